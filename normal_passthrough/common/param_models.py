"""Pydantic parameter models and hierarchical parameter lookup."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from normal_passthrough.common import constants


class ParameterError(ValueError):
    """A required parameter is missing or has an invalid value."""


class NormalPassthroughParams(BaseModel):
    """Startup configuration; read-only for the process lifetime."""

    model_config = ConfigDict(extra="forbid", frozen=True, strict=True, allow_inf_nan=False)

    search_radius: float = Field(gt=0.0)


_MISSING = object()


def _split_key(key: str) -> list[str]:
    key = key.replace(constants.ROS_PARAM_KEY_SEPARATOR, constants.PARAM_KEY_SEPARATOR)
    return [part for part in key.split(constants.PARAM_KEY_SEPARATOR) if part]


def get_param(source: Mapping[str, Any], key: str) -> Any:
    """
    Look up a hierarchical key such as "normals/search_radius".

    Accepts nested mappings ({"normals": {"search_radius": 0.1}}) as well as
    flat ROS 2 style keys ({"normals.search_radius": 0.1}) and flat slash keys.

    Raises:
        ParameterError: key not present
    """
    if key in source:
        return source[key]
    parts = _split_key(key)
    for flat in (
        constants.ROS_PARAM_KEY_SEPARATOR.join(parts),
        constants.PARAM_KEY_SEPARATOR.join(parts),
    ):
        if flat in source:
            return source[flat]

    node: Any = source
    for part in parts:
        if not isinstance(node, Mapping):
            node = _MISSING
            break
        node = node.get(part, _MISSING)
        if node is _MISSING:
            break
    if node is _MISSING:
        raise ParameterError(f"parameter '{key}' is not set")
    return node


def load_normal_passthrough_params(source: Mapping[str, Any]) -> NormalPassthroughParams:
    """
    Build NormalPassthroughParams from a parameter mapping. No defaults.

    Raises:
        ParameterError: missing key or value that is not a positive finite number
    """
    value = get_param(source, constants.SEARCH_RADIUS_KEY)
    try:
        return NormalPassthroughParams(search_radius=value)
    except ValidationError as exc:
        raise ParameterError(
            f"parameter '{constants.SEARCH_RADIUS_KEY}' is invalid ({value!r}): "
            f"{exc.errors()[0]['msg']}"
        ) from exc


def load_params_file(path: str, node_name: Optional[str] = None) -> Dict[str, Any]:
    """
    Load a ROS 2 YAML parameter file, unwrapping ros__parameters.

    Looks under node_name first, then the "/**" wildcard; a file without a
    ros__parameters wrapper is returned as-is.
    """
    import yaml

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as exc:
        raise ParameterError(f"cannot read parameter file '{path}': {exc}") from exc
    if not isinstance(data, dict):
        raise ParameterError(f"parameter file '{path}' must contain a mapping")

    for scope in (node_name, f"/{node_name}" if node_name else None, "/**"):
        if scope and isinstance(data.get(scope), dict) and "ros__parameters" in data[scope]:
            return dict(data[scope]["ros__parameters"] or {})
    return data
