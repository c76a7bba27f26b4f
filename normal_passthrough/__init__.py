"""
normal_passthrough: republish point clouds with per-point surface normals.

Layout:
- common/:   cloud containers, parameter models, constants
- features/: radius-search normal estimation
- augmenter: NormalPassthrough component (middleware-agnostic)
- transport: transport interface + in-process LocalTransport
- ros/:      rclpy binding (conversions, QoS, node, entry point)

ROS-dependent modules are not imported here so that the core can be used and
tested without a ROS environment.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = [
    "NormalPassthrough",
    "NodeContext",
    "LocalTransport",
    "PointCloud",
    "PointNormalCloud",
    "Header",
    "NormalEstimator",
    "estimate_normals",
]

_LAZY_ATTRS: dict[str, tuple[str, str]] = {
    "NormalPassthrough": ("normal_passthrough.augmenter", "NormalPassthrough"),
    "NodeContext": ("normal_passthrough.augmenter", "NodeContext"),
    "LocalTransport": ("normal_passthrough.transport", "LocalTransport"),
    "PointCloud": ("normal_passthrough.common.cloud", "PointCloud"),
    "PointNormalCloud": ("normal_passthrough.common.cloud", "PointNormalCloud"),
    "Header": ("normal_passthrough.common.cloud", "Header"),
    "NormalEstimator": ("normal_passthrough.features.normal_estimation", "NormalEstimator"),
    "estimate_normals": ("normal_passthrough.features.normal_estimation", "estimate_normals"),
}


def __getattr__(name: str) -> Any:
    target = _LAZY_ATTRS.get(name)
    if target is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    module_name, attr_name = target
    module = import_module(module_name)
    return getattr(module, attr_name)


def __dir__() -> list[str]:
    return sorted(set(globals().keys()) | set(_LAZY_ATTRS.keys()))
