"""Tests for parameter lookup and validation."""

import pytest
from pydantic import ValidationError

from normal_passthrough.common.param_models import (
    NormalPassthroughParams,
    ParameterError,
    get_param,
    load_normal_passthrough_params,
    load_params_file,
)


class TestGetParam:
    """Hierarchical lookup of normals/search_radius."""

    def test_nested_mapping(self):
        assert get_param({"normals": {"search_radius": 0.2}}, "normals/search_radius") == 0.2

    def test_flat_ros2_key(self):
        assert get_param({"normals.search_radius": 0.3}, "normals/search_radius") == 0.3

    def test_flat_slash_key(self):
        assert get_param({"normals/search_radius": 0.4}, "normals/search_radius") == 0.4

    def test_missing_raises(self):
        with pytest.raises(ParameterError):
            get_param({"normals": {}}, "normals/search_radius")

    def test_missing_parent_raises(self):
        with pytest.raises(ParameterError):
            get_param({}, "normals/search_radius")

    def test_non_mapping_parent_raises(self):
        with pytest.raises(ParameterError):
            get_param({"normals": 5}, "normals/search_radius")


class TestNormalPassthroughParams:
    def test_valid_radius(self):
        params = load_normal_passthrough_params({"normals": {"search_radius": 0.05}})
        assert params.search_radius == pytest.approx(0.05)

    def test_integer_radius_accepted(self):
        params = load_normal_passthrough_params({"normals": {"search_radius": 1}})
        assert params.search_radius == 1.0

    @pytest.mark.parametrize("value", [0.0, -1.0, "0.1", None, float("nan"), float("inf")])
    def test_invalid_radius_rejected(self, value):
        with pytest.raises(ParameterError):
            load_normal_passthrough_params({"normals": {"search_radius": value}})

    def test_no_default(self):
        with pytest.raises(ParameterError):
            load_normal_passthrough_params({})

    def test_frozen(self):
        params = NormalPassthroughParams(search_radius=0.1)
        with pytest.raises(ValidationError):
            params.search_radius = 0.2

    def test_extra_fields_forbidden(self):
        with pytest.raises(ValidationError):
            NormalPassthroughParams(search_radius=0.1, max_nn=30)


class TestLoadParamsFile:
    def test_node_scope(self, tmp_path):
        path = tmp_path / "params.yaml"
        path.write_text(
            "normal_passthrough:\n  ros__parameters:\n    normals:\n      search_radius: 0.25\n"
        )
        params = load_params_file(str(path), node_name="normal_passthrough")
        assert get_param(params, "normals/search_radius") == 0.25

    def test_wildcard_scope(self, tmp_path):
        path = tmp_path / "params.yaml"
        path.write_text('"/**":\n  ros__parameters:\n    normals.search_radius: 0.5\n')
        params = load_params_file(str(path), node_name="normal_passthrough")
        assert get_param(params, "normals/search_radius") == 0.5

    def test_plain_mapping(self, tmp_path):
        path = tmp_path / "params.yaml"
        path.write_text("normals:\n  search_radius: 0.75\n")
        assert load_params_file(str(path))["normals"]["search_radius"] == 0.75

    def test_missing_file(self, tmp_path):
        with pytest.raises(ParameterError):
            load_params_file(str(tmp_path / "nope.yaml"))

    def test_non_mapping_file(self, tmp_path):
        path = tmp_path / "params.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ParameterError):
            load_params_file(str(path))


def test_prod_config_is_valid(prod_config):
    params = load_normal_passthrough_params(prod_config)
    assert params.search_radius > 0.0
