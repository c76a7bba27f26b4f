import os
import sys
import pytest
from typing import Dict, Any

# Ensure local package import works for pytest collection.
_TEST_DIR = os.path.dirname(__file__)
_PKG_ROOT = os.path.abspath(os.path.join(_TEST_DIR, ".."))
if _PKG_ROOT not in sys.path:
    sys.path.insert(0, _PKG_ROOT)

# =============================================================================
# Production Config Fixtures
# =============================================================================


@pytest.fixture
def prod_config_path() -> str:
    return os.path.join(_PKG_ROOT, "config", "normal_passthrough.yaml")


@pytest.fixture
def prod_config(prod_config_path) -> Dict[str, Any]:
    """
    Parameters from config/normal_passthrough.yaml, ros__parameters unwrapped.

    Usage:
        def test_something(prod_config):
            assert prod_config["normals"]["search_radius"] > 0
    """
    from normal_passthrough.common.param_models import load_params_file

    if not os.path.exists(prod_config_path):
        pytest.skip("config/normal_passthrough.yaml not found")
    return load_params_file(prod_config_path, node_name="normal_passthrough")


# =============================================================================
# Test Utility Fixtures
# =============================================================================


@pytest.fixture
def numpy_seed():
    """Set numpy random seed for reproducible tests."""
    import numpy as np
    np.random.seed(42)
    yield


@pytest.fixture
def header():
    from normal_passthrough.common.cloud import Header
    return Header(frame_id="lidar", sec=1700000000, nanosec=250000000, seq=7)


@pytest.fixture
def planar_cloud(header):
    """
    11x11 grid on the plane z = 1, 0.1 m spacing, organized 11 wide.

    Viewpoint (origin) lies below the plane, so oriented normals point -z.
    """
    import numpy as np
    from normal_passthrough.common.cloud import PointCloud

    xs, ys = np.meshgrid(np.linspace(-0.5, 0.5, 11), np.linspace(-0.5, 0.5, 11))
    pts = np.stack([xs.ravel(), ys.ravel(), np.ones(xs.size)], axis=1)
    return PointCloud(pts, header=header, width=11, height=11)


@pytest.fixture
def triangle_cloud(header):
    """Three points spanning the z = 0 plane."""
    import numpy as np
    from normal_passthrough.common.cloud import PointCloud

    pts = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0]])
    return PointCloud(pts, header=header)


@pytest.fixture
def sphere_points():
    """Evenly spread points on the unit sphere (Fibonacci lattice)."""
    import numpy as np

    samples = 400
    i = np.arange(samples, dtype=np.float64)
    phi = np.pi * (3.0 - np.sqrt(5.0))
    y = 1.0 - (i / float(samples - 1)) * 2.0
    r = np.sqrt(1.0 - y * y)
    theta = phi * i
    return np.stack([np.cos(theta) * r, y, np.sin(theta) * r], axis=1)
