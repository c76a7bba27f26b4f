"""
Normal passthrough constants only.

=============================================================================
WIRING QUICK REFERENCE
=============================================================================

TOPICS (relative to the node namespace):
  point_cloud               -> xyz input, queue depth 100
  point_cloud_with_normals  -> xyz + normal + curvature output, queue depth 10

PARAMETERS:
  normals/search_radius     -> float, metres, required (no default)
  ROS 2 spelling:           normals.search_radius

OUTPUT FIELDS (PointCloud2, FLOAT32, PCL PointNormal names):
  x, y, z, normal_x, normal_y, normal_z, curvature
=============================================================================
"""

# Diagnostic name appended to the namespace at initialization
COMPONENT_NAME = "NormalPassthrough"
NODE_NAME = "normal_passthrough"

# Topics
INPUT_TOPIC = "point_cloud"
OUTPUT_TOPIC = "point_cloud_with_normals"
INPUT_QUEUE_DEPTH = 100
OUTPUT_QUEUE_DEPTH = 10
OUTPUT_LATCHED = False

# Parameters
SEARCH_RADIUS_KEY = "normals/search_radius"
PARAM_KEY_SEPARATOR = "/"
ROS_PARAM_KEY_SEPARATOR = "."

# Normal estimation
MIN_NEIGHBORS_FOR_NORMAL = 3  # plane fit needs at least 3 points
DEFAULT_VIEWPOINT = (0.0, 0.0, 0.0)  # sensor origin; normals are flipped to face it

# PointCloud2 output layout
NORMAL_CLOUD_FIELDS = ("x", "y", "z", "normal_x", "normal_y", "normal_z", "curvature")
