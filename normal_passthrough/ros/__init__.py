"""
ROS 2 binding for the normal passthrough.

Node classes are not imported here; use submodules directly, e.g.:
  from normal_passthrough.ros.normal_passthrough_node import NormalPassthroughNode
"""

__all__ = []
