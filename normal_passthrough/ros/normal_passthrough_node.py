"""
=============================================================================
NORMAL PASSTHROUGH NODE - Point clouds in, point clouds with normals out
=============================================================================

Topic Flow:
    ~/point_cloud (xyz) → [this node] → ~/point_cloud_with_normals
                                        (xyz + normal + curvature)

Parameters:
    normals.search_radius   (number, required) radius-search neighbourhood
    qos_reliability         (string)           reliable | best_effort | system_default

Startup fails (non-zero exit) when normals.search_radius is unset or invalid.
"""

from __future__ import annotations

import sys
from typing import Any, Dict, Optional

import rclpy
from rcl_interfaces.msg import ParameterDescriptor
from rclpy.node import Node
from rclpy.parameter import Parameter

from normal_passthrough.augmenter import NodeContext, NormalPassthrough
from normal_passthrough.common import constants
from normal_passthrough.ros.transport import RosTransport

_SEARCH_RADIUS_PARAM = constants.SEARCH_RADIUS_KEY.replace(
    constants.PARAM_KEY_SEPARATOR, constants.ROS_PARAM_KEY_SEPARATOR
)


class NormalPassthroughNode(Node):
    """
    Hosts a NormalPassthrough on an rclpy node.

    The constructor never raises on bad parameters; check `initialized` and
    destroy the node when it is False.
    """

    def __init__(self, parameter_overrides: Optional[Dict[str, Any]] = None) -> None:
        overrides = None
        if parameter_overrides:
            overrides = [Parameter(k, value=v) for k, v in parameter_overrides.items()]
        super().__init__(constants.NODE_NAME, parameter_overrides=overrides)

        # Any type and no default: NormalPassthroughParams validates the value.
        self.declare_parameter(
            _SEARCH_RADIUS_PARAM,
            None,
            ParameterDescriptor(
                description="Radius-search neighbourhood for normal estimation",
                dynamic_typing=True,
            ),
        )
        self.declare_parameter("qos_reliability", "reliable")

        params: Dict[str, Any] = {}
        radius = self.get_parameter(_SEARCH_RADIUS_PARAM).value
        if radius is not None:
            params[_SEARCH_RADIUS_PARAM] = radius
        reliability = str(self.get_parameter("qos_reliability").value)

        context = NodeContext(
            namespace=self.get_namespace(),
            transport=RosTransport(self, reliability=reliability),
            parameters=params,
        )
        self.passthrough = NormalPassthrough(logger=self.get_logger())
        self.initialized = self.passthrough.initialize(context)
        if not self.initialized:
            return

        self.get_logger().info("=" * 60)
        self.get_logger().info("NORMAL PASSTHROUGH")
        self.get_logger().info("=" * 60)
        self.get_logger().info(
            f"  Input:  {constants.INPUT_TOPIC} (depth {constants.INPUT_QUEUE_DEPTH})"
        )
        self.get_logger().info(
            f"  Output: {constants.OUTPUT_TOPIC} (depth {constants.OUTPUT_QUEUE_DEPTH}, not latched)"
        )
        self.get_logger().info(f"  search_radius: {self.passthrough.search_radius}")
        self.get_logger().info("=" * 60)


def main() -> None:
    rclpy.init()
    node = NormalPassthroughNode()
    if not node.initialized:
        node.get_logger().fatal(f"{node.passthrough.name}: initialization failed")
        node.destroy_node()
        rclpy.shutdown()
        sys.exit(1)
    try:
        rclpy.spin(node)
    except KeyboardInterrupt:
        pass
    finally:
        node.destroy_node()
        if rclpy.ok():
            rclpy.shutdown()


if __name__ == "__main__":
    main()
