"""
Transport over an rclpy node.

Converts at the boundary: subscribers receive PointCloud, publishers accept
PointNormalCloud. Topic names are resolved by ROS against the node namespace.
"""

from __future__ import annotations

import itertools
from typing import Callable

from rclpy.node import Node
from sensor_msgs.msg import PointCloud2

from normal_passthrough.common.cloud import PointCloud, PointNormalCloud
from normal_passthrough.ros.conversions import cloud_to_pointcloud2, pointcloud2_to_cloud
from normal_passthrough.ros.qos_utils import make_qos


class RosSubscription:
    def __init__(self, node: Node, sub) -> None:
        self._node = node
        self._sub = sub

    def shutdown(self) -> None:
        if self._sub is not None:
            self._node.destroy_subscription(self._sub)
            self._sub = None


class RosPublisher:
    def __init__(self, pub) -> None:
        self._pub = pub

    def get_num_subscribers(self) -> int:
        return int(self._pub.get_subscription_count())

    def publish(self, msg: PointNormalCloud) -> None:
        self._pub.publish(cloud_to_pointcloud2(msg))


class RosTransport:
    def __init__(self, node: Node, reliability: str = "reliable") -> None:
        self.node = node
        self.reliability = reliability

    def subscribe(
        self, topic: str, queue_size: int, callback: Callable[[PointCloud], None]
    ) -> RosSubscription:
        # ROS 2 headers dropped seq; number clouds in arrival order instead.
        seq = itertools.count()

        def _cb(msg: PointCloud2) -> None:
            callback(pointcloud2_to_cloud(msg, seq=next(seq)))

        sub = self.node.create_subscription(
            PointCloud2, topic, _cb, make_qos(queue_size, reliability=self.reliability)
        )
        return RosSubscription(self.node, sub)

    def advertise(self, topic: str, queue_size: int, latch: bool = False) -> RosPublisher:
        pub = self.node.create_publisher(
            PointCloud2, topic, make_qos(queue_size, latch=latch, reliability=self.reliability)
        )
        return RosPublisher(pub)
