"""
NormalPassthrough: republish incoming point clouds with per-point normals.

    point_cloud (xyz) -> [estimate normals] -> point_cloud_with_normals

Work is skipped while nobody listens on the output topic. The component is
middleware-agnostic: it is handed a NodeContext (namespace, parameter mapping,
transport) at initialize() and never touches process-global state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from normal_passthrough.common import constants
from normal_passthrough.common.cloud import PointCloud, PointNormalCloud
from normal_passthrough.common.param_models import (
    NormalPassthroughParams,
    ParameterError,
    load_normal_passthrough_params,
)
from normal_passthrough.features.normal_estimation import NormalEstimator
from normal_passthrough.transport import Publisher, Subscription, Transport

_logger = logging.getLogger(__name__)


def append_name(namespace: str, name: str) -> str:
    """Join a namespace and a name with exactly one separator."""
    ns = (namespace or "/").rstrip("/")
    return f"{ns}/{name.lstrip('/')}"


@dataclass
class NodeContext:
    """What a node handle carries: where we live, our parameters, our transport."""

    namespace: str
    transport: Transport
    parameters: Mapping[str, Any] = field(default_factory=dict)


class NormalPassthrough:
    """
    Point cloud -> point cloud with normals.

    Call initialize() once; afterwards the transport drives on_point_cloud().
    """

    def __init__(self, logger: Optional[Any] = None) -> None:
        self.name = constants.COMPONENT_NAME
        self.params: Optional[NormalPassthroughParams] = None
        self._logger = logger if logger is not None else _logger
        self._estimator: Optional[NormalEstimator] = None
        self._cloud_sub: Optional[Subscription] = None
        self._normal_pub: Optional[Publisher] = None

    @property
    def search_radius(self) -> Optional[float]:
        return None if self.params is None else self.params.search_radius

    def initialize(self, context: NodeContext) -> bool:
        self.name = append_name(context.namespace, constants.COMPONENT_NAME)

        if not self.load_parameters(context):
            self._logger.error(f"{self.name}: Failed to load parameters.")
            return False

        if not self.register_callbacks(context):
            self._logger.error(f"{self.name}: Failed to register callbacks.")
            return False

        return True

    def load_parameters(self, context: NodeContext) -> bool:
        try:
            self.params = load_normal_passthrough_params(context.parameters)
        except ParameterError as exc:
            self._logger.error(f"{self.name}: {exc}")
            return False
        self._estimator = NormalEstimator(self.params.search_radius)
        return True

    def register_callbacks(self, context: NodeContext) -> bool:
        self._cloud_sub = context.transport.subscribe(
            constants.INPUT_TOPIC, constants.INPUT_QUEUE_DEPTH, self.on_point_cloud
        )
        self._normal_pub = context.transport.advertise(
            constants.OUTPUT_TOPIC, constants.OUTPUT_QUEUE_DEPTH, latch=constants.OUTPUT_LATCHED
        )
        return True

    def shutdown(self) -> None:
        if self._cloud_sub is not None:
            self._cloud_sub.shutdown()
            self._cloud_sub = None

    def _has_listeners(self) -> bool:
        return self._normal_pub is not None and self._normal_pub.get_num_subscribers() > 0

    def on_point_cloud(self, msg: PointCloud) -> None:
        # Don't do any work if nobody is listening.
        if not self._has_listeners():
            return

        # compute_normals publishes the result itself.
        unused = PointNormalCloud()
        self.compute_normals(msg, unused)

    def compute_normals(
        self, points: PointCloud, points_with_normals: Optional[PointNormalCloud]
    ) -> bool:
        """
        Fill points_with_normals from points and publish it if anyone listens.

        Returns False (and logs) when no output target is given. Errors from the
        estimator are not caught.
        """
        if points_with_normals is None:
            self._logger.error(f"{self.name}: Output is null.")
            return False
        if self._estimator is None:
            raise RuntimeError(f"{self.name}: compute_normals called before initialize")

        self._estimator.compute_into(points, points_with_normals)

        # Listener count is checked again right before publishing.
        if self._has_listeners():
            self._normal_pub.publish(points_with_normals)

        return True
