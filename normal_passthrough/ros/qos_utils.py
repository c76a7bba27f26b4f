"""
QoS profiles for the passthrough endpoints.

Both sides are KEEP_LAST with an explicit depth and VOLATILE durability, so
nothing is latched: a late subscriber waits for the next cloud.
"""

from __future__ import annotations

from rclpy.qos import QoSProfile, ReliabilityPolicy, DurabilityPolicy, HistoryPolicy


def resolve_reliability(reliability: str) -> ReliabilityPolicy:
    """
    Map a reliability string to a policy.

    Supported values:
      - reliable
      - best_effort
      - system_default
    Anything else falls back to reliable.
    """
    rel_map = {
        "reliable": ReliabilityPolicy.RELIABLE,
        "best_effort": ReliabilityPolicy.BEST_EFFORT,
        "system_default": ReliabilityPolicy.SYSTEM_DEFAULT,
    }
    return rel_map.get(str(reliability).lower(), ReliabilityPolicy.RELIABLE)


def make_qos(depth: int, latch: bool = False, reliability: str = "reliable") -> QoSProfile:
    return QoSProfile(
        reliability=resolve_reliability(reliability),
        durability=DurabilityPolicy.TRANSIENT_LOCAL if latch else DurabilityPolicy.VOLATILE,
        history=HistoryPolicy.KEEP_LAST,
        depth=int(depth),
    )
