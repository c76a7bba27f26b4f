"""
Message-dispatch interface and an in-process implementation.

The passthrough only needs three things from a middleware:

    subscribe(topic, queue_size, callback) -> Subscription
    advertise(topic, queue_size, latch=False) -> Publisher
    Publisher.get_num_subscribers() / Publisher.publish(msg)

RosTransport (normal_passthrough.ros.transport) provides them over rclpy.
LocalTransport below provides them in-process: delivery is synchronous, in
subscription order, on the publishing thread.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Protocol

_logger = logging.getLogger(__name__)

Callback = Callable[[Any], None]


class Publisher(Protocol):
    def get_num_subscribers(self) -> int: ...

    def publish(self, msg: Any) -> None: ...


class Subscription(Protocol):
    def shutdown(self) -> None: ...


class Transport(Protocol):
    def subscribe(self, topic: str, queue_size: int, callback: Callback) -> Subscription: ...

    def advertise(self, topic: str, queue_size: int, latch: bool = False) -> Publisher: ...


def resolve_topic(namespace: str, topic: str) -> str:
    """Resolve a relative topic against a namespace ("/ns" + "t" -> "/ns/t")."""
    if topic.startswith("/"):
        return topic
    ns = namespace.rstrip("/")
    return f"{ns}/{topic}" if ns else f"/{topic}"


class LocalSubscription:
    def __init__(self, bus: "LocalTransport", topic: str, queue_size: int, callback: Callback) -> None:
        self.bus = bus
        self.topic = topic
        self.queue_size = int(queue_size)
        self.callback = callback
        self.active = True

    def shutdown(self) -> None:
        if self.active:
            self.bus._remove(self)
            self.active = False


class LocalPublisher:
    def __init__(self, bus: "LocalTransport", topic: str, queue_size: int, latch: bool) -> None:
        self.bus = bus
        self.topic = topic
        self.queue_size = int(queue_size)
        self.latch = bool(latch)
        self.last_msg: Optional[Any] = None
        self.publish_count = 0

    def get_num_subscribers(self) -> int:
        return len(self.bus._subscribers.get(self.topic, []))

    def publish(self, msg: Any) -> None:
        self.publish_count += 1
        if self.latch:
            self.last_msg = msg
        self.bus._deliver(self.topic, msg)


class LocalTransport:
    """Synchronous in-process pub/sub bus rooted at a namespace."""

    def __init__(self, namespace: str = "/") -> None:
        self.namespace = namespace or "/"
        self._subscribers: Dict[str, List[LocalSubscription]] = {}
        self._publishers: Dict[str, List[LocalPublisher]] = {}

    def subscribe(self, topic: str, queue_size: int, callback: Callback) -> LocalSubscription:
        if queue_size < 0:
            raise ValueError(f"queue_size must be >= 0, got {queue_size}")
        name = resolve_topic(self.namespace, topic)
        sub = LocalSubscription(self, name, queue_size, callback)
        self._subscribers.setdefault(name, []).append(sub)
        # Latched publishers hand their last message to late joiners
        for pub in self._publishers.get(name, []):
            if pub.latch and pub.last_msg is not None:
                callback(pub.last_msg)
        return sub

    def advertise(self, topic: str, queue_size: int, latch: bool = False) -> LocalPublisher:
        if queue_size < 0:
            raise ValueError(f"queue_size must be >= 0, got {queue_size}")
        name = resolve_topic(self.namespace, topic)
        pub = LocalPublisher(self, name, queue_size, latch)
        self._publishers.setdefault(name, []).append(pub)
        return pub

    def topics(self) -> List[str]:
        return sorted(set(self._subscribers) | set(self._publishers))

    def _remove(self, sub: LocalSubscription) -> None:
        subs = self._subscribers.get(sub.topic, [])
        if sub in subs:
            subs.remove(sub)

    def _deliver(self, topic: str, msg: Any) -> None:
        subs = list(self._subscribers.get(topic, []))
        if not subs:
            _logger.debug(f"{topic}: no subscribers, message dropped")
        for sub in subs:
            sub.callback(msg)
