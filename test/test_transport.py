"""Tests for the in-process transport."""

import pytest

from normal_passthrough.transport import LocalTransport, resolve_topic


class TestResolveTopic:
    @pytest.mark.parametrize(
        "namespace, topic, expected",
        [
            ("/", "point_cloud", "/point_cloud"),
            ("", "point_cloud", "/point_cloud"),
            ("/robot", "point_cloud", "/robot/point_cloud"),
            ("/robot/", "point_cloud", "/robot/point_cloud"),
            ("/robot", "/abs", "/abs"),
        ],
    )
    def test_resolution(self, namespace, topic, expected):
        assert resolve_topic(namespace, topic) == expected


class TestLocalTransport:
    def test_delivers_to_all_subscribers_in_order(self):
        bus = LocalTransport("/ns")
        got = []
        bus.subscribe("t", 10, lambda m: got.append(("a", m)))
        bus.subscribe("t", 10, lambda m: got.append(("b", m)))
        bus.advertise("t", 10).publish(1)
        assert got == [("a", 1), ("b", 1)]

    def test_subscriber_count(self):
        bus = LocalTransport()
        pub = bus.advertise("t", 10)
        assert pub.get_num_subscribers() == 0
        sub = bus.subscribe("t", 10, lambda m: None)
        assert pub.get_num_subscribers() == 1
        sub.shutdown()
        assert pub.get_num_subscribers() == 0

    def test_shutdown_twice_is_noop(self):
        bus = LocalTransport()
        sub = bus.subscribe("t", 10, lambda m: None)
        sub.shutdown()
        sub.shutdown()
        assert not sub.active

    def test_topics_are_namespaced(self):
        bus = LocalTransport("/robot")
        bus.subscribe("in", 100, lambda m: None)
        bus.advertise("out", 10)
        assert bus.topics() == ["/robot/in", "/robot/out"]

    def test_non_latched_late_subscriber_gets_nothing(self):
        bus = LocalTransport()
        pub = bus.advertise("t", 10, latch=False)
        pub.publish("first")
        got = []
        bus.subscribe("t", 10, got.append)
        assert got == []
        assert pub.publish_count == 1

    def test_latched_late_subscriber_gets_last(self):
        bus = LocalTransport()
        pub = bus.advertise("t", 1, latch=True)
        pub.publish("first")
        pub.publish("second")
        got = []
        bus.subscribe("t", 10, got.append)
        assert got == ["second"]

    def test_negative_queue_rejected(self):
        bus = LocalTransport()
        with pytest.raises(ValueError):
            bus.advertise("t", -1)
        with pytest.raises(ValueError):
            bus.subscribe("t", -1, lambda m: None)
