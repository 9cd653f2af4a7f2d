#!/usr/bin/env python3
"""
EventBus tests: topic polling, publish order and counters.
"""

import unittest

from bus import EventBus


class EventBusTests(unittest.TestCase):
    def setUp(self):
        self.bus = EventBus()

    def test_poll_topic_drains_only_that_topic(self):
        self.bus.publish("round.start", "sequencer", {"level": 0})
        self.bus.publish("victim.struck", "sequencer", {"id": "T0"})
        self.bus.publish("victim.struck", "sequencer", {"id": "T1"})

        struck = self.bus.poll("victim.struck")
        self.assertEqual([e.payload["id"] for e in struck], ["T0", "T1"])
        self.assertEqual(self.bus.poll("victim.struck"), [])
        self.assertEqual(self.bus.pending(), 1)
        self.assertEqual([e.topic for e in self.bus.poll_all()], ["round.start"])

    def test_poll_all_keeps_publish_order(self):
        for topic in ("round.start", "round.commit", "victim.struck", "round.complete"):
            self.bus.publish(topic, "sequencer", {})
        topics = [e.topic for e in self.bus.poll_all()]
        self.assertEqual(topics, ["round.start", "round.commit", "victim.struck", "round.complete"])
        self.assertEqual(self.bus.pending(), 0)

    def test_payload_is_copied(self):
        payload = {"level": 1}
        self.bus.publish("round.start", "sequencer", payload)
        payload["level"] = 99
        self.assertEqual(self.bus.poll("round.start")[0].payload, {"level": 1})

    def test_metrics(self):
        self.bus.publish("a", "x", {})
        self.bus.publish("a", "x", {})
        self.bus.publish("b", "x", {})
        self.bus.poll("a")
        self.assertEqual(
            self.bus.metrics.report(),
            {"published": 3, "delivered": 2, "by_topic": {"a": 2, "b": 1}},
        )


if __name__ == "__main__":
    unittest.main()
