#!/usr/bin/env python3
"""
SimBridge tests: event publication and the external hit counter.
"""

from __future__ import annotations

import unittest

from sim.sequencer import SequencePolicy
from sim.sim_bridge import SimBridge
from sim.track import Lane


def finish_round(bridge: SimBridge, limit: int = 500) -> None:
    for _ in range(limit):
        if bridge.tick(0.1).round_completed:
            return
    raise AssertionError("round did not complete")


class SimBridgeTests(unittest.TestCase):
    def setUp(self) -> None:
        self.bridge = SimBridge(
            [(1, 5), (3, 0)], policy=SequencePolicy.HALT, random_seed=3
        )

    def test_round_start_published_on_construction(self) -> None:
        events = self.bridge.bus.poll("round.start")
        self.assertEqual(len(events), 1)
        self.assertEqual(events[0].payload, {"level": 0, "top": 1, "bottom": 5})

    def test_round_events_in_order(self) -> None:
        self.bridge.bus.poll_all()
        self.bridge.select_lane(Lane.BOTTOM)
        finish_round(self.bridge)
        topics = [e.topic for e in self.bridge.bus.poll_all()]
        self.assertEqual(topics[0], "round.commit")
        self.assertEqual(topics.count("round.commit"), 1)
        self.assertEqual(topics.count("victim.struck"), 5)
        self.assertEqual(topics[-1], "round.complete")

    def test_hit_count_matches_strikes(self) -> None:
        self.bridge.select_lane(Lane.BOTTOM)
        finish_round(self.bridge)
        self.bridge.tick(0.1)
        self.bridge.tick(0.1)
        self.assertEqual(self.bridge.hit_count, 5)
        self.assertEqual(self.bridge.get_level_info()["hits"], 5)

    def test_run_complete_publishes_verdict(self) -> None:
        self.bridge.select_lane(Lane.TOP)
        finish_round(self.bridge)
        self.bridge.tick(0.1)
        self.bridge.select_lane(Lane.BOTTOM)
        finish_round(self.bridge)
        self.bridge.bus.poll_all()
        self.bridge.tick(0.1)

        self.assertTrue(self.bridge.is_finished())
        self.assertFalse(self.bridge.accepts_input())
        (event,) = self.bridge.bus.poll("run.complete")
        self.assertEqual(event.payload, self.bridge.get_result())
        self.assertEqual(event.payload["verdict"], "Heroic Utilitarian")
        self.assertEqual(
            self.bridge.get_run_log(),
            [
                {"level": 0, "top": 1, "bottom": 5, "choice": "T"},
                {"level": 1, "top": 3, "bottom": 0, "choice": "B"},
            ],
        )

    def test_pause_freezes_simulation(self) -> None:
        self.bridge.select_lane(Lane.TOP)
        self.bridge.set_paused(True)
        for _ in range(10):
            self.bridge.tick(0.1)
        self.assertEqual(self.bridge.get_snapshot().position, 0.0)
        self.bridge.set_paused(False)
        self.bridge.tick(0.1)
        self.assertGreater(self.bridge.get_snapshot().position, 0.0)

    def test_reset_clears_run(self) -> None:
        self.bridge.select_lane(Lane.BOTTOM)
        finish_round(self.bridge)
        self.bridge.reset(clear_log=True)
        self.assertEqual(self.bridge.hit_count, 0)
        self.assertEqual(self.bridge.get_run_log(), [])
        self.assertEqual([e.topic for e in self.bridge.bus.poll_all()], ["round.start"])
        self.assertTrue(self.bridge.accepts_input())


if __name__ == "__main__":
    unittest.main()
