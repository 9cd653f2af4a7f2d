#!/usr/bin/env python3
"""
Strike detection tests: lane exclusivity, idempotence and swept zones.
"""

from __future__ import annotations

import unittest

from sim.collision import CollisionDetector, intervals_overlap
from sim.levels import Level, VehicleState
from sim.track import Lane, TrackLayout
from sim.victims import VictimSet


class CollisionDetectorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.layout = TrackLayout()
        self.detector = CollisionDetector(self.layout)
        # top victim at x=400, bottom victims at 356, 378, 400, 422, 444
        self.victims = VictimSet.for_level(Level(1, 5), self.layout)

    def _vehicle(self, x: float, lane: Lane) -> VehicleState:
        return VehicleState(longitudinal_position=x, lane=lane, committed=True)

    def test_strikes_only_committed_lane(self) -> None:
        struck = self.detector.detect(self._vehicle(390.0, Lane.TOP), self.victims)
        self.assertEqual([v.id for v in struck], ["T0"])
        self.assertEqual(self.victims.struck_count(Lane.BOTTOM), 0)

    def test_repeat_overlap_is_idempotent(self) -> None:
        hits = 0
        for x in (390.0, 392.0, 395.0, 400.0):
            hits += len(self.detector.detect(self._vehicle(x, Lane.TOP), self.victims))
        self.assertEqual(hits, 1)
        self.assertTrue(self.victims.get("T0").struck)
        self.assertEqual(self.victims.struck_count(), 1)

    def test_no_strike_outside_zone(self) -> None:
        struck = self.detector.detect(self._vehicle(300.0, Lane.BOTTOM), self.victims)
        self.assertEqual(struck, [])

    def test_swept_zone_catches_long_tick(self) -> None:
        vehicle = self._vehicle(500.0, Lane.BOTTOM)
        without_sweep = self.detector.detect(vehicle, self.victims)
        self.assertEqual(without_sweep, [])
        swept = self.detector.detect(vehicle, self.victims, previous_position=300.0)
        self.assertEqual(sorted(v.id for v in swept), ["B0", "B1", "B2", "B3", "B4"])
        self.assertEqual(self.victims.struck_count(Lane.TOP), 0)

    def test_uncommitted_vehicle_rejected(self) -> None:
        vehicle = VehicleState(longitudinal_position=400.0, lane=Lane.TOP, committed=False)
        with self.assertRaises(RuntimeError):
            self.detector.detect(vehicle, self.victims)
        with self.assertRaises(RuntimeError):
            self.detector.detect(self._vehicle(400.0, Lane.TOP), None)

    def test_interval_overlap_is_closed(self) -> None:
        self.assertTrue(intervals_overlap((0.0, 1.0), (1.0, 2.0)))
        self.assertFalse(intervals_overlap((0.0, 0.9), (1.0, 2.0)))


class VictimSetTests(unittest.TestCase):
    def test_ids_and_slots(self) -> None:
        victims = VictimSet.for_level(Level(2, 1), TrackLayout())
        self.assertEqual([v.id for v in victims], ["T0", "T1", "B0"])
        self.assertEqual([v.x for v in victims.on_lane(Lane.TOP)], [389.0, 411.0])
        self.assertEqual(victims.counts(), {
            "top_total": 2, "bottom_total": 1, "top_struck": 0, "bottom_struck": 0,
        })

    def test_strike_is_monotonic(self) -> None:
        victim = VictimSet.for_level(Level(1, 0), TrackLayout()).get("T0")
        self.assertTrue(victim.strike())
        self.assertFalse(victim.strike())
        self.assertTrue(victim.struck)

    def test_empty_level(self) -> None:
        victims = VictimSet.for_level(Level(0, 0), TrackLayout())
        self.assertEqual(len(victims), 0)
        self.assertEqual(victims.survivors(), [])


if __name__ == "__main__":
    unittest.main()
