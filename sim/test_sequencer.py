#!/usr/bin/env python3
"""
Round lifecycle tests for the level sequencer.

Speed 120 and dt 0.1 move the trolley 12 units per tick, so the gate
(x=200) is crossed on the 17th moving tick and the end (x=800) is
reached on the 67th.
"""

from __future__ import annotations

import unittest
from typing import List

from sim.decision_gate import GateState
from sim.errors import ConfigError
from sim.levels import Level, parse_levels
from sim.sequencer import LevelSequencer, SequencePolicy, TickResult
from sim.track import Lane

DT = 0.1


class FixedRandom:
    def __init__(self, *values: float) -> None:
        self._values = list(values)

    def random(self) -> float:
        return self._values.pop(0)


def play_round(seq: LevelSequencer, limit: int = 500) -> List[TickResult]:
    """Tick until the active round completes."""
    results = []
    for _ in range(limit):
        result = seq.tick(DT)
        results.append(result)
        if result.round_completed:
            return results
    raise AssertionError("round did not complete")


class RoundTests(unittest.TestCase):
    def test_paused_until_lane_selected(self) -> None:
        seq = LevelSequencer([(1, 5)], rng=FixedRandom())
        for _ in range(50):
            seq.tick(1.0)
        self.assertEqual(seq.vehicle.longitudinal_position, 0.0)
        self.assertIs(seq.gate.state, GateState.AWAITING_CHOICE)

    def test_record_appended_exactly_at_commit(self) -> None:
        seq = LevelSequencer([(1, 5)], rng=FixedRandom())
        seq.select_lane(Lane.TOP)
        committed_at = None
        for i, result in enumerate(play_round(seq)):
            if result.record is not None:
                self.assertIsNone(committed_at, "second record in one round")
                committed_at = i
                self.assertEqual(len(seq.run_log), 1)
        self.assertEqual(committed_at, 16)
        self.assertEqual(len(seq.run_log), 1)
        record = seq.run_log[0]
        self.assertEqual((record.level_index, record.top_count, record.bottom_count), (0, 1, 5))
        self.assertIs(record.choice, Lane.TOP)

    def test_no_record_before_gate(self) -> None:
        seq = LevelSequencer([(1, 5)], rng=FixedRandom())
        seq.select_lane(Lane.BOTTOM)
        for _ in range(16):
            seq.tick(DT)
        self.assertLess(seq.vehicle.longitudinal_position, seq.layout.gate_x)
        self.assertEqual(len(seq.run_log), 0)
        self.assertFalse(seq.vehicle.committed)

    def test_last_selection_before_gate_wins(self) -> None:
        seq = LevelSequencer([(1, 5)], rng=FixedRandom())
        seq.select_lane(Lane.TOP)
        for _ in range(10):
            seq.tick(DT)
        self.assertTrue(seq.select_lane(Lane.BOTTOM))
        play_round(seq)
        self.assertIs(seq.run_log[0].choice, Lane.BOTTOM)
        self.assertEqual(seq.victims.struck_count(Lane.BOTTOM), 5)
        self.assertEqual(seq.victims.struck_count(Lane.TOP), 0)

    def test_lane_frozen_after_commit(self) -> None:
        seq = LevelSequencer([(1, 5)], rng=FixedRandom())
        seq.select_lane(Lane.TOP)
        for _ in range(20):
            seq.tick(DT)
        self.assertTrue(seq.vehicle.committed)
        self.assertFalse(seq.select_lane(Lane.BOTTOM))
        play_round(seq)
        self.assertIs(seq.vehicle.lane, Lane.TOP)
        self.assertEqual(seq.victims.struck_count(), 1)

    def test_release_falls_back_to_random_lane(self) -> None:
        seq = LevelSequencer([(2, 3)], rng=FixedRandom(0.75))
        self.assertTrue(seq.release())
        play_round(seq)
        self.assertIsNone(seq.run_log[0].choice)
        self.assertIs(seq.vehicle.lane, Lane.BOTTOM)
        self.assertEqual(seq.victims.struck_count(Lane.BOTTOM), 3)

    def test_idle_timeout_releases_gate(self) -> None:
        seq = LevelSequencer([(2, 3)], rng=FixedRandom(0.2), idle_release_s=0.5)
        seq.tick(0.3)
        self.assertIs(seq.gate.state, GateState.AWAITING_CHOICE)
        seq.tick(0.3)
        self.assertIs(seq.gate.state, GateState.ARMED)
        self.assertEqual(seq.vehicle.longitudinal_position, 0.0)
        play_round(seq)
        self.assertIs(seq.vehicle.lane, Lane.TOP)
        self.assertIsNone(seq.run_log[0].choice)

    def test_snapshot_stays_on_mainline_until_commit(self) -> None:
        seq = LevelSequencer([(1, 1)], rng=FixedRandom())
        seq.select_lane(Lane.TOP)
        snap = seq.snapshot()
        self.assertEqual(snap.offset, seq.layout.mainline_offset)
        self.assertIs(snap.selection, Lane.TOP)
        self.assertEqual(len(snap.victims), 2)
        for _ in range(30):
            seq.tick(DT)
        self.assertEqual(seq.snapshot().offset, seq.layout.top_offset)

    def test_negative_dt_rejected(self) -> None:
        seq = LevelSequencer([(1, 1)], rng=FixedRandom())
        with self.assertRaises(ValueError):
            seq.tick(-0.1)

    def test_crowded_lane_is_fully_struck(self) -> None:
        seq = LevelSequencer([(30, 0), (0, 25)], rng=FixedRandom())
        for lane, count in ((Lane.TOP, 30), (Lane.BOTTOM, 25)):
            seq.select_lane(lane)
            results = play_round(seq)
            self.assertEqual(sum(len(r.struck) for r in results), count)
            self.assertEqual(seq.victims.struck_count(lane), count)
            self.assertEqual(seq.victims.survivors(), [])
            seq.tick(DT)

    def test_zero_victim_round_completes(self) -> None:
        seq = LevelSequencer([(0, 0)], rng=FixedRandom())
        seq.select_lane(Lane.TOP)
        results = play_round(seq)
        self.assertEqual(sum(len(r.struck) for r in results), 0)
        self.assertEqual(len(seq.run_log), 1)


class SequenceTests(unittest.TestCase):
    def test_round_state_does_not_leak(self) -> None:
        seq = LevelSequencer([(1, 5), (5, 1)], rng=FixedRandom())
        seq.select_lane(Lane.BOTTOM)
        play_round(seq)
        result = seq.tick(DT)
        self.assertTrue(result.round_started)
        self.assertEqual(seq.level_index, 1)
        self.assertEqual(seq.vehicle.longitudinal_position, seq.layout.start_x)
        self.assertIsNone(seq.vehicle.lane)
        self.assertFalse(seq.vehicle.committed)
        self.assertIs(seq.gate.state, GateState.AWAITING_CHOICE)
        self.assertIsNone(seq.gate.selection)
        self.assertEqual(seq.victims.struck_count(), 0)
        self.assertEqual(len(seq.victims.on_lane(Lane.TOP)), 5)

    def test_manual_advance(self) -> None:
        seq = LevelSequencer([(1, 1), (2, 2)], rng=FixedRandom(), auto_advance=False)
        seq.select_lane(Lane.TOP)
        play_round(seq)
        self.assertIs(seq.tick(DT).round_started, False)
        self.assertIs(seq.gate.state, GateState.ROUND_COMPLETE)
        self.assertTrue(seq.next_round().round_started)
        self.assertEqual(seq.level, Level(2, 2))

    def test_halt_policy_stops_after_last_level(self) -> None:
        seq = LevelSequencer(
            [(1, 5), (5, 1)], rng=FixedRandom(), policy=SequencePolicy.HALT
        )
        for _ in range(2):
            seq.select_lane(Lane.TOP)
            play_round(seq)
        result = seq.tick(DT)
        self.assertTrue(result.run_completed)
        self.assertFalse(result.round_started)
        self.assertTrue(seq.halted)
        self.assertEqual(result.result.verdict, seq.last_result.verdict)
        self.assertEqual(len(seq.run_log), 2)
        self.assertEqual(seq.level_index, 1)

        # halted: further ticks and input do nothing
        self.assertEqual(seq.tick(DT), TickResult())
        self.assertFalse(seq.select_lane(Lane.BOTTOM))
        self.assertEqual(len(seq.run_log), 2)

    def test_wrap_policy_keeps_run_log(self) -> None:
        seq = LevelSequencer(
            [(1, 5), (5, 1)], rng=FixedRandom(), policy=SequencePolicy.WRAP
        )
        for _ in range(2):
            seq.select_lane(Lane.TOP)
            play_round(seq)
        result = seq.tick(DT)
        self.assertTrue(result.run_completed)
        self.assertTrue(result.round_started)
        self.assertFalse(seq.halted)
        self.assertEqual(seq.level_index, 0)
        self.assertEqual(seq.runs_completed, 1)
        self.assertEqual(len(seq.run_log), 2)

        seq.select_lane(Lane.BOTTOM)
        play_round(seq)
        self.assertEqual(len(seq.run_log), 3)

    def test_reset_run_clears_log_only_on_request(self) -> None:
        seq = LevelSequencer([(1, 5), (5, 1)], rng=FixedRandom())
        seq.select_lane(Lane.TOP)
        play_round(seq)
        seq.reset_run()
        self.assertEqual(len(seq.run_log), 1)
        self.assertEqual(seq.level_index, 0)
        seq.reset_run(clear_log=True)
        self.assertEqual(len(seq.run_log), 0)
        self.assertIsNone(seq.last_result)

    def test_configuration_errors(self) -> None:
        with self.assertRaises(ConfigError):
            LevelSequencer([])
        with self.assertRaises(ConfigError):
            LevelSequencer([(1, 1)], speed=0)
        with self.assertRaises(ConfigError):
            LevelSequencer([(-1, 1)])
        with self.assertRaises(ConfigError):
            LevelSequencer([(1, 1)], idle_release_s=-1)
        with self.assertRaises(ConfigError):
            SequencePolicy.parse("loop")
        self.assertIs(SequencePolicy.parse(" HALT "), SequencePolicy.HALT)

    def test_parse_levels(self) -> None:
        self.assertEqual(parse_levels("1:5, 5:1"), (Level(1, 5), Level(5, 1)))
        with self.assertRaises(ConfigError):
            parse_levels("1-5")
        with self.assertRaises(ConfigError):
            parse_levels(" , ")
        with self.assertRaises(ConfigError):
            Level(True, 1)


if __name__ == "__main__":
    unittest.main()
