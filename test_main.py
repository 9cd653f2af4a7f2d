#!/usr/bin/env python3
"""
test_main.py
============
Smoke tests for the entry points: environment configuration and a full
headless run through :mod:`demo`.

Usage::

    python test_main.py
"""

import unittest

import config
import demo
from main import bridge_from_env
from sim.errors import ConfigError
from sim.sequencer import SequencePolicy


class BridgeFromEnvTests(unittest.TestCase):
    def test_defaults(self):
        bridge = bridge_from_env({})
        self.assertEqual(len(bridge.sequencer.levels), len(config.DEFAULT_LEVELS))
        self.assertIs(bridge.sequencer.policy, SequencePolicy.HALT)
        self.assertEqual(bridge.layout.gate_x, config.TRACK_GATE_ENTRY_X)

    def test_overrides(self):
        bridge = bridge_from_env({
            "TROLLEY_LEVELS": "1:5,5:1",
            "TROLLEY_POLICY": "wrap",
            "TROLLEY_SEED": "4",
            "TROLLEY_SPEED": "240",
            "TROLLEY_IDLE_RELEASE_S": "2.5",
        })
        seq = bridge.sequencer
        self.assertEqual(len(seq.levels), 2)
        self.assertIs(seq.policy, SequencePolicy.WRAP)
        self.assertEqual(seq.speed, 240.0)
        self.assertEqual(seq.idle_release_s, 2.5)

    def test_bad_values(self):
        for env in (
            {"TROLLEY_SEED": "abc"},
            {"TROLLEY_SPEED": "fast"},
            {"TROLLEY_SPEED": "0"},
            {"TROLLEY_SPEED": "-5"},
            {"TROLLEY_POLICY": "forever"},
            {"TROLLEY_LEVELS": "1:x"},
        ):
            with self.subTest(env=env):
                with self.assertRaises(ConfigError):
                    bridge_from_env(env)


class DemoRunTests(unittest.TestCase):
    def test_scripted_operator(self):
        result = demo.play(demo.spare_the_crowd)
        self.assertEqual(result["livesLost"], 8)
        self.assertEqual(result["agency"], 0.86)
        self.assertEqual(result["compassion"], 0.3)
        self.assertEqual(result["verdict"], "Calculating Pragmatist")

    def test_bystander(self):
        result = demo.play(demo.bystander)
        self.assertEqual(result["agency"], 0.0)
        self.assertEqual(result["livesLost"], 0)
        self.assertEqual(result["verdict"], "Detached Bystander")


if __name__ == "__main__":
    unittest.main()
