#!/usr/bin/env python3
"""
Quick demo — plays a whole run headlessly with scripted choices so you
can see the simulation and the verdict without opening a window.

Usage:
    python3 demo.py                 # scripted operator
    python3 demo.py --bystander     # never touch the lever
"""

import logging
import sys
from typing import Callable, Optional

import config
from logging_setup import setup_logging
from sim.sequencer import SequencePolicy, RoundSnapshot
from sim.sim_bridge import SimBridge
from sim.track import Lane

log = logging.getLogger("demo")


def spare_the_crowd(snapshot: RoundSnapshot) -> Optional[Lane]:
    """Steer into whichever lane holds fewer victims."""
    level = snapshot.level
    if level.top_count == level.bottom_count:
        return None
    return Lane.TOP if level.top_count < level.bottom_count else Lane.BOTTOM


def bystander(snapshot: RoundSnapshot) -> Optional[Lane]:
    return None


def play(
    strategy: Callable[[RoundSnapshot], Optional[Lane]],
    seed: int = 7,
    tick_rate_hz: float = config.DEFAULT_TICK_RATE_HZ,
    max_ticks: int = 100_000,
) -> dict:
    """Run every default level once and return the verdict dict."""
    bridge = SimBridge(
        config.DEFAULT_LEVELS,
        speed=config.DEFAULT_VEHICLE_SPEED,
        policy=SequencePolicy.HALT,
        random_seed=seed,
    )
    dt = 1.0 / tick_rate_hz
    for _ in range(max_ticks):
        if bridge.is_finished():
            break
        if bridge.accepts_input() and bridge.sequencer.gate.selection is None:
            lane = strategy(bridge.get_snapshot())
            if lane is None:
                bridge.release()
            else:
                bridge.select_lane(lane)
        bridge.tick(dt)
        for event in bridge.bus.poll_all():
            if event.topic in ("round.commit", "round.complete"):
                log.info("%-15s %s", event.topic, event.payload)
    result = bridge.get_result()
    if result is None:
        raise RuntimeError("run did not finish within max_ticks")
    return result


if __name__ == "__main__":
    setup_logging(logging.INFO)
    chosen = bystander if "--bystander" in sys.argv[1:] else spare_the_crowd
    outcome = play(chosen)
    print(outcome["summary"])
    print(
        f"lives lost {outcome['livesLost']}  potential saved {outcome['potentialSaved']}  "
        f"agency {outcome['agency']:.2f}  compassion {outcome['compassion']:.2f}"
    )
