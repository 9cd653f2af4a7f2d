#!/usr/bin/env python3
"""
main.py
=======
Starts the trolley simulator in a Pygame window.

Environment overrides
---------------------
``TROLLEY_LEVELS``          comma separated ``top:bottom`` pairs, e.g. ``1:5,5:1``
``TROLLEY_POLICY``          ``wrap`` or ``halt``
``TROLLEY_SEED``            integer seed for the fallback lane
``TROLLEY_SPEED``           vehicle speed in track units per second
``TROLLEY_IDLE_RELEASE_S``  let the trolley roll after this many idle seconds
``TROLLEY_LOG_LEVEL``       ``DEBUG``, ``INFO``, ``WARNING`` …
"""

import logging
import os
from typing import Mapping, Optional

import config
from logging_setup import setup_logging
from sim.errors import ConfigError
from sim.levels import parse_levels
from sim.sequencer import SequencePolicy
from sim.sim_bridge import SimBridge
from sim.track import TrackLayout


def build_layout() -> TrackLayout:
    """Track layout from the constants in :mod:`config`."""
    return TrackLayout(
        gate_entry_x=config.TRACK_GATE_ENTRY_X,
        branch_start_x=config.TRACK_BRANCH_START_X,
        branch_end_x=config.TRACK_BRANCH_END_X,
        merge_exit_x=config.TRACK_MERGE_EXIT_X,
        end_x=config.TRACK_END_X,
        top_offset=-config.TRACK_LANE_OFFSET,
        bottom_offset=config.TRACK_LANE_OFFSET,
    )


def _env_float(env: Mapping[str, str], name: str) -> Optional[float]:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None


def bridge_from_env(env: Optional[Mapping[str, str]] = None) -> SimBridge:
    """Build a :class:`SimBridge` from :mod:`config` plus environment overrides."""
    env = os.environ if env is None else env

    levels = config.DEFAULT_LEVELS
    if env.get("TROLLEY_LEVELS"):
        levels = parse_levels(env["TROLLEY_LEVELS"])

    policy = SequencePolicy.parse(env.get("TROLLEY_POLICY", config.DEFAULT_SEQUENCE_POLICY))

    seed = None
    if env.get("TROLLEY_SEED"):
        try:
            seed = int(env["TROLLEY_SEED"])
        except ValueError:
            raise ConfigError(f"TROLLEY_SEED must be an integer, got {env['TROLLEY_SEED']!r}") from None

    speed = _env_float(env, "TROLLEY_SPEED")
    if speed is None:
        speed = config.DEFAULT_VEHICLE_SPEED
    idle = _env_float(env, "TROLLEY_IDLE_RELEASE_S")
    if idle is None:
        idle = config.DEFAULT_IDLE_RELEASE_S

    return SimBridge(
        levels,
        layout=build_layout(),
        speed=speed,
        policy=policy,
        random_seed=seed,
        idle_release_s=idle,
    )


def main() -> None:
    level_name = os.environ.get("TROLLEY_LOG_LEVEL", "INFO").upper()
    setup_logging(getattr(logging, level_name, logging.INFO))
    log = logging.getLogger("main")

    bridge = bridge_from_env()
    log.info(
        "Starting trolley simulator: %d levels, policy=%s",
        len(bridge.sequencer.levels), bridge.sequencer.policy.value,
    )

    # Imported late so headless tools can use this module without pygame.
    from ui import run_pygame_view

    try:
        run_pygame_view(
            bridge,
            width=config.WINDOW_WIDTH,
            height=config.WINDOW_HEIGHT,
            fps=config.TARGET_FPS,
        )
    except KeyboardInterrupt:
        log.info("Shutting down...")


if __name__ == "__main__":
    main()
