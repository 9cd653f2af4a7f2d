#!/usr/bin/env python3
"""
config.py
=========
Application-wide configuration constants.

Values can be overridden via environment variables (see :mod:`main`).
This module is a thin, import-safe leaf — it never imports from
other project packages.
"""

# ── Run defaults ─────────────────────────────────────────────────────────────
# (top, bottom) victim counts, one pair per level
DEFAULT_LEVELS = (
    (1, 5),
    (5, 1),
    (2, 2),
    (1, 0),
    (3, 4),
    (0, 2),
    (4, 3),
)
DEFAULT_SEQUENCE_POLICY: str = "halt"
DEFAULT_IDLE_RELEASE_S = None  # seconds; None waits for the operator

# ── Simulation defaults ──────────────────────────────────────────────────────
DEFAULT_VEHICLE_SPEED: float = 120.0  # track units per second
DEFAULT_TICK_RATE_HZ: float = 60.0

# ── Track layout defaults (track units) ──────────────────────────────────────
TRACK_GATE_ENTRY_X: float = 200.0
TRACK_BRANCH_START_X: float = 280.0
TRACK_BRANCH_END_X: float = 520.0
TRACK_MERGE_EXIT_X: float = 600.0
TRACK_END_X: float = 800.0
TRACK_LANE_OFFSET: float = 60.0

# ── UI defaults ──────────────────────────────────────────────────────────────
WINDOW_WIDTH: int = 1000
WINDOW_HEIGHT: int = 600
TARGET_FPS: int = 60

# ── Analyser API ─────────────────────────────────────────────────────────────
API_HOST: str = "0.0.0.0"
API_PORT: int = 8000

# ── Logging ──────────────────────────────────────────────────────────────────
LOG_FILE: str = "trolley.log"
SEQUENCER_DEBUG_LOG_FILE: str = "sequencer_debug.log"
