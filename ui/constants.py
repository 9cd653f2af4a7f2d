#!/usr/bin/env python3
"""Visual constants shared across all renderers."""

from __future__ import annotations

from typing import Sequence, Tuple

from .types import ColorRGB


class ViewConstants:
    """Mixin providing every visual / layout constant."""

    BG_COLOR: ColorRGB = (18, 20, 18)
    GROUND_COLOR: ColorRGB = (34, 48, 32)
    RAIL_COLOR: ColorRGB = (170, 170, 175)
    SLEEPER_COLOR: ColorRGB = (92, 70, 48)
    GATE_COLOR: ColorRGB = (255, 196, 0)
    HUD_BG_COLOR: ColorRGB = (22, 22, 22)
    HUD_BORDER_COLOR: ColorRGB = (42, 42, 42)
    TEXT_COLOR: ColorRGB = (230, 230, 235)
    MUTED_TEXT_COLOR: ColorRGB = (140, 140, 140)
    TROLLEY_COLOR: ColorRGB = (214, 64, 52)
    TROLLEY_TRIM_COLOR: ColorRGB = (250, 220, 160)
    VICTIM_COLOR: ColorRGB = (240, 200, 120)
    STRUCK_COLOR: ColorRGB = (120, 20, 20)
    SELECTION_COLOR: ColorRGB = (0, 255, 127)
    WARNING_COLOR: ColorRGB = (255, 60, 60)

    SELECTION_ALPHA = 70
    HUD_BLINK_MS = 500
    STRIKE_SHAKE_PX = 4.0
    SMOOTHING_RATE = 18.0

    RAIL_GAUGE_PX = 8
    SLEEPER_EVERY_PX = 14
    TRACK_SAMPLES = 160

    VICTIM_RADIUS_PX = 6
    TROLLEY_SIZE_PX: Tuple[int, int] = (30, 18)

    TICKER_LINES = 5
    RUN_LOG_LINES = 8

    CHOICE_LABELS: Sequence[Tuple[str, str]] = (
        ("T", "TOP"),
        ("B", "BOTTOM"),
    )

    SCREENSHOT_DIR = "screenshots"
