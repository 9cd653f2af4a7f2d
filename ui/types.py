"""
ui/types.py
===========
Lightweight data containers used across every UI module.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

ColorRGB = Tuple[int, int, int]
ColorRGBA = Tuple[int, int, int, int]


@dataclass
class Camera:
    """Viewport mapping track coordinates to screen pixels.

    ``x`` runs along the track, ``offset`` is the lateral offset
    returned by :meth:`sim.track.TrackLayout.lateral_offset`.
    """
    screen_w: int
    screen_h: int
    track_start: float = 0.0
    track_end: float = 800.0
    margin_px: int = 60
    lateral_scale: float = 1.4

    @property
    def scale(self) -> float:
        span = max(1e-6, self.track_end - self.track_start)
        return (self.screen_w - 2 * self.margin_px) / span

    def track_to_screen(self, x: float, offset: float) -> Tuple[float, float]:
        sx = self.margin_px + (x - self.track_start) * self.scale
        sy = self.screen_h * 0.5 + offset * self.lateral_scale
        return sx, sy


@dataclass
class TrolleyRenderState:
    """Smoothed trolley position for drawing between sim ticks."""
    x: float = 0.0
    y: float = 0.0
    heading_deg: float = 0.0
    shake: float = 0.0
