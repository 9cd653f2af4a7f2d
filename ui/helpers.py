"""
ui/helpers.py
=============
Pure utility functions shared across UI modules:
track sampling, parallel-rail offsets, interpolation, alpha-surface
drawing, and text rendering.
"""

from __future__ import annotations

import math
from typing import List, Optional, Tuple

import numpy as np
import pygame

from sim.track import Lane, TrackLayout
from ui.types import Camera

# ── Interpolation helpers ─────────────────────────────────────────────────────

def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def approach(current: float, target: float, rate: float, dt: float) -> float:
    """Exponential smoothing of *current* toward *target*."""
    return lerp(current, target, 1.0 - math.exp(-rate * max(0.0, dt)))


# ── Track sampling ────────────────────────────────────────────────────────────

def sample_lane(
    layout: TrackLayout,
    lane: Optional[Lane],
    n: int,
    x0: Optional[float] = None,
    x1: Optional[float] = None,
) -> np.ndarray:
    """``(n, 2)`` array of ``(x, offset)`` along *lane* between *x0* and *x1*.

    With ``lane=None`` only the shared mainline sections can be sampled.
    """
    start = layout.start_x if x0 is None else x0
    end = layout.end_x if x1 is None else x1
    xs = np.linspace(start, end, max(2, n))
    offsets = np.fromiter(
        (layout.lateral_offset(float(x), lane) for x in xs), dtype=float, count=len(xs)
    )
    return np.column_stack((xs, offsets))


def to_screen(camera: Camera, points: np.ndarray) -> np.ndarray:
    """Map an ``(n, 2)`` track-space array to screen pixels."""
    out = np.empty_like(points, dtype=float)
    out[:, 0] = camera.margin_px + (points[:, 0] - camera.track_start) * camera.scale
    out[:, 1] = camera.screen_h * 0.5 + points[:, 1] * camera.lateral_scale
    return out


def parallel_polylines(points: np.ndarray, half_gap: float) -> Tuple[np.ndarray, np.ndarray]:
    """Offset a screen polyline to both sides by *half_gap* pixels."""
    d = np.gradient(points, axis=0)
    norms = np.hypot(d[:, 0], d[:, 1])
    norms[norms < 1e-9] = 1.0
    normals = np.column_stack((-d[:, 1] / norms, d[:, 0] / norms))
    return points + normals * half_gap, points - normals * half_gap


# ── Alpha drawing helpers ────────────────────────────────────────────────────

def draw_alpha_rect(
    target: pygame.Surface,
    color: Tuple[int, ...],
    rect: pygame.Rect,
    border_radius: int = 0,
) -> None:
    """Draw a semi-transparent rectangle (colour tuple with 4 channels)."""
    tmp = pygame.Surface((rect.w, rect.h), pygame.SRCALPHA)
    pygame.draw.rect(tmp, color, (0, 0, rect.w, rect.h), border_radius=border_radius)
    target.blit(tmp, rect.topleft)


def draw_alpha_polyline(
    target: pygame.Surface,
    color: Tuple[int, ...],
    points: List[Tuple[float, float]],
    width: int,
) -> None:
    """Draw a semi-transparent open polyline."""
    if len(points) < 2:
        return
    tmp = pygame.Surface(target.get_size(), pygame.SRCALPHA)
    pygame.draw.lines(tmp, color, False, points, width)
    target.blit(tmp, (0, 0))


# ── Text helper ──────────────────────────────────────────────────────────────

def render_text(
    surface: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    pos: Tuple[int, int],
    color: Tuple[int, ...] = (230, 230, 235),
    anchor: str = "topleft",
) -> pygame.Rect:
    """Render text with flexible *anchor* ('topleft', 'center', 'midright' …)."""
    img = font.render(text, True, color)
    rect = img.get_rect(**{anchor: pos})
    surface.blit(img, rect)
    return rect


class ViewHelpers:
    """Mixin with font loading and small formatting helpers."""

    @staticmethod
    def _load_font(size: int, bold: bool = False) -> pygame.font.Font:
        for name in ("dejavusansmono", "menlo", "consolas", "couriernew"):
            path = pygame.font.match_font(name, bold=bold)
            if path:
                return pygame.font.Font(path, size)
        return pygame.font.Font(None, size + 4)

    def _choice_label(self, choice: Optional[str]) -> str:
        for tag, label in self.CHOICE_LABELS:
            if choice == tag:
                return label
        return "FATE"
