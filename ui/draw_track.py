"""
ui/draw_track.py
================
Renders the split-and-merge track: ground strip, sleepers, both rails of
the mainline and of each lane, and the gate marker.

All functions are *pure renderers* — they read the layout and draw to a
surface.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
import pygame

from sim.track import Lane, TrackLayout
from ui.helpers import draw_alpha_polyline, parallel_polylines, sample_lane, to_screen
from ui.types import Camera


class TrackRenderer:
    """Mixin that draws the rails and the gate."""

    def _lane_screen_points(self, layout: TrackLayout, lane: Lane) -> np.ndarray:
        return to_screen(self.camera, sample_lane(layout, lane, self.TRACK_SAMPLES))

    def draw_track(self, surface: pygame.Surface, layout: TrackLayout) -> None:
        half_gauge = self.RAIL_GAUGE_PX / 2.0
        _, y_top = self.camera.track_to_screen(layout.start_x, layout.top_offset)
        _, y_bottom = self.camera.track_to_screen(layout.start_x, layout.bottom_offset)
        ground = pygame.Rect(0, int(y_top) - 28, self.width, int(y_bottom - y_top) + 56)
        pygame.draw.rect(surface, self.GROUND_COLOR, ground)

        for lane in (Lane.TOP, Lane.BOTTOM):
            centre = self._lane_screen_points(layout, lane)
            self._draw_sleepers(surface, centre)
            left, right = parallel_polylines(centre, half_gauge)
            pygame.draw.lines(surface, self.RAIL_COLOR, False, left.tolist(), 2)
            pygame.draw.lines(surface, self.RAIL_COLOR, False, right.tolist(), 2)
        self._draw_gate(surface, layout)

    def _draw_sleepers(self, surface: pygame.Surface, centre: np.ndarray) -> None:
        seg = np.diff(centre, axis=0)
        dist = np.concatenate(([0.0], np.cumsum(np.hypot(seg[:, 0], seg[:, 1]))))
        marks = np.arange(0.0, dist[-1], self.SLEEPER_EVERY_PX)
        xs = np.interp(marks, dist, centre[:, 0])
        ys = np.interp(marks, dist, centre[:, 1])
        half = self.RAIL_GAUGE_PX
        for x, y in zip(xs, ys):
            pygame.draw.line(
                surface, self.SLEEPER_COLOR,
                (int(x), int(y - half)), (int(x), int(y + half)), 3,
            )

    def _draw_gate(self, surface: pygame.Surface, layout: TrackLayout) -> None:
        top = self.camera.track_to_screen(layout.gate_x, layout.top_offset)
        bottom = self.camera.track_to_screen(layout.gate_x, layout.bottom_offset)
        pygame.draw.line(
            surface, self.GATE_COLOR,
            (int(top[0]), int(top[1]) - 10), (int(bottom[0]), int(bottom[1]) + 10), 1,
        )

    def draw_selection(
        self,
        surface: pygame.Surface,
        layout: TrackLayout,
        lane: Optional[Lane],
    ) -> None:
        """Highlight the lane the operator is currently pointing at."""
        if lane is None:
            return
        centre = self._lane_screen_points(layout, lane)
        split = (centre[:, 0] >= self.camera.track_to_screen(layout.gate_x, 0)[0])
        pts = [tuple(p) for p in centre[split].tolist()]
        draw_alpha_polyline(
            surface,
            (*self.SELECTION_COLOR, self.SELECTION_ALPHA),
            pts,
            self.RAIL_GAUGE_PX * 3,
        )

    def build_camera(self, layout: TrackLayout) -> Camera:
        return Camera(
            screen_w=self.width,
            screen_h=self.height,
            track_start=layout.start_x,
            track_end=layout.end_x,
        )
