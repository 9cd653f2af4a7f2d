#!/usr/bin/env python3
"""Trolley sprite, victims, strike feedback and position smoothing (mixin)."""

from __future__ import annotations

import math

import pygame

from sim.sequencer import RoundSnapshot
from .helpers import approach


class VehicleRenderer:
    """Mixin that draws the trolley and the victims."""

    # ------------------------------------------------------------------ #
    #  Animation                                                           #
    # ------------------------------------------------------------------ #

    def animate_trolley(self, snapshot: RoundSnapshot, dt: float) -> None:
        """Ease the drawn trolley toward the simulated position."""
        tx, ty = self.camera.track_to_screen(snapshot.position, snapshot.offset)
        state = self.trolley_state
        # snap on round restart instead of sliding back across the screen
        if tx < state.x - self.width * 0.5:
            state.x, state.y = tx, ty
        prev_x, prev_y = state.x, state.y
        state.x = approach(state.x, tx, self.SMOOTHING_RATE, dt)
        state.y = approach(state.y, ty, self.SMOOTHING_RATE, dt)
        dx, dy = state.x - prev_x, state.y - prev_y
        if abs(dx) + abs(dy) > 1e-3:
            state.heading_deg = -math.degrees(math.atan2(dy, dx))
        state.shake = max(0.0, state.shake - dt * 20.0)

    def kick_shake(self) -> None:
        self.trolley_state.shake = self.STRIKE_SHAKE_PX

    # ------------------------------------------------------------------ #
    #  Public draw methods                                                 #
    # ------------------------------------------------------------------ #

    def draw_victims(self, surface: pygame.Surface, snapshot: RoundSnapshot) -> None:
        r = self.VICTIM_RADIUS_PX
        for victim in snapshot.victims:
            sx, sy = self.camera.track_to_screen(victim.x, victim.offset)
            cx, cy = int(sx), int(sy)
            if victim.struck:
                pygame.draw.line(surface, self.STRUCK_COLOR, (cx - r, cy - r), (cx + r, cy + r), 3)
                pygame.draw.line(surface, self.STRUCK_COLOR, (cx - r, cy + r), (cx + r, cy - r), 3)
                continue
            # head + body, standing across the rails
            pygame.draw.circle(surface, self.VICTIM_COLOR, (cx, cy - r - 3), r // 2 + 1)
            pygame.draw.line(surface, self.VICTIM_COLOR, (cx, cy - r), (cx, cy + r), 3)
            pygame.draw.line(surface, self.VICTIM_COLOR, (cx - r, cy - 1), (cx + r, cy - 1), 2)

    def draw_trolley(self, surface: pygame.Surface) -> None:
        state = self.trolley_state
        w, h = self.TROLLEY_SIZE_PX
        sprite = pygame.Surface((w, h), pygame.SRCALPHA)

        body = pygame.Rect(0, 0, w, h)
        pygame.draw.rect(sprite, self.TROLLEY_COLOR, body, border_radius=4)
        # windows
        for i in range(3):
            pygame.draw.rect(
                sprite, self.TROLLEY_TRIM_COLOR, (4 + i * 8, 4, 6, h - 8), border_radius=1,
            )
        # headlight
        pygame.draw.circle(sprite, (255, 248, 200), (w - 2, h // 2), 2)
        pygame.draw.rect(sprite, (235, 235, 235), body, width=1, border_radius=4)

        rotated = pygame.transform.rotate(sprite, state.heading_deg)
        jitter = math.sin(self.time_seconds * 60.0) * state.shake
        dest = rotated.get_rect(center=(int(state.x), int(state.y + jitter)))
        surface.blit(rotated, dest)
