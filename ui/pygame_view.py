#!/usr/bin/env python3
"""
Main view class — combines all UI mixins into one runnable Pygame window.

Module layout
─────────────
    ui/
    ├── types.py           – ColorRGB, Camera, TrolleyRenderState
    ├── constants.py       – ViewConstants mixin (all class-level constants)
    ├── helpers.py         – ViewHelpers mixin + track sampling utilities
    ├── draw_track.py      – TrackRenderer mixin (rails, sleepers, gate)
    ├── draw_vehicles.py   – VehicleRenderer mixin (trolley, victims)
    ├── hud.py             – HudRenderer mixin  (HUD, run log, verdict, splash)
    └── pygame_view.py     – PygameTrolleyView (this file – main loop)

The view only *reads* the simulation through the bridge's snapshot and
only *writes* lane selections, releases, pause and reset.
"""

from __future__ import annotations

import os
from collections import deque
from datetime import datetime
from typing import Any, Optional

import pygame

from sim.track import Lane
from .constants import ViewConstants
from .draw_track import TrackRenderer
from .draw_vehicles import VehicleRenderer
from .helpers import ViewHelpers
from .hud import HudRenderer
from .types import TrolleyRenderState

_VERDICT_HOLD_S = 6.0


class PygameTrolleyView(
    ViewConstants,
    ViewHelpers,
    TrackRenderer,
    VehicleRenderer,
    HudRenderer,
):
    """Trolley-problem visualiser powered by Pygame.

    Inherits drawing logic from focused mixin modules so each file
    stays small and single-purpose.
    """

    def __init__(self, bridge: Any, width: int = 1000, height: int = 600, fps: int = 60):
        self.bridge = bridge
        self.width = width
        self.height = height
        self.fps = fps

        self.screen: Optional[pygame.Surface] = None
        self.clock: Optional[pygame.time.Clock] = None
        self.font_small: Optional[pygame.font.Font] = None
        self.font_tiny: Optional[pygame.font.Font] = None
        self.font_title: Optional[pygame.font.Font] = None

        self.camera = self.build_camera(bridge.layout)
        self.time_seconds = 0.0
        self.trolley_state = TrolleyRenderState()
        self.ticker: deque = deque(maxlen=self.TICKER_LINES)

        # UI state
        self.paused = False
        self.show_debug = False
        self.show_splash = True
        self._verdict_until = 0.0
        self._screenshot_flash_until = 0.0

    # ------------------------------------------------------------------ #
    #  Resize                                                              #
    # ------------------------------------------------------------------ #
    def _handle_resize(self, new_w: int, new_h: int) -> None:
        self.width = max(480, new_w)
        self.height = max(320, new_h)
        self.camera = self.build_camera(self.bridge.layout)
        self.screen = pygame.display.set_mode(
            (self.width, self.height), pygame.RESIZABLE
        )

    # ------------------------------------------------------------------ #
    #  Screenshot                                                          #
    # ------------------------------------------------------------------ #
    def _take_screenshot(self) -> None:
        if self.screen is None:
            return
        os.makedirs(self.SCREENSHOT_DIR, exist_ok=True)
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = os.path.join(self.SCREENSHOT_DIR, f"trolley_{stamp}.png")
        pygame.image.save(self.screen, path)
        self._screenshot_flash_until = self.time_seconds + 0.35

    # ------------------------------------------------------------------ #
    #  Input                                                               #
    # ------------------------------------------------------------------ #
    def _handle_key(self, key: int) -> bool:
        """Apply one key press.  Returns False when the window should close."""
        if key == pygame.K_ESCAPE:
            return False
        if key in (pygame.K_UP, pygame.K_w):
            self.bridge.select_lane(Lane.TOP)
        elif key in (pygame.K_DOWN, pygame.K_s):
            self.bridge.select_lane(Lane.BOTTOM)
        elif key == pygame.K_SPACE:
            self.bridge.release()
        elif key == pygame.K_p:
            self.paused = not self.paused
            self.bridge.set_paused(self.paused)
        elif key == pygame.K_r:
            self.paused = False
            self.ticker.clear()
            self._verdict_until = 0.0
            self.bridge.reset(clear_log=True)
        elif key == pygame.K_F3:
            self.show_debug = not self.show_debug
        elif key == pygame.K_F12:
            self._take_screenshot()
        return True

    # ------------------------------------------------------------------ #
    #  Bus polling                                                         #
    # ------------------------------------------------------------------ #
    def _poll_events(self) -> None:
        for event in self.bridge.bus.poll_all():
            payload = event.payload
            if event.topic == "round.start":
                self.ticker.append(
                    f"LEVEL {payload['level'] + 1}: {payload['top']} TOP / {payload['bottom']} BOTTOM"
                )
            elif event.topic == "round.commit":
                self.ticker.append(f"COMMITTED  {self._choice_label(payload.get('choice'))}")
            elif event.topic == "victim.struck":
                self.kick_shake()
            elif event.topic == "round.complete":
                struck = payload.get("top_struck", 0) + payload.get("bottom_struck", 0)
                self.ticker.append(f"ROUND OVER  {struck} STRUCK")
            elif event.topic == "run.complete":
                self.ticker.append(payload["summary"].upper())
                self._verdict_until = self.time_seconds + _VERDICT_HOLD_S

    # ------------------------------------------------------------------ #
    #  Main loop                                                           #
    # ------------------------------------------------------------------ #
    def run(self) -> None:
        pygame.init()
        pygame.display.set_caption("THE TROLLEY")
        self.screen = pygame.display.set_mode(
            (self.width, self.height), pygame.RESIZABLE
        )
        self.clock = pygame.time.Clock()
        self.font_small = self._load_font(14, bold=False)
        self.font_tiny = self._load_font(11, bold=False)
        self.font_title = self._load_font(30, bold=True)

        running = True
        while running:
            delta_time = self.clock.tick(self.fps) / 1000.0
            self.time_seconds += delta_time

            # ---- events ------------------------------------------------- #
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.VIDEORESIZE:
                    self._handle_resize(event.w, event.h)
                elif event.type == pygame.KEYDOWN:
                    if self.show_splash:
                        self.show_splash = False
                        continue
                    running = self._handle_key(event.key)

            # ---- splash ------------------------------------------------- #
            if self.show_splash:
                self.screen.fill(self.BG_COLOR)
                self._draw_splash(self.screen, self.time_seconds)
                pygame.display.flip()
                continue

            # ---- simulation tick ---------------------------------------- #
            if not self.paused:
                self.bridge.tick(delta_time)
            self._poll_events()

            snapshot = self.bridge.get_snapshot()
            self.animate_trolley(snapshot, delta_time)

            # ---- render ------------------------------------------------- #
            self.screen.fill(self.BG_COLOR)
            self.draw_track(self.screen, self.bridge.layout)
            if self.bridge.accepts_input():
                self.draw_selection(self.screen, self.bridge.layout, snapshot.selection)
            self.draw_victims(self.screen, snapshot)
            self.draw_trolley(self.screen)

            # HUD layers
            self.draw_hud(self.screen, snapshot, self.bridge.get_level_info(), self.time_seconds)
            self.draw_run_log(self.screen, self.bridge.get_run_log())
            self.draw_ticker(self.screen)
            if snapshot.halted or self.time_seconds < self._verdict_until:
                self.draw_verdict(self.screen, self.bridge.get_result())
            if self.show_debug:
                self._draw_debug_overlay(self.screen, snapshot, delta_time)
            if self.paused:
                self._draw_pause_banner(self.screen)
            if self.time_seconds < self._screenshot_flash_until:
                flash = pygame.Surface(
                    (self.width, self.height), pygame.SRCALPHA
                )
                flash.fill((255, 255, 255, 40))
                self.screen.blit(flash, (0, 0))

            pygame.display.flip()

        pygame.quit()


# ---------------------------------------------------------------------- #
#  Convenience entry point                                                 #
# ---------------------------------------------------------------------- #
def run_pygame_view(
    bridge: Any, width: int = 1000, height: int = 600, fps: int = 60
) -> None:
    view = PygameTrolleyView(bridge=bridge, width=width, height=height, fps=fps)
    view.run()


if __name__ == "__main__":
    raise SystemExit(
        "pygame_view.py needs a bridge object. Run `python main.py` "
        "or call run_pygame_view(your_bridge)."
    )
