#!/usr/bin/env python3
"""HUD panel, run log, event ticker, verdict card, splash and pause banner (mixin)."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

import pygame

from sim.decision_gate import GateState
from sim.sequencer import RoundSnapshot
from .helpers import draw_alpha_rect, render_text


class HudRenderer:
    """Mixin that draws every overlay / HUD element."""

    # ------------------------------------------------------------------ #
    #  Main HUD panel                                                      #
    # ------------------------------------------------------------------ #

    def draw_hud(
        self,
        surface: pygame.Surface,
        snapshot: RoundSnapshot,
        level_info: Mapping[str, Any],
        tick: float,
    ) -> None:
        if self.font_small is None or self.font_tiny is None:
            return

        panel_rect = pygame.Rect(16, 16, 300, 86)
        draw_alpha_rect(surface, (*self.HUD_BG_COLOR, 220), panel_rect, border_radius=6)
        pygame.draw.rect(surface, self.HUD_BORDER_COLOR, panel_rect, width=1, border_radius=6)

        x, y = panel_rect.x + 10, panel_rect.y + 8
        render_text(
            surface, self.font_small,
            f"LEVEL {snapshot.level_index + 1}/{snapshot.level_count}",
            (x, y), self.TEXT_COLOR,
        )
        render_text(
            surface, self.font_tiny,
            f"TOP {snapshot.level.top_count}   BOTTOM {snapshot.level.bottom_count}"
            f"   HITS {level_info.get('hits', 0)}",
            (x, y + 20), self.MUTED_TEXT_COLOR,
        )

        blink_on = int((tick * 1000) // self.HUD_BLINK_MS) % 2 == 0
        prompt, color = self._prompt_for(snapshot)
        if prompt and (blink_on or snapshot.gate_state is not GateState.AWAITING_CHOICE):
            render_text(surface, self.font_tiny, prompt, (x, y + 42), color)

        runs = level_info.get("runs_completed", 0)
        if runs:
            render_text(
                surface, self.font_tiny, f"RUNS {runs}",
                (panel_rect.right - 10, y), self.MUTED_TEXT_COLOR, anchor="topright",
            )

    def _prompt_for(self, snapshot: RoundSnapshot):
        state = snapshot.gate_state
        if snapshot.halted:
            return "RUN OVER  -  R to play again", self.TEXT_COLOR
        if state is GateState.AWAITING_CHOICE:
            return "UP / DOWN choose a lane   SPACE let it roll", self.GATE_COLOR
        if state is GateState.ARMED:
            lane = self._choice_label(snapshot.selection.value if snapshot.selection else None)
            return f"HEADING {lane}  -  change before the gate", self.SELECTION_COLOR
        if state is GateState.COMMITTED:
            return f"COMMITTED {snapshot.lane.name if snapshot.lane else '?'}", self.WARNING_COLOR
        return "", self.TEXT_COLOR

    # ------------------------------------------------------------------ #
    #  Run log / ticker                                                    #
    # ------------------------------------------------------------------ #

    def draw_run_log(self, surface: pygame.Surface, run_log: Sequence[Mapping[str, Any]]) -> None:
        if self.font_tiny is None:
            return
        rows = list(run_log)[-self.RUN_LOG_LINES:]
        box_w = 190
        box_h = 26 + max(1, len(rows)) * 15
        rect = pygame.Rect(self.width - box_w - 16, 16, box_w, box_h)
        draw_alpha_rect(surface, (*self.HUD_BG_COLOR, 220), rect, border_radius=6)
        pygame.draw.rect(surface, self.HUD_BORDER_COLOR, rect, width=1, border_radius=6)
        render_text(surface, self.font_tiny, "DECISIONS", (rect.x + 10, rect.y + 6), self.MUTED_TEXT_COLOR)
        y = rect.y + 22
        for row in rows:
            label = self._choice_label(row.get("choice"))
            line = f"L{row.get('level', 0) + 1:<3}{row.get('top', 0)}:{row.get('bottom', 0)}  {label}"
            render_text(surface, self.font_tiny, line, (rect.x + 10, y), self.TEXT_COLOR)
            y += 15

    def draw_ticker(self, surface: pygame.Surface) -> None:
        if self.font_tiny is None:
            return
        y = self.height - 16 - len(self.ticker) * 14
        for line in self.ticker:
            render_text(surface, self.font_tiny, line, (16, y), self.MUTED_TEXT_COLOR)
            y += 14

    # ------------------------------------------------------------------ #
    #  Verdict card                                                        #
    # ------------------------------------------------------------------ #

    def draw_verdict(self, surface: pygame.Surface, result: Optional[Mapping[str, Any]]) -> None:
        if not result or self.font_title is None or self.font_small is None:
            return
        overlay = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 150))
        surface.blit(overlay, (0, 0))
        cx, cy = self.width // 2, self.height // 2
        render_text(surface, self.font_title, result["verdict"].upper(), (cx, cy - 50), self.TEXT_COLOR, "center")
        render_text(surface, self.font_small, result["tagline"], (cx, cy - 14), self.GATE_COLOR, "center")
        stats = (
            f"LIVES LOST {result['livesLost']}   POTENTIAL SAVED {result['potentialSaved']}   "
            f"AGENCY {result['agency']:.2f}   COMPASSION {result['compassion']:.2f}"
        )
        render_text(surface, self.font_tiny, stats, (cx, cy + 20), self.MUTED_TEXT_COLOR, "center")

    # ------------------------------------------------------------------ #
    #  Splash screen                                                       #
    # ------------------------------------------------------------------ #

    def _draw_splash(self, surface: pygame.Surface, tick: float) -> None:
        if self.font_title is None or self.font_small is None:
            return
        title = self.font_title.render("THE TROLLEY", True, (240, 240, 240))
        surface.blit(
            title,
            title.get_rect(center=(self.width // 2, self.height // 2 - 30)),
        )
        if int(tick * 2) % 2 == 0:
            prompt = self.font_small.render("Press any key to start", True, (160, 160, 160))
            surface.blit(
                prompt,
                prompt.get_rect(center=(self.width // 2, self.height // 2 + 20)),
            )
        lines = [
            "UP / W     Top lane",
            "DOWN / S   Bottom lane",
            "SPACE      Let it roll",
            "P          Pause/Resume",
            "R          Restart run",
            "F3         Debug overlay",
            "F12        Screenshot",
        ]
        y = self.height // 2 + 60
        for line in lines:
            t = self.font_tiny.render(line, True, (100, 100, 100)) if self.font_tiny else None
            if t:
                surface.blit(t, t.get_rect(center=(self.width // 2, y)))
                y += 16

    # ------------------------------------------------------------------ #
    #  Debug / FPS overlay                                                 #
    # ------------------------------------------------------------------ #

    def _draw_debug_overlay(
        self, surface: pygame.Surface, snapshot: RoundSnapshot, dt: float
    ) -> None:
        if self.font_tiny is None:
            return
        fps = self.clock.get_fps() if self.clock else 0.0
        lines = [
            f"FPS   {fps:.1f}",
            f"DT    {dt * 1000:.1f} ms",
            f"X     {snapshot.position:.1f}",
            f"OFF   {snapshot.offset:.1f}",
            f"GATE  {snapshot.gate_state.name}",
            f"RES   {self.width}x{self.height}",
            f"BUS   {self.bridge.bus.metrics.published}",
        ]
        x, y = 16, 110
        for line in lines:
            text = self.font_tiny.render(line, True, (0, 255, 127))
            surface.blit(text, (x, y))
            y += 14

    # ------------------------------------------------------------------ #
    #  Pause banner                                                        #
    # ------------------------------------------------------------------ #

    def _draw_pause_banner(self, surface: pygame.Surface) -> None:
        overlay = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 100))
        surface.blit(overlay, (0, 0))
        if self.font_title:
            text = self.font_title.render("PAUSED", True, (220, 220, 220))
            surface.blit(text, text.get_rect(center=(self.width // 2, self.height // 2)))
