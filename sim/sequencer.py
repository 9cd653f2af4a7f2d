#!/usr/bin/env python3
"""
sim/sequencer.py
================
Drives a run: an ordered list of :class:`~sim.levels.Level` configs,
one round per level.

The per-round state lives in an explicit :class:`SimulationContext`
(vehicle, gate, victims, run log).  :class:`LevelSequencer` owns the
context and mutates it only inside :meth:`LevelSequencer.tick` and the
synchronous input calls.  Renderers get a frozen :class:`RoundSnapshot`.

Round lifecycle
---------------
1. :meth:`~LevelSequencer.start_round` — fresh victims, vehicle at the
   start, gate back to ``AWAITING_CHOICE``.
2. :meth:`~LevelSequencer.tick` — advance while the gate allows it;
   commit at the gate boundary (one :class:`~sim.levels.DecisionRecord`
   appended right then); strike victims once committed; complete the
   round at the end of the span.
3. :meth:`~LevelSequencer.next_round` — move the cursor.  When the
   sequence is exhausted the run log is analysed, then the sequencer
   wraps to the first level or halts depending on its
   :class:`SequencePolicy`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Sequence, Tuple

from analysis.analyser import AnalysisResult, analyse
from sim.collision import CollisionDetector
from sim.decision_gate import DecisionGate, GateState
from sim.errors import ConfigError
from sim.levels import DecisionRecord, Level, RunLog, VehicleState
from sim.track import Lane, TrackLayout
from sim.victims import Victim, VictimSet

log = logging.getLogger("sequencer")


class SequencePolicy(Enum):
    """What happens after the last level."""

    WRAP = "wrap"
    HALT = "halt"

    @classmethod
    def parse(cls, value: str) -> "SequencePolicy":
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigError(f"unknown sequence policy {value!r} (wrap|halt)") from None


@dataclass
class SimulationContext:
    """Everything that changes during a round, plus the run log."""

    vehicle: VehicleState
    gate: DecisionGate
    victims: Optional[VictimSet]
    run_log: RunLog
    idle_s: float = 0.0


@dataclass
class TickResult:
    """What happened during one :meth:`LevelSequencer.tick`."""

    record: Optional[DecisionRecord] = None
    struck: List[Victim] = field(default_factory=list)
    round_started: bool = False
    round_completed: bool = False
    run_completed: bool = False
    result: Optional[AnalysisResult] = None


@dataclass(frozen=True)
class VictimView:
    id: str
    lane: Lane
    x: float
    offset: float
    struck: bool


@dataclass(frozen=True)
class RoundSnapshot:
    """Read-only view of the active round for renderers."""

    level_index: int
    level_count: int
    level: Level
    position: float
    lane: Optional[Lane]
    committed: bool
    offset: float
    gate_state: GateState
    selection: Optional[Lane]
    victims: Tuple[VictimView, ...]
    halted: bool


class LevelSequencer:
    """Round-by-round driver for the trolley simulation.

    Parameters
    ----------
    levels : sequence
        :class:`Level` objects or ``(top, bottom)`` pairs; at least one.
    layout : TrackLayout or None
        Track geometry; defaults to :class:`TrackLayout()`.
    speed : float
        Vehicle speed in track units per second.
    policy : SequencePolicy
        Wrap to the first level or halt after the last one.
    rng : object or None
        Randomness source for the gate's fallback lane.
    idle_release_s : float or None
        Release the gate automatically after this many seconds without
        input.  ``None`` waits forever.
    auto_advance : bool
        Start the next round on the tick after a round completes.
    """

    def __init__(
        self,
        levels: Sequence[Any],
        layout: Optional[TrackLayout] = None,
        speed: float = 120.0,
        policy: SequencePolicy = SequencePolicy.WRAP,
        rng: Optional[Any] = None,
        idle_release_s: Optional[float] = None,
        auto_advance: bool = True,
    ) -> None:
        self.levels: Tuple[Level, ...] = tuple(
            item if isinstance(item, Level) else Level(*item) for item in levels
        )
        if not self.levels:
            raise ConfigError("at least one level is required")
        if speed <= 0:
            raise ConfigError(f"speed must be positive, got {speed}")
        if idle_release_s is not None and idle_release_s < 0:
            raise ConfigError(f"idle_release_s must be non-negative, got {idle_release_s}")
        self.layout = layout or TrackLayout()
        self.speed = float(speed)
        self.policy = policy
        self.idle_release_s = idle_release_s
        self.auto_advance = auto_advance
        self.detector = CollisionDetector(self.layout)

        self.context = SimulationContext(
            vehicle=VehicleState(self.layout.start_x),
            gate=DecisionGate(rng),
            victims=None,
            run_log=RunLog(),
        )
        self._cursor = 0
        self._halted = False
        self.runs_completed = 0
        self.last_result: Optional[AnalysisResult] = None
        self.start_round()

    # ── queries ───────────────────────────────────────────────────────────

    @property
    def level_index(self) -> int:
        return self._cursor

    @property
    def level(self) -> Level:
        return self.levels[self._cursor]

    @property
    def run_log(self) -> RunLog:
        return self.context.run_log

    @property
    def gate(self) -> DecisionGate:
        return self.context.gate

    @property
    def vehicle(self) -> VehicleState:
        return self.context.vehicle

    @property
    def victims(self) -> Optional[VictimSet]:
        return self.context.victims

    @property
    def halted(self) -> bool:
        return self._halted

    def snapshot(self) -> RoundSnapshot:
        ctx = self.context
        vehicle = ctx.vehicle
        x = vehicle.longitudinal_position
        # before commitment the vehicle is still on the mainline
        offset = (
            self.layout.lateral_offset(x, vehicle.lane)
            if vehicle.committed
            else self.layout.mainline_offset
        )
        victims = tuple(
            VictimView(
                id=v.id,
                lane=v.lane,
                x=v.x,
                offset=self.layout.lateral_offset(v.x, v.lane),
                struck=v.struck,
            )
            for v in (ctx.victims or ())
        )
        return RoundSnapshot(
            level_index=self._cursor,
            level_count=len(self.levels),
            level=self.level,
            position=x,
            lane=vehicle.lane,
            committed=vehicle.committed,
            offset=offset,
            gate_state=ctx.gate.state,
            selection=ctx.gate.selection,
            victims=victims,
            halted=self._halted,
        )

    # ── round lifecycle ───────────────────────────────────────────────────

    def start_round(self) -> None:
        """(Re)initialise every per-round value for the active level."""
        ctx = self.context
        ctx.victims = VictimSet.for_level(self.level, self.layout)
        ctx.vehicle = VehicleState(longitudinal_position=self.layout.start_x)
        ctx.gate.reset()
        ctx.idle_s = 0.0
        log.info(
            "round %d/%d started: top=%d bottom=%d",
            self._cursor + 1, len(self.levels),
            self.level.top_count, self.level.bottom_count,
        )

    def next_round(self) -> TickResult:
        """Advance the cursor; analyse and wrap/halt at the end of the list."""
        result = TickResult()
        if self._halted:
            return result
        self._cursor += 1
        if self._cursor >= len(self.levels):
            result.run_completed = True
            result.result = self._finish_run()
            if self.policy is SequencePolicy.HALT:
                self._cursor = len(self.levels) - 1
                self._halted = True
                # per-round state is dropped, the run log stays
                self.context.victims = None
                log.info("sequence halted after %d levels", len(self.levels))
                return result
            self._cursor = 0
        self.start_round()
        result.round_started = True
        return result

    def reset_run(self, clear_log: bool = False) -> None:
        """Back to the first level.  The run log survives unless *clear_log*."""
        self._cursor = 0
        self._halted = False
        if clear_log:
            self.context.run_log.clear()
            self.last_result = None
        self.start_round()
        log.info("run reset (log %s)", "cleared" if clear_log else "kept")

    def _finish_run(self) -> AnalysisResult:
        self.runs_completed += 1
        self.last_result = analyse(self.context.run_log)
        log.info(
            "run %d complete after %d decisions: %s",
            self.runs_completed, len(self.context.run_log), self.last_result.summary,
        )
        return self.last_result

    # ── input ─────────────────────────────────────────────────────────────

    def select_lane(self, lane: Lane) -> bool:
        if self._halted:
            return False
        accepted = self.context.gate.select(lane)
        if accepted:
            self.context.vehicle.lane = lane
        return accepted

    def release(self) -> bool:
        if self._halted:
            return False
        return self.context.gate.release()

    # ── tick ──────────────────────────────────────────────────────────────

    def tick(self, dt: float) -> TickResult:
        """One logical update of *dt* seconds."""
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")
        if self._halted:
            return TickResult()

        ctx = self.context
        gate = ctx.gate

        if gate.state is GateState.ROUND_COMPLETE:
            if self.auto_advance:
                return self.next_round()
            return TickResult()

        if gate.state is GateState.AWAITING_CHOICE:
            ctx.idle_s += dt
            if self.idle_release_s is not None and ctx.idle_s >= self.idle_release_s:
                log.info("no input for %.1fs, releasing the gate", ctx.idle_s)
                gate.release()
            return TickResult()

        result = TickResult()
        vehicle = ctx.vehicle
        previous = vehicle.longitudinal_position
        vehicle.longitudinal_position = min(self.layout.end_x, previous + self.speed * dt)

        if gate.state is GateState.ARMED:
            vehicle.lane = gate.selection
            if vehicle.longitudinal_position >= self.layout.gate_x:
                result.record = self._commit()

        if vehicle.committed:
            result.struck = self.detector.detect(vehicle, ctx.victims, previous_position=previous)

        log.debug(
            "tick x=%.1f lane=%s gate=%s struck=%d",
            vehicle.longitudinal_position,
            vehicle.lane.name if vehicle.lane else "-",
            gate.state.name, len(result.struck),
        )

        if vehicle.longitudinal_position >= self.layout.end_x:
            gate.complete()
            result.round_completed = True
            log.info(
                "round %d complete: %d struck, %d spared",
                self._cursor + 1,
                ctx.victims.struck_count() if ctx.victims else 0,
                len(ctx.victims.survivors()) if ctx.victims else 0,
            )
        return result

    def _commit(self) -> DecisionRecord:
        ctx = self.context
        lane = ctx.gate.commit()
        ctx.vehicle.lane = lane
        ctx.vehicle.committed = True
        record = DecisionRecord(
            level_index=self._cursor,
            top_count=self.level.top_count,
            bottom_count=self.level.bottom_count,
            choice=ctx.gate.recorded_choice,
        )
        ctx.run_log.append(record)
        log.info(
            "level %d committed to %s (choice=%s)",
            self._cursor + 1, lane.name,
            record.choice.name if record.choice else "UNSET",
        )
        return record
