"""
sim/sim_bridge.py
=================
Orchestrator tying :mod:`sim.sequencer` and the
:class:`bus.event_bus.EventBus` together.  The UI calls :meth:`SimBridge.tick`
once per frame and reads the latest snapshot through the getters below.

Public API consumed by :mod:`ui.pygame_view`
--------------------------------------------
* ``tick(dt)``                → ``TickResult``
* ``get_snapshot()``          → ``RoundSnapshot``
* ``get_run_log()``           → ``List[dict]``
* ``get_level_info()``        → ``dict``
* ``get_result()``            → ``dict`` or ``None``
* ``accepts_input()``         → ``bool``
* ``select_lane(lane)``       → ``bool``
* ``release()``               → ``bool``
* ``is_finished()``           → ``bool``
* ``reset(clear_log)``        → ``None``
* ``set_paused(bool)``        → ``None``
"""

from __future__ import annotations

import logging
import random
from typing import Any, Dict, List, Optional, Sequence

from bus.event_bus import EventBus
from sim.sequencer import LevelSequencer, RoundSnapshot, SequencePolicy, TickResult
from sim.track import Lane, TrackLayout

log = logging.getLogger("sim_bridge")

_SENDER = "sequencer"


class SimBridge:
    """Single-threaded adapter between the sequencer and the UI.

    Every call runs synchronously on the caller's thread; the UI's frame
    loop is the scheduler.

    Parameters
    ----------
    levels : sequence
        Level configs handed to :class:`~sim.sequencer.LevelSequencer`.
    layout : TrackLayout or None
        Track geometry.
    speed : float
        Vehicle speed (track units per second).
    policy : SequencePolicy
        Wrap or halt after the last level.
    random_seed : int or None
        Seed for the fallback-lane randomness source.
    idle_release_s : float or None
        Auto-release timeout forwarded to the sequencer.
    bus : EventBus or None
        Event channel; a private one is created when *None*.
    """

    def __init__(
        self,
        levels: Sequence[Any],
        layout: Optional[TrackLayout] = None,
        speed: float = 120.0,
        policy: SequencePolicy = SequencePolicy.WRAP,
        random_seed: Optional[int] = None,
        idle_release_s: Optional[float] = None,
        bus: Optional[EventBus] = None,
    ) -> None:
        self._sequencer = LevelSequencer(
            levels,
            layout=layout,
            speed=speed,
            policy=policy,
            rng=random.Random(random_seed),
            idle_release_s=idle_release_s,
        )
        self.bus = bus or EventBus()
        self._paused = False
        self.hit_count = 0
        self._publish_round_start()

    @property
    def sequencer(self) -> LevelSequencer:
        return self._sequencer

    @property
    def layout(self) -> TrackLayout:
        return self._sequencer.layout

    # ── Tick ──────────────────────────────────────────────────────────────────

    def tick(self, dt: float) -> TickResult:
        """Advance the simulation by one logical step unless paused."""
        if self._paused:
            return TickResult()
        result = self._sequencer.tick(dt)
        self._publish(result)
        return result

    def _publish(self, result: TickResult) -> None:
        if result.record is not None:
            self.bus.publish("round.commit", _SENDER, result.record.as_dict())
        for victim in result.struck:
            self.hit_count += 1
            self.bus.publish("victim.struck", _SENDER, victim.as_dict())
        if result.round_completed:
            victims = self._sequencer.victims
            self.bus.publish(
                "round.complete",
                _SENDER,
                {
                    "level": self._sequencer.level_index,
                    **(victims.counts() if victims else {}),
                },
            )
        if result.run_completed and result.result is not None:
            self.bus.publish("run.complete", _SENDER, result.result.as_dict())
        if result.round_started:
            self._publish_round_start()

    def _publish_round_start(self) -> None:
        level = self._sequencer.level
        self.bus.publish(
            "round.start",
            _SENDER,
            {
                "level": self._sequencer.level_index,
                "top": level.top_count,
                "bottom": level.bottom_count,
            },
        )

    # ── Read API ──────────────────────────────────────────────────────────────

    def get_snapshot(self) -> RoundSnapshot:
        return self._sequencer.snapshot()

    def get_run_log(self) -> List[Dict[str, Any]]:
        return self._sequencer.run_log.as_dicts()

    def get_level_info(self) -> Dict[str, Any]:
        """Current level index and counts for progress displays."""
        level = self._sequencer.level
        return {
            "index": self._sequencer.level_index,
            "count": len(self._sequencer.levels),
            "top": level.top_count,
            "bottom": level.bottom_count,
            "runs_completed": self._sequencer.runs_completed,
            "hits": self.hit_count,
        }

    def get_result(self) -> Optional[Dict[str, Any]]:
        """The verdict of the last completed run, if any."""
        result = self._sequencer.last_result
        return result.as_dict() if result else None

    def accepts_input(self) -> bool:
        return not self._sequencer.halted and self._sequencer.gate.accepts_input

    def is_finished(self) -> bool:
        """True once a halting sequence has run out of levels."""
        return self._sequencer.halted

    # ── Write API ─────────────────────────────────────────────────────────────

    def select_lane(self, lane: Lane) -> bool:
        accepted = self._sequencer.select_lane(lane)
        if accepted:
            log.debug("lane %s selected on level %d", lane.name, self._sequencer.level_index)
        return accepted

    def release(self) -> bool:
        return self._sequencer.release()

    def reset(self, clear_log: bool = True) -> None:
        """Restart the run from the first level."""
        self._sequencer.reset_run(clear_log=clear_log)
        self.bus.poll_all()
        self.hit_count = 0
        self._paused = False
        self._publish_round_start()
        log.info("SimBridge reset")

    def set_paused(self, paused: bool) -> None:
        """Pause / unpause the simulation tick."""
        self._paused = paused
