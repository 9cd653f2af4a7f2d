#!/usr/bin/env python3
"""
sim/decision_gate.py
====================
State machine that owns one round's lane choice and the moment it
becomes binding.

::

    AWAITING_CHOICE ──select / release──▶ ARMED ──commit──▶ COMMITTED
          ▲                                 │ select (any number)   │
          └──────────── reset ◀── ROUND_COMPLETE ◀──complete────────┘

While ``AWAITING_CHOICE`` the round is paused.  ``ARMED`` lets the
vehicle advance and keeps the selection changeable ("last write wins").
At the gate boundary the sequencer calls :meth:`DecisionGate.commit`,
which freezes the selection.  A round that reaches the gate with no
selection gets a lane drawn from the injected randomness source, but
the recorded choice stays ``None``: the realised lane only drives the
motion and the collisions.
"""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Any, Optional

from sim.errors import GateStateError
from sim.track import Lane

log = logging.getLogger("decision_gate")


class GateState(Enum):
    AWAITING_CHOICE = "awaiting_choice"
    ARMED = "armed"
    COMMITTED = "committed"
    ROUND_COMPLETE = "round_complete"


class DecisionGate:
    """Lane-choice state machine for a single round.

    Parameters
    ----------
    rng : object or None
        Randomness source used for the fallback lane.  Anything with a
        ``random() -> float`` method works; defaults to a fresh
        :class:`random.Random`.
    """

    def __init__(self, rng: Optional[Any] = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self.state = GateState.AWAITING_CHOICE
        self.selection: Optional[Lane] = None
        self.committed_lane: Optional[Lane] = None
        self.recorded_choice: Optional[Lane] = None

    # ── queries ───────────────────────────────────────────────────────────

    @property
    def accepts_input(self) -> bool:
        """True while a lane selection can still change the outcome."""
        return self.state in (GateState.AWAITING_CHOICE, GateState.ARMED)

    @property
    def is_advancing(self) -> bool:
        """True while the vehicle is allowed to move."""
        return self.state in (GateState.ARMED, GateState.COMMITTED)

    @property
    def used_fallback(self) -> bool:
        return self.committed_lane is not None and self.recorded_choice is None

    # ── transitions ───────────────────────────────────────────────────────

    def reset(self) -> None:
        """Return to ``AWAITING_CHOICE`` and forget the previous round."""
        self.state = GateState.AWAITING_CHOICE
        self.selection = None
        self.committed_lane = None
        self.recorded_choice = None

    def select(self, lane: Lane) -> bool:
        """Select *lane*.  Returns False when the gate no longer listens."""
        if not isinstance(lane, Lane):
            raise TypeError(f"expected Lane, got {lane!r}")
        if not self.accepts_input:
            log.debug("selection %s ignored in state %s", lane.name, self.state.name)
            return False
        if self.state is GateState.AWAITING_CHOICE:
            self.state = GateState.ARMED
        self.selection = lane
        log.debug("lane %s selected", lane.name)
        return True

    def release(self) -> bool:
        """Let the vehicle roll without choosing a lane.

        Only meaningful in ``AWAITING_CHOICE``; returns False otherwise.
        """
        if self.state is not GateState.AWAITING_CHOICE:
            return False
        self.state = GateState.ARMED
        log.debug("gate released without a selection")
        return True

    def commit(self) -> Lane:
        """Freeze the current selection and return the realised lane."""
        if self.state is not GateState.ARMED:
            raise GateStateError(f"cannot commit from {self.state.name}")
        if self.selection is not None:
            lane = self.selection
        else:
            lane = Lane.TOP if self._rng.random() < 0.5 else Lane.BOTTOM
            log.info("no lane chosen, fate picked %s", lane.name)
        self.committed_lane = lane
        self.recorded_choice = self.selection
        self.state = GateState.COMMITTED
        return lane

    def complete(self) -> None:
        """Mark the round as finished (vehicle reached the end of the span)."""
        if self.state is not GateState.COMMITTED:
            raise GateStateError(f"cannot complete from {self.state.name}")
        self.state = GateState.ROUND_COMPLETE
