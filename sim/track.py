#!/usr/bin/env python3
"""
sim/track.py
============
Track geometry for the split-and-merge layout.

Every boundary and offset lives in the frozen :class:`TrackLayout`
dataclass so that experiments can swap layouts without touching code.
The layout answers one question for everybody else: *how far from the
mainline is a vehicle at longitudinal position x on a given lane?*

Longitudinal layout (x grows to the right)::

    start ── gate_entry ╱ branch_start ──── branch_end ╲ merge_exit ── end
                        ╲ (bottom lane)                ╱

Lateral offsets use screen convention: negative values are drawn above
the mainline, positive values below it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from sim.errors import ConfigError


class Lane(str, Enum):
    """One of the two parallel tracks past the split."""

    TOP = "T"
    BOTTOM = "B"

    @classmethod
    def parse(cls, value: object) -> Optional["Lane"]:
        """Map ``Lane`` / ``"T"`` / ``"top"`` style tags to a member.

        Returns ``None`` for anything that does not name a lane.
        """
        if isinstance(value, Lane):
            return value
        if not isinstance(value, str):
            return None
        tag = value.strip().upper()
        if tag in ("T", "TOP"):
            return cls.TOP
        if tag in ("B", "BOTTOM"):
            return cls.BOTTOM
        return None


@dataclass(frozen=True)
class TrackLayout:
    """Immutable bag of every geometry parameter.

    Groups: longitudinal boundaries, lateral offsets, victim slots,
    vehicle hit zone.
    """

    # ── Longitudinal boundaries ───────────────────────────────────────────
    start_x: float = 0.0
    """Where the vehicle is placed at the start of every round."""

    gate_entry_x: float = 200.0
    """Gate boundary: the lane choice becomes binding here and the
    tracks start to diverge."""

    branch_start_x: float = 280.0
    """End of the diverging curve; the lanes run parallel from here."""

    branch_end_x: float = 520.0
    """End of the parallel section; the merging curve starts here."""

    merge_exit_x: float = 600.0
    """End of the merging curve; mainline from here on."""

    end_x: float = 800.0
    """End of the visible span; reaching it completes the round."""

    # ── Lateral offsets ───────────────────────────────────────────────────
    mainline_offset: float = 0.0
    top_offset: float = -60.0
    bottom_offset: float = 60.0

    # ── Victim slots ──────────────────────────────────────────────────────
    victim_spacing: float = 22.0
    """Distance between neighbouring victims on the same lane."""

    victim_half_width: float = 6.0
    """Half of a victim's longitudinal footprint."""

    # ── Vehicle ───────────────────────────────────────────────────────────
    hit_zone_length: float = 14.0
    """Length of the vehicle's forward hit zone, measured ahead of its
    longitudinal position."""

    def __post_init__(self) -> None:
        bounds = (
            ("start_x", self.start_x),
            ("gate_entry_x", self.gate_entry_x),
            ("branch_start_x", self.branch_start_x),
            ("branch_end_x", self.branch_end_x),
            ("merge_exit_x", self.merge_exit_x),
            ("end_x", self.end_x),
        )
        for (name_a, a), (name_b, b) in zip(bounds, bounds[1:]):
            if b < a:
                raise ConfigError(f"{name_b}={b} lies before {name_a}={a}")
        if self.victim_spacing < 0 or self.victim_half_width < 0:
            raise ConfigError("victim spacing and footprint must be non-negative")
        if self.hit_zone_length < 0:
            raise ConfigError("hit_zone_length must be non-negative")

    # ── derived positions ─────────────────────────────────────────────────

    @property
    def gate_x(self) -> float:
        """Longitudinal position at which the lane choice is frozen."""
        return self.gate_entry_x

    @property
    def branch_midpoint(self) -> float:
        return (self.branch_start_x + self.branch_end_x) / 2.0

    def branch_offset(self, lane: Lane) -> float:
        """Fixed lateral offset of *lane* inside the branch span."""
        if lane is Lane.TOP:
            return self.top_offset
        if lane is Lane.BOTTOM:
            return self.bottom_offset
        raise ValueError(f"not a lane: {lane!r}")

    def slot_position(self, count: int, slot_index: int) -> float:
        """Longitudinal position of victim *slot_index* out of *count*.

        Slots are centred on the branch midpoint.  Spacing shrinks for
        crowded lanes so every slot stays within
        ``[branch_start_x, branch_end_x]``.
        """
        if not 0 <= slot_index < count:
            raise IndexError(f"slot {slot_index} outside 0..{count - 1}")
        return self.branch_midpoint + (slot_index - (count - 1) / 2.0) * self.slot_spacing(count)

    def slot_spacing(self, count: int) -> float:
        """Distance between neighbouring slots on a lane holding *count* victims."""
        span = self.branch_end_x - self.branch_start_x
        return min(self.victim_spacing, span / max(count - 1, 1))

    # ── lateral geometry ──────────────────────────────────────────────────

    def lateral_offset(self, x: float, lane: Optional[Lane]) -> float:
        """Lateral offset of the track for *lane* at longitudinal *x*.

        Before the gate and after the merge the mainline offset is
        returned whatever *lane* is.  Inside the split *lane* must be a
        :class:`Lane`; passing ``None`` there raises :class:`ValueError`.
        """
        if x < self.gate_entry_x or x >= self.merge_exit_x:
            return self.mainline_offset
        if lane is None:
            raise ValueError(f"lane required at x={x} (inside the split)")
        branch = self.branch_offset(lane)
        if x < self.branch_start_x:
            t = _progress(x, self.gate_entry_x, self.branch_start_x)
            return _blend(self.mainline_offset, branch, t)
        if x <= self.branch_end_x:
            return branch
        t = _progress(x, self.branch_end_x, self.merge_exit_x)
        return _blend(branch, self.mainline_offset, t)

    def sample(self, lane: Lane, n: int = 64) -> List[Tuple[float, float]]:
        """Return *n* ``(x, offset)`` points along *lane* from start to end."""
        if n < 2:
            raise ValueError("need at least two samples")
        step = (self.end_x - self.start_x) / (n - 1)
        points = []
        for i in range(n):
            x = self.start_x + i * step
            points.append((x, self.lateral_offset(x, lane)))
        return points


def smoothstep(t: float) -> float:
    """Cubic blend ``3t² − 2t³``: 0 at t=0, 1 at t=1, flat at both ends."""
    return t * t * (3.0 - 2.0 * t)


def _progress(x: float, a: float, b: float) -> float:
    """Normalised progress of *x* across ``[a, b]``, clamped to [0, 1].

    A span of zero (or negative) length collapses to a step at *b*.
    """
    span = b - a
    if span <= 0.0:
        return 1.0 if x >= b else 0.0
    return min(1.0, max(0.0, (x - a) / span))


def _blend(a: float, b: float, t: float) -> float:
    return a + (b - a) * smoothstep(t)
