#!/usr/bin/env python3
"""
sim/victims.py
==============
Per-round victim entities.

A :class:`VictimSet` is built once per round from the active
:class:`~sim.levels.Level` and is never resized afterwards; only the
``struck`` flag of its members changes, and only from False to True.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from sim.levels import Level
from sim.track import Lane, TrackLayout


@dataclass
class Victim:
    """A single entity standing on a lane.

    Attributes
    ----------
    id : str
        ``T0``, ``T1``, … for the top lane, ``B0``, … for the bottom lane.
    lane : Lane
        Lane the victim stands on.
    slot_index : int
        Position in the lane's row of victims.
    x : float
        Longitudinal world position (centre of the footprint).
    """

    id: str
    lane: Lane
    slot_index: int
    x: float
    _struck: bool = field(default=False, repr=False)

    @property
    def struck(self) -> bool:
        return self._struck

    def strike(self) -> bool:
        """Mark the victim as struck.  Returns True only on the first call."""
        if self._struck:
            return False
        self._struck = True
        return True

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "lane": self.lane.value,
            "slot": self.slot_index,
            "x": self.x,
            "struck": self._struck,
        }


class VictimSet:
    """Fixed collection of victims for one round."""

    def __init__(self, victims: Tuple[Victim, ...]) -> None:
        self._victims = tuple(victims)
        ids = [v.id for v in self._victims]
        if len(set(ids)) != len(ids):
            raise ValueError("duplicate victim ids")

    @classmethod
    def for_level(cls, level: Level, layout: TrackLayout) -> "VictimSet":
        """One victim per configured count on each lane."""
        victims: List[Victim] = []
        for lane, count in ((Lane.TOP, level.top_count), (Lane.BOTTOM, level.bottom_count)):
            for i in range(count):
                victims.append(
                    Victim(
                        id=f"{lane.value}{i}",
                        lane=lane,
                        slot_index=i,
                        x=layout.slot_position(count, i),
                    )
                )
        return cls(tuple(victims))

    def __iter__(self) -> Iterator[Victim]:
        return iter(self._victims)

    def __len__(self) -> int:
        return len(self._victims)

    def get(self, victim_id: str) -> Optional[Victim]:
        for victim in self._victims:
            if victim.id == victim_id:
                return victim
        return None

    def on_lane(self, lane: Lane) -> List[Victim]:
        return [v for v in self._victims if v.lane is lane]

    def struck(self) -> List[Victim]:
        return [v for v in self._victims if v.struck]

    def survivors(self) -> List[Victim]:
        return [v for v in self._victims if not v.struck]

    def struck_count(self, lane: Optional[Lane] = None) -> int:
        return sum(1 for v in self._victims if v.struck and (lane is None or v.lane is lane))

    def counts(self) -> Dict[str, int]:
        """Struck / total tallies keyed for HUD display."""
        return {
            "top_total": len(self.on_lane(Lane.TOP)),
            "bottom_total": len(self.on_lane(Lane.BOTTOM)),
            "top_struck": self.struck_count(Lane.TOP),
            "bottom_struck": self.struck_count(Lane.BOTTOM),
        }
