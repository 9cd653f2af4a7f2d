#!/usr/bin/env python3
"""
sim/levels.py
=============
Round configuration and the records a run leaves behind.

* :class:`Level` — victim counts for one round (immutable).
* :class:`VehicleState` — the trolley's position, lane and commitment.
* :class:`DecisionRecord` — one committed choice (immutable).
* :class:`RunLog` — append-only sequence of decision records.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple

from sim.errors import ConfigError
from sim.track import Lane


@dataclass(frozen=True)
class Level:
    """Victim counts for one round."""

    top_count: int
    bottom_count: int

    def __post_init__(self) -> None:
        for name in ("top_count", "bottom_count"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{name} must be an int, got {value!r}")
            if value < 0:
                raise ConfigError(f"{name} must be non-negative, got {value}")

    @classmethod
    def parse(cls, text: str) -> "Level":
        """Build a level from ``"top:bottom"`` (e.g. ``"1:5"``)."""
        parts = text.strip().split(":")
        if len(parts) != 2:
            raise ConfigError(f"level must look like 'top:bottom', got {text!r}")
        try:
            top, bottom = int(parts[0]), int(parts[1])
        except ValueError:
            raise ConfigError(f"level counts must be integers, got {text!r}") from None
        return cls(top, bottom)


def parse_levels(text: str) -> Tuple[Level, ...]:
    """Parse a comma separated list such as ``"1:5,5:1,2:2"``."""
    levels = tuple(Level.parse(chunk) for chunk in text.split(",") if chunk.strip())
    if not levels:
        raise ConfigError("at least one level is required")
    return levels


@dataclass
class VehicleState:
    """The trolley.

    ``lane`` is ``None`` while undecided.  ``committed`` flips to True
    once per round; after that ``lane`` no longer changes until the
    next round starts.
    """

    longitudinal_position: float = 0.0
    lane: Optional[Lane] = None
    committed: bool = False

    def as_dict(self) -> dict:
        return {
            "x": self.longitudinal_position,
            "lane": self.lane.value if self.lane else None,
            "committed": self.committed,
        }


@dataclass(frozen=True)
class DecisionRecord:
    """One committed decision.  ``choice`` is ``None`` when the operator
    never chose and the gate fell back to a random lane."""

    level_index: int
    top_count: int
    bottom_count: int
    choice: Optional[Lane] = None

    def as_dict(self) -> dict:
        """Mapping in the shape accepted by :func:`analysis.analyser.analyse`."""
        return {
            "level": self.level_index,
            "top": self.top_count,
            "bottom": self.bottom_count,
            "choice": self.choice.value if self.choice else None,
        }


class RunLog:
    """Ordered, append-only list of :class:`DecisionRecord`.

    Survives round resets; only an explicit :meth:`clear` empties it.
    """

    def __init__(self, records: Iterable[DecisionRecord] = ()) -> None:
        self._records: List[DecisionRecord] = list(records)

    def append(self, record: DecisionRecord) -> None:
        if not isinstance(record, DecisionRecord):
            raise TypeError(f"expected DecisionRecord, got {record!r}")
        self._records.append(record)

    def clear(self) -> None:
        self._records.clear()

    @property
    def records(self) -> Tuple[DecisionRecord, ...]:
        return tuple(self._records)

    def as_dicts(self) -> List[dict]:
        return [r.as_dict() for r in self._records]

    def __iter__(self) -> Iterator[DecisionRecord]:
        return iter(tuple(self._records))

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index: int) -> DecisionRecord:
        return self._records[index]
