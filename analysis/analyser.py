#!/usr/bin/env python3
"""
analysis/analyser.py
====================
Reduces a run's decision log to an ethical-archetype verdict.

:func:`analyse` is pure: the same decisions always produce the same
:class:`AnalysisResult`.  Each decision is a mapping (or anything with
``as_dict()``) carrying the victim counts of both lanes and an optional
``choice`` tag.  The counts accept two naming conventions, ``top`` /
``up`` and ``bottom`` / ``down``; the first key wins when present and
missing counts are 0.

Compassion is linearly rescaled so that::

    nobody struck        →  +1
    half the worst case  →   0
    the worst case       →  −1

Command-line use::

    python -m analysis.analyser decisions.json
"""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Mapping, Optional, Tuple

from sim.track import Lane

log = logging.getLogger("analyser")

_TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class RunTotals:
    """Raw tallies gathered before any rounding."""

    decisions: int = 0
    agency_count: int = 0
    lives_lost: float = 0
    potential_saved: float = 0
    max_casualties: float = 0


@dataclass(frozen=True)
class AnalysisResult:
    verdict: str
    tagline: str
    lives_lost: float
    potential_saved: float
    agency: float
    compassion: float

    @property
    def summary(self) -> str:
        return f"{self.verdict} — {self.tagline}"

    def as_dict(self) -> dict:
        """The public result shape (camelCase keys)."""
        return {
            "verdict": self.verdict,
            "tagline": self.tagline,
            "livesLost": self.lives_lost,
            "potentialSaved": self.potential_saved,
            "agency": self.agency,
            "compassion": self.compassion,
            "summary": self.summary,
        }


# ── helpers ───────────────────────────────────────────────────────────────────

def round2(value: float) -> float:
    """Round to two decimals, halves away from zero."""
    rounded = Decimal(str(value)).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)
    # + 0.0 folds a negative zero into 0.0
    return float(rounded) + 0.0


def _as_mapping(decision: Any) -> Mapping[str, Any]:
    if isinstance(decision, Mapping):
        return decision
    if hasattr(decision, "as_dict"):
        return decision.as_dict()
    raise TypeError(f"decision must be a mapping, got {type(decision).__name__}")


def _count(d: Mapping[str, Any], key: str, synonym: str) -> float:
    value = d.get(key)
    if value is None:
        value = d.get(synonym)
    return 0 if value is None else value


def lane_counts(decision: Any) -> Tuple[float, float]:
    """``(top, bottom)`` victim counts of one decision."""
    d = _as_mapping(decision)
    return _count(d, "top", "up"), _count(d, "bottom", "down")


def resolve_choice(decision: Any) -> Optional[Lane]:
    """The deliberately chosen lane, or ``None`` when the choice is unset."""
    return Lane.parse(_as_mapping(decision).get("choice"))


# ── reduction ─────────────────────────────────────────────────────────────────

def aggregate(decisions: Iterable[Any]) -> RunTotals:
    """Tally lives lost, lives spared and deliberate choices."""
    n = agency_count = 0
    lives_lost = potential_saved = max_casualties = 0
    for decision in decisions:
        n += 1
        top, bottom = lane_counts(decision)
        choice = resolve_choice(decision)

        max_casualties += max(top, bottom)
        if choice is Lane.TOP:
            lives_lost += top
            potential_saved += bottom
            agency_count += 1
        elif choice is Lane.BOTTOM:
            lives_lost += bottom
            potential_saved += top
            agency_count += 1
        else:
            potential_saved += -abs(top - bottom)

    return RunTotals(
        decisions=n,
        agency_count=agency_count,
        lives_lost=lives_lost,
        potential_saved=potential_saved,
        max_casualties=max_casualties,
    )


def pick_verdict(agency: float, compassion: float) -> Tuple[str, str]:
    """Map rounded agency / compassion to ``(verdict, tagline)``."""
    # low-agency players first
    if agency < 0.2:
        return "Detached Bystander", "You let fate decide."

    # the rest, ordered by compassion
    if compassion >= 0.5:
        return "Heroic Utilitarian", "You cut losses wherever you could."
    if compassion >= 0.2:
        return "Calculating Pragmatist", "Feelings off, calculator on."
    if compassion > -0.2:
        return "Chaos Conductor", "Equal parts mercy and mayhem."
    if compassion >= -0.5:
        return "Cold Strategist", "Your math favoured the massacre."
    if compassion >= -0.8:
        return "Malevolent Mastermind", "You steered straight into crowds."
    return "Pure Evil", "All aboard the pain train."


def analyse(decisions: Iterable[Any]) -> AnalysisResult:
    """Reduce *decisions* to an :class:`AnalysisResult`.

    Parameters
    ----------
    decisions : iterable
        Mappings with ``top``/``up``, ``bottom``/``down`` and an optional
        ``choice`` (``"T"``, ``"B"``, ``"top"``, ``"bottom"`` or a
        :class:`~sim.track.Lane`).  :class:`~sim.levels.DecisionRecord`
        objects are accepted as well.
    """
    totals = aggregate(decisions)

    agency = round2(totals.agency_count / totals.decisions if totals.decisions else 0)
    compassion = round2(
        1 - 2 * (totals.lives_lost / totals.max_casualties)
        if totals.max_casualties
        else 0  # nothing at stake, nothing to judge
    )

    verdict, tagline = pick_verdict(agency, compassion)
    log.debug(
        "analysed %d decisions: agency=%.2f compassion=%.2f -> %s",
        totals.decisions, agency, compassion, verdict,
    )
    return AnalysisResult(
        verdict=verdict,
        tagline=tagline,
        lives_lost=totals.lives_lost,
        potential_saved=totals.potential_saved,
        agency=agency,
        compassion=compassion,
    )


def main(argv: Optional[list] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        print("usage: python -m analysis.analyser DECISIONS.json", file=sys.stderr)
        return 2
    with open(args[0], "r", encoding="utf-8") as fh:
        decisions = json.load(fh)
    result = analyse(decisions)
    print(json.dumps(result.as_dict(), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
