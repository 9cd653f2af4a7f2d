#!/usr/bin/env python3
"""
sim/collision.py
================
Strike detection between the trolley and the victims of the active round.

The vehicle's forward hit zone is a longitudinal interval starting at
its position and reaching ``hit_zone_length`` ahead.  When the caller
passes the position from the previous tick the zone is swept back to
it, so a long tick cannot jump over a victim.  Lanes are mutually
exclusive, so only victims on the committed lane can ever be struck.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from sim.levels import VehicleState
from sim.track import TrackLayout
from sim.victims import Victim, VictimSet

log = logging.getLogger("collision")


def intervals_overlap(a: Tuple[float, float], b: Tuple[float, float]) -> bool:
    """True when closed intervals *a* and *b* share at least one point."""
    return a[0] <= b[1] and b[0] <= a[1]


class CollisionDetector:
    """Maps vehicle position + committed lane to victim strikes.

    Parameters
    ----------
    layout : TrackLayout
        Supplies the hit-zone length and the victim footprint.
    """

    def __init__(self, layout: TrackLayout) -> None:
        self.layout = layout

    def hit_zone(
        self,
        position: float,
        previous_position: Optional[float] = None,
    ) -> Tuple[float, float]:
        """Longitudinal interval covered by the vehicle this tick."""
        rear = position if previous_position is None else min(position, previous_position)
        return rear, position + self.layout.hit_zone_length

    def footprint(self, victim: Victim) -> Tuple[float, float]:
        half = self.layout.victim_half_width
        return victim.x - half, victim.x + half

    def detect(
        self,
        vehicle: VehicleState,
        victims: Optional[VictimSet],
        previous_position: Optional[float] = None,
    ) -> List[Victim]:
        """Strike every victim the vehicle overlaps on its committed lane.

        Returns only the victims struck by *this* call; victims that were
        already struck are left untouched and are not reported again.
        """
        if victims is None:
            raise RuntimeError("collision check before the round was initialised")
        if not vehicle.committed or vehicle.lane is None:
            raise RuntimeError("collision check requires a committed lane")

        zone = self.hit_zone(vehicle.longitudinal_position, previous_position)
        newly_struck: List[Victim] = []
        for victim in victims.on_lane(vehicle.lane):
            if victim.struck:
                continue
            if intervals_overlap(zone, self.footprint(victim)) and victim.strike():
                newly_struck.append(victim)
                log.debug(
                    "struck %s at x=%.1f (zone %.1f..%.1f)",
                    victim.id, victim.x, zone[0], zone[1],
                )
        return newly_struck
