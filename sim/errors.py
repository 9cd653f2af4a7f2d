#!/usr/bin/env python3
"""
sim/errors.py
=============
Exception types raised by the simulation core.
"""

from __future__ import annotations


class ConfigError(ValueError):
    """Invalid level, layout or runtime configuration."""


class GateStateError(RuntimeError):
    """A :class:`~sim.decision_gate.DecisionGate` transition was requested
    from a state that does not allow it.
    """
