"""
sim — Simulation core
=====================

Modules
-------
track
    :class:`TrackLayout` geometry and :class:`Lane`.
decision_gate
    :class:`DecisionGate` lane-choice state machine.
levels
    :class:`Level`, :class:`VehicleState`, :class:`DecisionRecord`, :class:`RunLog`.
victims
    :class:`Victim` and the per-round :class:`VictimSet`.
collision
    :class:`CollisionDetector` strike detection.
sequencer
    :class:`LevelSequencer` round lifecycle and run driver.
sim_bridge
    :class:`SimBridge` tick adapter publishing events for the UI.
errors
    :class:`ConfigError`, :class:`GateStateError`.
"""
