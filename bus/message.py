"""
SimEvent: Data structure representing an event published on the EventBus.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SimEvent:
    """
    Represents a single event emitted by the simulation.

    Attributes:
        id (str): Unique identifier for the event.
        topic (str): The topic of the event (e.g., 'round.commit', 'victim.struck').
        sender (str): ID of the emitter (e.g., 'sequencer', 'ui').
        payload (dict): Arbitrary dictionary containing event contents.
        ts (float): Timestamp (in seconds) when the event was created.
    """
    id: str
    topic: str
    sender: str
    payload: dict
    ts: float
