"""
EventBus: In-memory pub/sub channel between the simulation and its consumers.

Supports:
    - Topic-based publishing
    - Draining one topic or every topic in publish order
    - Counters for published / delivered events

Intended usage:
    - SimBridge publishes 'round.start', 'round.commit', 'victim.struck',
      'round.complete' and 'run.complete'
    - The UI polls them once per frame for its ticker and verdict panel
"""

import time
import uuid
import logging
from typing import Dict, List

from .message import SimEvent
from .metrics import BusMetrics

log = logging.getLogger(__name__)


class EventBus:
    """
    Synchronous transport for simulation events.

    Events are stored until a consumer polls them; nothing is dropped or
    delayed.
    """

    def __init__(self):
        """
        Initialize an empty EventBus.
        """
        self._topics: Dict[str, List[SimEvent]] = {}
        self._order: List[SimEvent] = []
        self.metrics = BusMetrics()

    def publish(self, topic: str, sender: str, payload: dict) -> str:
        """
        Publish an event to a specific topic.

        Args:
            topic (str): The topic name (e.g., 'round.commit').
            sender (str): ID of the emitter.
            payload (dict): Arbitrary data dictionary representing the event contents.

        Returns:
            str: The unique event ID.
        """
        event = SimEvent(
            id=str(uuid.uuid4()),
            topic=topic,
            sender=sender,
            payload=dict(payload),
            ts=time.time(),
        )
        self._topics.setdefault(topic, []).append(event)
        self._order.append(event)
        self.metrics.record_publish(topic)
        log.debug("publish topic=%s sender=%s id=%s", topic, sender, event.id)
        return event.id

    def poll(self, topic: str) -> List[SimEvent]:
        """
        Retrieve and clear all events from a given topic.

        Args:
            topic (str): The topic name to poll events from.

        Returns:
            List[SimEvent]: Events published to the topic since the last poll.
        """
        events = self._topics.get(topic, [])
        self._topics[topic] = []
        if events:
            drained = set(e.id for e in events)
            self._order = [e for e in self._order if e.id not in drained]
        self.metrics.record_delivery(len(events))
        return events

    def poll_all(self) -> List[SimEvent]:
        """
        Retrieve and clear every pending event, oldest first.

        Returns:
            List[SimEvent]: All pending events in publish order.
        """
        events = self._order
        self._order = []
        self._topics = {}
        self.metrics.record_delivery(len(events))
        return events

    def pending(self) -> int:
        """
        Number of events waiting to be polled.
        """
        return len(self._order)
