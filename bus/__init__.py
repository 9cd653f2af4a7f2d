"""
bus — In-memory simulation event channel
========================================

Provides a lightweight pub/sub transport so the simulation core can
report what happened during a tick without knowing who is listening.

Modules
-------
message
    :class:`SimEvent` dataclass.
event_bus
    :class:`EventBus` publish / poll transport.
metrics
    :class:`BusMetrics` counter snapshot.
"""

from .message import SimEvent
from .event_bus import EventBus
from .metrics import BusMetrics

__all__ = [
    "SimEvent",
    "EventBus",
    "BusMetrics",
]
