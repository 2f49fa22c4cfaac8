"""
Event bus between the simulation core and the presentation shell.

Core components (picker, tour, time controller) publish named events; UI
widgets subscribe to them. Neither side holds a reference to the other.
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Callable, Dict, List


class OrreryEvent(str, Enum):
    """Events published on the bus"""
    HOVER = "hover"                          # payload: InteractionRecord or None
    SELECT = "select"                        # payload: InteractionRecord
    CLOSE_PANEL = "close_panel"              # payload: None
    TOUR_CHANGED = "tour_changed"            # payload: bool (active)
    TIME_SCALE_CHANGED = "time_scale_changed"  # payload: float


class EventBus:
    """
    Synchronous publish/subscribe.

    Handlers run in subscription order on the emitting thread. A failing
    handler is reported and does not stop the others.
    """

    def __init__(self):
        self._subscribers: Dict[OrreryEvent, List[Callable[[Any], None]]] = {
            event: [] for event in OrreryEvent
        }

    def subscribe(self, event: OrreryEvent, callback: Callable[[Any], None]) -> None:
        self._subscribers[OrreryEvent(event)].append(callback)

    def unsubscribe(self, event: OrreryEvent, callback: Callable[[Any], None]) -> None:
        self._subscribers[OrreryEvent(event)] = [
            cb for cb in self._subscribers[OrreryEvent(event)] if cb != callback
        ]

    def emit(self, event: OrreryEvent, payload: Any = None) -> int:
        """Deliver payload to every subscriber. Returns the number notified."""
        notified = 0
        for callback in list(self._subscribers[OrreryEvent(event)]):
            try:
                callback(payload)
                notified += 1
            except Exception as e:
                print(f"Event handler failed ({OrreryEvent(event).value}): {e}")
        return notified
