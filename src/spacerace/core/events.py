"""
Event bus for SPACE RACE.

Carries keyboard input and frame ticks from the window to the game
mode, and run/score notifications back to the window. Dispatch is
synchronous: every handler has run when ``emit`` returns.
"""

from dataclasses import dataclass, field
from typing import Any, Callable
from enum import Enum, auto
import logging
import time
from collections import defaultdict

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Event types on the bus."""
    # Input events
    BUTTON_PRESS = auto()          # Space: restart after a crash
    ARCADE_LEFT = auto()
    ARCADE_RIGHT = auto()
    ARCADE_LEFT_RELEASE = auto()
    ARCADE_RIGHT_RELEASE = auto()

    # Run events
    RUN_STARTED = auto()
    RUN_ENDED = auto()
    NAME_ENTERED = auto()
    SCORE_RECORDED = auto()

    # Frame tick, delta in seconds
    TICK = auto()


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: Event type
        data: Event payload
        source: Component that emitted the event
        timestamp: When event was created (monotonic seconds)
    """
    type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.monotonic)


Handler = Callable[[Event], Any]


class EventBus:
    """Routes each emitted event to the handlers subscribed to its type."""

    def __init__(self) -> None:
        self._handlers: dict[EventType, list[Handler]] = defaultdict(list)

    def subscribe(self, event_type: EventType, handler: Handler) -> Callable[[], None]:
        """
        Subscribe to an event type.

        Args:
            event_type: Type of event to listen for
            handler: Called with the event

        Returns:
            Unsubscribe function
        """
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type.name}")

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)
                logger.debug(f"Handler unsubscribed from {event_type.name}")

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Dispatch an event. A failing handler is logged and skipped."""
        for handler in list(self._handlers.get(event.type, [])):
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in {event.type.name} handler: {e}")


# Convenience functions for creating common events
def restart_event(source: str = "keyboard") -> Event:
    """Create a restart (center button) event."""
    return Event(EventType.BUTTON_PRESS, source=source)


def arcade_event(direction: str, pressed: bool = True, source: str = "arcade") -> Event:
    """Create a lane-shift press or release event."""
    if direction == "left":
        event_type = EventType.ARCADE_LEFT if pressed else EventType.ARCADE_LEFT_RELEASE
    else:
        event_type = EventType.ARCADE_RIGHT if pressed else EventType.ARCADE_RIGHT_RELEASE
    return Event(event_type, source=source)


def tick_event(delta: float, frame: int) -> Event:
    """Create a frame tick event. ``delta`` is in seconds."""
    return Event(EventType.TICK, data={"delta": delta, "frame": frame}, source="window")
