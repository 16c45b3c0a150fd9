"""Base class for game modes in SPACE RACE."""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any
from dataclasses import dataclass, field
from enum import Enum, auto
import logging

from spacerace.core.events import EventBus, Event, EventType
from spacerace.core.state import StateMachine

logger = logging.getLogger(__name__)


class ModePhase(Enum):
    """Phases within a mode's lifecycle."""

    INTRO = auto()       # Entered, not yet playing
    ACTIVE = auto()      # Run in progress
    RESULT = auto()      # Run over, result available


@dataclass
class ModeResult:
    """Outcome of the last finished run."""

    mode_name: str
    success: bool = True
    data: Dict[str, Any] = field(default_factory=dict)
    display_text: str = ""
    error: Optional[str] = None


@dataclass
class ModeContext:
    """Shared systems and playfield size handed to a mode."""

    state_machine: StateMachine
    event_bus: EventBus

    # Playfield dimensions
    main_width: int = 480
    main_height: int = 720


class BaseMode(ABC):
    """Abstract base class for game modes.

    Lifecycle:
        1. on_enter() - Build game state
        2. on_update(delta) - Per-frame logic, only while entered
        3. on_input(event) - Input events, only while entered
        4. on_exit() - Cleanup; exit() returns the last result
    """

    name: str = "base"

    def __init__(self, context: ModeContext):
        self.context = context
        self.phase = ModePhase.INTRO
        self._active = False
        self._result: Optional[ModeResult] = None

        logger.debug(f"Mode created: {self.name}")

    @property
    def result(self) -> Optional[ModeResult]:
        """Result of the last finished run, if any."""
        return self._result

    def enter(self) -> None:
        """Called when mode becomes active."""
        self._active = True
        self.phase = ModePhase.INTRO
        self._result = None

        logger.info(f"Entering mode: {self.name}")
        self.on_enter()

    def exit(self) -> ModeResult:
        """Called when mode is deactivated."""
        logger.info(f"Exiting mode: {self.name}")
        self.on_exit()
        self._active = False

        if self._result is None:
            self._result = ModeResult(
                mode_name=self.name,
                success=False,
                error="Mode exited without result"
            )

        return self._result

    def update(self, delta_ms: float) -> None:
        """Advance one frame; ``delta_ms`` is milliseconds since the last one."""
        if self._active:
            self.on_update(delta_ms)

    def handle_input(self, event: Event) -> bool:
        """Process input event. Returns True if handled."""
        if not self._active:
            return False

        return self.on_input(event)

    def change_phase(self, new_phase: ModePhase) -> None:
        old_phase = self.phase
        self.phase = new_phase
        logger.debug(f"Mode {self.name}: {old_phase.name} -> {new_phase.name}")

    def complete(self, result: ModeResult) -> None:
        """Store the run's result and move to RESULT."""
        self._result = result
        self.change_phase(ModePhase.RESULT)

    @abstractmethod
    def on_enter(self) -> None:
        """Initialize mode state."""
        pass

    @abstractmethod
    def on_update(self, delta_ms: float) -> None:
        """Per-frame update logic."""
        pass

    @abstractmethod
    def on_input(self, event: Event) -> bool:
        """Handle user input. Return True if handled."""
        pass

    @abstractmethod
    def on_exit(self) -> None:
        """Cleanup mode state."""
        pass

    @abstractmethod
    def render_main(self, buffer) -> None:
        """Draw the playfield into an (H, W, 3) buffer."""
        pass

    def emit_event(self, event_type: EventType, data: Optional[Dict[str, Any]] = None) -> None:
        """Emit an event through the event bus."""
        self.context.event_bus.emit(Event(
            type=event_type,
            data=data or {},
            source=f"mode_{self.name}"
        ))
