"""
State machine for a SPACE RACE run.

States:
    RUNNING: Ship is flying, score is accruing
    ENDED: Ship crashed, score frozen, waiting for name entry and restart
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Callable, Any
import logging

logger = logging.getLogger(__name__)


class State(Enum):
    """Run states."""
    RUNNING = auto()
    ENDED = auto()


@dataclass
class StateContext:
    """Context data carried alongside the run state."""
    status: str = ""
    final_score: int = 0
    runs: int = 1


StateListener = Callable[[State, State, StateContext], None]


class StateMachine:
    """
    Manages the run state and its transitions.

    Only RUNNING -> ENDED (crash) and ENDED -> RUNNING (restart) are
    valid; listeners are notified of every successful transition.
    """

    VALID_TRANSITIONS: list[tuple[State, State]] = [
        (State.RUNNING, State.ENDED),
        (State.ENDED, State.RUNNING),
    ]

    def __init__(self, initial_state: State = State.RUNNING) -> None:
        self._state = initial_state
        self._context = StateContext()
        self._listeners: list[StateListener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.info(f"StateMachine initialized with state: {initial_state.name}")

    @property
    def state(self) -> State:
        """Get current state."""
        return self._state

    @property
    def context(self) -> StateContext:
        """Get current context."""
        return self._context

    @property
    def is_running(self) -> bool:
        return self._state == State.RUNNING

    def can_transition(self, to_state: State) -> bool:
        """Check if transition to given state is valid."""
        return (self._state, to_state) in self._valid_transitions

    def transition(self, to_state: State, **context_updates: Any) -> bool:
        """
        Attempt to transition to a new state.

        Args:
            to_state: Target state
            **context_updates: Updates to apply to context

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_state):
            logger.warning(
                f"Invalid transition: {self._state.name} -> {to_state.name}"
            )
            return False

        old_state = self._state
        self._state = to_state

        for key, value in context_updates.items():
            if hasattr(self._context, key):
                setattr(self._context, key, value)

        logger.info(f"State transition: {old_state.name} -> {to_state.name}")

        for listener in self._listeners:
            try:
                listener(old_state, to_state, self._context)
            except Exception as e:
                logger.error(f"Error in state listener: {e}")

        return True

    def add_listener(self, callback: StateListener) -> None:
        """Add a state change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: StateListener) -> None:
        """Remove a state change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)
