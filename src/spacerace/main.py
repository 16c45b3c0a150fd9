"""
Main entry point for SPACE RACE.

Wires the run, the leaderboard and the pygame window together and
starts the frame loop.
"""

import asyncio
import logging
import random
import sys
from pathlib import Path

from dotenv import load_dotenv

from spacerace.config.settings import Settings, get_settings
from spacerace.core.events import Event, EventBus, EventType
from spacerace.core.state import StateMachine
from spacerace.modes.base import ModeContext
from spacerace.modes.space_race import SpaceRaceMode
from spacerace.scores.storage import JsonFileStorage
from spacerace.scores.store import HighScoreStore

logger = logging.getLogger(__name__)

INPUT_EVENTS = (
    EventType.ARCADE_LEFT,
    EventType.ARCADE_RIGHT,
    EventType.ARCADE_LEFT_RELEASE,
    EventType.ARCADE_RIGHT_RELEASE,
    EventType.BUTTON_PRESS,
)


def setup_logging(debug: bool = False, log_file: Path | None = None) -> None:
    """Configure console logging, plus a file truncated on each run."""
    level = logging.DEBUG if debug else logging.INFO
    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        logging.info(f"Logging to file: {log_file}")


class SpaceRaceApp:
    """Application integrating run, scores and window."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

        # Core systems
        self.state_machine = StateMachine()
        self.event_bus = EventBus()

        self.store = HighScoreStore(
            JsonFileStorage(settings.scores.path),
            key=settings.scores.key,
            limit=settings.scores.limit,
        )

        context = ModeContext(
            state_machine=self.state_machine,
            event_bus=self.event_bus,
            main_width=settings.game.width,
            main_height=settings.game.height,
        )
        self.mode = SpaceRaceMode(
            context,
            settings=settings.game,
            store=self.store,
            rng=random.Random(settings.game.seed),
        )

        self._setup_event_handlers()
        logger.info("SpaceRaceApp initialized")

    def _setup_event_handlers(self) -> None:
        """Route input and frame ticks into the mode."""
        for event_type in INPUT_EVENTS:
            self.event_bus.subscribe(event_type, self.mode.handle_input)
        self.event_bus.subscribe(EventType.TICK, self._on_tick)

    def _on_tick(self, event: Event) -> None:
        delta = event.data.get("delta", 0.016)
        self.mode.update(delta * 1000)

    async def run(self) -> None:
        from spacerace.simulator.window import GameWindow

        window = GameWindow(
            self.mode,
            config=self.settings.window,
            state_machine=self.state_machine,
            event_bus=self.event_bus,
        )
        self.mode.enter()
        try:
            await window.run()
        finally:
            result = self.mode.exit()
            logger.info(
                f"Session over after {self.state_machine.context.runs} run(s): "
                f"{result.display_text or result.error}"
            )


def main() -> None:
    """Main entry point."""
    load_dotenv()
    settings = get_settings()

    setup_logging(settings.debug, settings.log_file)

    logger.info("=" * 40)
    logger.info("SPACE RACE starting")
    logger.info("=" * 40)
    logger.info("Controls:")
    logger.info("  LEFT/RIGHT - Change lane")
    logger.info("  SPACE      - Restart after a crash")
    logger.info("  D / L      - Debug panel / log viewer")
    logger.info("  Q          - Quit")
    logger.info(f"Leaderboard: {settings.scores.path}")

    try:
        asyncio.run(SpaceRaceApp(settings).run())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("SPACE RACE stopped")


if __name__ == "__main__":
    main()
