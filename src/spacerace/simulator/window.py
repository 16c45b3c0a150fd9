"""
Main game window using pygame.

Hosts the playfield, the score/leaderboard side panel and the
name-entry overlay, and turns keyboard input into bus events.
"""

import pygame
import asyncio
import logging

from ..config.settings import WindowSettings
from ..core.state import StateMachine
from ..core.events import EventBus, EventType, Event, arcade_event, restart_event, tick_event
from ..modes.space_race import SpaceRaceMode
from ..scores.names import NAME_LENGTH, FILLER
from ..scores.store import HighScoreEntry
from .display import GameDisplay
from .name_entry import NameEntryPrompt

logger = logging.getLogger(__name__)

BG_COLOR = (12, 16, 28)
PANEL_COLOR = (28, 34, 52)
TEXT_COLOR = (200, 210, 230)
ACCENT_COLOR = (120, 200, 255)
ALERT_COLOR = (255, 110, 110)


class GameWindow:
    """
    Desktop window for SPACE RACE.

    Keyboard Mapping:
        LEFT/RIGHT: Shift one lane
        SPACE: Restart after a crash
        A-Z, BACKSPACE, ENTER: Name entry after a crash
        ESC: Skip name entry / quit
        D: Toggle debug panel
        L: Toggle log viewer
        S: Screenshot
        Q: Quit
    """

    def __init__(
        self,
        mode: SpaceRaceMode,
        config: WindowSettings | None = None,
        state_machine: StateMachine | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.config = config or WindowSettings()
        self.mode = mode
        self.state_machine = state_machine or mode.context.state_machine
        self.event_bus = event_bus or mode.context.event_bus

        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._running = True
        self._frame_count = 0
        self._show_debug = False

        self.display = GameDisplay(mode.settings.width, mode.settings.height)
        self.prompt = NameEntryPrompt()
        self.mode.set_name_entry(self.prompt.open)

        # Leaderboard is re-read only when a score lands
        self._leaderboard = self.mode.leaderboard()
        self._unsubscribe_scores = self.event_bus.subscribe(
            EventType.SCORE_RECORDED, self._refresh_leaderboard
        )

        self._layout: dict[str, pygame.Rect] = {}
        self._font: pygame.font.Font | None = None
        self._big_font: pygame.font.Font | None = None
        self._small_font: pygame.font.Font | None = None

        # Log viewer
        self._show_log = False
        self._log_buffer: list[str] = []
        self._max_log_lines = 20
        self._setup_log_capture()

        logger.info("GameWindow created")

    def _setup_log_capture(self) -> None:
        """Setup log capturing for the log viewer."""
        class WindowLogHandler(logging.Handler):
            def __init__(self, window: 'GameWindow'):
                super().__init__()
                self.window = window

            def emit(self, record):
                msg = self.format(record)
                self.window._log_buffer.append(msg)
                if len(self.window._log_buffer) > self.window._max_log_lines * 2:
                    self.window._log_buffer = self.window._log_buffer[-self.window._max_log_lines:]

        self._log_handler = WindowLogHandler(self)
        self._log_handler.setLevel(logging.INFO)
        self._log_handler.setFormatter(logging.Formatter('%(levelname).1s %(name)s: %(message)s'))
        logging.getLogger().addHandler(self._log_handler)

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        flags = pygame.DOUBLEBUF
        if self.config.fullscreen:
            flags |= pygame.FULLSCREEN

        self._screen = pygame.display.set_mode(
            (self.config.width, self.config.height),
            flags
        )
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont("DejaVu Sans Mono", 20)
        self._big_font = pygame.font.SysFont("DejaVu Sans Mono", 36, bold=True)
        self._small_font = pygame.font.SysFont("DejaVu Sans Mono", 14)

        self._calculate_layout()
        logger.info(f"Pygame initialized: {self.config.width}x{self.config.height}")

    def _calculate_layout(self) -> None:
        """Fit the playfield to the window height, panel on the right."""
        w, h = self.config.width, self.config.height
        panel_w = 280

        scale = min((w - panel_w - 30) / self.display.width, (h - 20) / self.display.height)
        field_w = int(self.display.width * scale)
        field_h = int(self.display.height * scale)
        field_x = 10
        field_y = (h - field_h) // 2

        self._layout = {
            "field": pygame.Rect(field_x, field_y, field_w, field_h),
            "panel": pygame.Rect(field_x + field_w + 20, 10, w - field_w - 40, h - 20),
        }

    @property
    def running(self) -> bool:
        return self._running

    @property
    def leaderboard(self) -> list[HighScoreEntry]:
        """Entries shown in the side panel."""
        return self._leaderboard

    def _refresh_leaderboard(self, event: Event) -> None:
        self._leaderboard = self.mode.leaderboard()

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            self.handle_event(event)

    def handle_event(self, event: pygame.event.Event) -> None:
        """Route one pygame event; the name prompt takes keys while open."""
        if event.type == pygame.QUIT:
            self._running = False
        elif event.type == pygame.KEYDOWN:
            if self.prompt.is_open:
                self._handle_name_key(event)
            else:
                self._handle_keydown(event)
        elif event.type == pygame.KEYUP:
            self._handle_keyup(event)

    def _handle_name_key(self, event: pygame.event.Event) -> None:
        """Route keys to the name prompt while it is open."""
        key = event.key
        if key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            self.mode.submit_name(self.prompt.submit() or "")
        elif key == pygame.K_ESCAPE:
            self.prompt.cancel()
            self.mode.skip_name()
        elif key == pygame.K_BACKSPACE:
            self.prompt.backspace()
        elif event.unicode:
            self.prompt.type_char(event.unicode)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key

        if key == pygame.K_ESCAPE or key == pygame.K_q:
            self._running = False
        elif key == pygame.K_d:
            self._show_debug = not self._show_debug
        elif key == pygame.K_l:
            self._show_log = not self._show_log
        elif key == pygame.K_s:
            self._capture_screenshot()
        elif key == pygame.K_SPACE:
            self.event_bus.emit(restart_event(source="keyboard"))
        elif key == pygame.K_LEFT:
            self.event_bus.emit(arcade_event("left", source="keyboard"))
        elif key == pygame.K_RIGHT:
            self.event_bus.emit(arcade_event("right", source="keyboard"))

    def _handle_keyup(self, event: pygame.event.Event) -> None:
        """Handle key release."""
        if event.key == pygame.K_LEFT:
            self.event_bus.emit(arcade_event("left", pressed=False, source="keyboard"))
        elif event.key == pygame.K_RIGHT:
            self.event_bus.emit(arcade_event("right", pressed=False, source="keyboard"))

    def _render(self) -> None:
        """Render all UI elements."""
        if not self._screen:
            return

        self._screen.fill(BG_COLOR)

        self.mode.render_main(self.display.buffer)
        field = self._layout["field"]
        self._screen.blit(self.display.render(field.size), field.topleft)

        self._render_panel()
        if self.prompt.is_open:
            self._render_name_entry()
        if self._show_log:
            self._render_log_panel()

        pygame.display.flip()

    def _text(self, font: pygame.font.Font, text: str, color, pos) -> int:
        surface = font.render(text, True, color)
        self._screen.blit(surface, pos)
        return surface.get_height()

    def _render_panel(self) -> None:
        """Render score, status, pilot and leaderboard."""
        rect = self._layout["panel"]
        pygame.draw.rect(self._screen, PANEL_COLOR, rect, border_radius=8)
        if not self._font:
            return

        x = rect.x + 16
        y = rect.y + 16
        y += self._text(self._big_font, f"Score: {self.mode.score}", ACCENT_COLOR, (x, y)) + 8
        status_color = TEXT_COLOR if self.mode.run and self.mode.run.is_running else ALERT_COLOR
        y += self._text(self._small_font, self.mode.status, status_color, (x, y)) + 8
        y += self._text(self._font, f"Pilot: {self.mode.pilot_name}", TEXT_COLOR, (x, y)) + 20

        y += self._text(self._font, "LEADERBOARD", ACCENT_COLOR, (x, y)) + 8
        entries = self._leaderboard
        if not entries:
            y += self._text(self._font, "No scores yet", TEXT_COLOR, (x, y)) + 4
        for index, entry in enumerate(entries):
            line = f"{index + 1:>2}. {entry.name}  {entry.score:>6}"
            y += self._text(self._font, line, TEXT_COLOR, (x, y)) + 4

        if self._show_debug:
            y += 16
            lines = [
                f"FPS: {self._clock.get_fps():.1f}" if self._clock else "FPS: --",
                f"Frame: {self._frame_count}",
                f"State: {self.state_machine.state.name}",
                f"Run: {self.state_machine.context.runs}",
            ]
            world = self.mode.world
            if world is not None:
                lines.append(f"Lane: {world.player.lane}/{world.lanes - 1}")
                lines.append(f"Missiles: {len(world.obstacles)}")
                lines.append(f"Warnings: {sum(1 for w in world.warnings if w.active)}")
            for line in lines:
                y += self._text(self._small_font, line, TEXT_COLOR, (x, y)) + 2

    def _render_name_entry(self) -> None:
        """Render the pilot name overlay over the playfield."""
        field = self._layout["field"]
        box = pygame.Rect(0, 0, min(field.width - 40, 360), 170)
        box.center = field.center

        overlay = pygame.Surface(box.size, pygame.SRCALPHA)
        overlay.fill((10, 14, 26, 235))
        self._screen.blit(overlay, box.topleft)
        pygame.draw.rect(self._screen, ACCENT_COLOR, box, 2, border_radius=6)

        x = box.x + 20
        y = box.y + 16
        y += self._text(self._font, f"CRASHED - SCORE {self.prompt.score}", ALERT_COLOR, (x, y)) + 10
        y += self._text(self._small_font, "Enter your pilot code:", TEXT_COLOR, (x, y)) + 10
        code = self.prompt.text.ljust(NAME_LENGTH, FILLER)
        y += self._text(self._big_font, " ".join(code), ACCENT_COLOR, (x, y)) + 10
        self._text(self._small_font, "ENTER save  ESC skip", TEXT_COLOR, (x, y))

    def _render_log_panel(self) -> None:
        """Render the log viewer panel."""
        if not self._small_font:
            return

        rect = pygame.Rect(10, 50, 420, self.config.height - 100)
        surf = pygame.Surface((rect.width, rect.height), pygame.SRCALPHA)
        surf.fill((20, 25, 35, 230))
        self._screen.blit(surf, rect.topleft)
        pygame.draw.rect(self._screen, (60, 80, 100), rect, 1, border_radius=5)

        y = rect.y + 8
        for line in self._log_buffer[-self._max_log_lines:]:
            if line.startswith('E'):
                color = (255, 100, 100)
            elif line.startswith('W'):
                color = (255, 200, 100)
            else:
                color = (150, 200, 150)

            display_line = line[:55] + "..." if len(line) > 58 else line
            self._text(self._small_font, display_line, color, (rect.x + 8, y))
            y += 16
            if y > rect.bottom - 10:
                break

    def _capture_screenshot(self) -> None:
        """Capture and save a screenshot."""
        if self._screen:
            filename = f"screenshot_{self._frame_count}.png"
            pygame.image.save(self._screen, filename)
            logger.info(f"Screenshot saved: {filename}")

    async def run(self) -> None:
        """Main game loop."""
        self._init_pygame()
        self._running = True

        logger.info("Window loop started")

        while self._running:
            self._handle_events()

            if self._clock:
                delta = self._clock.get_time() / 1000.0
                self.event_bus.emit(tick_event(delta, self._frame_count))

            self._render()

            if self._clock:
                self._clock.tick(self.config.fps)

            self._frame_count += 1

            # Yield to other tasks
            await asyncio.sleep(0)

        self.close()

    def close(self) -> None:
        """Release pygame and detach from the bus and root logger."""
        self._unsubscribe_scores()
        logging.getLogger().removeHandler(self._log_handler)
        pygame.quit()
        logger.info("Window closed")
