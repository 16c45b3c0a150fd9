"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested sections use a double underscore, e.g. ``SPACERACE_GAME__LANES=6``.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GameSettings(BaseModel):
    """Playfield geometry and pacing."""

    # Playfield (pixels)
    width: int = Field(default=480, gt=0)
    height: int = Field(default=720, gt=0)

    # Lanes
    lanes: int = Field(default=8, ge=1)
    lane_padding: int = Field(default=44, ge=0)

    # Base fall speed of missiles
    speed: float = Field(default=3.2, gt=0.0)

    # Fixed seed for reproducible runs (None = random)
    seed: Optional[int] = None


class WindowSettings(BaseModel):
    """Desktop window settings."""

    width: int = 960
    height: int = 720
    title: str = "SPACE RACE"
    fullscreen: bool = False
    fps: int = 60


class ScoreSettings(BaseModel):
    """High-score persistence."""

    path: Path = Field(default_factory=lambda: Path.home() / ".spacerace" / "scores.json")
    key: str = "space-race-leaderboard"
    limit: int = Field(default=10, ge=1)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="SPACERACE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False

    # Log file written next to the working directory
    log_file: Path = Path("spacerace.log")

    # Nested settings
    game: GameSettings = Field(default_factory=GameSettings)
    window: WindowSettings = Field(default_factory=WindowSettings)
    scores: ScoreSettings = Field(default_factory=ScoreSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
