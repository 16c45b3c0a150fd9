"""Configuration for SPACE RACE."""

from .settings import GameSettings, ScoreSettings, Settings, WindowSettings, get_settings

__all__ = ["GameSettings", "ScoreSettings", "Settings", "WindowSettings", "get_settings"]
