"""Settings persistence and runtime configuration."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any
import logging
import pygame

from . import utils
from .utils import (
    ARENA_HEIGHT,
    ARENA_WIDTH,
    BLUE,
    GREEN,
    PINK,
    PLAYER_SPEED,
    PLAYER_TURN_RATE,
    RED,
    TICK_RATE,
    Color,
    load_json,
    save_json,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ControlScheme:
    """Per-player key bindings and display identity."""

    left: int
    right: int
    left_label: str
    right_label: str
    color: Color


def default_controls() -> list[ControlScheme]:
    """Return the four-player keyboard layout."""
    return [
        ControlScheme(pygame.K_a, pygame.K_d, "A", "D", BLUE),
        ControlScheme(pygame.K_j, pygame.K_l, "J", "L", PINK),
        ControlScheme(pygame.K_LEFT, pygame.K_RIGHT, "L arrow", "R arrow", RED),
        ControlScheme(pygame.K_KP1, pygame.K_KP3, "Num 1", "Num 3", GREEN),
    ]


@dataclass(slots=True)
class GameSettings:
    """Persistent settings for the game."""

    arena_width: float = ARENA_WIDTH
    arena_height: float = ARENA_HEIGHT
    speed: float = PLAYER_SPEED
    turn_rate: float = PLAYER_TURN_RATE
    tick_rate: int = TICK_RATE
    confirm_key: int = pygame.K_RETURN
    cancel_key: int = pygame.K_ESCAPE
    controls: list[ControlScheme] = field(default_factory=default_controls)

    @property
    def tick_interval_ms(self) -> int:
        """Return milliseconds between update (and draw) timer events."""
        return max(1, round(1000 / self.tick_rate))


class SettingsManager:
    """Load and save game settings."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path if path is not None else utils.SETTINGS_FILE
        self.settings = self.load()

    def load(self) -> GameSettings:
        """Load game settings from disk with safe defaults."""
        raw = load_json(self.path, {})
        settings = GameSettings()
        if not isinstance(raw, dict):
            logger.warning("Ignoring malformed settings file %s", self.path)
            return settings

        settings.arena_width = self._positive(raw, "arena_width", settings.arena_width, float)
        settings.arena_height = self._positive(raw, "arena_height", settings.arena_height, float)
        settings.speed = self._positive(raw, "speed", settings.speed, float)
        settings.turn_rate = self._positive(raw, "turn_rate", settings.turn_rate, float)
        settings.tick_rate = self._positive(raw, "tick_rate", settings.tick_rate, int)
        settings.confirm_key = self._cast(raw, "confirm_key", settings.confirm_key, int)
        settings.cancel_key = self._cast(raw, "cancel_key", settings.cancel_key, int)

        payload = raw.get("controls", [])
        if isinstance(payload, list):
            entries = [entry if isinstance(entry, dict) else {} for entry in payload]
            entries += [{}] * (len(settings.controls) - len(entries))
            settings.controls = [
                self._load_controls(entry, defaults) for entry, defaults in zip(entries, settings.controls)
            ]
        if settings.arena_width <= utils.SCOREBOARD_WIDTH:
            logger.warning("arena_width %s leaves no playable space, using default", settings.arena_width)
            settings.arena_width = ARENA_WIDTH
        return settings

    @staticmethod
    def _cast(raw: dict[str, Any], key: str, default: Any, cast: type) -> Any:
        if key not in raw:
            return default
        try:
            return cast(raw[key])
        except (TypeError, ValueError):
            logger.warning("Invalid %s=%r in settings, using %s", key, raw[key], default)
            return default

    @classmethod
    def _positive(cls, raw: dict[str, Any], key: str, default: Any, cast: type) -> Any:
        value = cls._cast(raw, key, default, cast)
        if value <= 0:
            logger.warning("Non-positive %s=%r in settings, using %s", key, value, default)
            return default
        return value

    @staticmethod
    def _color(value: Any, default: Color) -> Color:
        if (
            isinstance(value, (list, tuple))
            and len(value) == 3
            and all(isinstance(channel, int) and 0 <= channel <= 255 for channel in value)
        ):
            return (value[0], value[1], value[2])
        logger.warning("Invalid color=%r in settings, using %s", value, default)
        return default

    @classmethod
    def _load_controls(cls, payload: dict[str, Any], defaults: ControlScheme) -> ControlScheme:
        return ControlScheme(
            left=cls._cast(payload, "left", defaults.left, int),
            right=cls._cast(payload, "right", defaults.right, int),
            left_label=str(payload.get("left_label", defaults.left_label)),
            right_label=str(payload.get("right_label", defaults.right_label)),
            color=cls._color(payload.get("color", defaults.color), defaults.color),
        )

    def save(self) -> None:
        """Persist settings to disk."""
        save_json(self.path, asdict(self.settings))
