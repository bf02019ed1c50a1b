"""Shared constants and utility helpers for Kurve."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Tuple
import json

ARENA_WIDTH = 1120
ARENA_HEIGHT = 768
SCOREBOARD_WIDTH = 120
TICK_RATE = 30

PLAYER_SPEED = 0.07
PLAYER_TURN_RATE = 0.15
TRAIL_SPACING = 10.0

BG_COLOR = (0, 0, 0)
SCOREBOARD_COLOR = (17, 17, 17)
TITLE_COLOR = (136, 0, 0)
TEXT_COLOR = (204, 204, 204)
HINT_COLOR = (238, 238, 238)
READY_COLOR = (170, 238, 170)

BLUE = (51, 51, 255)
PINK = (255, 51, 255)
RED = (255, 51, 51)
GREEN = (51, 255, 51)

Color = Tuple[int, int, int]
Point = Tuple[float, float]
Segment = Tuple[Point, Point]

DATA_DIR = Path(".kurve")
SETTINGS_FILE = DATA_DIR / "settings.json"


def load_json(path: Path, default: Any) -> Any:
    """Load JSON data, returning default when missing or malformed."""
    if not path.exists():
        return default
    try:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except (json.JSONDecodeError, OSError):
        return default


def save_json(path: Path, payload: Any) -> None:
    """Save JSON data with deterministic formatting."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, sort_keys=True)
