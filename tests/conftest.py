"""Pytest configuration for headless pygame tests."""

from __future__ import annotations

import os
import random
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from kurve.player import Arena, Player  # noqa: E402


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def arena() -> Arena:
    return Arena(1120, 768)


@pytest.fixture
def make_player(arena: Arena, rng: random.Random):
    def factory(player_id: int = 0, x: float = 100.0, y: float = 100.0, heading: float = 0.0) -> Player:
        player = Player(
            player_id=player_id,
            name=f"P{player_id + 1}",
            color=(51, 51, 255),
            left_key=1000 + player_id * 2,
            right_key=1001 + player_id * 2,
            arena=arena,
            rng=rng,
        )
        player.enabled = True
        player.x, player.y, player.heading = x, y, heading
        return player

    return factory
