"""Lobby/round state machine routing input and ticks to the simulation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
import logging
import random

from .player import Arena, Player, TrailPoint
from .settings import GameSettings
from .simulation import RoundSimulator, TickOutcome
from .utils import Color, Point

logger = logging.getLogger(__name__)


class Mode(Enum):
    """Top-level modes of a session."""

    LOBBY = auto()
    ROUND = auto()


class EventType(Enum):
    """Key transitions delivered by the host."""

    KEY_DOWN = auto()
    KEY_UP = auto()


@dataclass(frozen=True, slots=True)
class InputEvent:
    """A key transition already stripped of host specifics."""

    type: EventType
    key: int


@dataclass(slots=True)
class SimulationState:
    """Everything the active phase is allowed to mutate."""

    players: list[Player]
    arena: Arena
    rng: random.Random


@dataclass(slots=True)
class LobbyPhase:
    """Players opt in with their steering keys."""

    enabled_count: int = 0


@dataclass(slots=True)
class RoundPhase:
    """Rounds run back to back until the session is cancelled."""

    simulator: RoundSimulator = field(default_factory=RoundSimulator)
    last_outcome: TickOutcome | None = None


@dataclass(frozen=True, slots=True)
class PlayerView:
    """Read-only view of a player for renderers."""

    player_id: int
    name: str
    color: Color
    left_label: str
    right_label: str
    enabled: bool
    alive: bool
    score: int
    position: Point
    trail: tuple[TrailPoint, ...]


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Read-only view of the whole session for one frame."""

    mode: Mode
    players: tuple[PlayerView, ...]
    enabled_count: int | None
    arena: Arena


class ModeController:
    """Owns the roster and dispatches events to the active phase."""

    def __init__(self, settings: GameSettings | None = None, rng: random.Random | None = None) -> None:
        settings = settings if settings is not None else GameSettings()
        rng = rng if rng is not None else random.Random()
        arena = Arena(settings.arena_width, settings.arena_height)

        self.confirm_key = settings.confirm_key
        self.cancel_key = settings.cancel_key
        self.state = SimulationState(
            players=self._create_players(settings, arena, rng),
            arena=arena,
            rng=rng,
        )
        self.phase: LobbyPhase | RoundPhase = LobbyPhase()

    @staticmethod
    def _create_players(settings: GameSettings, arena: Arena, rng: random.Random) -> list[Player]:
        return [
            Player(
                player_id=idx,
                name=f"Player {idx + 1}",
                color=scheme.color,
                left_key=scheme.left,
                right_key=scheme.right,
                arena=arena,
                rng=rng,
                left_label=scheme.left_label,
                right_label=scheme.right_label,
                speed=settings.speed,
                turn_rate=settings.turn_rate,
            )
            for idx, scheme in enumerate(settings.controls)
        ]

    @property
    def mode(self) -> Mode:
        return Mode.LOBBY if isinstance(self.phase, LobbyPhase) else Mode.ROUND

    @property
    def players(self) -> list[Player]:
        return self.state.players

    def dispatch(self, event: InputEvent) -> None:
        """Apply a key event to the active phase immediately."""
        if isinstance(self.phase, LobbyPhase):
            if event.type == EventType.KEY_UP:
                self._lobby_key_up(self.phase, event.key)
        elif event.type == EventType.KEY_DOWN:
            self._set_steering(event.key, True)
        else:
            self._set_steering(event.key, False)
            if event.key == self.cancel_key:
                self._abort_round()

    def update(self, delta_ms: float) -> TickOutcome | None:
        """Advance the simulation by ``delta_ms`` when a round is running."""
        if isinstance(self.phase, RoundPhase):
            self.phase.last_outcome = self.phase.simulator.tick(self.state.players, delta_ms)
            return self.phase.last_outcome
        return None

    def snapshot(self) -> Snapshot:
        """Return an immutable copy of everything a renderer needs."""
        views = tuple(
            PlayerView(
                player_id=player.player_id,
                name=player.name,
                color=player.color,
                left_label=player.left_label,
                right_label=player.right_label,
                enabled=player.enabled,
                alive=player.alive,
                score=player.score,
                position=player.position,
                trail=tuple(player.trail),
            )
            for player in self.state.players
        )
        enabled_count = self.phase.enabled_count if isinstance(self.phase, LobbyPhase) else None
        return Snapshot(mode=self.mode, players=views, enabled_count=enabled_count, arena=self.state.arena)

    def _lobby_key_up(self, phase: LobbyPhase, key: int) -> None:
        for player in self.state.players:
            if player.binds(key):
                player.enabled = True
        phase.enabled_count = sum(1 for player in self.state.players if player.enabled)

        if key == self.confirm_key and phase.enabled_count > 1:
            self._start_round()
        elif key == self.cancel_key:
            for player in self.state.players:
                player.enabled = False
            phase.enabled_count = 0

    def _start_round(self) -> None:
        enabled = [player for player in self.state.players if player.enabled]
        for player in enabled:
            player.reset()
        self.phase = RoundPhase()
        logger.info("Round started with %s", ", ".join(player.name for player in enabled))

    def _set_steering(self, key: int, down: bool) -> None:
        for player in self.state.players:
            if not (player.enabled and player.alive):
                continue
            if key == player.left_key:
                player.steer_left = down
            if key == player.right_key:
                player.steer_right = down

    def _abort_round(self) -> None:
        for player in self.state.players:
            player.enabled = False
            player.score = 0
        self.phase = LobbyPhase()
        logger.info("Round cancelled, back to lobby")
