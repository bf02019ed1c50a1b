"""Round simulation: movement, deaths, scoring, and round turnover."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence
import logging

from .player import Player

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TickOutcome:
    """What happened during one simulation tick."""

    dead_count: int
    deaths: list[int] = field(default_factory=list)
    round_over: bool = False
    survivors: list[int] = field(default_factory=list)


class RoundSimulator:
    """Advances every enabled player and resolves the round."""

    def __init__(self) -> None:
        self.rounds_played = 0

    def tick(self, players: Sequence[Player], delta_ms: float) -> TickOutcome:
        """Run one tick over the roster.

        Every death and every round survivor in this tick is awarded the
        number of enabled players that were already dead when the tick
        started, so simultaneous deaths score the same regardless of roster
        order.
        """
        enabled = [player for player in players if player.enabled]

        for player in enabled:
            if player.alive:
                player.move(delta_ms)

        dead_count = sum(1 for player in enabled if not player.alive)
        outcome = TickOutcome(dead_count=dead_count)

        for player in enabled:
            if not player.alive:
                continue
            if player.suicide():
                self._kill(player, dead_count, outcome, "crashed into itself or a wall")
                continue
            # Trails of crashed players stay lethal until the round resets.
            for other in enabled:
                if other is player:
                    continue
                if player.collide_with(other):
                    self._kill(player, dead_count, outcome, f"hit {other.name}'s trail")
                    break

        alive = [player for player in enabled if player.alive]
        if len(alive) <= 1:
            for player in alive:
                player.score += dead_count
                outcome.survivors.append(player.player_id)
            self._finish_round(enabled, alive)
            outcome.round_over = True
        return outcome

    def _kill(self, player: Player, dead_count: int, outcome: TickOutcome, reason: str) -> None:
        player.score += dead_count
        player.alive = False
        outcome.deaths.append(player.player_id)
        logger.debug("%s %s (+%d, score %d)", player.name, reason, dead_count, player.score)

    def _finish_round(self, enabled: Sequence[Player], alive: Sequence[Player]) -> None:
        self.rounds_played += 1
        if alive:
            logger.info("Round %d won by %s", self.rounds_played, alive[0].name)
        else:
            logger.info("Round %d ended with no survivors", self.rounds_played)
        logger.info(
            "Scores: %s",
            ", ".join(f"{player.name}={player.score}" for player in enabled),
        )
        for player in enabled:
            player.reset()
