"""Lobby and round rendering for controller snapshots."""

from __future__ import annotations

import pygame

from .controller import Mode, PlayerView, Snapshot
from .utils import (
    BG_COLOR,
    HINT_COLOR,
    READY_COLOR,
    SCOREBOARD_COLOR,
    TEXT_COLOR,
    TITLE_COLOR,
)

TRAIL_WIDTH = 4


class Renderer:
    """Draws a :class:`Snapshot` onto a pygame surface."""

    def __init__(self) -> None:
        pygame.font.init()
        self.title_font = pygame.font.SysFont("sans", 120)
        self.score_font = pygame.font.SysFont("sans", 60)
        self.name_font = pygame.font.SysFont("sans", 30)
        self.body_font = pygame.font.SysFont("sans", 20)
        self.ready_font = pygame.font.SysFont("sans", 16)
        self.hint_font = pygame.font.SysFont("sans", 12)

    def draw(self, surface: pygame.Surface, snapshot: Snapshot) -> None:
        """Clear the surface and draw the active mode."""
        surface.fill(BG_COLOR)
        if snapshot.mode == Mode.LOBBY:
            self._draw_lobby(surface, snapshot)
        else:
            self._draw_round(surface, snapshot)

    def _draw_lobby(self, surface: pygame.Surface, snapshot: Snapshot) -> None:
        width, height = surface.get_size()
        self._blit_centered(surface, self.title_font, "Kurve", TITLE_COLOR, (width / 2, height / 3))

        prompt = (
            "Press enter to start game"
            if (snapshot.enabled_count or 0) > 1
            else "Select at least 2 users to play."
        )
        self._blit_centered(surface, self.body_font, prompt, TEXT_COLOR, (width / 2, height / 2))

        column = width / max(1, len(snapshot.players))
        top = height * 2 / 3
        for idx, player in enumerate(snapshot.players):
            cx = column / 2 + column * idx
            self._blit_top(surface, self.name_font, player.name, player.color, (cx, top))
            keys = f"{player.left_label} and {player.right_label}"
            self._blit_top(surface, self.body_font, keys, TEXT_COLOR, (cx, top + 60))
            if player.enabled:
                self._blit_top(surface, self.ready_font, "Ready", READY_COLOR, (cx, top + 100))
            else:
                self._blit_top(surface, self.hint_font, "Press key to play!", HINT_COLOR, (cx, top + 100))

    def _draw_round(self, surface: pygame.Surface, snapshot: Snapshot) -> None:
        width, height = surface.get_size()
        strip = snapshot.arena.reserved
        pygame.draw.rect(surface, SCOREBOARD_COLOR, pygame.Rect(width - strip, 0, strip, height))

        slot = height / max(1, len(snapshot.players))
        for idx, player in enumerate(snapshot.players):
            if player.enabled:
                self._draw_trail(surface, player)
            color = player.color if player.enabled else TEXT_COLOR
            center = (width - strip + 40, slot / 2 + idx * slot)
            self._blit_centered(surface, self.score_font, str(player.score), color, center)

    @staticmethod
    def _draw_trail(surface: pygame.Surface, player: PlayerView) -> None:
        trail = player.trail
        for previous, point in zip(trail, trail[1:]):
            if point.gap:
                continue
            pygame.draw.line(surface, player.color, (previous.x, previous.y), (point.x, point.y), TRAIL_WIDTH)
        if trail:
            last = trail[-1]
            pygame.draw.line(surface, player.color, (last.x, last.y), player.position, TRAIL_WIDTH)

    @staticmethod
    def _blit_centered(
        surface: pygame.Surface,
        font: pygame.font.Font,
        text: str,
        color: tuple[int, int, int],
        center: tuple[float, float],
    ) -> None:
        rendered = font.render(text, True, color)
        surface.blit(rendered, rendered.get_rect(center=(int(center[0]), int(center[1]))))

    @staticmethod
    def _blit_top(
        surface: pygame.Surface,
        font: pygame.font.Font,
        text: str,
        color: tuple[int, int, int],
        midtop: tuple[float, float],
    ) -> None:
        rendered = font.render(text, True, color)
        surface.blit(rendered, rendered.get_rect(midtop=(int(midtop[0]), int(midtop[1]))))
