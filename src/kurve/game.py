"""pygame host: window, timers, and key routing around the controller."""

from __future__ import annotations

import logging
import random
import pygame

from .controller import EventType, InputEvent, ModeController
from .render import Renderer
from .settings import GameSettings

logger = logging.getLogger(__name__)

UPDATE_EVENT = pygame.USEREVENT + 1
DRAW_EVENT = pygame.USEREVENT + 2

KEY_EVENTS = {
    pygame.KEYDOWN: EventType.KEY_DOWN,
    pygame.KEYUP: EventType.KEY_UP,
}


class KurveGame:
    """Runs the controller on two fixed-rate timers and draws every frame."""

    def __init__(self, settings: GameSettings, rng: random.Random | None = None) -> None:
        pygame.init()
        self.settings = settings
        self.screen = pygame.display.set_mode((int(settings.arena_width), int(settings.arena_height)))
        pygame.display.set_caption("Kurve")

        self.controller = ModeController(settings, rng)
        self.renderer = Renderer()
        self.last_update_ms = pygame.time.get_ticks()

    def run(self) -> None:
        """Block on the event queue until the window is closed."""
        interval = self.settings.tick_interval_ms
        pygame.time.set_timer(UPDATE_EVENT, interval)
        pygame.time.set_timer(DRAW_EVENT, interval)
        self.last_update_ms = pygame.time.get_ticks()
        logger.info("Running at %d Hz (%d ms ticks)", self.settings.tick_rate, interval)

        running = True
        while running:
            running = self.handle_event(pygame.event.wait())

        pygame.time.set_timer(UPDATE_EVENT, 0)
        pygame.time.set_timer(DRAW_EVENT, 0)
        pygame.quit()

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Process one pygame event; return False when the game should exit."""
        if event.type == pygame.QUIT:
            return False
        if event.type in KEY_EVENTS:
            self.controller.dispatch(InputEvent(KEY_EVENTS[event.type], event.key))
        elif event.type == UPDATE_EVENT:
            now = pygame.time.get_ticks()
            self.controller.update(now - self.last_update_ms)
            self.last_update_ms = now
        elif event.type == DRAW_EVENT:
            self.renderer.draw(self.screen, self.controller.snapshot())
            pygame.display.flip()
        return True
