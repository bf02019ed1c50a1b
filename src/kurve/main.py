"""Executable entrypoint for Kurve."""

from __future__ import annotations

import argparse
import logging
import random

from rich.logging import RichHandler

from .game import KurveGame
from .settings import SettingsManager
from .utils import SCOREBOARD_WIDTH


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="kurve", description="Local multiplayer light-trail game.")
    parser.add_argument("--seed", type=int, default=None, help="seed spawn and gap randomness")
    parser.add_argument("--width", type=float, default=None, help="window width for this session")
    parser.add_argument("--height", type=float, default=None, help="window height for this session")
    parser.add_argument("--save-settings", action="store_true", help="write the effective settings to disk")
    parser.add_argument("-v", "--verbose", action="store_true", help="log every crash")
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
    )


def main(argv: list[str] | None = None) -> None:
    """Launch the game."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.width is not None and args.width <= SCOREBOARD_WIDTH:
        parser.error(f"--width must be greater than the {SCOREBOARD_WIDTH}-unit scoreboard strip")
    if args.height is not None and args.height <= 0:
        parser.error("--height must be positive")
    configure_logging(args.verbose)

    manager = SettingsManager()
    settings = manager.settings
    if args.width is not None:
        settings.arena_width = args.width
    if args.height is not None:
        settings.arena_height = args.height
    if args.save_settings:
        manager.save()

    KurveGame(settings, rng=random.Random(args.seed)).run()


if __name__ == "__main__":
    main()
