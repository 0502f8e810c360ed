"""
Game constants and environment driven settings.

The rule constants are fixed by the game design. Only the database location and the log level can be changed from outside.
"""

import logging
import os

# Board is always 8x8. Kept adjustable in one place as multiple modules need it.
BOARD_DIMENSIONS = (8, 8)

# --- resource economy ---
UPGRADE_COST = 2
CAPTURE_REWARD = 1

# --- end of game ---
DRAW_THRESHOLD = 50  # consecutive moves without a capture
MIN_PIECES = 3  # fewer than this (royal piece not counted) loses the game

# --- history ---
MAX_UNDO = 3

# --- computer opponent ---
AI_TIME_BUDGET_SECONDS = 5.0

DATABASE_URL = os.environ.get("PAWN_ASCENT_DATABASE_URL", "sqlite:///pawn_ascent.db")
LOG_LEVEL = os.environ.get("PAWN_ASCENT_LOG_LEVEL", "WARNING")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int | None = None) -> None:
    """For applications embedding the engine. The library itself never installs handlers."""
    level = level if level is not None else LOG_LEVEL
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT)
