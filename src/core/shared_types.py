"""
Type definitions used across layers
"""

from enum import StrEnum


class GameStatus(StrEnum):
    IN_PROGRESS = "in progress"
    PLAYER_1_WIN = "player 1 wins"
    PLAYER_2_WIN = "player 2 wins"
    DRAW = "draw"


class Difficulty(StrEnum):
    EASY = "easy"
    HARD = "hard"


class GameMode(StrEnum):
    """PVP: two humans on one board. AI: player 2 is played by the computer."""

    PVP = "pvp"
    AI = "ai"


class Ruleset(StrEnum):
    """
    The two starting compositions the game has shipped with.

    * CLASSIC: knights and bishops behind a row of pawns. No royal piece.
    * ROYAL: adds rooks and a king. Capturing the king ends the game.
    """

    CLASSIC = "classic"
    ROYAL = "royal"
