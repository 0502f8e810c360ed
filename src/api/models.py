"""Requests and Response models at the boundary between the presentation layer and the GameController / ProfileService"""

import re
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Difficulty, GameMode, GameStatus, Ruleset

MAX_DISPLAY_NAME_LENGTH = 20
# letters and digits, words separated by a single space
DISPLAY_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9]+( [a-zA-Z0-9]+)*$")

AI_PLAYER_NAME = "AI Opponent"


def _is_algebraic_notation(value: str) -> bool:
    if len(value) != 2:
        return False

    first_character = value[0]
    second_character = value[1]
    return first_character.lower() in "abcdefgh" and second_character in "12345678"


def validate_display_name(name: str) -> str:
    """Shared by the profile requests. Raises InvalidRequestError with the message to show to the player."""
    trimmed = name.strip()
    if len(trimmed) < 1:
        raise InvalidRequestError("Display name cannot be empty")

    if len(trimmed) > MAX_DISPLAY_NAME_LENGTH:
        raise InvalidRequestError(
            f"Display name must be {MAX_DISPLAY_NAME_LENGTH} characters or less"
        )

    if name != trimmed:
        raise InvalidRequestError(
            "Display name cannot have leading or trailing spaces"
        )

    if not DISPLAY_NAME_PATTERN.match(trimmed):
        raise InvalidRequestError(
            "Display name can only contain letters, numbers, and single spaces"
        )
    return trimmed


# --- REQUEST MODELS ---
class GameConfig(BaseModel):
    """How a new game should be set up."""

    mode: GameMode = GameMode.PVP
    difficulty: Difficulty = Difficulty.EASY
    ruleset: Ruleset = Ruleset.CLASSIC
    player_1_name: str = "Player 1"
    player_2_name: str = "Player 2"

    @field_validator("player_1_name", "player_2_name")
    @classmethod
    def validate_player_name(cls, value: str) -> str:
        if not value.strip():
            raise InvalidRequestError("Player names cannot be empty.")
        return value


class MoveRequest(BaseModel):
    from_square: str
    to_square: str

    @field_validator("from_square", "to_square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        if not _is_algebraic_notation(value):
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as a valid square name."
            )
        return value.lower()


class UpgradeRequest(BaseModel):
    piece_id: str


class UndoRequest(BaseModel):
    count: int = 1


class CreateProfileRequest(BaseModel):
    display_name: str

    @field_validator("display_name")
    @classmethod
    def check_display_name(cls, value: str) -> str:
        return validate_display_name(value)


class RenameProfileRequest(BaseModel):
    profile_id: UUID
    display_name: str

    @field_validator("display_name")
    @classmethod
    def check_display_name(cls, value: str) -> str:
        return validate_display_name(value)


# --- RESPONSE MODELS ---
class PieceView(BaseModel):
    id: str
    type: str
    side: int
    square: str
    has_moved: bool


class GameResponse(BaseModel):
    pieces: list[PieceView]
    layout: str
    turn: int
    resource_points: dict[int, int]
    move_count: int
    moves_since_capture: int
    status: GameStatus
    outcome_message: str
    move_history: list[str]
    players: dict[int, str]


class MoveResponse(BaseModel):
    valid: bool
    error: Optional[str] = None
    move: Optional[str] = None
    game: GameResponse


class ProfileResponse(BaseModel):
    id: UUID
    display_name: str
    created_at: datetime
    games_played: int
    wins: int
