"""Unit tests for src/api/models.py"""

from uuid import uuid4

import pytest

from src.api.models import (
    CreateProfileRequest,
    GameConfig,
    MoveRequest,
    RenameProfileRequest,
    UndoRequest,
    validate_display_name,
)
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Difficulty, GameMode, Ruleset


# -- Validation - GameConfig --
def test_game_config_defaults() -> None:
    config = GameConfig()
    assert config.mode == GameMode.PVP
    assert config.difficulty == Difficulty.EASY
    assert config.ruleset == Ruleset.CLASSIC
    assert (config.player_1_name, config.player_2_name) == ("Player 1", "Player 2")


def test_game_config_from_plain_values() -> None:
    """Enum members can be given by their value (as a presentation layer would send them)."""
    config = GameConfig(mode="ai", difficulty="hard", ruleset="royal")
    assert config.mode == GameMode.AI
    assert config.difficulty == Difficulty.HARD
    assert config.ruleset == Ruleset.ROYAL


@pytest.mark.parametrize("name", ["", "   "])
def test_game_config_rejects_empty_names(name: str) -> None:
    with pytest.raises(InvalidRequestError):
        _ = GameConfig(player_1_name=name)


# -- Validation - MoveRequest --
def test_valid_squares() -> None:
    """Squares are normalized to lower case."""
    request = MoveRequest(from_square="E2", to_square="e4")
    assert (request.from_square, request.to_square) == ("e2", "e4")


@pytest.mark.parametrize("invalid_square", ["e9", "i1", "e", "e22", "", "22"])
def test_invalid_squares(invalid_square: str) -> None:
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(from_square=invalid_square, to_square="e4")
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(from_square="e4", to_square=invalid_square)


def test_undo_request_default() -> None:
    assert UndoRequest().count == 1


# -- Validation - display names --
@pytest.mark.parametrize("name", ["Magnus", "Player 1", "a", "A" * 20, "x y z"])
def test_valid_display_names(name: str) -> None:
    assert validate_display_name(name) == name
    assert CreateProfileRequest(display_name=name).display_name == name


@pytest.mark.parametrize(
    "name, message",
    [
        ("", "Display name cannot be empty"),
        ("    ", "Display name cannot be empty"),
        ("A" * 21, "Display name must be 20 characters or less"),
        (" Magnus", "Display name cannot have leading or trailing spaces"),
        ("Magnus ", "Display name cannot have leading or trailing spaces"),
        ("Mag  nus", "Display name can only contain letters, numbers, and single spaces"),
        ("Magnus!", "Display name can only contain letters, numbers, and single spaces"),
    ],
)
def test_invalid_display_names(name: str, message: str) -> None:
    with pytest.raises(InvalidRequestError, match=message):
        validate_display_name(name)


def test_rename_request_validates_display_name() -> None:
    with pytest.raises(InvalidRequestError):
        _ = RenameProfileRequest(profile_id=uuid4(), display_name="no_underscores")
