"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

import random
from typing import Callable, Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.shared_types import Ruleset
from src.db.schema import Base
from src.engine.board import BoardState
from src.engine.pieces import Piece, PieceType, Side
from src.engine.square import all_positions

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)

BoardFactory = Callable[..., BoardState]
RandomBoardFactory = Callable[[int], BoardState]


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


def layout_from_squares(pieces: dict[str, str]) -> str:
    """
    Build a layout string from {"d4": "B", "f6": "n", ...}.
    Upper case letters are player 1 pieces, lower case player 2 (same convention as the layout string itself).
    """
    rows: list[str] = []
    for row in range(8, 0, -1):
        characters = ""
        empty = 0
        for col in range(1, 9):
            square = f"{chr(ord('a') + col - 1)}{row}"
            if square in pieces:
                if empty:
                    characters += str(empty)
                    empty = 0
                characters += pieces[square]
            else:
                empty += 1
        if empty:
            characters += str(empty)
        rows.append(characters)
    return "/".join(rows)


@pytest.fixture
def make_board() -> BoardFactory:
    """Factory: create a board with only the given pieces on it. Keyword arguments are passed on to BoardState.from_layout."""

    def _make_board(
        pieces: dict[str, str],
        turn: Side = Side.PLAYER_1,
        ruleset: Ruleset = Ruleset.CLASSIC,
        **kwargs,
    ) -> BoardState:
        return BoardState.from_layout(
            layout_from_squares(pieces), turn=turn, ruleset=ruleset, **kwargs
        )

    return _make_board


@pytest.fixture
def random_board() -> RandomBoardFactory:
    """Factory: a seeded, reproducible board with 2 to 30 pieces of any type and side scattered around. Player 1 to move."""

    def _random_board(seed: int) -> BoardState:
        rng = random.Random(seed)
        positions = rng.sample(all_positions(), rng.randint(2, 30))
        pieces = tuple(
            Piece(
                type=rng.choice(list(PieceType)),
                side=rng.choice(list(Side)),
                position=position,
                has_moved=rng.random() < 0.5,
                id=f"piece-{index}",
            )
            for index, position in enumerate(positions)
        )
        return BoardState(pieces=pieces)

    return _random_board
