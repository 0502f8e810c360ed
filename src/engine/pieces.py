"""Defines the pieces, the two sides and the value of each piece type"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, auto

from src.engine.square import Position


class PieceType(Enum):
    PAWN = auto()
    KNIGHT = auto()
    BISHOP = auto()
    ROOK = auto()
    QUEEN = auto()
    KING = auto()


class Side(Enum):
    PLAYER_1 = 1
    PLAYER_2 = 2

    @property
    def opponent(self) -> Side:
        return Side.PLAYER_2 if self == Side.PLAYER_1 else Side.PLAYER_1

    @property
    def forward(self) -> int:
        """Player 1 moves UP the board (towards row 8), player 2 moves DOWN."""
        return 1 if self == Side.PLAYER_1 else -1

    @property
    def home_row(self) -> int:
        return 1 if self == Side.PLAYER_1 else 8

    @property
    def far_row(self) -> int:
        """Row where a pawn of this side promotes."""
        return 8 if self == Side.PLAYER_1 else 1

    @property
    def label(self) -> str:
        return f"Player {self.value}"


# The piece every upgrade / promotion turns a pawn into
TOP_TIER = PieceType.QUEEN

# Piece whose capture ends the game (only present in the royal ruleset)
ROYAL = PieceType.KING

LETTER_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_LETTER: dict[PieceType, str] = {
    value: key for key, value in LETTER_TO_PIECE.items()
}

# NOTE: The king is worth more than all other pieces together, so capturing it always outranks anything else.
PIECE_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 10,
    PieceType.KNIGHT: 30,
    PieceType.BISHOP: 30,
    PieceType.ROOK: 50,
    PieceType.QUEEN: 90,
    PieceType.KING: 10000,
}


@dataclass(frozen=True)
class Piece:
    type: PieceType
    side: Side
    position: Position
    has_moved: bool = False
    # stable for the lifetime of the piece, unique on a board. Always given by name.
    id: str = field(kw_only=True)

    @property
    def value(self) -> int:
        return PIECE_VALUES.get(self.type, 0)

    @property
    def is_royal(self) -> bool:
        return self.type == ROYAL

    def to_letter(self) -> str:
        # upper case: player 1, lower case: player 2
        letter = PIECE_TO_LETTER[self.type]
        return letter.upper() if self.side == Side.PLAYER_1 else letter

    def moved_to(self, position: Position) -> Piece:
        """Same piece (same id) standing on a new square."""
        return replace(self, position=position, has_moved=True)

    def promoted(self, new_type: PieceType = TOP_TIER) -> Piece:
        return replace(self, type=new_type)
