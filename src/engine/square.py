"""
A position on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

from src.core.config import BOARD_DIMENSIONS


@dataclass(frozen=True)
class Position:
    row: int
    col: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Position:
        """Algebraic notation: 'a1' - 'h8' get converted to (row=1, col=1) - (row=8, col=8). The letter is the column."""
        col = ord(sq[0].lower()) - ord("a") + 1
        row = int(sq[1:])
        return cls(row, col)

    def to_algebraic(self) -> str:
        return f"{chr(self.col + ord('a') - 1)}{self.row}"

    def is_within_bounds(self) -> bool:
        return (1 <= self.row <= BOARD_DIMENSIONS[0]) and (
            1 <= self.col <= BOARD_DIMENSIONS[1]
        )

    def offset(self, d_row: int, d_col: int) -> Position:
        return Position(self.row + d_row, self.col + d_col)

    def chebyshev_distance(self, other: Position) -> int:
        """Number of king steps between the two positions."""
        return max(abs(self.row - other.row), abs(self.col - other.col))


def all_positions() -> list[Position]:
    return [
        Position(row, col)
        for row in range(1, BOARD_DIMENSIONS[0] + 1)
        for col in range(1, BOARD_DIMENSIONS[1] + 1)
    ]
