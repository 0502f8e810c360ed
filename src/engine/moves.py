"""
The Move record: one already decided transition of the board.

Moves are created by the validator once a candidate move is confirmed legal, then consumed by `apply_move` and archived by the history.
"""

import time
from dataclasses import dataclass, field
from typing import Optional

from src.engine.pieces import TOP_TIER, PIECE_TO_LETTER, Piece
from src.engine.square import Position


@dataclass(frozen=True)
class Move:
    """basic definition of a move that was made (or is about to be made)"""

    piece: Piece  # snapshot of the piece BEFORE moving
    from_position: Position
    to_position: Position
    captured_piece: Optional[Piece] = None
    is_upgrade: bool = False
    # ordering marker only: two moves describing the same transition are equal
    sequence: int = field(default_factory=time.monotonic_ns, compare=False)

    @property
    def is_capture(self) -> bool:
        return self.captured_piece is not None

    @property
    def is_stationary_upgrade(self) -> bool:
        """A paid upgrade: the pawn stays where it is and the turn does not pass."""
        return self.is_upgrade and self.from_position == self.to_position

    def to_notation(self) -> str:
        """
        Human readable notation, used for the move list and in logs

        examples:
        * "e2e4": piece moved from e2 to e4
        * "c5xd6": piece on c5 captured on d6
        * "e7e8=Q": pawn reached the far row and promoted
        * "e4=Q": pawn on e4 was upgraded using resource points (no movement)
        """
        upgrade = f"={PIECE_TO_LETTER[TOP_TIER].upper()}" if self.is_upgrade else ""
        if self.is_stationary_upgrade:
            return f"{self.from_position.to_algebraic()}{upgrade}"
        separator = "x" if self.is_capture else ""
        return f"{self.from_position.to_algebraic()}{separator}{self.to_position.to_algebraic()}{upgrade}"
