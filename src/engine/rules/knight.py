"""Knights always move such that |delta_row| + |delta_col| = 3, and jump over anything in between"""

from src.engine.pieces import Piece, PieceType
from src.engine.rules.common import (
    Board,
    Vector,
    occupied_by_opponent,
    single_step_destinations,
)
from src.engine.square import Position

KNIGHT_DELTAS: list[Vector] = [
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
]


def destinations(piece: Piece, board: Board) -> set[Position]:
    if piece.type != PieceType.KNIGHT:
        return set()
    return single_step_destinations(piece, board, KNIGHT_DELTAS)


def path_clear(start: Position, end: Position, board: Board) -> bool:
    return True


def can_capture(piece: Piece, target: Position, board: Board) -> bool:
    return occupied_by_opponent(piece, target, board)
