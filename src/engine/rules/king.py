"""The king moves by a single square at the time, in any direction (royal ruleset only)"""

from src.engine.pieces import Piece, PieceType
from src.engine.rules.common import (
    ALL_DIRECTIONS,
    Board,
    occupied_by_opponent,
    single_step_destinations,
)
from src.engine.square import Position


def destinations(piece: Piece, board: Board) -> set[Position]:
    if piece.type != PieceType.KING:
        return set()
    return single_step_destinations(piece, board, ALL_DIRECTIONS)


def path_clear(start: Position, end: Position, board: Board) -> bool:
    """Nothing in between for a single step. Only checks that it IS a single step."""
    return start.chebyshev_distance(end) == 1


def can_capture(piece: Piece, target: Position, board: Board) -> bool:
    return occupied_by_opponent(piece, target, board)
