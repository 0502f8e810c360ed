"""
STRATEGY PATTERN: route a piece to the rules of its type.

Callers (validator, win conditions, AI) only talk to this module.
An unknown piece type gets no moves rather than an error, so `destinations` is total.
"""

from typing import Callable

from src.engine.pieces import Piece, PieceType
from src.engine.rules import king, knight, pawn, sliders
from src.engine.rules.common import Board
from src.engine.square import Position

DestinationsFn = Callable[[Piece, Board], set[Position]]
PathClearFn = Callable[[Position, Position, Board], bool]
CanCaptureFn = Callable[[Piece, Position, Board], bool]

MOVEMENT_RULES: dict[PieceType, DestinationsFn] = {
    PieceType.PAWN: pawn.destinations,
    PieceType.KNIGHT: knight.destinations,
    PieceType.BISHOP: sliders.bishop_destinations,
    PieceType.ROOK: sliders.rook_destinations,
    PieceType.QUEEN: sliders.queen_destinations,
    PieceType.KING: king.destinations,
}

PATH_RULES: dict[PieceType, PathClearFn] = {
    PieceType.PAWN: pawn.path_clear,
    PieceType.KNIGHT: knight.path_clear,
    PieceType.BISHOP: sliders.bishop_path_clear,
    PieceType.ROOK: sliders.rook_path_clear,
    PieceType.QUEEN: sliders.queen_path_clear,
    PieceType.KING: king.path_clear,
}

CAPTURE_RULES: dict[PieceType, CanCaptureFn] = {
    PieceType.PAWN: pawn.can_capture,
    PieceType.KNIGHT: knight.can_capture,
    PieceType.BISHOP: sliders.can_capture,
    PieceType.ROOK: sliders.can_capture,
    PieceType.QUEEN: sliders.can_capture,
    PieceType.KING: king.can_capture,
}

# Piece types whose path gets re-checked by the validator. Knights jump, pawns handle obstruction in their destinations.
NEEDS_PATH_CHECK: frozenset[PieceType] = frozenset(
    {PieceType.BISHOP, PieceType.ROOK, PieceType.QUEEN, PieceType.KING}
)


def destinations(piece: Piece, board: Board) -> set[Position]:
    rule = MOVEMENT_RULES.get(piece.type)
    if rule is None:
        return set()
    return rule(piece, board)


def path_clear(
    piece_type: PieceType, start: Position, end: Position, board: Board
) -> bool:
    rule = PATH_RULES.get(piece_type)
    if rule is None:
        return False
    return rule(start, end, board)


def can_capture(piece: Piece, target: Position, board: Board) -> bool:
    rule = CAPTURE_RULES.get(piece.type)
    if rule is None:
        return False
    return rule(piece, target, board)


def is_valid_move(piece: Piece, to: Position, board: Board) -> bool:
    return to in destinations(piece, board)
