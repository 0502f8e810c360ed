"""
Pawn rules

A pawn:
- moves by a single square forward (forward depends on the side).
- can move by two on its first move, if both squares are empty.
- can NOT capture. Not diagonally, not forward. An occupied square simply blocks it.
- is promoted to the top tier piece when it reaches the far row (see the validator).
"""

from src.engine.pieces import Piece, PieceType, Side
from src.engine.rules.common import Board, is_line_empty, is_vertical
from src.engine.square import Position


def destinations(piece: Piece, board: Board) -> set[Position]:
    if piece.type != PieceType.PAWN:
        return set()

    forward = piece.side.forward
    one_ahead = piece.position.offset(forward, 0)
    if not _is_free(one_ahead, board):
        return set()

    result = {one_ahead}
    if not piece.has_moved:
        two_ahead = piece.position.offset(2 * forward, 0)
        if _is_free(two_ahead, board):
            result.add(two_ahead)
    return result


def path_clear(start: Position, end: Position, board: Board) -> bool:
    """Pawns only ever travel along their column"""
    return is_vertical(start, end) and is_line_empty(start, end, board)


def can_capture(piece: Piece, target: Position, board: Board) -> bool:
    return False


def should_auto_promote(side: Side, position: Position) -> bool:
    """Player 1 promotes on row 8, player 2 on row 1"""
    return position.row == side.far_row


def _is_free(position: Position, board: Board) -> bool:
    return position.is_within_bounds() and board.piece_at(position) is None
