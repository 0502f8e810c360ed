"""
Sliding pieces: bishop, rook and queen

All three use raycasting (see common.py). They differ in their directions:
* bishop: the four diagonals
* rook: horizontal and vertical
* queen: the four diagonals plus straight forward (towards the opponent's side). It does NOT move sideways or backwards.
"""

from src.engine.pieces import Piece, PieceType, Side
from src.engine.rules.common import (
    DIAGONALS,
    ORTHOGONALS,
    Board,
    Vector,
    is_diagonal,
    is_line_empty,
    is_orthogonal,
    is_vertical,
    occupied_by_opponent,
    raycasting_destinations,
)
from src.engine.square import Position


def queen_directions(side: Side) -> list[Vector]:
    return DIAGONALS + [(side.forward, 0)]


# --- BISHOP ---
def bishop_destinations(piece: Piece, board: Board) -> set[Position]:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    if piece.type != PieceType.BISHOP:
        return set()
    return raycasting_destinations(piece, board, DIAGONALS)


def bishop_path_clear(start: Position, end: Position, board: Board) -> bool:
    return is_diagonal(start, end) and is_line_empty(start, end, board)


# --- ROOK ---
def rook_destinations(piece: Piece, board: Board) -> set[Position]:
    """Rooks move either horizontally or vertically"""
    if piece.type != PieceType.ROOK:
        return set()
    return raycasting_destinations(piece, board, ORTHOGONALS)


def rook_path_clear(start: Position, end: Position, board: Board) -> bool:
    return is_orthogonal(start, end) and is_line_empty(start, end, board)


# --- QUEEN ---
def queen_destinations(piece: Piece, board: Board) -> set[Position]:
    if piece.type != PieceType.QUEEN:
        return set()
    return raycasting_destinations(piece, board, queen_directions(piece.side))


def queen_path_clear(start: Position, end: Position, board: Board) -> bool:
    """
    The queen travels diagonally or along the column (its forward axis).

    NOTE: Geometry only. Whether a vertical segment actually points forward for the queen's side is decided by queen_destinations.
    """
    is_straight = is_diagonal(start, end) or is_vertical(start, end)
    return is_straight and is_line_empty(start, end, board)


def can_capture(piece: Piece, target: Position, board: Board) -> bool:
    """Identical for all sliders"""
    return occupied_by_opponent(piece, target, board)
