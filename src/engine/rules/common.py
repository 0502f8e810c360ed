"""
Geometry shared by the piece rule modules

Key idea: every piece type is either a *stepper* (fixed set of offsets, one step) or a *slider* (walks along a direction until something stops it).
Both helpers below already filter out squares occupied by your own pieces, so callers never see a friendly-blocked destination.

Turn order / resources / promotion are checked later by the validator.
"""

from typing import Optional, Protocol

from src.engine.pieces import Piece
from src.engine.square import Position


class Board(Protocol):
    """Just the parts the movement rules need"""

    def piece_at(self, position: Position) -> Optional[Piece]: ...


Vector = tuple[int, int]  # (d_row, d_col)

DIAGONALS: list[Vector] = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
ORTHOGONALS: list[Vector] = [(1, 0), (-1, 0), (0, 1), (0, -1)]
ALL_DIRECTIONS: list[Vector] = ORTHOGONALS + DIAGONALS


def raycasting_destinations(
    piece: Piece, board: Board, directions: list[Vector]
) -> set[Position]:
    """
    Raycasting algorithm
    -----

    ---
    We walk along each direction one square at a time until we hit another piece or the edge of the board.
    The first occupied square is included only if it holds an opponent's piece (capture). Either way the ray stops there.
    """
    destinations: set[Position] = set()
    for d_row, d_col in directions:
        target = piece.position
        while True:
            target = target.offset(d_row, d_col)
            if not target.is_within_bounds():
                break

            occupant = board.piece_at(target)
            if occupant is not None:
                if occupant.side != piece.side:
                    destinations.add(target)
                break

            destinations.add(target)
    return destinations


def single_step_destinations(
    piece: Piece, board: Board, deltas: list[Vector]
) -> set[Position]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just jump to a fixed offset"""
    destinations: set[Position] = set()
    for d_row, d_col in deltas:
        target = piece.position.offset(d_row, d_col)
        if not target.is_within_bounds():
            continue

        occupant = board.piece_at(target)
        if occupant is None or occupant.side != piece.side:
            destinations.add(target)
    return destinations


def unit_step(start: Position, end: Position) -> Vector:
    """Direction of travel, each component reduced to -1, 0 or 1"""
    d_row = end.row - start.row
    d_col = end.col - start.col
    return ((d_row > 0) - (d_row < 0), (d_col > 0) - (d_col < 0))


def squares_between(start: Position, end: Position) -> list[Position]:
    """
    The squares strictly in between two squares on a straight line (diagonal, horizontal or vertical).

    NOTE: The caller must make sure the segment is straight. For any other pair this walks along the unit step and the result is meaningless.
    """
    d_row, d_col = unit_step(start, end)
    steps = start.chebyshev_distance(end)
    return [start.offset(i * d_row, i * d_col) for i in range(1, steps)]


def is_diagonal(start: Position, end: Position) -> bool:
    d_row = end.row - start.row
    d_col = end.col - start.col
    return d_row != 0 and abs(d_row) == abs(d_col)


def is_orthogonal(start: Position, end: Position) -> bool:
    d_row = end.row - start.row
    d_col = end.col - start.col
    return (d_row == 0) != (d_col == 0)


def is_vertical(start: Position, end: Position) -> bool:
    return start.col == end.col and start.row != end.row


def is_line_empty(start: Position, end: Position, board: Board) -> bool:
    return all(board.piece_at(square) is None for square in squares_between(start, end))


def occupied_by_opponent(piece: Piece, target: Position, board: Board) -> bool:
    """A piece can capture on target if there is a piece there and it belongs to the other side."""
    occupant = board.piece_at(target)
    return occupant is not None and occupant.side != piece.side
