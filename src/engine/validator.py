"""
The MoveValidator combines everything required to accept or reject a single move.
----

It is the only place that creates Move records (apart from the AI, which goes through here as well).
A rejected move is NOT an exception: the caller gets a MoveResult with the reason, and nothing was changed.
"""

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Optional, Self

from src.core.config import UPGRADE_COST
from src.engine.board import BoardState, apply_move
from src.engine.moves import Move
from src.engine.pieces import Piece, PieceType, Side
from src.engine.rules import dispatcher
from src.engine.rules.pawn import should_auto_promote
from src.engine.square import Position

logger = logging.getLogger(__name__)


class Reason(StrEnum):
    """Why a move / upgrade got rejected. The value is the message shown to the player."""

    NOT_YOUR_TURN = "Invalid: not your turn"
    OUT_OF_BOUNDS = "Invalid: out of bounds"
    ILLEGAL_FOR_PIECE = "Invalid: illegal move for piece type"
    BLOCKED = "Invalid: blocked"
    OBSTRUCTED = "Invalid: obstructed"
    PAWN_CANNOT_CAPTURE = "Invalid: pawns cannot capture"
    PIECE_NOT_FOUND = "Invalid: piece not found"
    NO_PIECE_AT_SOURCE = "Invalid: no piece at source position"
    NOT_UPGRADEABLE = "Invalid: only pawns can be upgraded"
    INSUFFICIENT_RESOURCES = (
        f"Invalid: insufficient resource points (need {UPGRADE_COST})"
    )
    RESTRICTED_RANK = "Invalid: cannot upgrade pawns on row 1 or row 8"
    GAME_OVER = "Invalid: game over"


@dataclass(frozen=True)
class MoveResult:
    valid: bool
    reason: Optional[Reason] = None
    move: Optional[Move] = None
    new_state: Optional[BoardState] = None

    @classmethod
    def rejected(cls, reason: Reason) -> Self:
        return cls(valid=False, reason=reason)

    @classmethod
    def accepted(cls, move: Move, new_state: BoardState) -> Self:
        return cls(valid=True, move=move, new_state=new_state)

    @property
    def error(self) -> Optional[str]:
        return self.reason.value if self.reason else None


def validate_move(piece: Piece, to: Position, state: BoardState) -> MoveResult:
    """
    Attempt a move of `piece` to `to`
    -----

    Checks run in this order and stop at the first failure:
    1. is it your turn
    2. is the destination on the board
    3. does the piece type allow it (covers friendly pieces and most obstructions already)
    4. friendly piece on the destination (re-check)
    5. path obstruction (sliders and king)
    6. capture allowed (pawns never capture)
    7. pawn reaching the far row gets promoted for free
    """
    result = _check_move(piece, to, state)
    if result is not None:
        logger.debug(
            "rejected %s %s -> %s: %s",
            piece.id,
            piece.position,
            to,
            result.error,
        )
        return result

    occupant = state.piece_at(to)
    is_promotion = piece.type == PieceType.PAWN and should_auto_promote(piece.side, to)
    move = Move(
        piece=piece,
        from_position=piece.position,
        to_position=to,
        captured_piece=occupant,
        is_upgrade=is_promotion,
    )
    return MoveResult.accepted(move, apply_move(state, move))


def _check_move(piece: Piece, to: Position, state: BoardState) -> Optional[MoveResult]:
    """Returns the rejection, or None if the move survived all checks."""
    if piece.side != state.turn:
        return MoveResult.rejected(Reason.NOT_YOUR_TURN)

    if not to.is_within_bounds():
        return MoveResult.rejected(Reason.OUT_OF_BOUNDS)

    if not dispatcher.is_valid_move(piece, to, state):
        return MoveResult.rejected(Reason.ILLEGAL_FOR_PIECE)

    occupant = state.piece_at(to)
    if occupant is not None and occupant.side == piece.side:
        return MoveResult.rejected(Reason.BLOCKED)

    if piece.type in dispatcher.NEEDS_PATH_CHECK and not dispatcher.path_clear(
        piece.type, piece.position, to, state
    ):
        return MoveResult.rejected(Reason.OBSTRUCTED)

    if occupant is not None and not dispatcher.can_capture(piece, to, state):
        if piece.type == PieceType.PAWN:
            return MoveResult.rejected(Reason.PAWN_CANNOT_CAPTURE)
        return MoveResult.rejected(Reason.BLOCKED)

    return None


def get_valid_moves(piece: Piece, state: BoardState) -> set[Position]:
    """Only the side to move has valid moves."""
    if piece.side != state.turn:
        return set()
    return dispatcher.destinations(piece, state)


def validate_upgrade(piece_id: str, state: BoardState) -> MoveResult:
    """
    Spend resource points to turn a pawn into the top tier piece, without moving it.
    ----

    1. the piece must exist
    2. it must be your turn
    3. it must be a pawn
    4. you need enough resource points
    5. the pawn may not stand on row 1 or row 8
    """
    result = _check_upgrade(piece_id, state)
    if result is not None:
        logger.debug("rejected upgrade of %s: %s", piece_id, result.error)
        return result

    piece = state.piece_by_id(piece_id)
    # for the type checker: _check_upgrade made sure the piece exists
    assert piece is not None
    move = Move(
        piece=piece,
        from_position=piece.position,
        to_position=piece.position,
        is_upgrade=True,
    )
    return MoveResult.accepted(move, apply_move(state, move))


def can_upgrade(piece_id: str, state: BoardState) -> bool:
    return _check_upgrade(piece_id, state) is None


def _check_upgrade(piece_id: str, state: BoardState) -> Optional[MoveResult]:
    piece = state.piece_by_id(piece_id)
    if piece is None:
        return MoveResult.rejected(Reason.PIECE_NOT_FOUND)

    if piece.side != state.turn:
        return MoveResult.rejected(Reason.NOT_YOUR_TURN)

    if piece.type != PieceType.PAWN:
        return MoveResult.rejected(Reason.NOT_UPGRADEABLE)

    if state.resource_points[piece.side] < UPGRADE_COST:
        return MoveResult.rejected(Reason.INSUFFICIENT_RESOURCES)

    if piece.position.row in (Side.PLAYER_1.home_row, Side.PLAYER_2.home_row):
        return MoveResult.rejected(Reason.RESTRICTED_RANK)

    return None
