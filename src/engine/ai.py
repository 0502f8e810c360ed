"""
Computer opponent
----

Picks a move by generating every legal move for the side to move and ranking them with a fixed heuristic (greedy, one ply).

`evaluate_position` (leaf evaluation) and `get_search_depth` (cutoff) are not used by the greedy policy yet.
They are the seams for a depth limited minimax / alpha-beta search on top of `generate_moves` + `order_moves`.
"""

import logging
import time
from typing import Optional

from src.core.config import AI_TIME_BUDGET_SECONDS
from src.core.shared_types import Difficulty, Ruleset
from src.engine.board import BoardState
from src.engine.moves import Move
from src.engine.pieces import PIECE_VALUES, ROYAL, PieceType, Side
from src.engine.rules import dispatcher
from src.engine.validator import can_upgrade, validate_move, validate_upgrade

logger = logging.getLogger(__name__)

SEARCH_DEPTHS: dict[Difficulty, int] = {
    Difficulty.EASY: 4,
    Difficulty.HARD: 6,
}

# --- evaluation weights ---
RESOURCE_WEIGHT = 10
MOBILITY_WEIGHT = 2
HOME_ROWS_BONUS = 20
FRIENDLY_NEAR_KING_BONUS = 5
ENEMY_NEAR_KING_PENALTY = 10
FRIENDLY_SUPPORT_RADIUS = 2
# enemy pieces threaten from further away than friendly pieces can help
ENEMY_THREAT_RADIUS = 3
KING_LOST_SCORE = -PIECE_VALUES[ROYAL]


def get_piece_value(piece_type: PieceType) -> int:
    return PIECE_VALUES.get(piece_type, 0)


def get_search_depth(difficulty: Difficulty) -> int:
    return SEARCH_DEPTHS[difficulty]


# --- MOVE GENERATION ---
def generate_moves(
    state: BoardState, side: Side, include_upgrades: bool = False
) -> list[Move]:
    """
    All legal moves for `side` in this position, as the validator would create them (captured piece / promotion filled in).

    NOTE: Works for the side that is NOT to move as well (needed for mobility), by validating against the same position with the turn handed over.
    Upgrades are optional: they are not moves on the board, so they do not count for mobility or for 'no legal moves'.
    """
    position = state.with_turn(side)
    moves: list[Move] = []
    for piece in position.pieces_of(side):
        # sorted: a set has no stable order, and the ordering below relies on the input order for ties
        for destination in sorted(
            dispatcher.destinations(piece, position), key=lambda p: (p.row, p.col)
        ):
            result = validate_move(piece, destination, position)
            if result.valid and result.move is not None:
                moves.append(result.move)

        if include_upgrades and can_upgrade(piece.id, position):
            result = validate_upgrade(piece.id, position)
            if result.move is not None:
                moves.append(result.move)
    return moves


# --- MOVE ORDERING ---
def _forward_progress(move: Move) -> int:
    """Rows gained towards the opponent. Negative for moving back, zero for sideways."""
    return (move.to_position.row - move.from_position.row) * move.piece.side.forward


def _ordering_key(move: Move) -> tuple[bool, bool, int, bool, int]:
    captured = move.captured_piece
    return (
        captured is not None and captured.type == ROYAL,
        captured is not None,
        get_piece_value(captured.type) if captured is not None else 0,
        move.is_stationary_upgrade,
        _forward_progress(move),
    )


def order_moves(moves: list[Move], state: BoardState) -> list[Move]:
    """
    Most promising move first:

    1. capturing the royal piece (wins the game)
    2. other captures, most valuable victim first
    3. upgrading a pawn with resource points
    4. moves that advance furthest towards the opponent (sideways and backwards last)

    Ties keep their input order (the sort is stable). Returns a new list, the input is left alone.
    """
    return sorted(moves, key=_ordering_key, reverse=True)


# --- POSITION EVALUATION ---
def evaluate_king_safety(state: BoardState, side: Side) -> int:
    """
    Rulesets without a royal piece have nothing to protect (0).
    A missing king is the worst possible outcome.
    """
    if state.ruleset != Ruleset.ROYAL:
        return 0

    king = next((piece for piece in state.pieces_of(side) if piece.type == ROYAL), None)
    if king is None:
        return KING_LOST_SCORE

    score = 0
    home_rows = (side.home_row, side.home_row + side.forward)
    if king.position.row in home_rows:
        score += HOME_ROWS_BONUS

    for piece in state.pieces:
        if piece.id == king.id:
            continue
        distance = piece.position.chebyshev_distance(king.position)
        if piece.side == side and distance <= FRIENDLY_SUPPORT_RADIUS:
            score += FRIENDLY_NEAR_KING_BONUS
        elif piece.side != side and distance <= ENEMY_THREAT_RADIUS:
            score -= ENEMY_NEAR_KING_PENALTY
    return score


def evaluate_position(state: BoardState, side: Side) -> int:
    """
    Static evaluation from the point of view of `side` (positive is good for `side`):

    * material (piece values)
    * resource points
    * king safety
    * mobility (number of legal moves)
    """
    opponent = side.opponent
    score = 0

    for piece in state.pieces:
        value = get_piece_value(piece.type)
        score += value if piece.side == side else -value

    score += RESOURCE_WEIGHT * (
        state.resource_points[side] - state.resource_points[opponent]
    )

    score += evaluate_king_safety(state, side) - evaluate_king_safety(state, opponent)

    own_moves = len(generate_moves(state, side))
    opponent_moves = len(generate_moves(state, opponent))
    score += MOBILITY_WEIGHT * (own_moves - opponent_moves)
    return score


# --- MOVE SELECTION ---
def select_move(
    state: BoardState,
    difficulty: Difficulty = Difficulty.EASY,
    time_budget: float = AI_TIME_BUDGET_SECONDS,
) -> Optional[Move]:
    """
    Pick the move for the side to move, or None if it has no legal move.

    NOTE: The time budget is only looked at once. The greedy policy does not need more, a deeper search must poll it between plies.
    """
    started = time.monotonic()
    depth = get_search_depth(difficulty)

    moves = generate_moves(state, state.turn, include_upgrades=True)
    if not moves:
        logger.info("no legal moves for %s", state.turn.label)
        return None

    ordered = order_moves(moves, state)
    best_move = ordered[0]

    elapsed = time.monotonic() - started
    if elapsed >= time_budget:
        logger.warning(
            "move selection exceeded its budget (%.2fs > %.2fs), playing %s",
            elapsed,
            time_budget,
            best_move.to_notation(),
        )
        return best_move

    logger.debug(
        "%s picks %s out of %d moves (difficulty %s, depth %d)",
        state.turn.label,
        best_move.to_notation(),
        len(moves),
        difficulty,
        depth,
    )
    return best_move
