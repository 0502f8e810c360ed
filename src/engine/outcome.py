"""
Win and draw detection
----

Every check is a pure function of the board state. `check_game_status` combines them in a fixed priority order; the first one that applies decides:

1. royal piece captured (royal ruleset only)
2. draw: too many moves without a capture
3. a side has too few pieces left
4. the side to move has no legal moves
"""

from typing import Optional

from src.core.config import DRAW_THRESHOLD, MIN_PIECES
from src.core.shared_types import GameStatus, Ruleset
from src.engine.board import BoardState
from src.engine.pieces import ROYAL, Side
from src.engine.validator import get_valid_moves

WIN_STATUS: dict[Side, GameStatus] = {
    Side.PLAYER_1: GameStatus.PLAYER_1_WIN,
    Side.PLAYER_2: GameStatus.PLAYER_2_WIN,
}


def check_game_status(state: BoardState) -> GameStatus:
    royal_status = check_royal_capture(state)
    if royal_status != GameStatus.IN_PROGRESS:
        return royal_status

    # NOTE: the draw outranks a win on material
    if is_draw_by_move_limit(state):
        return GameStatus.DRAW

    for side in (Side.PLAYER_1, Side.PLAYER_2):
        if has_insufficient_pieces(state, side):
            return WIN_STATUS[side.opponent]

    if has_no_valid_moves(state, state.turn):
        return WIN_STATUS[state.turn.opponent]

    return GameStatus.IN_PROGRESS


def check_royal_capture(state: BoardState) -> GameStatus:
    """Losing your king loses the game immediately. Rulesets without a royal piece never end this way."""
    if state.ruleset != Ruleset.ROYAL:
        return GameStatus.IN_PROGRESS

    for side in (Side.PLAYER_1, Side.PLAYER_2):
        if is_royal_captured(state, side):
            return WIN_STATUS[side.opponent]
    return GameStatus.IN_PROGRESS


def is_royal_captured(state: BoardState, side: Side) -> bool:
    return not any(piece.type == ROYAL for piece in state.pieces_of(side))


def is_draw_by_move_limit(state: BoardState) -> bool:
    """If you reach 50 consecutive moves without a capture, it is a draw"""
    return state.moves_since_capture >= DRAW_THRESHOLD


def has_insufficient_pieces(state: BoardState, side: Side) -> bool:
    """Fewer than 3 pieces (the king does not count) loses the game"""
    return state.count_pieces(side, exclude_royal=True) < MIN_PIECES


def has_no_valid_moves(state: BoardState, side: Side) -> bool:
    # the validator only hands out moves to the side to move
    position = state.with_turn(side)
    return not any(get_valid_moves(piece, position) for piece in position.pieces_of(side))


# --- derived from check_game_status ---
def is_game_over(state: BoardState) -> bool:
    return check_game_status(state) != GameStatus.IN_PROGRESS


def get_winner(state: BoardState) -> Optional[Side]:
    status = check_game_status(state)
    return next((side for side, won in WIN_STATUS.items() if won == status), None)


def get_outcome_message(state: BoardState) -> str:
    status = check_game_status(state)
    if status == GameStatus.DRAW:
        return f"Game is a draw ({DRAW_THRESHOLD} moves without capture)"
    if status == GameStatus.IN_PROGRESS:
        return "Game in progress"

    winner = Side.PLAYER_1 if status == GameStatus.PLAYER_1_WIN else Side.PLAYER_2
    if check_royal_capture(state) != GameStatus.IN_PROGRESS:
        return f"{winner.label} wins by King capture!"
    return f"{winner.label} wins!"
