"""
Owner of the authoritative game state: the move log plus a snapshot of the board after every move.

snapshots[0] is the starting position and snapshots[i] the position after moves[i - 1], so there is always one more snapshot than there are moves.
Undo never replays moves: it simply drops snapshots from the tail.
"""

import logging
from typing import Optional

from src.core.config import MAX_UNDO
from src.core.shared_types import Ruleset
from src.engine.board import BoardState, apply_move
from src.engine.moves import Move

logger = logging.getLogger(__name__)


class GameHistory:
    def __init__(self, initial_state: Optional[BoardState] = None) -> None:
        state = initial_state if initial_state is not None else BoardState.initial()
        self._moves: list[Move] = []
        self._snapshots: list[BoardState] = [state]

    @property
    def current_state(self) -> BoardState:
        return self._snapshots[-1]

    @property
    def moves(self) -> list[Move]:
        """Copy: the log can only change through record_move / undo."""
        return list(self._moves)

    @property
    def snapshots(self) -> list[BoardState]:
        return list(self._snapshots)

    @property
    def move_count(self) -> int:
        return len(self._moves)

    def record_move(self, move: Move) -> BoardState:
        """Apply the move to the current state and archive both."""
        new_state = apply_move(self.current_state, move)
        self._moves.append(move)
        self._snapshots.append(new_state)
        return new_state

    def undo(self, count: int = 1) -> bool:
        """
        Take back up to `count` moves (never more than MAX_UNDO at once, never more than were played).

        Returns False if nothing could be undone. A request that had to be clamped still counts as a success.
        """
        if count < 1:
            return False

        actual_count = min(count, len(self._moves), MAX_UNDO)
        if actual_count == 0:
            return False

        del self._moves[-actual_count:]
        del self._snapshots[-actual_count:]
        logger.debug("undid %d move(s) (requested %d)", actual_count, count)
        return True

    def can_undo(self, count: int = 1) -> bool:
        return 1 <= count <= MAX_UNDO and len(self._moves) >= count

    def state_at(self, index: int) -> Optional[BoardState]:
        """Snapshot after `index` moves, or None if there is no such snapshot."""
        if index < 0 or index >= len(self._snapshots):
            return None
        return self._snapshots[index]

    def reset(self, ruleset: Ruleset = Ruleset.CLASSIC) -> None:
        self._moves = []
        self._snapshots = [BoardState.initial(ruleset)]
