"""
Orchestration of one game session: turn flow, upgrades, undo, mode switching and the computer opponent.

The controller is thin. Rules live in src/engine; the controller only decides WHEN to call them and records accepted moves in the GameHistory.
"""

import logging
from typing import Optional

from src.api.models import (
    AI_PLAYER_NAME,
    GameConfig,
    GameResponse,
    MoveRequest,
    MoveResponse,
    PieceView,
    UndoRequest,
    UpgradeRequest,
)
from src.core.shared_types import Difficulty, GameMode, GameStatus
from src.engine import ai, outcome, validator
from src.engine.board import BoardState
from src.engine.history import GameHistory
from src.engine.moves import Move
from src.engine.pieces import Piece, Side
from src.engine.square import Position
from src.engine.validator import MoveResult, Reason

logger = logging.getLogger(__name__)

# The computer always plays the second side
AI_SIDE = Side.PLAYER_2


class GameController:
    """Facade used by the presentation layer."""

    def __init__(self, config: Optional[GameConfig] = None) -> None:
        self._config = config if config is not None else GameConfig()
        self._history = GameHistory(BoardState.initial(self._config.ruleset))

    # -- QUERIES ---
    @property
    def config(self) -> GameConfig:
        return self._config.model_copy()

    @property
    def state(self) -> BoardState:
        return self._history.current_state

    @property
    def current_side(self) -> Side:
        return self.state.turn

    @property
    def status(self) -> GameStatus:
        return outcome.check_game_status(self.state)

    @property
    def is_game_over(self) -> bool:
        return outcome.is_game_over(self.state)

    @property
    def winner(self) -> Optional[Side]:
        return outcome.get_winner(self.state)

    @property
    def outcome_message(self) -> str:
        return outcome.get_outcome_message(self.state)

    @property
    def move_history(self) -> list[Move]:
        return self._history.moves

    @property
    def player_names(self) -> dict[Side, str]:
        return {
            Side.PLAYER_1: self._config.player_1_name,
            Side.PLAYER_2: self._config.player_2_name,
        }

    @property
    def is_ai_turn(self) -> bool:
        return self._config.mode == GameMode.AI and self.current_side == AI_SIDE

    def state_at(self, index: int) -> Optional[BoardState]:
        return self._history.state_at(index)

    def valid_moves(self, position: Position) -> set[Position]:
        """Destinations for the piece standing on `position` (empty if there is none or it is not its turn)."""
        piece = self.state.piece_at(position)
        if piece is None:
            return set()
        return validator.get_valid_moves(piece, self.state)

    def resource_points(self, side: Side) -> int:
        return self.state.resource_points[side]

    def can_undo(self, count: int = 1) -> bool:
        return not self.is_game_over and self._history.can_undo(count)

    def can_upgrade(self, piece_id: str) -> bool:
        return validator.can_upgrade(piece_id, self.state)

    # -- COMMANDS ---
    def attempt_move(self, from_position: Position, to_position: Position) -> MoveResult:
        """
        Attempt a move of the piece on `from_position`
        -----

        1. the game must still be going on
        2. there must be a piece to move
        3. the validator decides (and creates the Move)
        4. accepted? record it, and let the computer answer if it is its turn
        """
        if self.is_game_over:
            return MoveResult.rejected(Reason.GAME_OVER)

        piece = self.state.piece_at(from_position)
        if piece is None:
            return MoveResult.rejected(Reason.NO_PIECE_AT_SOURCE)

        result = validator.validate_move(piece, to_position, self.state)
        if not result.valid or result.move is None:
            logger.info(
                "%s: %s -> %s rejected (%s)",
                self._name_of(piece),
                from_position.to_algebraic(),
                to_position,
                result.error,
            )
            return result

        self._record(result.move)
        self._play_ai_if_needed()
        return result

    def attempt_upgrade(self, piece_id: str) -> MoveResult:
        """Spend resource points on turning a pawn into a queen. The turn does not pass."""
        if self.is_game_over:
            return MoveResult.rejected(Reason.GAME_OVER)

        result = validator.validate_upgrade(piece_id, self.state)
        if result.valid and result.move is not None:
            self._record(result.move)
        else:
            logger.info("upgrade of %s rejected (%s)", piece_id, result.error)
        return result

    def undo(self, count: int = 1) -> bool:
        """
        Take back up to `count` moves.

        NOTE: Against the computer, an undo that leaves the computer to move is answered right away.
        Undo 2 moves to take back your own move.
        """
        if self.is_game_over:
            return False

        undone = self._history.undo(count)
        if undone:
            logger.info("undo requested for %d move(s), %d move(s) left", count, self._history.move_count)
            self._play_ai_if_needed()
        return undone

    def request_ai_move(self, difficulty: Optional[Difficulty] = None) -> Optional[Move]:
        """Let the computer pick and play a move for the side to move."""
        if self.is_game_over:
            return None

        move = ai.select_move(self.state, difficulty or self._config.difficulty)
        if move is not None:
            self._record(move)
        return move

    def new_game(self, config: Optional[GameConfig] = None) -> None:
        """Start over, optionally with a different configuration."""
        if config is not None:
            self._config = config
        self._history.reset(self._config.ruleset)
        logger.info(
            "new game: mode=%s difficulty=%s ruleset=%s",
            self._config.mode,
            self._config.difficulty,
            self._config.ruleset,
        )

    def restart(self) -> None:
        self.new_game()

    def switch_mode(self, config: GameConfig) -> None:
        """Change mode (and reset the board). Against the computer, the second player is renamed."""
        if config.mode == GameMode.AI:
            config = config.model_copy(update={"player_2_name": AI_PLAYER_NAME})
        self.new_game(config)

    # -- REQUEST / RESPONSE MODELS ---
    def make_move(self, request: MoveRequest) -> MoveResponse:
        """Same as attempt_move, but speaks in request/response models (algebraic squares)."""
        result = self.attempt_move(
            Position.from_algebraic(request.from_square),
            Position.from_algebraic(request.to_square),
        )
        return self._move_response(result)

    def upgrade(self, request: UpgradeRequest) -> MoveResponse:
        return self._move_response(self.attempt_upgrade(request.piece_id))

    def undo_moves(self, request: UndoRequest) -> GameResponse:
        self.undo(request.count)
        return self.snapshot()

    def snapshot(self) -> GameResponse:
        """Everything the presentation layer needs to draw the current game."""
        state = self.state
        return GameResponse(
            pieces=[self._piece_view(piece) for piece in state.pieces],
            layout=state.to_layout(),
            turn=state.turn.value,
            resource_points={side.value: points for side, points in state.resource_points.items()},
            move_count=state.move_count,
            moves_since_capture=state.moves_since_capture,
            status=self.status,
            outcome_message=self.outcome_message,
            move_history=[move.to_notation() for move in self._history.moves],
            players={side.value: name for side, name in self.player_names.items()},
        )

    # -- Internal helpers --
    def _record(self, move: Move) -> None:
        self._history.record_move(move)
        logger.info("%s played %s", self._name_of(move.piece), move.to_notation())
        if self.is_game_over:
            logger.info("game over: %s", self.outcome_message)

    def _play_ai_if_needed(self) -> None:
        """
        The computer answers right after a human move.

        NOTE: Loops because an upgrade does not pass the turn: the computer then still has to make its move.
        Every upgrade costs resource points, so this always ends.
        """
        while self.is_ai_turn and not self.is_game_over:
            if self.request_ai_move() is None:
                break

    def _name_of(self, piece: Piece) -> str:
        return self.player_names[piece.side]

    def _move_response(self, result: MoveResult) -> MoveResponse:
        return MoveResponse(
            valid=result.valid,
            error=result.error,
            move=result.move.to_notation() if result.move else None,
            game=self.snapshot(),
        )

    @staticmethod
    def _piece_view(piece: Piece) -> PieceView:
        return PieceView(
            id=piece.id,
            type=piece.type.name.lower(),
            side=piece.side.value,
            square=piece.position.to_algebraic(),
            has_moved=piece.has_moved,
        )
