"""Unit tests for src/services/game_controller.py"""

from typing import Callable

import pytest

from src.api.models import AI_PLAYER_NAME, GameConfig, MoveRequest, UndoRequest, UpgradeRequest
from src.core.shared_types import Difficulty, GameMode, GameStatus, Ruleset
from src.engine.board import STARTING_LAYOUTS, BoardState
from src.engine.history import GameHistory
from src.engine.pieces import PieceType, Side
from src.engine.square import Position
from src.engine.validator import Reason
from src.services.game_controller import GameController

BoardFactory = Callable[..., BoardState]


def sq(notation: str) -> Position:
    return Position.from_algebraic(notation)


def controller_with(state: BoardState, config: GameConfig | None = None) -> GameController:
    """Controller continuing from an arbitrary position instead of the starting position."""
    controller = GameController(config)
    controller._history = GameHistory(state)
    return controller


@pytest.fixture
def controller() -> GameController:
    return GameController()


@pytest.fixture
def ai_controller() -> GameController:
    return GameController(GameConfig(mode=GameMode.AI))


# --- SETUP ---
def test_default_game(controller: GameController) -> None:
    assert controller.config == GameConfig()
    assert controller.state == BoardState.initial(Ruleset.CLASSIC)
    assert controller.current_side == Side.PLAYER_1
    assert controller.status == GameStatus.IN_PROGRESS
    assert not controller.is_game_over
    assert controller.winner is None
    assert controller.move_history == []
    assert controller.player_names == {Side.PLAYER_1: "Player 1", Side.PLAYER_2: "Player 2"}
    assert not controller.is_ai_turn


def test_config_cannot_be_changed_from_outside(controller: GameController) -> None:
    config = controller.config
    config.ruleset = Ruleset.ROYAL
    assert controller.config.ruleset == Ruleset.CLASSIC


def test_new_game_with_other_ruleset(controller: GameController) -> None:
    controller.attempt_move(sq("b1"), sq("c3"))
    controller.new_game(GameConfig(ruleset=Ruleset.ROYAL))

    assert controller.state == BoardState.initial(Ruleset.ROYAL)
    assert controller.move_history == []
    assert controller.config.ruleset == Ruleset.ROYAL


def test_restart_keeps_configuration() -> None:
    controller = GameController(GameConfig(ruleset=Ruleset.ROYAL, player_1_name="Ada"))
    controller.attempt_move(sq("b1"), sq("c3"))
    controller.restart()

    assert controller.state == BoardState.initial(Ruleset.ROYAL)
    assert controller.player_names[Side.PLAYER_1] == "Ada"


def test_switch_mode_renames_second_player(controller: GameController) -> None:
    controller.switch_mode(GameConfig(mode=GameMode.AI, difficulty=Difficulty.HARD))

    assert controller.config.mode == GameMode.AI
    assert controller.config.difficulty == Difficulty.HARD
    assert controller.player_names[Side.PLAYER_2] == AI_PLAYER_NAME

    controller.switch_mode(GameConfig(mode=GameMode.PVP, player_2_name="Grace"))
    assert controller.player_names[Side.PLAYER_2] == "Grace"


# --- MOVES ---
def test_attempt_valid_move(controller: GameController) -> None:
    result = controller.attempt_move(sq("b1"), sq("c3"))

    assert result.valid
    assert controller.state.piece_at(sq("c3")).type == PieceType.KNIGHT
    assert controller.current_side == Side.PLAYER_2
    assert [move.to_notation() for move in controller.move_history] == ["b1c3"]
    assert controller.state_at(0) == BoardState.initial()
    assert controller.state_at(1) == controller.state


def test_attempt_move_from_empty_square(controller: GameController) -> None:
    result = controller.attempt_move(sq("d4"), sq("d5"))
    assert not result.valid
    assert result.reason == Reason.NO_PIECE_AT_SOURCE
    assert controller.move_history == []


def test_attempt_move_for_the_wrong_side(controller: GameController) -> None:
    result = controller.attempt_move(sq("e8"), sq("f6"))
    assert result.reason == Reason.NOT_YOUR_TURN
    assert controller.state == BoardState.initial()


def test_attempt_illegal_move(controller: GameController) -> None:
    result = controller.attempt_move(sq("e1"), sq("e3"))
    assert result.reason == Reason.ILLEGAL_FOR_PIECE
    assert result.error == "Invalid: illegal move for piece type"


def test_valid_moves(controller: GameController) -> None:
    assert controller.valid_moves(sq("b1")) == {sq("a3"), sq("c3")}
    assert controller.valid_moves(sq("e8")) == set()
    assert controller.valid_moves(sq("d4")) == set()


def test_no_moves_after_game_over(make_board: BoardFactory) -> None:
    """Player 2 is down to two pieces: the game is already decided"""
    controller = controller_with(make_board({"a2": "P", "b2": "P", "c2": "P", "a7": "p", "b7": "p"}))

    assert controller.is_game_over
    assert controller.winner == Side.PLAYER_1
    assert controller.outcome_message == "Player 1 wins!"
    assert controller.attempt_move(sq("a2"), sq("a3")).reason == Reason.GAME_OVER
    assert controller.request_ai_move() is None
    assert not controller.undo()


def test_capture_ends_the_game(make_board: BoardFactory) -> None:
    board = make_board({"d1": "K", "d4": "B", "a2": "P", "b2": "P", "f6": "k", "e7": "p", "g7": "p", "h7": "p"}, ruleset=Ruleset.ROYAL)
    controller = controller_with(board, GameConfig(ruleset=Ruleset.ROYAL))

    assert controller.attempt_move(sq("d4"), sq("f6")).valid
    assert controller.status == GameStatus.PLAYER_1_WIN
    assert controller.outcome_message == "Player 1 wins by King capture!"
    assert controller.resource_points(Side.PLAYER_1) == 1


# --- UPGRADES ---
def test_attempt_upgrade(make_board: BoardFactory) -> None:
    board = make_board(
        {"c4": "P", "a2": "P", "b2": "P", "f7": "p", "g7": "p", "h7": "p"},
        resource_points={Side.PLAYER_1: 2, Side.PLAYER_2: 0},
    )
    controller = controller_with(board)
    pawn_id = board.piece_at(sq("c4")).id

    assert controller.can_upgrade(pawn_id)
    result = controller.attempt_upgrade(pawn_id)

    assert result.valid
    assert controller.state.piece_by_id(pawn_id).type == PieceType.QUEEN
    assert controller.resource_points(Side.PLAYER_1) == 0
    assert controller.current_side == Side.PLAYER_1
    assert not controller.can_upgrade(board.piece_at(sq("a2")).id)


def test_attempt_upgrade_rejected(controller: GameController) -> None:
    result = controller.attempt_upgrade("p1-pawn-1")
    assert result.reason == Reason.INSUFFICIENT_RESOURCES
    assert controller.move_history == []


# --- UNDO ---
def test_undo(controller: GameController) -> None:
    controller.attempt_move(sq("b1"), sq("c3"))
    controller.attempt_move(sq("e8"), sq("f6"))

    assert controller.can_undo(2)
    assert controller.undo(2)
    assert controller.state == BoardState.initial()
    assert not controller.undo()


def test_undo_is_limited(controller: GameController) -> None:
    for start, end in [("b1", "c3"), ("e8", "f6"), ("c3", "b5"), ("f6", "g4")]:
        assert controller.attempt_move(sq(start), sq(end)).valid

    assert not controller.can_undo(4)
    assert controller.undo(4)
    assert len(controller.move_history) == 1


def test_undo_against_ai_hands_the_turn_back(ai_controller: GameController) -> None:
    """Taking back only the computer's reply makes it move again, the human is to move afterwards"""
    ai_controller.attempt_move(sq("b1"), sq("c3"))

    assert ai_controller.undo(1)
    assert len(ai_controller.move_history) == 2
    assert ai_controller.move_history[0].to_notation() == "b1c3"
    assert ai_controller.current_side == Side.PLAYER_1
    assert not ai_controller.is_ai_turn


def test_undo_own_move_against_ai(ai_controller: GameController) -> None:
    ai_controller.attempt_move(sq("b1"), sq("c3"))

    assert ai_controller.undo(2)
    assert ai_controller.move_history == []
    assert ai_controller.state == BoardState.initial()
    assert ai_controller.current_side == Side.PLAYER_1


def test_history_snapshots_cannot_be_changed(controller: GameController) -> None:
    controller.attempt_move(sq("b1"), sq("c3"))

    with pytest.raises(TypeError):
        controller.state.resource_points[Side.PLAYER_1] = 99  # type: ignore[index]
    assert controller.state_at(0) == BoardState.initial()
    assert controller.resource_points(Side.PLAYER_1) == 0


# --- COMPUTER OPPONENT ---
def test_ai_answers_immediately(ai_controller: GameController) -> None:
    result = ai_controller.attempt_move(sq("b1"), sq("c3"))

    assert result.valid
    history = ai_controller.move_history
    assert len(history) == 2
    assert history[1].piece.side == Side.PLAYER_2
    assert ai_controller.current_side == Side.PLAYER_1
    assert not ai_controller.is_ai_turn


def test_ai_spends_points_then_moves(make_board: BoardFactory) -> None:
    """The upgrade does not pass the turn, so the computer still moves afterwards"""
    board = make_board(
        {"a2": "P", "b2": "P", "c2": "P", "f7": "p", "g7": "p", "h5": "p"},
        resource_points={Side.PLAYER_1: 0, Side.PLAYER_2: 2},
    )
    controller = controller_with(board, GameConfig(mode=GameMode.AI))
    controller.attempt_move(sq("a2"), sq("a3"))

    history = controller.move_history
    assert len(history) == 3
    assert history[1].is_stationary_upgrade
    assert not history[2].is_stationary_upgrade
    assert controller.resource_points(Side.PLAYER_2) == 0
    assert controller.current_side == Side.PLAYER_1


def test_request_ai_move_in_pvp(controller: GameController) -> None:
    """Plays for whoever is to move (hint / auto play)"""
    move = controller.request_ai_move(Difficulty.HARD)
    assert move is not None
    assert move.piece.side == Side.PLAYER_1
    assert controller.move_history == [move]


def test_rejected_move_does_not_trigger_ai(ai_controller: GameController) -> None:
    ai_controller.attempt_move(sq("b1"), sq("b3"))
    assert ai_controller.move_history == []


# --- REQUEST / RESPONSE MODELS ---
def test_snapshot(controller: GameController) -> None:
    snapshot = controller.snapshot()

    assert snapshot.layout == STARTING_LAYOUTS[Ruleset.CLASSIC]
    assert len(snapshot.pieces) == 32
    assert snapshot.turn == 1
    assert snapshot.resource_points == {1: 0, 2: 0}
    assert snapshot.status == GameStatus.IN_PROGRESS
    assert snapshot.outcome_message == "Game in progress"
    assert snapshot.players == {1: "Player 1", 2: "Player 2"}
    knight = next(piece for piece in snapshot.pieces if piece.square == "a1")
    assert knight.id == "p1-knight-1"
    assert knight.type == "knight"
    assert knight.side == 1


def test_make_move(controller: GameController) -> None:
    response = controller.make_move(MoveRequest(from_square="B1", to_square="c3"))

    assert response.valid
    assert response.error is None
    assert response.move == "b1c3"
    assert response.game.turn == 2
    assert response.game.move_history == ["b1c3"]


def test_make_invalid_move(controller: GameController) -> None:
    response = controller.make_move(MoveRequest(from_square="a2", to_square="b3"))

    assert not response.valid
    assert response.error == "Invalid: illegal move for piece type"
    assert response.move is None
    assert response.game.move_history == []


def test_upgrade_and_undo_requests(make_board: BoardFactory) -> None:
    board = make_board(
        {"c4": "P", "a2": "P", "b2": "P", "f7": "p", "g7": "p", "h7": "p"},
        resource_points={Side.PLAYER_1: 2, Side.PLAYER_2: 0},
    )
    controller = controller_with(board)

    response = controller.upgrade(UpgradeRequest(piece_id=board.piece_at(sq("c4")).id))
    assert response.valid
    assert response.move == "c4=Q"
    assert response.game.resource_points[1] == 0

    game = controller.undo_moves(UndoRequest(count=1))
    assert game.resource_points[1] == 2
    assert game.move_history == []
