"""
The board state and the only function allowed to produce a new one from a move.

BoardState is immutable: every transition returns a new value. The history keeps old snapshots around and must never see them change.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field, replace
from functools import cached_property
from types import MappingProxyType
from typing import Mapping, Optional, Self

from src.core.config import BOARD_DIMENSIONS, CAPTURE_REWARD, UPGRADE_COST
from src.core.shared_types import Ruleset
from src.engine.moves import Move
from src.engine.pieces import LETTER_TO_PIECE, TOP_TIER, Piece, PieceType, Side
from src.engine.square import Position

logger = logging.getLogger(__name__)

# Layout strings are read like the piece placement part of a FEN string:
# top row (8) first, columns left to right, digits count empty squares, upper case = player 1.
STARTING_LAYOUTS: dict[Ruleset, str] = {
    Ruleset.CLASSIC: "bbbbnnnn/pppppppp/8/8/8/8/PPPPPPPP/NNNNBBBB",
    Ruleset.ROYAL: "rnbnkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBKNBNR",
}

EMPTY_LAYOUT = "/".join(["8"] * BOARD_DIMENSIONS[0])


def _pawn_start_row(side: Side) -> int:
    return 2 if side == Side.PLAYER_1 else BOARD_DIMENSIONS[0] - 1


def _no_points() -> dict[Side, int]:
    return {Side.PLAYER_1: 0, Side.PLAYER_2: 0}


@dataclass(frozen=True)
class BoardState:
    pieces: tuple[Piece, ...]
    turn: Side = Side.PLAYER_1
    # read-only view over a private copy. Left out of the hash (a mapping is not hashable), still compared.
    resource_points: Mapping[Side, int] = field(default_factory=_no_points, hash=False)
    move_count: int = 0
    moves_since_capture: int = 0
    ruleset: Ruleset = Ruleset.CLASSIC

    def __post_init__(self) -> None:
        # frozen: the only way to normalize fields is object.__setattr__
        object.__setattr__(self, "pieces", tuple(self.pieces))
        object.__setattr__(
            self, "resource_points", MappingProxyType(dict(self.resource_points))
        )

    # -- CREATION LOGIC --
    @classmethod
    def initial(cls, ruleset: Ruleset = Ruleset.CLASSIC) -> Self:
        """The fixed starting position of the given ruleset. Player 1 is to move."""
        return cls.from_layout(STARTING_LAYOUTS[ruleset], ruleset=ruleset)

    @classmethod
    def from_layout(
        cls,
        layout: str,
        turn: Side = Side.PLAYER_1,
        ruleset: Ruleset = Ruleset.CLASSIC,
        resource_points: Optional[Mapping[Side, int]] = None,
        move_count: int = 0,
        moves_since_capture: int = 0,
    ) -> Self:
        """
        Construct a board from a layout string.

        ex. the classic starting position:
        bbbbnnnn/pppppppp/8/8/8/8/PPPPPPPP/NNNNBBBB
        means:
        * player 2 has bishops on a8-d8 and knights on e8-h8
        * pawns cover the 7th and 2nd row
        * rows 6 through 3 have 8 consecutive empty squares
        * player 1 (capital letters) has knights on a1-d1 and bishops on e1-h1.

        Ids are numbered per side and type in reading order: "p1-pawn-1", "p2-knight-3", ...
        NOTE: a pawn found away from its starting row is marked as having moved (it cannot double step anymore).
        """
        pieces: list[Piece] = []
        counters: Counter[tuple[Side, PieceType]] = Counter()
        for row_idx, layout_one_row in enumerate(layout.split("/")):
            # layout is read from top row (8th) to bottom row (1st)
            row = BOARD_DIMENSIONS[0] - row_idx
            col = 1
            for character in layout_one_row:
                if character.isdigit():
                    col += int(character)
                    continue

                side = Side.PLAYER_1 if character.isupper() else Side.PLAYER_2
                piece_type = LETTER_TO_PIECE[character.lower()]
                counters[side, piece_type] += 1
                has_moved = (
                    piece_type == PieceType.PAWN and row != _pawn_start_row(side)
                )
                pieces.append(
                    Piece(
                        type=piece_type,
                        side=side,
                        position=Position(row, col),
                        has_moved=has_moved,
                        id=f"p{side.value}-{piece_type.name.lower()}-{counters[side, piece_type]}",
                    )
                )
                col += 1

        return cls(
            pieces=tuple(pieces),
            turn=turn,
            resource_points=resource_points if resource_points else _no_points(),
            move_count=move_count,
            moves_since_capture=moves_since_capture,
            ruleset=ruleset,
        )

    def to_layout(self) -> str:
        """Rows are separated by slashes in the layout string."""
        return "/".join(
            self._row_to_layout(row) for row in range(BOARD_DIMENSIONS[0], 0, -1)
        )

    def _row_to_layout(self, row: int) -> str:
        characters: list[str] = []
        empty_count = 0
        for col in range(1, BOARD_DIMENSIONS[1] + 1):
            piece = self.piece_at(Position(row, col))
            if piece is None:
                empty_count += 1
                continue

            if empty_count > 0:
                characters.append(str(empty_count))
                empty_count = 0
            characters.append(piece.to_letter())

        # if the entire row is empty, then we still place this number in the string
        if empty_count > 0:
            characters.append(str(empty_count))
        return "".join(characters)

    def to_text(self) -> str:
        """ASCII diagram of the board (row 8 on top). Used for debug logging."""
        lines: list[str] = []
        for row in range(BOARD_DIMENSIONS[0], 0, -1):
            cells = []
            for col in range(1, BOARD_DIMENSIONS[1] + 1):
                piece = self.piece_at(Position(row, col))
                cells.append(piece.to_letter() if piece else ".")
            lines.append(f"{row} {' '.join(cells)}")
        files = " ".join(chr(ord("a") + col) for col in range(BOARD_DIMENSIONS[1]))
        lines.append(f"  {files}")
        return "\n".join(lines)

    # -- QUERIES --
    @cached_property
    def _occupancy(self) -> dict[Position, Piece]:
        return {piece.position: piece for piece in self.pieces}

    def piece_at(self, position: Position) -> Optional[Piece]:
        return self._occupancy.get(position)

    def is_occupied(self, position: Position) -> bool:
        return position in self._occupancy

    def piece_by_id(self, piece_id: str) -> Optional[Piece]:
        return next((piece for piece in self.pieces if piece.id == piece_id), None)

    def pieces_of(self, side: Side) -> list[Piece]:
        return [piece for piece in self.pieces if piece.side == side]

    def count_pieces(self, side: Side, exclude_royal: bool = False) -> int:
        return sum(
            1
            for piece in self.pieces_of(side)
            if not (exclude_royal and piece.is_royal)
        )

    def count_material(self) -> dict[Side, int]:
        """Tally the value of the pieces each player has on the board"""
        return {
            side: sum(piece.value for piece in self.pieces_of(side)) for side in Side
        }

    def with_turn(self, side: Side) -> BoardState:
        """Same position with another side to move. Used to measure the mobility of the side that is waiting."""
        if side == self.turn:
            return self
        return replace(self, turn=side)


def apply_move(state: BoardState, move: Move) -> BoardState:
    """
    Produce the state after the move.
    ----

    1. remove the captured piece (if any)
    2. move the piece, mark it as moved, promote it if the move is an upgrade
    3. resources: +1 for a capture, -2 for an upgrade in place (promotion on the far row is free)
    4. pass the turn, unless it is a stationary upgrade
    5. count the move, unless it is a stationary upgrade
    6. reset the non-capture counter on a capture, otherwise count up (again: not for a stationary upgrade)

    NOTE: No legality checking at all. The validator is trusted to only hand over legal moves.
    Pieces are matched on id AND square, so a board with a duplicated id still moves a single piece.
    """
    captured = move.captured_piece
    mover = move.piece

    new_pieces: list[Piece] = []
    for piece in state.pieces:
        if captured is not None and _is_same_piece(piece, captured.id, move.to_position):
            continue
        if _is_same_piece(piece, mover.id, move.from_position):
            piece = piece.moved_to(move.to_position)
            if move.is_upgrade:
                piece = piece.promoted(TOP_TIER)
        new_pieces.append(piece)

    stationary = move.is_stationary_upgrade
    side = move.piece.side
    resource_points = dict(state.resource_points)
    if move.is_capture:
        resource_points[side] += CAPTURE_REWARD
    # promotion on the far row is free, only the upgrade in place is paid for
    if stationary:
        resource_points[side] -= UPGRADE_COST

    if move.is_capture:
        moves_since_capture = 0
    elif stationary:
        moves_since_capture = state.moves_since_capture
    else:
        moves_since_capture = state.moves_since_capture + 1

    new_state = BoardState(
        pieces=tuple(new_pieces),
        turn=state.turn if stationary else state.turn.opponent,
        resource_points=resource_points,
        move_count=state.move_count if stationary else state.move_count + 1,
        moves_since_capture=moves_since_capture,
        ruleset=state.ruleset,
    )
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "applied %s (move %d)\n%s",
            move.to_notation(),
            new_state.move_count,
            new_state.to_text(),
        )
    return new_state


def _is_same_piece(piece: Piece, piece_id: str, position: Position) -> bool:
    return piece.id == piece_id and piece.position == position
