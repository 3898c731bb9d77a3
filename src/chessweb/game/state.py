"""Game session state: board snapshots, move history and derived status."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from chessweb.core.applier import apply_move, undo_move
from chessweb.core.board import Board
from chessweb.core.enums import Color, GameStatus
from chessweb.core.move import Move
from chessweb.core.move_generator import MoveGenerator
from chessweb.core.notation import move_history_display
from chessweb.core.piece import Piece
from chessweb.core.rules import Rules
from chessweb.core.types import Square, square_to_algebraic

_LOGGER = logging.getLogger(__name__)


class IllegalMoveError(ValueError):
    """Raised when a requested move is not legal in the current position."""


@dataclass
class GameState:
    """Tracks one game: current board, side to move, history and status.

    Every ply replaces ``board`` with a new snapshot; undo reverses the last
    move's placement rather than replaying the history.

    This is a pure data/logic class with no threading or UI.
    """

    board: Board = field(default_factory=Board.initial)
    side_to_move: Color = Color.WHITE
    move_history: list[Move] = field(default_factory=list)
    status: GameStatus = GameStatus.PLAYING
    winner: Color | None = None

    def __post_init__(self) -> None:
        self._update_status()

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, board: Board | None = None, side_to_move: Color = Color.WHITE) -> None:
        """Initialise (or reset) the game."""
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.move_history.clear()
        self.winner = None
        self._update_status()

    # ── Move application ─────────────────────────────────────────────────

    def legal_moves(self, square: Square) -> list[Square]:
        """Legal destinations from *square* for the side to move."""
        if self.is_game_over:
            return []
        return Rules.legal_moves(self.board, square, self.side_to_move)

    def play(self, from_sq: Square, to_sq: Square) -> Move:
        """Validate and apply the move *from_sq* → *to_sq* for the side to move."""
        if to_sq not in self.legal_moves(from_sq):
            raise IllegalMoveError(
                f"Illegal move for {self.side_to_move}: "
                f"{square_to_algebraic(from_sq)}{square_to_algebraic(to_sq)}"
            )
        piece = self.board[from_sq]
        assert piece is not None
        move = Move(from_sq, to_sq, piece, captured=self.board[to_sq])
        return self.apply_move(move)

    def apply_move(self, move: Move) -> Move:
        """Apply an already validated move and record it.

        Caller is responsible for legality check.
        """
        self.board = apply_move(self.board, move)
        self.move_history.append(move)
        mover = self.side_to_move
        self.side_to_move = mover.opposite
        _LOGGER.debug("%s played %s", mover, move)

        self._update_status()
        if self.status == GameStatus.CHECKMATE:
            self.winner = mover
        return move

    def undo_last_move(self) -> Move | None:
        """Undo the last move. Returns the undone Move, or None if empty."""
        if not self.move_history:
            return None

        move = self.move_history.pop()
        self.board = undo_move(self.board, move)
        self.side_to_move = self.side_to_move.opposite
        self.winner = None
        self._update_status()
        _LOGGER.debug("undid %s", move)
        return move

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def is_game_over(self) -> bool:
        return self.status.is_terminal

    @property
    def last_move(self) -> Move | None:
        return self.move_history[-1] if self.move_history else None

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    def all_legal_moves(self) -> list[Move]:
        """Legal moves in the current position."""
        return MoveGenerator(self.board).generate_legal_moves(self.side_to_move)

    def captured_pieces(self) -> tuple[list[Piece], list[Piece]]:
        """``(white pieces lost, black pieces lost)`` in capture order."""
        white_lost: list[Piece] = []
        black_lost: list[Piece] = []
        for move in self.move_history:
            if move.captured is None:
                continue
            if move.captured.color == Color.WHITE:
                white_lost.append(move.captured)
            else:
                black_lost.append(move.captured)
        return white_lost, black_lost

    def move_history_display(self) -> list[str]:
        return move_history_display(self.move_history)

    # ── Internal ─────────────────────────────────────────────────────────

    def _update_status(self) -> None:
        self.status = Rules.game_status(self.board, self.side_to_move)
        if self.status.is_terminal:
            _LOGGER.info("game over: %s (%s to move)", self.status.value, self.side_to_move)
