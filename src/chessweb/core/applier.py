"""Move application - pure board transformations, no legality checks."""

from __future__ import annotations

from chessweb.core.board import Board
from chessweb.core.move import Move


def apply_move(board: Board, move: Move) -> Board:
    """Return a new board with ``move.piece`` on ``move.to_sq`` and the origin cleared."""
    return board.replace({move.to_sq: move.piece, move.from_sq: None})


def undo_move(board: Board, move: Move) -> Board:
    """Reverse :func:`apply_move`: piece back to its origin, captured piece restored."""
    return board.replace({move.from_sq: move.piece, move.to_sq: move.captured})
