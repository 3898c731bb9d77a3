"""High-level chess rules: check, checkmate, stalemate, game status."""

from __future__ import annotations

from chessweb.core.board import Board
from chessweb.core.enums import Color, GameStatus
from chessweb.core.move_generator import MoveGenerator
from chessweb.core.types import Square


class Rules:
    """Static rule-checker that operates on a :class:`Board` and a side."""

    # Product policy: no draw rules beyond stalemate (no repetition,
    # 50-move or insufficient-material detection).

    @staticmethod
    def legal_moves(
        board: Board, square: Square, color: Color | None = None
    ) -> list[Square]:
        """Legal destinations from *square*, sorted for stable highlighting.

        Returns an empty list for an empty square, an off-board square, or a
        piece that does not belong to *color* (when given).
        """
        piece = board[square]
        if piece is None:
            return []
        if color is not None and piece.color != color:
            return []
        return sorted(MoveGenerator(board).legal_moves(square, piece))

    @staticmethod
    def is_in_check(board: Board, color: Color) -> bool:
        return MoveGenerator(board).is_in_check(color)

    @staticmethod
    def is_checkmate(board: Board, color: Color) -> bool:
        gen = MoveGenerator(board)
        if not gen.is_in_check(color):
            return False
        return not gen.has_legal_move(color)

    @staticmethod
    def is_stalemate(board: Board, color: Color) -> bool:
        gen = MoveGenerator(board)
        if gen.is_in_check(color):
            return False
        return not gen.has_legal_move(color)

    @staticmethod
    def game_status(board: Board, color: Color) -> GameStatus:
        """Classify the position for *color*, the side to move."""
        gen = MoveGenerator(board)
        in_check = gen.is_in_check(color)
        if not gen.has_legal_move(color):
            return GameStatus.CHECKMATE if in_check else GameStatus.STALEMATE
        if in_check:
            return GameStatus.CHECK
        return GameStatus.PLAYING


def legal_moves(board: Board, square: Square) -> list[Square]:
    """Legal destinations for whatever piece stands on *square*."""
    return Rules.legal_moves(board, square)


def is_in_check(board: Board, color: Color) -> bool:
    return Rules.is_in_check(board, color)


def is_checkmate(board: Board, color: Color) -> bool:
    return Rules.is_checkmate(board, color)


def is_stalemate(board: Board, color: Color) -> bool:
    return Rules.is_stalemate(board, color)
