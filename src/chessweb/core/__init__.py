"""Core domain layer: pure chess logic with zero external dependencies.

Quick start::

    from chessweb.core import Board, Color, MoveGenerator

    board = Board.initial()
    gen = MoveGenerator(board)
    for move in gen.generate_legal_moves(Color.WHITE):
        print(move)
"""

from chessweb.core.applier import apply_move, undo_move
from chessweb.core.board import Board, create_initial_board
from chessweb.core.enums import CastlingSide, Color, GameStatus, PieceKind
from chessweb.core.move import Move
from chessweb.core.move_generator import MoveGenerator
from chessweb.core.notation import (
    STARTING_PLACEMENT,
    board_from_fen,
    board_to_fen,
    move_history_display,
)
from chessweb.core.piece import Piece
from chessweb.core.rules import (
    Rules,
    is_checkmate,
    is_in_check,
    is_stalemate,
    legal_moves,
)
from chessweb.core.types import (
    Square,
    algebraic_to_square,
    is_valid_square,
    square_to_algebraic,
)

__all__ = [
    # Enums
    "CastlingSide",
    "Color",
    "GameStatus",
    "PieceKind",
    # Types / helpers
    "Square",
    "algebraic_to_square",
    "is_valid_square",
    "square_to_algebraic",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Rules",
    # Operations
    "apply_move",
    "create_initial_board",
    "is_checkmate",
    "is_in_check",
    "is_stalemate",
    "legal_moves",
    "undo_move",
    # Notation
    "STARTING_PLACEMENT",
    "board_from_fen",
    "board_to_fen",
    "move_history_display",
]
