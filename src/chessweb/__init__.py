"""ChessWeb engine: chess rules, game session and a minimax opponent.

The names below are the interface hosts (UI, automated play, tests) use::

    from chessweb import Color, best_move, create_initial_board, legal_moves

    board = create_initial_board()
    move = best_move(board, Color.WHITE, "easy")
"""

from chessweb.core import (
    Board,
    Color,
    GameStatus,
    Move,
    Piece,
    PieceKind,
    Square,
    algebraic_to_square,
    apply_move,
    create_initial_board,
    is_checkmate,
    is_in_check,
    is_stalemate,
    legal_moves,
    square_to_algebraic,
    undo_move,
)
from chessweb.engine import Difficulty, MinimaxEngine, SearchConfig, best_move
from chessweb.game import GameController, GameState

__version__ = "0.1.0"

__all__ = [
    "Board",
    "Color",
    "Difficulty",
    "GameController",
    "GameState",
    "GameStatus",
    "MinimaxEngine",
    "Move",
    "Piece",
    "PieceKind",
    "SearchConfig",
    "Square",
    "algebraic_to_square",
    "apply_move",
    "best_move",
    "create_initial_board",
    "is_checkmate",
    "is_in_check",
    "is_stalemate",
    "legal_moves",
    "square_to_algebraic",
    "undo_move",
]
