"""Static evaluation: material plus piece-square tables.

Scores are in centipawns from white's point of view (positive favours
white). Tables are laid out as seen from white's side of the board: the
first row is the far rank (row 0 of the board), so white reads them
directly and black reads them mirrored.
"""

from __future__ import annotations

from chessweb.core.board import Board
from chessweb.core.enums import Color, PieceKind
from chessweb.core.piece import Piece
from chessweb.core.types import Square

PieceSquareTable = tuple[tuple[int, ...], ...]

PIECE_VALUES: dict[PieceKind, int] = {
    PieceKind.PAWN: 100,
    PieceKind.KNIGHT: 320,
    PieceKind.BISHOP: 330,
    PieceKind.ROOK: 500,
    PieceKind.QUEEN: 900,
    PieceKind.KING: 20_000,
}

PAWN_TABLE: PieceSquareTable = (
    (0, 0, 0, 0, 0, 0, 0, 0),
    (50, 50, 50, 50, 50, 50, 50, 50),
    (10, 10, 20, 30, 30, 20, 10, 10),
    (5, 5, 10, 25, 25, 10, 5, 5),
    (0, 0, 0, 20, 20, 0, 0, 0),
    (5, -5, -10, 0, 0, -10, -5, 5),
    (5, 10, 10, -20, -20, 10, 10, 5),
    (0, 0, 0, 0, 0, 0, 0, 0),
)

KNIGHT_TABLE: PieceSquareTable = (
    (-50, -40, -30, -30, -30, -30, -40, -50),
    (-40, -20, 0, 0, 0, 0, -20, -40),
    (-30, 0, 10, 15, 15, 10, 0, -30),
    (-30, 5, 15, 20, 20, 15, 5, -30),
    (-30, 0, 15, 20, 20, 15, 0, -30),
    (-30, 5, 10, 15, 15, 10, 5, -30),
    (-40, -20, 0, 5, 5, 0, -20, -40),
    (-50, -40, -30, -30, -30, -30, -40, -50),
)

BISHOP_TABLE: PieceSquareTable = (
    (-20, -10, -10, -10, -10, -10, -10, -20),
    (-10, 0, 0, 0, 0, 0, 0, -10),
    (-10, 0, 5, 10, 10, 5, 0, -10),
    (-10, 5, 5, 10, 10, 5, 5, -10),
    (-10, 0, 10, 10, 10, 10, 0, -10),
    (-10, 10, 10, 10, 10, 10, 10, -10),
    (-10, 5, 0, 0, 0, 0, 5, -10),
    (-20, -10, -10, -10, -10, -10, -10, -20),
)

ROOK_TABLE: PieceSquareTable = (
    (0, 0, 0, 0, 0, 0, 0, 0),
    (5, 10, 10, 10, 10, 10, 10, 5),
    (-5, 0, 0, 0, 0, 0, 0, -5),
    (-5, 0, 0, 0, 0, 0, 0, -5),
    (-5, 0, 0, 0, 0, 0, 0, -5),
    (-5, 0, 0, 0, 0, 0, 0, -5),
    (-5, 0, 0, 0, 0, 0, 0, -5),
    (0, 0, 0, 5, 5, 0, 0, 0),
)

QUEEN_TABLE: PieceSquareTable = (
    (-20, -10, -10, -5, -5, -10, -10, -20),
    (-10, 0, 0, 0, 0, 0, 0, -10),
    (-10, 0, 5, 5, 5, 5, 0, -10),
    (-5, 0, 5, 5, 5, 5, 0, -5),
    (0, 0, 5, 5, 5, 5, 0, -5),
    (-10, 5, 5, 5, 5, 5, 0, -10),
    (-10, 0, 5, 0, 0, 0, 0, -10),
    (-20, -10, -10, -5, -5, -10, -10, -20),
)

KING_TABLE: PieceSquareTable = (
    (-30, -40, -40, -50, -50, -40, -40, -30),
    (-30, -40, -40, -50, -50, -40, -40, -30),
    (-30, -40, -40, -50, -50, -40, -40, -30),
    (-30, -40, -40, -50, -50, -40, -40, -30),
    (-20, -30, -30, -40, -40, -30, -30, -20),
    (-10, -20, -20, -20, -20, -20, -20, -10),
    (20, 20, 0, 0, 0, 0, 20, 20),
    (20, 30, 10, 0, 0, 10, 30, 20),
)

PIECE_SQUARE_TABLES: dict[PieceKind, PieceSquareTable] = {
    PieceKind.PAWN: PAWN_TABLE,
    PieceKind.KNIGHT: KNIGHT_TABLE,
    PieceKind.BISHOP: BISHOP_TABLE,
    PieceKind.ROOK: ROOK_TABLE,
    PieceKind.QUEEN: QUEEN_TABLE,
    PieceKind.KING: KING_TABLE,
}


def piece_square_bonus(piece: Piece, sq: Square) -> int:
    """Positional bonus for *piece* standing on *sq*, from its owner's view."""
    row, col = sq
    if piece.color == Color.BLACK:
        row = 7 - row
    return PIECE_SQUARE_TABLES[piece.kind][row][col]


def piece_value(piece: Piece, sq: Square) -> int:
    """Material plus positional value of *piece* on *sq*."""
    return PIECE_VALUES[piece.kind] + piece_square_bonus(piece, sq)


def evaluate(board: Board) -> int:
    """Static score of *board*; positive favours white."""
    score = 0
    for sq, piece in board.occupied():
        value = piece_value(piece, sq)
        if piece.color == Color.WHITE:
            score += value
        else:
            score -= value
    return score
