"""Board diagrams (FEN piece placement) and move-history display."""

from __future__ import annotations

from collections.abc import Sequence

from chessweb.core.board import Board
from chessweb.core.move import Move
from chessweb.core.piece import Piece
from chessweb.core.types import Square, square_to_algebraic

STARTING_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"


def board_from_fen(fen: str) -> Board:
    """Parse the piece-placement field of a FEN string into a :class:`Board`.

    Only the first field is read; side to move, castling and clocks are
    ignored. The first rank listed (rank 8) becomes row 0.
    """
    parts = fen.split()
    if not parts:
        raise ValueError(f"Invalid FEN (empty): {fen!r}")

    ranks = parts[0].split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")

    pieces: dict[Square, Piece] = {}
    for row, rank_text in enumerate(ranks):
        col = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                col += step
            else:
                if col >= 8:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                pieces[Square(row, col)] = Piece.from_char(ch)
                col += 1
            if col > 8:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if col != 8:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")
    return Board.from_pieces(pieces)


def board_to_fen(board: Board) -> str:
    """Serialise *board* as a FEN piece-placement field."""
    ranks: list[str] = []
    for row in range(8):
        text = ""
        empty = 0
        for col in range(8):
            piece = board[Square(row, col)]
            if piece is None:
                empty += 1
                continue
            if empty:
                text += str(empty)
                empty = 0
            text += str(piece)
        if empty:
            text += str(empty)
        ranks.append(text)
    return "/".join(ranks)


def move_history_display(moves: Sequence[Move]) -> list[str]:
    """Numbered move pairs by destination square, e.g. ``["1. e4 e5", "2. f3"]``."""
    lines: list[str] = []
    for i in range(0, len(moves), 2):
        line = f"{i // 2 + 1}. {square_to_algebraic(moves[i].to_sq)}"
        if i + 1 < len(moves):
            line += f" {square_to_algebraic(moves[i + 1].to_sq)}"
        lines.append(line)
    return lines
