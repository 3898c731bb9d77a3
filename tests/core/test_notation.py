"""Tests for square names, board diagrams and move-history display."""

import pytest

from chessweb.core.board import Board
from chessweb.core.enums import Color, PieceKind
from chessweb.core.move import Move
from chessweb.core.notation import (
    STARTING_PLACEMENT,
    board_from_fen,
    board_to_fen,
    move_history_display,
)
from chessweb.core.piece import Piece
from chessweb.core.types import (
    A1, A8, E2, E4, E5, E7, H1, H8,
    ALL_SQUARES,
    Square,
    algebraic_to_square,
    is_valid_square,
    square_to_algebraic,
)


class TestSquareNames:
    def test_corners(self) -> None:
        assert square_to_algebraic(Square(0, 0)) == "a8"
        assert square_to_algebraic(Square(7, 0)) == "a1"
        assert square_to_algebraic(Square(7, 7)) == "h1"
        assert square_to_algebraic(Square(0, 7)) == "h8"

    def test_named_constants(self) -> None:
        assert (A1, A8, H1, H8) == (Square(7, 0), Square(0, 0), Square(7, 7), Square(0, 7))
        assert str(E4) == "e4"

    def test_parse(self) -> None:
        assert algebraic_to_square("e4") == Square(4, 4)
        assert algebraic_to_square("a1") == A1

    def test_offset(self) -> None:
        assert E2.offset(-2, 0) == E4
        assert A8.offset(1, 1) == Square(1, 1)
        assert not is_valid_square(*H1.offset(1, 0))

    def test_round_trip_all_squares(self) -> None:
        for sq in ALL_SQUARES:
            assert algebraic_to_square(square_to_algebraic(sq)) == sq

    @pytest.mark.parametrize("name", ["", "e", "e9", "i1", "E4", "e44"])
    def test_parse_rejects_bad_names(self, name: str) -> None:
        with pytest.raises(ValueError, match="Invalid square name"):
            algebraic_to_square(name)

    def test_is_valid_square(self) -> None:
        assert is_valid_square(0, 0)
        assert is_valid_square(7, 7)
        assert not is_valid_square(8, 0)
        assert not is_valid_square(0, -1)


class TestPiece:
    def test_from_char(self) -> None:
        assert Piece.from_char("N") == Piece(PieceKind.KNIGHT, Color.WHITE)
        assert Piece.from_char("q") == Piece(PieceKind.QUEEN, Color.BLACK)

    def test_invalid_char(self) -> None:
        with pytest.raises(ValueError, match="Invalid piece character"):
            Piece.from_char("x")

    def test_str_and_symbol(self) -> None:
        piece = Piece(PieceKind.KING, Color.BLACK)
        assert str(piece) == "k"
        assert piece.symbol == "♚"


class TestBoardDiagram:
    def test_starting_placement(self) -> None:
        assert board_from_fen(STARTING_PLACEMENT) == Board.initial()
        assert board_to_fen(Board.initial()) == STARTING_PLACEMENT

    def test_full_fen_ignores_trailing_fields(self) -> None:
        fen = STARTING_PLACEMENT + " w KQkq - 0 1"
        assert board_from_fen(fen) == Board.initial()

    def test_first_rank_is_row_zero(self) -> None:
        board = board_from_fen("k7/8/8/8/8/8/8/7K")
        assert board[A8] == Piece(PieceKind.KING, Color.BLACK)
        assert board[H1] == Piece(PieceKind.KING, Color.WHITE)
        assert board_to_fen(board) == "k7/8/8/8/8/8/8/7K"

    @pytest.mark.parametrize(
        "fen",
        [
            "",
            "8/8/8/8/8/8/8",
            "9/8/8/8/8/8/8/8",
            "ppppppppp/8/8/8/8/8/8/8",
            "7/8/8/8/8/8/8/8",
            "x7/8/8/8/8/8/8/8",
        ],
    )
    def test_invalid_fen(self, fen: str) -> None:
        with pytest.raises(ValueError):
            board_from_fen(fen)


class TestMoveDisplay:
    def test_move_str(self) -> None:
        move = Move(E2, E4, Piece(PieceKind.PAWN, Color.WHITE))
        assert str(move) == "e2e4"
        assert move.coordinate == "e2e4"
        assert not move.is_capture

    def test_history_pairs(self) -> None:
        wp = Piece(PieceKind.PAWN, Color.WHITE)
        bp = Piece(PieceKind.PAWN, Color.BLACK)
        moves = [
            Move(E2, E4, wp),
            Move(E7, E5, bp),
            Move(Square(6, 3), Square(4, 3), wp),
        ]
        assert move_history_display(moves) == ["1. e4 e5", "2. d4"]

    def test_empty_history(self) -> None:
        assert move_history_display([]) == []
