"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import Enum, IntEnum


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def pawn_direction(self) -> int:
        """Row step toward the opponent's back rank (row 0 is black's)."""
        return -1 if self == Color.WHITE else 1

    def __str__(self) -> str:
        return self.name.lower()


class PieceKind(IntEnum):
    """Chess piece kinds ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class CastlingSide(Enum):
    """Reserved move tag; castling is not generated."""

    KINGSIDE = "kingside"
    QUEENSIDE = "queenside"


class GameStatus(Enum):
    """Derived state of a position for the side to move."""

    PLAYING = "playing"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    DRAW = "draw"

    @property
    def is_terminal(self) -> bool:
        return self in (GameStatus.CHECKMATE, GameStatus.STALEMATE, GameStatus.DRAW)
