"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from chessweb.core.enums import Color, PieceKind

# FEN character ↔ (Color, PieceKind)
_CHAR_MAP: dict[str, tuple[Color, PieceKind]] = {
    "P": (Color.WHITE, PieceKind.PAWN),
    "N": (Color.WHITE, PieceKind.KNIGHT),
    "B": (Color.WHITE, PieceKind.BISHOP),
    "R": (Color.WHITE, PieceKind.ROOK),
    "Q": (Color.WHITE, PieceKind.QUEEN),
    "K": (Color.WHITE, PieceKind.KING),
    "p": (Color.BLACK, PieceKind.PAWN),
    "n": (Color.BLACK, PieceKind.KNIGHT),
    "b": (Color.BLACK, PieceKind.BISHOP),
    "r": (Color.BLACK, PieceKind.ROOK),
    "q": (Color.BLACK, PieceKind.QUEEN),
    "k": (Color.BLACK, PieceKind.KING),
}

_UNICODE: dict[tuple[Color, PieceKind], str] = {
    (Color.WHITE, PieceKind.PAWN): "♙",
    (Color.WHITE, PieceKind.KNIGHT): "♘",
    (Color.WHITE, PieceKind.BISHOP): "♗",
    (Color.WHITE, PieceKind.ROOK): "♖",
    (Color.WHITE, PieceKind.QUEEN): "♕",
    (Color.WHITE, PieceKind.KING): "♔",
    (Color.BLACK, PieceKind.PAWN): "♟",
    (Color.BLACK, PieceKind.KNIGHT): "♞",
    (Color.BLACK, PieceKind.BISHOP): "♝",
    (Color.BLACK, PieceKind.ROOK): "♜",
    (Color.BLACK, PieceKind.QUEEN): "♛",
    (Color.BLACK, PieceKind.KING): "♚",
}

_FEN_CHARS: dict[tuple[Color, PieceKind], str] = {v: k for k, v in _CHAR_MAP.items()}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a chess piece."""

    kind: PieceKind
    color: Color

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return _FEN_CHARS[(self.color, self.kind)]

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        try:
            color, kind = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(kind, color)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.kind)]
