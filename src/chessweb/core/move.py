"""Move value object (one ply)."""

from __future__ import annotations

from dataclasses import dataclass

from chessweb.core.enums import CastlingSide, PieceKind
from chessweb.core.piece import Piece
from chessweb.core.types import Square, square_to_algebraic


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable record of a single ply.

    ``captured`` is whatever stood on ``to_sq`` before the move; the caller
    fills it in when building the record. ``promotion``, ``castling`` and
    ``en_passant`` are reserved tags that move generation never sets.
    """

    from_sq: Square
    to_sq: Square
    piece: Piece
    captured: Piece | None = None
    promotion: PieceKind | None = None
    castling: CastlingSide | None = None
    en_passant: bool = False

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        return f"{square_to_algebraic(self.from_sq)}{square_to_algebraic(self.to_sq)}"

    @property
    def coordinate(self) -> str:
        """Coordinate notation, e.g. ``e2e4``."""
        return str(self)
