"""Square type and coordinate helpers.

Board layout (array rows, not algebraic ranks):
    row 0 = black's back rank (rank 8), row 7 = white's back rank (rank 1)
    col 0 = a-file, col 7 = h-file

    (0, 0) = a8, (0, 7) = h8, (7, 0) = a1, (7, 4) = e1
"""

from __future__ import annotations

from typing import NamedTuple


class Square(NamedTuple):
    """Board coordinate as ``(row, col)``."""

    row: int
    col: int

    def offset(self, d_row: int, d_col: int) -> Square:
        return Square(self.row + d_row, self.col + d_col)

    def __str__(self) -> str:
        return square_to_algebraic(self)


def is_valid_square(row: int, col: int) -> bool:
    """Check whether ``(row, col)`` lies on the board."""
    return 0 <= row < 8 and 0 <= col < 8


def square_to_algebraic(sq: Square) -> str:
    """Human-readable name, e.g. (7, 4) → 'e1', (0, 0) → 'a8'."""
    row, col = sq
    return chr(ord("a") + col) + str(8 - row)


def algebraic_to_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → Square(4, 4)."""
    if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return Square(8 - int(name[1]), ord(name[0]) - ord("a"))


ALL_SQUARES: tuple[Square, ...] = tuple(
    Square(row, col) for row in range(8) for col in range(8)
)


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = (Square(0, c) for c in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = (Square(1, c) for c in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = (Square(2, c) for c in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = (Square(3, c) for c in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = (Square(4, c) for c in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = (Square(5, c) for c in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = (Square(6, c) for c in range(8))
A1, B1, C1, D1, E1, F1, G1, H1 = (Square(7, c) for c in range(8))
