"""Board - immutable piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from chessweb.core.enums import Color, PieceKind
from chessweb.core.piece import Piece
from chessweb.core.types import ALL_SQUARES, Square, is_valid_square

_BACK_RANK: tuple[PieceKind, ...] = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)


def _index(sq: Square) -> int:
    return sq[0] * 8 + sq[1]


class Board:
    """Immutable 64-cell board snapshot.

    Every change produces a new ``Board``; older snapshots stay valid, so
    history and search frames can hold on to them without copying.
    """

    __slots__ = ("_cells",)

    def __init__(self, cells: tuple[Piece | None, ...] | None = None) -> None:
        if cells is None:
            cells = (None,) * 64
        elif len(cells) != 64:
            raise ValueError(f"Board needs 64 cells, got {len(cells)}")
        self._cells = cells

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        """Piece on *sq*; off-board squares read as empty."""
        row, col = sq
        if not is_valid_square(row, col):
            return None
        return self._cells[row * 8 + col]

    def is_empty(self, sq: Square) -> bool:
        return self[sq] is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self, color: Color | None = None) -> Iterator[tuple[Square, Piece]]:
        """Yield ``(square, piece)`` in row-major order, optionally for one side."""
        cells = self._cells
        for sq in ALL_SQUARES:
            piece = cells[sq.row * 8 + sq.col]
            if piece is None:
                continue
            if color is None or piece.color == color:
                yield sq, piece

    def count(self, color: Color) -> int:
        """Number of pieces *color* has on the board."""
        return sum(1 for _ in self.occupied(color))

    def king_square(self, color: Color) -> Square | None:
        """Square of *color*'s king, or ``None`` on a king-less board."""
        king = Piece(PieceKind.KING, color)
        for sq, piece in self.occupied(color):
            if piece == king:
                return sq
        return None

    # -- Derivation ---------------------------------------------------------

    def replace(self, changes: Mapping[Square, Piece | None]) -> Board:
        """New board with *changes* applied on top of this one."""
        cells = list(self._cells)
        for sq, piece in changes.items():
            if not is_valid_square(*sq):
                raise ValueError(f"Square off the board: {tuple(sq)!r}")
            cells[_index(sq)] = piece
        return Board(tuple(cells))

    def moved(self, from_sq: Square, to_sq: Square) -> Board:
        """New board with the piece on *from_sq* relocated to *to_sq*.

        Whatever stood on *to_sq* is overwritten (an implicit capture).
        """
        cells = list(self._cells)
        cells[_index(to_sq)] = cells[_index(from_sq)]
        cells[_index(from_sq)] = None
        return Board(tuple(cells))

    # -- Factory ------------------------------------------------------------

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @classmethod
    def from_pieces(cls, pieces: Mapping[Square, Piece]) -> Board:
        """Board holding exactly *pieces*."""
        return cls().replace(pieces)

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        cells: list[Piece | None] = [None] * 64
        for col, kind in enumerate(_BACK_RANK):
            cells[col] = Piece(kind, Color.BLACK)
            cells[8 + col] = Piece(PieceKind.PAWN, Color.BLACK)
            cells[48 + col] = Piece(PieceKind.PAWN, Color.WHITE)
            cells[56 + col] = Piece(kind, Color.WHITE)
        return cls(tuple(cells))

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __hash__(self) -> int:
        return hash(self._cells)

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(8):
            line = []
            for col in range(8):
                p = self._cells[row * 8 + col]
                line.append(str(p) if p else ".")
            rows.append(f"{8 - row} {' '.join(line)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)


def create_initial_board() -> Board:
    """Standard starting position."""
    return Board.initial()
