"""Pseudo-legal move rules, check detection and the legality filter."""

from __future__ import annotations

from collections.abc import Callable

from chessweb.core.board import Board
from chessweb.core.enums import Color, PieceKind
from chessweb.core.move import Move
from chessweb.core.piece import Piece
from chessweb.core.types import Square, is_valid_square

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((1, 1), (1, -1), (-1, 1), (-1, -1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((0, 1), (0, -1), (1, 0), (-1, 0))

_PAWN_START_ROW: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for idx in range(64):
        row, col = divmod(idx, 8)
        targets.append(
            tuple(
                Square(row + dr, col + dc)
                for dr, dc in offsets
                if is_valid_square(row + dr, col + dc)
            )
        )
    return tuple(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for idx in range(64):
        row, col = divmod(idx, 8)
        square_rays: list[tuple[Square, ...]] = []
        for dr, dc in directions:
            r, c = row + dr, col + dc
            ray: list[Square] = []
            while is_valid_square(r, c):
                ray.append(Square(r, c))
                r += dr
                c += dc
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)
_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)


# -- Per-kind move rules ---------------------------------------------------


def _pawn_targets(board: Board, sq: Square, color: Color) -> list[Square]:
    targets: list[Square] = []
    direction = color.pawn_direction

    one = sq.offset(direction, 0)
    if is_valid_square(*one) and board[one] is None:
        targets.append(one)
        two = one.offset(direction, 0)
        if sq.row == _PAWN_START_ROW[color] and board[two] is None:
            targets.append(two)

    for d_col in (-1, 1):
        cap_sq = sq.offset(direction, d_col)
        if not is_valid_square(*cap_sq):
            continue
        target = board[cap_sq]
        if target is not None and target.color != color:
            targets.append(cap_sq)
    return targets


def _step_targets(
    board: Board,
    color: Color,
    candidates: tuple[Square, ...],
) -> list[Square]:
    targets: list[Square] = []
    for to_sq in candidates:
        target = board[to_sq]
        if target is None or target.color != color:
            targets.append(to_sq)
    return targets


def _sliding_targets(
    board: Board,
    color: Color,
    rays: tuple[tuple[Square, ...], ...],
) -> list[Square]:
    targets: list[Square] = []
    for ray in rays:
        for to_sq in ray:
            target = board[to_sq]
            if target is None:
                targets.append(to_sq)
                continue
            if target.color != color:
                targets.append(to_sq)
            break
    return targets


def _knight_targets(board: Board, sq: Square, color: Color) -> list[Square]:
    return _step_targets(board, color, _KNIGHT_TARGETS[sq.row * 8 + sq.col])


def _bishop_targets(board: Board, sq: Square, color: Color) -> list[Square]:
    return _sliding_targets(board, color, _BISHOP_RAYS[sq.row * 8 + sq.col])


def _rook_targets(board: Board, sq: Square, color: Color) -> list[Square]:
    return _sliding_targets(board, color, _ROOK_RAYS[sq.row * 8 + sq.col])


def _queen_targets(board: Board, sq: Square, color: Color) -> list[Square]:
    return _rook_targets(board, sq, color) + _bishop_targets(board, sq, color)


def _king_targets(board: Board, sq: Square, color: Color) -> list[Square]:
    return _step_targets(board, color, _KING_TARGETS[sq.row * 8 + sq.col])


_TARGETS_BY_KIND: dict[PieceKind, Callable[[Board, Square, Color], list[Square]]] = {
    PieceKind.PAWN: _pawn_targets,
    PieceKind.KNIGHT: _knight_targets,
    PieceKind.BISHOP: _bishop_targets,
    PieceKind.ROOK: _rook_targets,
    PieceKind.QUEEN: _queen_targets,
    PieceKind.KING: _king_targets,
}


class MoveGenerator:
    """Generates pseudo-legal and legal moves for a given :class:`Board`.

    Legality is judged by simulating each candidate on a scratch board and
    asking whether the mover's own king is attacked afterwards. The board
    itself is never modified.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    # -- Public API ---------------------------------------------------------

    def pseudo_legal_moves(
        self, from_sq: Square, piece: Piece | None = None
    ) -> set[Square]:
        """Destinations obeying *piece*'s movement rules, ignoring own-king safety."""
        return set(self._destinations(from_sq, piece))

    def legal_moves(self, from_sq: Square, piece: Piece | None = None) -> set[Square]:
        """Destinations from *from_sq* that do not leave the mover in check."""
        return set(self._legal_destinations(from_sq, piece))

    def generate_legal_moves(self, color: Color) -> list[Move]:
        """All legal moves for *color*, in board-scan order."""
        board = self._board
        moves: list[Move] = []
        for from_sq, piece in board.occupied(color):
            for to_sq in self._legal_destinations(from_sq, piece):
                moves.append(Move(from_sq, to_sq, piece, captured=board[to_sq]))
        return moves

    def has_legal_move(self, color: Color) -> bool:
        """Whether *color* has at least one legal move."""
        for from_sq, piece in self._board.occupied(color):
            for _ in self._legal_destinations(from_sq, piece):
                return True
        return False

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked? A board without that king is never in check."""
        king_sq = self._board.king_square(color)
        if king_sq is None:
            return False
        return self.is_square_attacked(king_sq, color.opposite)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Can any piece of *by_color* move onto *sq* by its movement rules?"""
        board = self._board
        for from_sq, piece in board.occupied(by_color):
            if sq in _TARGETS_BY_KIND[piece.kind](board, from_sq, piece.color):
                return True
        return False

    # -- Internals ----------------------------------------------------------

    def _destinations(self, from_sq: Square, piece: Piece | None) -> list[Square]:
        row, col = from_sq
        if not is_valid_square(row, col):
            return []
        if piece is None:
            piece = self._board[from_sq]
            if piece is None:
                return []
        return _TARGETS_BY_KIND[piece.kind](self._board, Square(row, col), piece.color)

    def _legal_destinations(
        self, from_sq: Square, piece: Piece | None
    ) -> list[Square]:
        if piece is None:
            piece = self._board[from_sq]
            if piece is None:
                return []
        board = self._board
        legal: list[Square] = []
        for to_sq in self._destinations(from_sq, piece):
            scratch = board.replace({to_sq: piece, from_sq: None})
            if not MoveGenerator(scratch).is_in_check(piece.color):
                legal.append(to_sq)
        return legal
