"""Pure-Python chess engine search (minimax + alpha-beta)."""

from __future__ import annotations

import logging
import random
from time import perf_counter, sleep

from chessweb.core.applier import apply_move
from chessweb.core.board import Board
from chessweb.core.enums import Color
from chessweb.core.move import Move
from chessweb.core.move_generator import MoveGenerator
from chessweb.engine.evaluate import evaluate
from chessweb.engine.search import (
    INF_SCORE,
    CancelCheck,
    Difficulty,
    IEngine,
    SearchConfig,
    SearchResult,
)

_LOGGER = logging.getLogger(__name__)
_YIELD_EVERY_NODES = 4096


def _never_cancelled() -> bool:
    return False


class SearchAborted(Exception):
    """Raised inside the tree when a cancel check or soft cap fires."""


class MinimaxEngine(IEngine):
    """Fixed-depth minimax with alpha-beta pruning.

    White maximises, black minimises. There is no move ordering,
    transposition table or iterative deepening; moves are searched in
    board-scan order and the first of equally scored root moves wins.

    An instance keeps per-search counters, so run one search at a time
    per engine.
    """

    __slots__ = (
        "_config",
        "_rng",
        "_nodes",
        "_last_yield_nodes",
        "_deadline",
        "_cancel_check",
    )

    def __init__(
        self,
        config: SearchConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._config = config or SearchConfig()
        self._rng = rng or random.Random()
        self._nodes = 0
        self._last_yield_nodes = 0
        self._deadline: float | None = None
        self._cancel_check: CancelCheck = _never_cancelled

    @property
    def config(self) -> SearchConfig:
        return self._config

    @property
    def nodes(self) -> int:
        """Nodes visited by the most recent search."""
        return self._nodes

    # -- Public API ---------------------------------------------------------

    def search(
        self,
        board: Board,
        color: Color,
        difficulty: Difficulty | str = Difficulty.MEDIUM,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        difficulty = Difficulty.parse(difficulty)
        self._reset(is_cancelled)

        gen = MoveGenerator(board)
        moves = gen.generate_legal_moves(color)
        if not moves:
            score = 0
            if gen.is_in_check(color):
                score = -INF_SCORE if color == Color.WHITE else INF_SCORE
            return SearchResult(None, score, 0, 0)

        if (
            difficulty == Difficulty.EASY
            and self._rng.random() < self._config.easy_random_probability
        ):
            move = self._rng.choice(moves)
            _LOGGER.debug("easy mode: playing random move %s for %s", move, color)
            return SearchResult(
                move, evaluate(apply_move(board, move)), 0, 0, randomized=True
            )

        depth = self._config.depth_for(difficulty)
        try:
            score, move = self._search_root(board, color, moves, depth)
        except SearchAborted:
            _LOGGER.info(
                "search aborted for %s at %s after %d nodes",
                color,
                difficulty,
                self._nodes,
            )
            return SearchResult(None, 0, 0, self._nodes, aborted=True)

        _LOGGER.debug(
            "search %s/%s: depth=%d nodes=%d score=%d move=%s",
            color,
            difficulty,
            depth,
            self._nodes,
            score,
            move,
        )
        return SearchResult(move, score, depth, self._nodes)

    def best_move(
        self,
        board: Board,
        color: Color,
        difficulty: Difficulty | str = Difficulty.MEDIUM,
    ) -> Move | None:
        """Chosen move for *color*, or ``None`` when it has no legal move."""
        return self.search(board, color, difficulty).best_move

    def random_move(self, board: Board, color: Color) -> Move | None:
        """A uniformly random legal move for *color*."""
        moves = MoveGenerator(board).generate_legal_moves(color)
        if not moves:
            return None
        return self._rng.choice(moves)

    def minimax(
        self,
        board: Board,
        depth: int,
        maximizing: bool,
        alpha: int = -INF_SCORE,
        beta: int = INF_SCORE,
    ) -> int:
        """Score of *board* searched *depth* plies; white to move iff *maximizing*."""
        self._check_abort()
        self._nodes += 1

        if depth <= 0:
            return evaluate(board)

        color = Color.WHITE if maximizing else Color.BLACK
        gen = MoveGenerator(board)
        moves = gen.generate_legal_moves(color)
        if not moves:
            if gen.is_in_check(color):
                return -INF_SCORE if maximizing else INF_SCORE
            return 0

        if maximizing:
            best = -INF_SCORE
            for move in moves:
                value = self.minimax(apply_move(board, move), depth - 1, False, alpha, beta)
                best = max(best, value)
                alpha = max(alpha, value)
                if beta <= alpha:
                    break
            return best

        best = INF_SCORE
        for move in moves:
            value = self.minimax(apply_move(board, move), depth - 1, True, alpha, beta)
            best = min(best, value)
            beta = min(beta, value)
            if beta <= alpha:
                break
        return best

    # -- Internals ----------------------------------------------------------

    def _search_root(
        self,
        board: Board,
        color: Color,
        moves: list[Move],
        depth: int,
    ) -> tuple[int, Move]:
        maximizing = color == Color.WHITE
        best_move = moves[0]
        best_score = -INF_SCORE if maximizing else INF_SCORE

        for move in moves:
            value = self.minimax(
                apply_move(board, move),
                depth - 1,
                not maximizing,
                -INF_SCORE,
                INF_SCORE,
            )
            if (maximizing and value > best_score) or (
                not maximizing and value < best_score
            ):
                best_score = value
                best_move = move

        return best_score, best_move

    def _reset(self, is_cancelled: CancelCheck | None) -> None:
        self._nodes = 0
        self._last_yield_nodes = 0
        self._cancel_check = is_cancelled or _never_cancelled
        self._deadline = None
        if self._config.time_limit_ms is not None:
            ms = max(self._config.time_limit_ms, 1)
            self._deadline = perf_counter() + (ms / 1000.0)

    def _check_abort(self) -> None:
        if self._nodes - self._last_yield_nodes >= _YIELD_EVERY_NODES:
            # Let a UI thread sharing the GIL run during long searches.
            self._last_yield_nodes = self._nodes
            sleep(0.001)
        if self._cancel_check():
            raise SearchAborted
        max_nodes = self._config.max_nodes
        if max_nodes is not None and self._nodes >= max_nodes:
            raise SearchAborted
        if self._deadline is not None and perf_counter() >= self._deadline:
            raise SearchAborted


def best_move(
    board: Board,
    color: Color,
    difficulty: Difficulty | str = Difficulty.MEDIUM,
) -> Move | None:
    """Automated opponent entry point with the default configuration."""
    return MinimaxEngine().best_move(board, color, difficulty)
