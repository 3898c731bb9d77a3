"""Tests for the minimax engine."""

from __future__ import annotations

import random

import pytest

from chessweb.core.applier import apply_move
from chessweb.core.board import Board
from chessweb.core.enums import Color
from chessweb.core.move_generator import MoveGenerator
from chessweb.core.notation import board_from_fen
from chessweb.core.rules import Rules
from chessweb.core.types import D4, D8
from chessweb.engine import (
    INF_SCORE,
    Difficulty,
    MinimaxEngine,
    SearchConfig,
    best_move,
    evaluate,
)

MATE_IN_ONE = "7k/Q7/6K1/8/8/8/8/8"
FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR"
STALEMATE = "7k/8/5KQ1/8/8/8/8/8"
HANGING_QUEEN = "k2r4/8/8/8/3Q4/8/8/7K"
SMALL = "4k3/8/2n5/3q4/8/2N5/3P4/4K3"

DETERMINISTIC = SearchConfig(easy_random_probability=0.0)


def _plain_minimax(board: Board, depth: int, maximizing: bool) -> int:
    """Reference minimax without pruning."""
    if depth <= 0:
        return evaluate(board)
    color = Color.WHITE if maximizing else Color.BLACK
    gen = MoveGenerator(board)
    moves = gen.generate_legal_moves(color)
    if not moves:
        if gen.is_in_check(color):
            return -INF_SCORE if maximizing else INF_SCORE
        return 0
    values = [_plain_minimax(apply_move(board, m), depth - 1, not maximizing) for m in moves]
    return max(values) if maximizing else min(values)


class _FlatEngine(MinimaxEngine):
    """Scores every line equally, so only the tie-break decides."""

    def minimax(self, board, depth, maximizing, alpha=-INF_SCORE, beta=INF_SCORE) -> int:
        self._nodes += 1
        return 0


class TestDifficulty:
    def test_parse_strings(self) -> None:
        assert Difficulty.parse("easy") is Difficulty.EASY
        assert Difficulty.parse(" Hard ") is Difficulty.HARD
        assert Difficulty.parse(Difficulty.MEDIUM) is Difficulty.MEDIUM

    def test_parse_unknown(self) -> None:
        with pytest.raises(ValueError, match="Unknown difficulty"):
            Difficulty.parse("grandmaster")

    def test_default_depths(self) -> None:
        config = SearchConfig()
        assert config.depth_for(Difficulty.EASY) == 2
        assert config.depth_for(Difficulty.MEDIUM) == 3
        assert config.depth_for(Difficulty.HARD) == 4


class TestSearchConfig:
    def test_default_random_probability(self) -> None:
        assert SearchConfig().easy_random_probability == 0.3

    @pytest.mark.parametrize("p", [-0.1, 1.5])
    def test_rejects_bad_probability(self, p: float) -> None:
        with pytest.raises(ValueError, match="easy_random_probability"):
            SearchConfig(easy_random_probability=p)

    def test_rejects_zero_depth(self) -> None:
        depths = {Difficulty.EASY: 0, Difficulty.MEDIUM: 3, Difficulty.HARD: 4}
        with pytest.raises(ValueError, match="depth"):
            SearchConfig(depths=depths)

    def test_rejects_missing_depth(self) -> None:
        with pytest.raises(ValueError, match="depth"):
            SearchConfig(depths={Difficulty.EASY: 2})


class TestMinimaxEngine:
    def test_returns_legal_move_from_start(self) -> None:
        board = Board.initial()
        engine = MinimaxEngine(DETERMINISTIC)

        result = engine.search(board, Color.WHITE, Difficulty.EASY)

        assert result.best_move in MoveGenerator(board).generate_legal_moves(Color.WHITE)
        assert result.depth == 2
        assert result.nodes > 0
        assert not result.aborted
        assert not result.randomized

    def test_finds_mate_in_one(self) -> None:
        board = board_from_fen(MATE_IN_ONE)
        result = MinimaxEngine(DETERMINISTIC).search(board, Color.WHITE, Difficulty.MEDIUM)

        assert result.best_move is not None
        assert result.score == INF_SCORE
        assert Rules.is_checkmate(apply_move(board, result.best_move), Color.BLACK)

    def test_black_takes_hanging_queen(self) -> None:
        board = board_from_fen(HANGING_QUEEN)
        result = MinimaxEngine(DETERMINISTIC).search(board, Color.BLACK, Difficulty.EASY)

        assert result.best_move is not None
        assert (result.best_move.from_sq, result.best_move.to_sq) == (D8, D4)
        assert result.best_move.is_capture
        assert result.score < 0

    def test_checkmated_side_has_no_move(self) -> None:
        result = MinimaxEngine().search(board_from_fen(FOOLS_MATE), Color.WHITE)
        assert result.best_move is None
        assert result.score == -INF_SCORE
        assert result.nodes == 0

    def test_stalemated_side_scores_zero(self) -> None:
        result = MinimaxEngine().search(board_from_fen(STALEMATE), Color.BLACK)
        assert result.best_move is None
        assert result.score == 0

    def test_first_equal_move_wins(self) -> None:
        board = Board.initial()
        engine = _FlatEngine(DETERMINISTIC)

        result = engine.search(board, Color.WHITE, Difficulty.MEDIUM)

        assert result.best_move == MoveGenerator(board).generate_legal_moves(Color.WHITE)[0]

    @pytest.mark.parametrize("depth", [1, 2, 3])
    def test_alpha_beta_matches_plain_minimax(self, depth: int) -> None:
        board = board_from_fen(SMALL)
        engine = MinimaxEngine(DETERMINISTIC)
        for maximizing in (True, False):
            assert engine.minimax(board, depth, maximizing) == _plain_minimax(
                board, depth, maximizing
            )

    def test_pruning_visits_fewer_nodes(self) -> None:
        board = board_from_fen(SMALL)
        engine = MinimaxEngine(DETERMINISTIC)
        engine.search(board, Color.WHITE, Difficulty.MEDIUM)
        pruned = engine.nodes

        unpruned = 0
        gen = MoveGenerator(board)
        for move in gen.generate_legal_moves(Color.WHITE):
            after = apply_move(board, move)
            for reply in MoveGenerator(after).generate_legal_moves(Color.BLACK):
                unpruned += 1 + len(
                    MoveGenerator(apply_move(after, reply)).generate_legal_moves(Color.WHITE)
                )
            unpruned += 1
        assert pruned < unpruned

    @pytest.mark.slow
    def test_hard_depth(self) -> None:
        result = MinimaxEngine(DETERMINISTIC).search(
            board_from_fen(HANGING_QUEEN), Color.BLACK, Difficulty.HARD
        )
        assert result.depth == 4
        assert (result.best_move.from_sq, result.best_move.to_sq) == (D8, D4)


class TestEasyRandomness:
    def test_always_random_when_probability_is_one(self) -> None:
        board = Board.initial()
        engine = MinimaxEngine(SearchConfig(easy_random_probability=1.0), random.Random(7))

        result = engine.search(board, Color.WHITE, Difficulty.EASY)

        assert result.randomized
        assert result.best_move in MoveGenerator(board).generate_legal_moves(Color.WHITE)
        assert result.score == evaluate(apply_move(board, result.best_move))
        assert result.nodes == 0

    def test_medium_never_randomizes(self) -> None:
        engine = MinimaxEngine(SearchConfig(easy_random_probability=1.0))
        result = engine.search(board_from_fen(MATE_IN_ONE), Color.WHITE, Difficulty.MEDIUM)
        assert not result.randomized
        assert result.score == INF_SCORE

    def test_seeded_rng_is_reproducible(self) -> None:
        board = Board.initial()
        config = SearchConfig(easy_random_probability=1.0)
        first = MinimaxEngine(config, random.Random(42)).search(board, Color.WHITE, "easy")
        second = MinimaxEngine(config, random.Random(42)).search(board, Color.WHITE, "easy")
        assert first.best_move == second.best_move

    def test_random_move_is_legal(self) -> None:
        board = Board.initial()
        engine = MinimaxEngine(rng=random.Random(3))
        legal = MoveGenerator(board).generate_legal_moves(Color.BLACK)
        for _ in range(10):
            assert engine.random_move(board, Color.BLACK) in legal

    def test_random_move_none_when_stuck(self) -> None:
        assert MinimaxEngine().random_move(board_from_fen(STALEMATE), Color.BLACK) is None


class TestAbort:
    def test_cancel_check_aborts(self) -> None:
        engine = MinimaxEngine(DETERMINISTIC)
        result = engine.search(Board.initial(), Color.WHITE, is_cancelled=lambda: True)
        assert result.aborted
        assert result.best_move is None
        assert result.score == 0

    def test_node_cap_aborts(self) -> None:
        engine = MinimaxEngine(SearchConfig(easy_random_probability=0.0, max_nodes=50))
        result = engine.search(Board.initial(), Color.WHITE, Difficulty.MEDIUM)
        assert result.aborted
        assert result.nodes == 50

    def test_next_search_starts_fresh(self) -> None:
        engine = MinimaxEngine(DETERMINISTIC)
        engine.search(Board.initial(), Color.WHITE, is_cancelled=lambda: True)
        result = engine.search(board_from_fen(MATE_IN_ONE), Color.WHITE)
        assert not result.aborted
        assert result.best_move is not None


class TestModuleEntryPoint:
    def test_best_move_function(self) -> None:
        move = best_move(board_from_fen(HANGING_QUEEN), Color.BLACK, "medium")
        assert move is not None
        assert (move.from_sq, move.to_sq) == (D8, D4)

    def test_best_move_none_when_mated(self) -> None:
        assert best_move(board_from_fen(FOOLS_MATE), Color.WHITE) is None
