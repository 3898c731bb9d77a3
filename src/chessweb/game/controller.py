"""GameController: turn orchestration between a human and the engine.

Coordinates: GameState, the engine opponent, listeners.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chessweb.core.board import Board
from chessweb.core.enums import Color, GameStatus
from chessweb.core.move import Move
from chessweb.core.types import Square
from chessweb.engine.minimax import MinimaxEngine
from chessweb.engine.search import Difficulty, IEngine
from chessweb.game.state import GameState, IllegalMoveError

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, "GameState"], None]
GameOverCallback = Callable[[GameStatus, "Color | None"], None]  # status, winner


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Validates human moves, lets the engine answer, notifies listeners.

    With ``auto_reply`` the engine searches synchronously right after each
    human move. Hosts that search on a worker thread (see
    :class:`~chessweb.engine.qt_bridge.EngineWorker`) pass
    ``auto_reply=False`` and hand the result to :meth:`submit_engine_move`.
    """

    __slots__ = (
        "_state",
        "_engine",
        "_engine_colors",
        "_difficulty",
        "_auto_reply",
        "events",
    )

    def __init__(
        self,
        engine: IEngine | None = None,
        *,
        auto_reply: bool = True,
    ) -> None:
        self._state = GameState()
        self._engine: IEngine = engine or MinimaxEngine()
        self._engine_colors: frozenset[Color] = frozenset()
        self._difficulty = Difficulty.MEDIUM
        self._auto_reply = auto_reply
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def engine_colors(self) -> frozenset[Color]:
        """Sides the engine plays; empty when two humans share the board."""
        return self._engine_colors

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @property
    def is_engine_turn(self) -> bool:
        return (
            self._state.side_to_move in self._engine_colors
            and not self._state.is_game_over
        )

    # ── Game lifecycle ───────────────────────────────────────────────────

    def new_game(
        self,
        engine_color: Color | None = None,
        difficulty: Difficulty | str = Difficulty.MEDIUM,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        self_play: bool = False,
    ) -> None:
        """Start a game.

        *engine_color* ``None`` means two humans share the board; *self_play*
        hands both sides to the engine.
        """
        if self_play:
            self._engine_colors = frozenset(Color)
        elif engine_color is not None:
            self._engine_colors = frozenset((engine_color,))
        else:
            self._engine_colors = frozenset()
        self._difficulty = Difficulty.parse(difficulty)
        self._state = GameState()
        self._state.setup(board, side_to_move)
        _LOGGER.debug(
            "new game: engine=%s difficulty=%s",
            sorted(str(c) for c in self._engine_colors),
            self._difficulty,
        )

        if self._auto_reply and self.is_engine_turn:
            self.play_engine_move()

    def select(self, square: Square) -> list[Square]:
        """Legal destinations to highlight for a human clicking *square*."""
        if self.is_engine_turn:
            return []
        return self._state.legal_moves(square)

    def submit_move(self, from_sq: Square, to_sq: Square) -> bool:
        """Human move. Returns ``False`` when refused or illegal."""
        if self._state.is_game_over or self.is_engine_turn:
            return False
        try:
            move = self._state.play(from_sq, to_sq)
        except IllegalMoveError:
            return False

        self._after_move(move)
        if self._auto_reply and self.is_engine_turn:
            self.play_engine_move()
        return True

    def play_engine_move(self) -> Move | None:
        """Let the engine search and play for its side; ``None`` if it cannot move."""
        if not self.is_engine_turn:
            return None
        move = self._engine.search(
            self._state.board,
            self._state.side_to_move,
            self._difficulty,
        ).best_move
        if move is None:
            return None
        self._state.apply_move(move)
        self._after_move(move)
        return move

    def submit_engine_move(self, move: Move) -> bool:
        """Apply a move computed off-thread, if it is still legal here."""
        if not self.is_engine_turn:
            return False
        if move not in self._state.all_legal_moves():
            _LOGGER.warning("discarding stale engine move %s", move)
            return False
        self._state.apply_move(move)
        self._after_move(move)
        return True

    def undo_move(self) -> bool:
        """Take back the last move; against the engine, back to the human's turn."""
        if self._state.undo_last_move() is None:
            return False
        if len(self._engine_colors) == 1 and self.is_engine_turn:
            self._state.undo_last_move()
        # Only the engine's opening move was taken back; let it move again.
        if self._auto_reply and self.is_engine_turn:
            self.play_engine_move()
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _after_move(self, move: Move) -> None:
        for cb in self.events.on_move:
            cb(move, self._state)
        if self._state.is_game_over:
            for cb in self.events.on_game_over:
                cb(self._state.status, self._state.winner)
