"""Qt bridge to run engine search in a worker thread."""

from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chessweb.core.board import Board
from chessweb.core.enums import Color
from chessweb.engine.minimax import MinimaxEngine
from chessweb.engine.search import Difficulty, IEngine, SearchConfig

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that computes engine moves on demand.

    Move it to a ``QThread`` and call :meth:`request_move` through a queued
    connection; results come back as signals tagged with the request id.
    """

    best_move_ready = pyqtSignal(int, object, int, int)
    search_cancelled = pyqtSignal(int)
    search_no_move = pyqtSignal(int, int)
    search_error = pyqtSignal(int, str)

    __slots__ = ("_cancel_event", "_engine", "_difficulty")

    def __init__(
        self,
        *,
        difficulty: Difficulty | str = Difficulty.MEDIUM,
        config: SearchConfig | None = None,
    ) -> None:
        super().__init__()
        self._engine: IEngine = MinimaxEngine(config)
        self._difficulty = Difficulty.parse(difficulty)
        self._cancel_event = threading.Event()

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @pyqtSlot(object, object, int)
    def request_move(self, board_obj: object, color_obj: object, request_id: int) -> None:
        """Search for *color_obj*'s best move on *board_obj* and emit the result."""
        if not isinstance(board_obj, Board) or not isinstance(color_obj, Color):
            _LOGGER.warning("engine request %d rejected: invalid arguments", request_id)
            self.search_error.emit(request_id, "Engine received invalid board or color")
            return

        self._cancel_event.clear()
        try:
            result = self._engine.search(
                board_obj,
                color_obj,
                self._difficulty,
                is_cancelled=self._cancel_event.is_set,
            )
        except Exception as exc:
            _LOGGER.exception("engine request %d failed", request_id)
            self.search_error.emit(request_id, str(exc))
            return

        if result.aborted or self._cancel_event.is_set():
            self.search_cancelled.emit(request_id)
            return

        if result.best_move is None:
            self.search_no_move.emit(request_id, result.score)
            return

        self.best_move_ready.emit(
            request_id,
            result.best_move,
            result.score,
            result.nodes,
        )

    @pyqtSlot()
    def cancel(self) -> None:
        """Request cancellation of the current search."""
        self._cancel_event.set()

    @pyqtSlot(str)
    def set_difficulty(self, difficulty: str) -> None:
        """Update the strength preset (takes effect on the next search)."""
        self._difficulty = Difficulty.parse(difficulty)
