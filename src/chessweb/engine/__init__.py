"""Chess engine package: evaluation, minimax search and Qt worker bridge.

``EngineWorker`` lives in :mod:`chessweb.engine.qt_bridge` and is not
re-exported here, so importing the search does not load Qt.
"""

from chessweb.engine.evaluate import PIECE_VALUES, evaluate, piece_square_bonus
from chessweb.engine.minimax import MinimaxEngine, SearchAborted, best_move
from chessweb.engine.search import (
    INF_SCORE,
    CancelCheck,
    Difficulty,
    IEngine,
    SearchConfig,
    SearchResult,
)

__all__ = [
    "INF_SCORE",
    "PIECE_VALUES",
    "CancelCheck",
    "Difficulty",
    "IEngine",
    "MinimaxEngine",
    "SearchAborted",
    "SearchConfig",
    "SearchResult",
    "best_move",
    "evaluate",
    "piece_square_bonus",
]
