"""Shared engine search models and protocol."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from chessweb.core.board import Board
    from chessweb.core.enums import Color
    from chessweb.core.move import Move

CancelCheck = Callable[[], bool]

INF_SCORE = 1_000_000
"""Score of a mate; larger in magnitude than any material total."""


class Difficulty(Enum):
    """Engine strength presets."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value: str | Difficulty) -> Difficulty:
        """Accept a :class:`Difficulty` or its string value (case-insensitive)."""
        if isinstance(value, Difficulty):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown difficulty: {value!r}") from None

    def __str__(self) -> str:
        return self.value


_DEFAULT_DEPTHS: Mapping[Difficulty, int] = MappingProxyType(
    {Difficulty.EASY: 2, Difficulty.MEDIUM: 3, Difficulty.HARD: 4}
)


@dataclass(slots=True, frozen=True)
class SearchConfig:
    """Engine tuning shared by every search.

    ``easy_random_probability`` is the chance that an easy-mode search
    skips the tree and plays a uniformly random legal move. ``max_nodes``
    and ``time_limit_ms`` are optional soft caps; hitting one aborts the
    search.
    """

    depths: Mapping[Difficulty, int] = field(default_factory=lambda: _DEFAULT_DEPTHS)
    easy_random_probability: float = 0.3
    max_nodes: int | None = None
    time_limit_ms: int | None = None

    def __post_init__(self) -> None:
        if not 0.0 <= self.easy_random_probability <= 1.0:
            raise ValueError(
                f"easy_random_probability must be in [0, 1]: "
                f"{self.easy_random_probability!r}"
            )
        for difficulty in Difficulty:
            if self.depths.get(difficulty, 0) < 1:
                raise ValueError(f"Search depth for {difficulty} must be >= 1")

    def depth_for(self, difficulty: Difficulty) -> int:
        return self.depths[difficulty]


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search.

    ``best_move`` is ``None`` when the side has no legal move, or when the
    search was aborted (``aborted`` is then ``True`` and ``score`` is 0).
    """

    best_move: Move | None
    score: int
    depth: int
    nodes: int
    aborted: bool = False
    randomized: bool = False


class IEngine(Protocol):
    """Protocol for chess engines used by the game layer."""

    def search(
        self,
        board: Board,
        color: Color,
        difficulty: Difficulty = Difficulty.MEDIUM,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult: ...
