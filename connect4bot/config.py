"""Tuning constants for the heuristic engine."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class Aggregation(str, enum.Enum):
    """How a node combines the ratings of its children."""

    BEST = "best"  # max for the engine's side, min for the opponent
    WEIGHTED = "weighted"  # rank-weighted mean, worst outcomes count most
    MEAN = "mean"  # plain arithmetic mean


@dataclass(frozen=True)
class Weights:
    four: float = 1.0
    four_factor: float = 1000.0
    three: float = 0.1
    two: float = 0.015

    @property
    def win_threshold(self) -> float:
        return self.four * self.four_factor

    def validate(self) -> None:
        if self.four <= 0 or self.four_factor <= 0:
            raise ValueError("four and four_factor must be > 0")
        if self.three < 0 or self.two < 0:
            raise ValueError("three/two weights must be >= 0")


@dataclass(frozen=True)
class EngineConfig:
    think_time_ms: int = 2000
    min_depth: int = 3
    depth_factor: int = 6
    weights: Weights = field(default_factory=Weights)
    own_policy: Aggregation = Aggregation.BEST
    opponent_policy: Aggregation = Aggregation.BEST

    @classmethod
    def from_toggles(
        cls,
        *,
        best_move_own: bool = True,
        best_move_opponent: bool = True,
        weighting: bool = True,
        **kwargs,
    ) -> "EngineConfig":
        """Map the best-move-only / weighting switches onto per-side strategies."""

        fallback = Aggregation.WEIGHTED if weighting else Aggregation.MEAN
        return cls(
            own_policy=Aggregation.BEST if best_move_own else fallback,
            opponent_policy=Aggregation.BEST if best_move_opponent else fallback,
            **kwargs,
        )

    @property
    def round_budget(self) -> float:
        """Seconds after which no further deepening round is started."""
        return (self.think_time_ms // self.depth_factor) / 1000.0

    def policy_for(self, maximizing: bool) -> Aggregation:
        return self.own_policy if maximizing else self.opponent_policy

    def validate(self) -> None:
        if self.think_time_ms < 0:
            raise ValueError("think_time_ms must be >= 0")
        if self.min_depth < 1:
            raise ValueError("min_depth must be >= 1")
        if self.depth_factor < 1:
            raise ValueError("depth_factor must be >= 1")
        self.weights.validate()
