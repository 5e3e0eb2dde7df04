"""
Time-budgeted, depth-limited search over the static evaluator.

The searcher rates positions from the point of view of one side (`me`):
- `me` maximizes, the opponent minimizes (or averages, depending on policy)
- a forced win for `me` cuts the expansion short immediately
- every simulated piece is lifted again before a frame returns, so the one
  scratch board always mirrors the path from the root to the active frame

Iterative deepening re-runs the whole tree one ply deeper per round until the
round budget is spent or the board has no room for a deeper search.
"""

from __future__ import annotations

import dataclasses
import logging
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from connect4bot.config import Aggregation, EngineConfig
from connect4bot.engine import WIDTH, Board, Cell
from connect4bot.evaluation import rate_board

logger = logging.getLogger(__name__)

# Rating reported for full columns at the root.
VERY_NEGATIVE = -1_000_000.0


@dataclass(frozen=True)
class SearchContext:
    player: Cell  # side to move at this node
    depth: int
    max_depth: int

    def child(self) -> "SearchContext":
        return dataclasses.replace(self, player=self.player.opponent, depth=self.depth + 1)


@dataclass
class SearchResult:
    column: Optional[int]
    ratings: np.ndarray  # shape (WIDTH,), VERY_NEGATIVE for full columns
    depth_reached: int
    nodes: int
    elapsed: float  # seconds


def aggregate(policy: Aggregation, ratings: Sequence[float], *, maximizing: bool) -> float:
    if policy is Aggregation.BEST:
        return max(ratings) if maximizing else min(ratings)

    values = np.sort(np.asarray(ratings, dtype=np.float64))
    if policy is Aggregation.MEAN:
        return float(values.mean())

    # k-th smallest of n gets weight n - k: a sloppy opponent still tends to
    # find the bad replies.
    weights = np.arange(len(values), 0, -1, dtype=np.float64)
    return float(np.dot(values, weights) / weights.sum())


class Searcher:
    def __init__(self, config: EngineConfig, me: Cell) -> None:
        if me == Cell.EMPTY:
            raise ValueError("searcher needs a side to play")
        config.validate()
        self.config = config
        self.me = me
        self._nodes = 0

    @property
    def threshold(self) -> float:
        return self.config.weights.win_threshold

    def rate(self, board: Board, ctx: SearchContext) -> float:
        """Rate `board` with `ctx.player` to move, looking ahead to `ctx.max_depth`."""

        self._nodes += 1
        threshold = self.threshold
        four = self.config.weights.four

        static = rate_board(board, self.me, self.config.weights)
        if static >= threshold:
            return threshold
        if static <= -threshold:
            return -threshold

        if ctx.depth >= ctx.max_depth:
            return static

        maximizing = ctx.player == self.me
        child_ctx = ctx.child()
        opponent_can_lose = False
        children: List[float] = []

        for col in range(WIDTH):
            row = board.drop(col, ctx.player)
            if row is None:
                continue
            rating = self.rate(board, child_ctx)
            board.lift(col, row)

            if rating >= threshold:
                if maximizing:
                    return threshold
                # Every such reply loses for the opponent; keep looking for one that doesn't.
                opponent_can_lose = True
                continue
            if rating <= -threshold and not maximizing:
                return -four

            children.append(rating)

        if not children:
            return four if opponent_can_lose else 0.0
        return aggregate(self.config.policy_for(maximizing), children, maximizing=maximizing)

    def rate_moves(self, board: Board, max_depth: int) -> np.ndarray:
        """Rate each of our own drops; full columns get VERY_NEGATIVE."""

        ratings = np.full((WIDTH,), VERY_NEGATIVE, dtype=np.float64)
        ctx = SearchContext(player=self.me.opponent, depth=1, max_depth=max_depth)
        for col in range(WIDTH):
            row = board.drop(col, self.me)
            if row is None:
                continue
            ratings[col] = self.rate(board, ctx)
            board.lift(col, row)
        return ratings

    def search(self, board: Board) -> SearchResult:
        start = time.perf_counter()
        self._nodes = 0

        if board.is_full():
            return SearchResult(
                column=None,
                ratings=np.full((WIDTH,), VERY_NEGATIVE, dtype=np.float64),
                depth_reached=0,
                nodes=0,
                elapsed=0.0,
            )

        scratch = board.copy()
        budget = self.config.round_budget
        spaces = scratch.empty_count()
        depth = self.config.min_depth

        while True:
            ratings = self.rate_moves(scratch, depth)
            # argmax keeps the first of equal ratings.
            column = int(np.argmax(ratings))
            result = SearchResult(
                column=column,
                ratings=ratings,
                depth_reached=depth,
                nodes=self._nodes,
                elapsed=time.perf_counter() - start,
            )
            logger.debug(
                "depth=%d best=%d rating=%.4f nodes=%d elapsed=%.3fs",
                depth,
                column,
                float(ratings[column]),
                self._nodes,
                result.elapsed,
            )

            depth += 1
            if depth > spaces or result.elapsed >= budget:
                break

        return result

    def choose_column(self, board: Board) -> Optional[int]:
        """Column to drop into, or None when the board is full."""
        return self.search(board).column
