"""The engine as a seat at the table: iterative deepening over the run heuristic."""

from __future__ import annotations

from typing import Optional

from connect4bot.agents.base import Agent
from connect4bot.config import EngineConfig
from connect4bot.engine import Game
from connect4bot.search import Searcher, SearchResult


class HeuristicAgent(Agent):
    def __init__(self, name: str, config: Optional[EngineConfig] = None) -> None:
        self.name = name
        self.config = config or EngineConfig()
        self.config.validate()
        self.last_result: Optional[SearchResult] = None

    def select_move(self, game: Game) -> int:
        result = Searcher(self.config, game.current_player).search(game.board)
        self.last_result = result
        if result.column is None:
            raise ValueError("no legal moves available")
        return result.column
