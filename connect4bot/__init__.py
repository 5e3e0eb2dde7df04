"""Connect-4 package (board + heuristic engine + agents + CLI)."""

from connect4bot.config import Aggregation, EngineConfig, Weights
from connect4bot.engine import Board, Cell, Game, Move, TerminalResult, WinningLine
from connect4bot.search import SearchContext, Searcher, SearchResult

__all__ = [
    "Aggregation",
    "Board",
    "Cell",
    "EngineConfig",
    "Game",
    "Move",
    "SearchContext",
    "SearchResult",
    "Searcher",
    "TerminalResult",
    "Weights",
    "WinningLine",
]
