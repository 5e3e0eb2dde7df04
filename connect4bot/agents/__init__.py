"""Players that can be seated at a Game."""

from connect4bot.agents.base import Agent
from connect4bot.agents.heuristic import HeuristicAgent
from connect4bot.agents.human import HumanAgent
from connect4bot.agents.random_agent import RandomAgent

__all__ = ["Agent", "HeuristicAgent", "HumanAgent", "RandomAgent"]
