"""Human-in-the-loop agent that defers input handling to a CLI prompt function."""

from __future__ import annotations

from typing import Callable

from connect4bot.agents.base import Agent
from connect4bot.engine import Game

PromptFn = Callable[[Game, str], int]


class HumanAgent(Agent):
    def __init__(self, name: str, prompt_fn: PromptFn) -> None:
        self.name = name
        self.prompt_fn = prompt_fn

    def select_move(self, game: Game) -> int:
        return self.prompt_fn(game, self.name)
