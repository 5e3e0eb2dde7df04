"""Random baseline agent."""

from __future__ import annotations

import random
from typing import Optional

from connect4bot.agents.base import Agent
from connect4bot.engine import Game


class RandomAgent(Agent):
    def __init__(self, name: str, seed: Optional[int] = None) -> None:
        self.name = name
        self.rng = random.Random(seed)

    def select_move(self, game: Game) -> int:
        legal = game.board.legal_columns().tolist()
        if not legal:
            raise ValueError("no legal moves available")
        return self.rng.choice(legal)
