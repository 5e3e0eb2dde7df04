"""Abstract base class for Connect-4 agents."""

from __future__ import annotations

import abc

from connect4bot.engine import Game


class Agent(abc.ABC):
    name: str

    @abc.abstractmethod
    def select_move(self, game: Game) -> int:
        """Column for `game.current_player`; must not mutate the game."""
        raise NotImplementedError
