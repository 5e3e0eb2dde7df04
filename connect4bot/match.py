"""Play single games and whole series between two agents."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping, Optional

from tqdm import trange

from connect4bot.agents.base import Agent
from connect4bot.engine import Cell, Game, Move, TerminalResult

logger = logging.getLogger(__name__)

MoveHook = Callable[[Game, Move], None]


@dataclass
class MatchSummary:
    games: int = 0
    wins: Dict[Cell, int] = field(default_factory=lambda: {Cell.RED: 0, Cell.YELLOW: 0})
    draws: int = 0
    moves: int = 0

    def record(self, result: TerminalResult, moves: int) -> None:
        self.games += 1
        self.moves += moves
        if result.winner == Cell.EMPTY:
            self.draws += 1
        else:
            self.wins[result.winner] += 1


def play_game(game: Game, agents: Mapping[Cell, Agent], *, on_move: Optional[MoveHook] = None) -> TerminalResult:
    """Let the agents alternate on `game` until somebody connects four or the board fills up."""

    while True:
        result = game.check_for_winner()
        if result.is_terminal:
            return result

        agent = agents[game.current_player]
        col = agent.select_move(game)
        move = game.play(col)
        logger.debug("%s (%s) -> col %d, row %d", agent.name, move.player.glyph, move.col, move.row)
        if on_move is not None:
            on_move(game, move)


def run_match(red: Agent, yellow: Agent, *, games: int, progress: bool = True) -> MatchSummary:
    """
    Play a series of games on one Game, so the score tally carries over.

    Game.reset() decides who opens each game (it follows the score parity).
    """

    if games < 1:
        raise ValueError("games must be >= 1")

    game = Game(red.name, yellow.name)
    agents = {Cell.RED: red, Cell.YELLOW: yellow}
    summary = MatchSummary()

    for g in trange(games, desc="match", leave=False, disable=not progress):
        if g > 0:
            game.reset()
        result = play_game(game, agents)
        summary.record(result, len(game.move_history))
        logger.info("game %d: %s in %d moves", g + 1, result.reason, len(game.move_history))

    return summary
