"""Agents and the game/match loop."""

from typing import List

import pytest

from connect4bot.agents import Agent, HeuristicAgent, HumanAgent, RandomAgent
from connect4bot.config import EngineConfig
from connect4bot.engine import Board, Cell, Game
from connect4bot.match import MatchSummary, play_game, run_match

FAST = EngineConfig(think_time_ms=0, min_depth=1)


class ScriptedAgent(Agent):
    def __init__(self, name: str, cols: List[int]) -> None:
        self.name = name
        self.cols = list(cols)

    def select_move(self, game: Game) -> int:
        return self.cols.pop(0)


class TestAgents:
    def test_random_agent_plays_legal_columns(self):
        game = Game()
        for _ in range(6):
            game.play(0)
        agent = RandomAgent("r", seed=3)
        for _ in range(20):
            assert agent.select_move(game) in range(1, 7)

    def test_human_agent_defers_to_prompt(self):
        seen = []

        def prompt(game: Game, name: str) -> int:
            seen.append(name)
            return 5

        assert HumanAgent("me", prompt).select_move(Game()) == 5
        assert seen == ["me"]

    def test_heuristic_agent_finishes_the_game(self):
        game = Game()
        for col in [1, 1, 2, 2, 3, 3]:
            game.play(col)
        agent = HeuristicAgent("bot", FAST)
        assert agent.select_move(game) == 0
        assert agent.last_result.column == 0

    def test_heuristic_agent_plays_for_the_side_to_move(self):
        game = Game()
        for col in [1, 1, 2, 2, 3, 3, 6]:
            game.play(col)
        # O to move: completing its own four beats blocking X.
        assert HeuristicAgent("bot", FAST).select_move(game) == 0

    def test_heuristic_agent_without_moves(self):
        game = Game()
        game.board = Board.from_strings(
            "XOXOXOX",
            "XOXOXOX",
            "OXOXOXO",
            "OXOXOXO",
            "XOXOXOX",
            "XOXOXOX",
        )
        with pytest.raises(ValueError):
            HeuristicAgent("bot", FAST).select_move(game)


class TestPlayGame:
    def test_scripted_vertical_win(self):
        game = Game()
        agents = {
            Cell.RED: ScriptedAgent("x", [0, 0, 0, 0]),
            Cell.YELLOW: ScriptedAgent("o", [1, 1, 1]),
        }
        moves = []
        result = play_game(game, agents, on_move=lambda g, m: moves.append(m))
        assert result.winner == Cell.RED
        assert len(moves) == 7
        assert game.scores[Cell.RED] == 1


class TestRunMatch:
    def test_tally_adds_up(self):
        summary = run_match(RandomAgent("a", seed=1), RandomAgent("b", seed=2), games=4, progress=False)
        assert summary.games == 4
        assert summary.wins[Cell.RED] + summary.wins[Cell.YELLOW] + summary.draws == 4
        assert summary.moves >= 4 * 7

    def test_engine_against_random(self):
        summary = run_match(HeuristicAgent("bot", FAST), RandomAgent("rnd", seed=0), games=2, progress=False)
        assert summary.games == 2

    def test_games_must_be_positive(self):
        with pytest.raises(ValueError):
            run_match(RandomAgent("a"), RandomAgent("b"), games=0)

    def test_summary_record(self):
        game = Game()
        for col in [0, 1, 0, 1, 0, 1, 0]:
            game.play(col)
        summary = MatchSummary()
        summary.record(game.check_for_winner(), 7)
        assert summary.wins == {Cell.RED: 1, Cell.YELLOW: 0}
        assert summary.draws == 0
