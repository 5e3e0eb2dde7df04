"""Command line: play against the engine, run engine matches, analyze positions."""

from __future__ import annotations

import logging
from typing import Dict, Optional, Sequence

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from connect4bot.agents import Agent, HeuristicAgent, HumanAgent, RandomAgent
from connect4bot.config import Aggregation, EngineConfig
from connect4bot.engine import WIDTH, Board, Cell, Game, Move, TerminalResult, format_move_history, render_board
from connect4bot.match import play_game, run_match
from connect4bot.search import VERY_NEGATIVE, Searcher

app = typer.Typer(no_args_is_help=True)
console = Console()

AGENT_CHOICES = {"human", "bot", "random"}

THINK_MS = typer.Option(2000, "--think-ms", help="Total thinking time per move in ms (divided by --depth-factor).")
MIN_DEPTH = typer.Option(3, "--min-depth", help="Depth of the first deepening round (plies).")
DEPTH_FACTOR = typer.Option(6, "--depth-factor", help="Divisor applied to --think-ms to get the per-round budget.")
OWN_POLICY = typer.Option(Aggregation.BEST, "--own-policy", help="How the engine aggregates its own replies.")
OPPONENT_POLICY = typer.Option(
    Aggregation.BEST, "--opponent-policy", help="How the engine aggregates the opponent's replies."
)
VERBOSE = typer.Option(False, "--verbose", "-v", help="Log every deepening round.", is_flag=True)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _engine_config(
    think_ms: int,
    min_depth: int,
    depth_factor: int,
    own_policy: Aggregation,
    opponent_policy: Aggregation,
) -> EngineConfig:
    cfg = EngineConfig(
        think_time_ms=think_ms,
        min_depth=min_depth,
        depth_factor=depth_factor,
        own_policy=own_policy,
        opponent_policy=opponent_policy,
    )
    try:
        cfg.validate()
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    return cfg


def _parse_column(raw: str, width: int) -> Optional[int]:
    raw = raw.strip()
    if not raw:
        return None
    try:
        col = int(raw)
    except ValueError:
        return None

    if 0 <= col < width:
        return col
    if 1 <= col <= width:
        return col - 1
    return None


def prompt_for_human_move(game: Game, name: str) -> int:
    legal = game.board.legal_columns().tolist()
    prompt = f"{name} ({game.current_player.glyph}) to move. Column {legal}"

    while True:
        raw = typer.prompt(prompt)
        col = _parse_column(raw, WIDTH)
        if col is None:
            console.print("Enter a column index (0-based or 1-based).")
            continue
        if col not in legal:
            console.print("Illegal move: column full or out of range.")
            continue
        return col


def _build_agent(choice: str, name: str, cfg: EngineConfig, seed: Optional[int]) -> Agent:
    if choice == "human":
        return HumanAgent(name, prompt_for_human_move)
    if choice == "random":
        return RandomAgent(f"Random {name}", seed=seed)
    if choice == "bot":
        return HeuristicAgent(f"Bot {name}", cfg)
    raise typer.BadParameter(f"unsupported agent choice: {choice}")


def _announce(game: Game, result: TerminalResult) -> None:
    highlight = game.winning_line.cells() if game.winning_line is not None else ()
    console.print(render_board(game.board, highlight=highlight))
    if result.winner == Cell.EMPTY:
        console.print("Result: draw")
    else:
        console.print(f"Result: {game.names[result.winner]} ({result.winner.glyph}) wins ({result.reason})")
    if game.move_history:
        console.print(f"Moves: {format_move_history(game.move_history)}")


def _print_scores(game: Game) -> None:
    table = Table(title="Score")
    table.add_column("player")
    table.add_column("side", justify="center")
    table.add_column("wins", justify="right")
    for side in (Cell.RED, Cell.YELLOW):
        table.add_row(game.names[side], side.glyph, str(game.scores[side]))
    console.print(table)


def _print_ratings(ratings: Sequence[float], column: Optional[int]) -> None:
    table = Table(title="Column ratings")
    table.add_column("col", justify="right")
    table.add_column("rating", justify="right")
    for col in range(WIDTH):
        value = float(ratings[col])
        text = "full" if value <= VERY_NEGATIVE else f"{value:.4f}"
        if col == column:
            text = f"[bold]{text}[/]"
        table.add_row(str(col), text)
    console.print(table)


@app.command()
def play(
    red: str = typer.Option("human", help="Agent for X (moves first): human|bot|random."),
    yellow: str = typer.Option("bot", help="Agent for O: human|bot|random."),
    rounds: int = typer.Option(1, help="Number of games to play; the opener alternates with the score."),
    seed: Optional[int] = typer.Option(None, help="Seed for random agents."),
    think_ms: int = THINK_MS,
    min_depth: int = MIN_DEPTH,
    depth_factor: int = DEPTH_FACTOR,
    own_policy: Aggregation = OWN_POLICY,
    opponent_policy: Aggregation = OPPONENT_POLICY,
    verbose: bool = VERBOSE,
) -> None:
    """Play Connect-4 in the terminal."""
    for choice in (red, yellow):
        if choice not in AGENT_CHOICES:
            raise typer.BadParameter("agents must be 'human', 'bot' or 'random'")
    if rounds < 1:
        raise typer.BadParameter("rounds must be >= 1")
    _setup_logging(verbose)

    cfg = _engine_config(think_ms, min_depth, depth_factor, own_policy, opponent_policy)
    agents: Dict[Cell, Agent] = {
        Cell.RED: _build_agent(red, "X", cfg, seed),
        Cell.YELLOW: _build_agent(yellow, "O", cfg, None if seed is None else seed + 1),
    }
    game = Game(agents[Cell.RED].name, agents[Cell.YELLOW].name)

    def show_move(g: Game, move: Move) -> None:
        agent = agents[move.player]
        console.print(f"Move: {move.player.glyph} -> col {move.col}, row {move.row}")
        if isinstance(agent, HeuristicAgent) and agent.last_result is not None:
            res = agent.last_result
            console.print(f"  searched depth {res.depth_reached}, {res.nodes} nodes, {res.elapsed:.2f}s")
        console.print(render_board(g.board))
        console.print("")

    for rnd in range(rounds):
        if rnd > 0:
            game.reset()
        console.print(f"Game {rnd + 1}: {game.names[game.current_player]} opens")
        console.print(render_board(game.board))
        result = play_game(game, agents, on_move=show_move)
        _announce(game, result)

    _print_scores(game)


@app.command()
def match(
    red: str = typer.Option("bot", help="Agent for X: bot|random."),
    yellow: str = typer.Option("random", help="Agent for O: bot|random."),
    games: int = typer.Option(10, help="Number of games."),
    seed: Optional[int] = typer.Option(0, help="Seed for random agents."),
    think_ms: int = THINK_MS,
    min_depth: int = MIN_DEPTH,
    depth_factor: int = DEPTH_FACTOR,
    own_policy: Aggregation = OWN_POLICY,
    opponent_policy: Aggregation = OPPONENT_POLICY,
    verbose: bool = VERBOSE,
) -> None:
    """Run a series of computer-vs-computer games and tally the results."""
    for choice in (red, yellow):
        if choice not in {"bot", "random"}:
            raise typer.BadParameter("match agents must be 'bot' or 'random'")
    if games < 1:
        raise typer.BadParameter("games must be >= 1")
    _setup_logging(verbose)

    cfg = _engine_config(think_ms, min_depth, depth_factor, own_policy, opponent_policy)
    red_agent = _build_agent(red, "X", cfg, seed)
    yellow_agent = _build_agent(yellow, "O", cfg, None if seed is None else seed + 1)

    summary = run_match(red_agent, yellow_agent, games=games)

    table = Table(title=f"Match: {red_agent.name} vs {yellow_agent.name}")
    table.add_column("games", justify="right")
    table.add_column("X wins", justify="right")
    table.add_column("O wins", justify="right")
    table.add_column("draws", justify="right")
    table.add_column("avg moves", justify="right")
    table.add_row(
        str(summary.games),
        str(summary.wins[Cell.RED]),
        str(summary.wins[Cell.YELLOW]),
        str(summary.draws),
        f"{summary.moves / summary.games:.1f}",
    )
    console.print(table)


@app.command()
def analyze(
    moves: str = typer.Argument("", help="Columns played so far, X first, e.g. '3342'."),
    think_ms: int = THINK_MS,
    min_depth: int = MIN_DEPTH,
    depth_factor: int = DEPTH_FACTOR,
    own_policy: Aggregation = OWN_POLICY,
    opponent_policy: Aggregation = OPPONENT_POLICY,
    verbose: bool = VERBOSE,
) -> None:
    """Show the engine's rating of every column for the side to move."""
    _setup_logging(verbose)
    cfg = _engine_config(think_ms, min_depth, depth_factor, own_policy, opponent_policy)

    moves = moves.strip()
    if moves and not moves.isdigit():
        raise typer.BadParameter("moves must be a string of column digits")
    try:
        board = Board.from_moves(int(ch) for ch in moves)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    side = Cell.RED if len(moves) % 2 == 0 else Cell.YELLOW
    line = board.find_four()
    console.print(render_board(board, highlight=line.cells() if line is not None else ()))
    if line is not None:
        console.print(f"{line.winner.glyph} already has four in a row")
        raise typer.Exit(code=1)

    result = Searcher(cfg, side).search(board)
    if result.column is None:
        console.print("no move: the board is full")
        raise typer.Exit(code=2)

    _print_ratings(result.ratings, result.column)
    console.print(
        f"{side.glyph} to move: column {result.column} "
        f"(depth {result.depth_reached}, {result.nodes} nodes, {result.elapsed:.2f}s)"
    )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
