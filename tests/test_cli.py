"""Command line smoke tests."""

from typer.testing import CliRunner

from connect4bot.cli import _parse_column, app

runner = CliRunner()
FAST = ["--think-ms", "0", "--min-depth", "1"]


class TestParseColumn:
    def test_zero_and_one_based(self):
        assert _parse_column("0", 7) == 0
        assert _parse_column("6", 7) == 6
        assert _parse_column("7", 7) == 6

    def test_garbage(self):
        assert _parse_column("", 7) is None
        assert _parse_column("abc", 7) is None
        assert _parse_column("9", 7) is None


class TestCommands:
    def test_analyze_shows_ratings(self):
        result = runner.invoke(app, ["analyze", "3344", *FAST])
        assert result.exit_code == 0, result.output
        assert "Column ratings" in result.output
        assert "X to move: column" in result.output

    def test_analyze_takes_the_win(self):
        result = runner.invoke(app, ["analyze", "112233", *FAST])
        assert result.exit_code == 0, result.output
        assert "X to move: column 0" in result.output

    def test_analyze_reports_existing_four(self):
        result = runner.invoke(app, ["analyze", "0101010", *FAST])
        assert result.exit_code == 1
        assert "already has four in a row" in result.output

    def test_analyze_rejects_overfull_column(self):
        result = runner.invoke(app, ["analyze", "0000000", *FAST])
        assert result.exit_code != 0

    def test_match(self):
        result = runner.invoke(app, ["match", "--games", "2", *FAST])
        assert result.exit_code == 0, result.output
        assert "Match" in result.output

    def test_play_between_computers(self):
        result = runner.invoke(app, ["play", "--red", "random", "--yellow", "bot", "--rounds", "2", "--seed", "4", *FAST])
        assert result.exit_code == 0, result.output
        assert "Result:" in result.output
        assert "Score" in result.output

    def test_play_with_human_input(self):
        result = runner.invoke(
            app,
            ["play", "--red", "human", "--yellow", "random", "--seed", "0", *FAST],
            input="\n".join(["x", "0"] + [str(c) for c in [0, 1, 2, 3, 4, 5, 6] * 6]) + "\n",
        )
        assert "Enter a column index" in result.output

    def test_bad_agent_choice(self):
        result = runner.invoke(app, ["play", "--red", "robot"])
        assert result.exit_code != 0
