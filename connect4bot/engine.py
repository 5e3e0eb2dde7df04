"""
Connect-4 board and game bookkeeping on the fixed 7x6 grid.

The search works on a single mutable Board:
- drop() places a piece and returns its row (None when the column is full)
- lift() clears exactly that cell again
- find_four() reports an in-progress four-in-a-row
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

import numpy as np

WIDTH = 7
HEIGHT = 6
CONNECT = 4

Coord = Tuple[int, int]  # (col, row)
Line = Tuple[Tuple[Coord, ...], Coord]  # cells of one line + scan direction


class Cell(enum.IntEnum):
    EMPTY = 0
    RED = 1
    YELLOW = -1

    @property
    def opponent(self) -> "Cell":
        return Cell(-int(self))

    @property
    def glyph(self) -> str:
        return _GLYPHS[self]


_GLYPHS = {Cell.RED: "X", Cell.YELLOW: "O", Cell.EMPTY: "."}
_FROM_GLYPH = {v: k for k, v in _GLYPHS.items()}


def in_bounds(col: int, row: int) -> bool:
    return 0 <= col < WIDTH and 0 <= row < HEIGHT


def _walk(col: int, row: int, dcol: int, drow: int) -> Tuple[Coord, ...]:
    cells = []
    while in_bounds(col, row):
        cells.append((col, row))
        col += dcol
        row += drow
    return tuple(cells)


def _build_lines() -> Tuple[Line, ...]:
    lines: List[Line] = []

    # Horizontal, bottom row first.
    for row in range(HEIGHT):
        lines.append((_walk(0, row, 1, 0), (1, 0)))

    # Vertical, left column first.
    for col in range(WIDTH):
        lines.append((_walk(col, 0, 0, 1), (0, 1)))

    # Ascending to the right: starts on the left edge (top down), then the bottom edge.
    for row in range(HEIGHT - 1, -1, -1):
        lines.append((_walk(0, row, 1, 1), (1, 1)))
    for col in range(1, WIDTH):
        lines.append((_walk(col, 0, 1, 1), (1, 1)))

    # Ascending to the left: starts on the right edge (top down), then the bottom edge.
    for row in range(HEIGHT - 1, -1, -1):
        lines.append((_walk(WIDTH - 1, row, -1, 1), (-1, 1)))
    for col in range(WIDTH - 2, -1, -1):
        lines.append((_walk(col, 0, -1, 1), (-1, 1)))

    return tuple(lines)


# Every line of every family, in scan order.
LINES: Tuple[Line, ...] = _build_lines()


@dataclass(frozen=True)
class WinningLine:
    winner: Cell
    start: Coord
    end: Coord

    def cells(self) -> FrozenSet[Coord]:
        (c0, r0), (c1, r1) = self.start, self.end
        steps = max(abs(c1 - c0), abs(r1 - r0))
        dc = (c1 - c0) // steps if steps else 0
        dr = (r1 - r0) // steps if steps else 0
        return frozenset((c0 + i * dc, r0 + i * dr) for i in range(steps + 1))


class Board:
    """
    Mutable 7x6 grid.

    cells: int8 array (HEIGHT, WIDTH) holding Cell values, row 0 at the bottom.
    heights: number of pieces in each column.
    """

    def __init__(self) -> None:
        self.cells = np.zeros((HEIGHT, WIDTH), dtype=np.int8)
        self.heights = np.zeros((WIDTH,), dtype=np.int16)

    @classmethod
    def from_strings(cls, *rows: str) -> "Board":
        """Build a board from rows written top row first, e.g. "..XO...". """
        if len(rows) != HEIGHT:
            raise ValueError(f"expected {HEIGHT} rows, got {len(rows)}")
        board = cls()
        for i, text in enumerate(rows):
            text = text.replace(" ", "")
            if len(text) != WIDTH:
                raise ValueError(f"row {i} must have {WIDTH} cells: {text!r}")
            row = HEIGHT - 1 - i
            for col, ch in enumerate(text):
                if ch not in _FROM_GLYPH:
                    raise ValueError(f"unknown cell {ch!r} in row {i}")
                board.cells[row, col] = _FROM_GLYPH[ch]

        for col in range(WIDTH):
            filled = board.cells[:, col] != Cell.EMPTY
            height = int(filled.sum())
            if not filled[:height].all():
                raise ValueError(f"column {col} has a floating piece")
            board.heights[col] = height
        return board

    @classmethod
    def from_moves(cls, cols: Iterable[int], first: Cell = Cell.RED) -> "Board":
        board = cls()
        player = first
        for col in cols:
            if not 0 <= col < WIDTH:
                raise ValueError(f"col out of range: {col}")
            if board.drop(col, player) is None:
                raise ValueError(f"illegal move: column {col} full")
            player = player.opponent
        return board

    def copy(self) -> "Board":
        other = Board()
        other.cells = self.cells.copy()
        other.heights = self.heights.copy()
        return other

    def clear(self) -> None:
        self.cells.fill(Cell.EMPTY)
        self.heights.fill(0)

    def get(self, col: int, row: int) -> Cell:
        return Cell(int(self.cells[row, col]))

    def drop(self, col: int, cell: Cell) -> Optional[int]:
        row = int(self.heights[col])
        if row >= HEIGHT:
            return None
        self.cells[row, col] = cell
        self.heights[col] = row + 1
        return row

    def lift(self, col: int, row: int) -> None:
        self.cells[row, col] = Cell.EMPTY
        self.heights[col] = row

    def column_full(self, col: int) -> bool:
        return int(self.heights[col]) >= HEIGHT

    def legal_columns(self) -> np.ndarray:
        return np.nonzero(self.heights < HEIGHT)[0]

    def empty_count(self) -> int:
        return int(np.count_nonzero(self.cells == Cell.EMPTY))

    def is_full(self) -> bool:
        return bool((self.heights >= HEIGHT).all())

    def find_four(self) -> Optional[WinningLine]:
        for cells, _ in LINES:
            prev = Cell.EMPTY
            count = 0
            start = cells[0]
            for col, row in cells:
                cell = self.get(col, row)
                if cell == prev and cell != Cell.EMPTY:
                    count += 1
                    if count >= CONNECT - 1:
                        return WinningLine(winner=cell, start=start, end=(col, row))
                else:
                    count = 0
                    start = (col, row)
                prev = cell
        return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self.cells, other.cells)) and bool(np.array_equal(self.heights, other.heights))

    def __repr__(self) -> str:
        return f"Board({render_board(self)!r})"


@dataclass(frozen=True)
class Move:
    ply: int
    player: Cell
    row: int
    col: int


@dataclass(frozen=True)
class TerminalResult:
    is_terminal: bool
    winner: Cell  # EMPTY for a draw or a game in progress
    reason: str


class Game:
    """
    Two named players, alternating turns and a running score tally.

    The board is the authoritative position; agents only ever see it.
    """

    def __init__(self, red_name: str = "Player 1", yellow_name: str = "Player 2") -> None:
        self.board = Board()
        self.names: Dict[Cell, str] = {Cell.RED: red_name, Cell.YELLOW: yellow_name}
        self.scores: Dict[Cell, int] = {Cell.RED: 0, Cell.YELLOW: 0}
        self.current_player = Cell.RED
        self.move_history: List[Move] = []
        self.winning_line: Optional[WinningLine] = None
        self._result: Optional[TerminalResult] = None

    @property
    def is_over(self) -> bool:
        return self._result is not None

    @property
    def last_move(self) -> Optional[Move]:
        return self.move_history[-1] if self.move_history else None

    def play(self, col: int) -> Move:
        if self.is_over:
            raise ValueError("game is over")
        if col < 0 or col >= WIDTH:
            raise ValueError("col out of range")
        row = self.board.drop(col, self.current_player)
        if row is None:
            raise ValueError("illegal move: column full")

        move = Move(ply=len(self.move_history), player=self.current_player, row=row, col=col)
        self.move_history.append(move)
        self.current_player = self.current_player.opponent
        return move

    def check_for_winner(self) -> TerminalResult:
        if self._result is not None:
            return self._result

        line = self.board.find_four()
        if line is not None:
            self.winning_line = line
            self.scores[line.winner] += 1
            self._result = TerminalResult(True, line.winner, "connect-4")
        elif self.board.is_full():
            self._result = TerminalResult(True, Cell.EMPTY, "draw")
        else:
            return TerminalResult(False, Cell.EMPTY, "in-progress")
        return self._result

    def reset(self) -> None:
        self.board.clear()
        self.move_history = []
        self.winning_line = None
        self._result = None
        # The starting side swaps whenever the total score changes parity.
        total = self.scores[Cell.RED] + self.scores[Cell.YELLOW]
        self.current_player = Cell.RED if total % 2 == 0 else Cell.YELLOW


def render_board(board: Board, *, highlight: Iterable[Coord] = ()) -> str:
    marked = set(highlight)
    lines: List[str] = []
    for row in range(HEIGHT - 1, -1, -1):
        glyphs = []
        for col in range(WIDTH):
            glyph = board.get(col, row).glyph
            if (col, row) in marked:
                glyph = f"[bold reverse]{glyph}[/]"
            glyphs.append(glyph)
        lines.append(" ".join(glyphs))
    lines.append("-" * (2 * WIDTH - 1))
    lines.append(" ".join(str(c) for c in range(WIDTH)))
    return "\n".join(lines)


def format_move_history(moves: Sequence[Move]) -> str:
    return " ".join(f"{m.ply}:{m.player.glyph}@{m.col}" for m in moves)
