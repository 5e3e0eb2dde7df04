"""Static evaluation: run-based line scoring summed over every line of the board."""

from __future__ import annotations

from typing import List, Optional, Sequence

from connect4bot.config import Weights
from connect4bot.engine import HEIGHT, LINES, WIDTH, Board, Cell

Grid = Sequence[Sequence[int]]  # grid[row][col], as produced by Board.cells.tolist()


def _at(grid: Grid, col: int, row: int) -> Optional[int]:
    # Off-board cells are neither empty nor owned by anyone.
    if 0 <= col < WIDTH and 0 <= row < HEIGHT:
        return grid[row][col]
    return None


def _gap_bonus(grid: Grid, owner: int, col: int, row: int, dcol: int, drow: int, three: float) -> float:
    # (col, row) is the far piece of a gapped pattern; look further out along (dcol, drow).
    bonus = three
    if _at(grid, col + dcol, row + drow) == owner:
        bonus /= 2
        if _at(grid, col + 2 * dcol, row + 2 * drow) == owner:
            bonus = 0.0
    return bonus


def score_run(
    grid: Grid,
    owner: int,
    count: int,
    col: int,
    row: int,
    dcol: int,
    drow: int,
    *,
    me: Cell,
    weights: Weights,
) -> float:
    """
    Rate one run of `owner` pieces that just ended at (col, row).

    `count` is the number of repeats after the first piece, so a run of four
    pieces has count == 3. (col, row) is the cell right after the run along
    (dcol, drow); it may be off the board.

    - count >= 3: four in a row, +/- the win threshold
    - count == 2: three in a row, one `three` per open end
    - count == 1: two in a row, a `three` bonus for each gapped pattern
      (".XX.X") and `two` per pair of open cells otherwise
    """

    sign = 1.0 if owner == me else -1.0

    if count >= 3:
        return sign * weights.win_threshold

    if count == 2:
        n = 0
        if _at(grid, col - 4 * dcol, row - 4 * drow) == Cell.EMPTY:
            n += 1
        if _at(grid, col, row) == Cell.EMPTY:
            n += 1
        return sign * n * weights.three

    if count == 1:
        rating = 0.0
        n = 0

        # Behind the pair.
        if _at(grid, col - 3 * dcol, row - 3 * drow) == Cell.EMPTY:
            n += 1
            beyond = _at(grid, col - 4 * dcol, row - 4 * drow)
            if beyond == owner:
                rating += _gap_bonus(grid, owner, col - 4 * dcol, row - 4 * drow, -dcol, -drow, weights.three)
                n = 0
            elif beyond == Cell.EMPTY:
                n += 1

        # Ahead of the pair.
        if _at(grid, col, row) == Cell.EMPTY:
            n += 1
            beyond = _at(grid, col + dcol, row + drow)
            if beyond == owner:
                rating += _gap_bonus(grid, owner, col + dcol, row + drow, dcol, drow, weights.three)
                n = 0
            elif beyond == Cell.EMPTY:
                n += 1

        rating += (n // 2) * weights.two
        return sign * rating

    return 0.0


def rate_board(board: Board, me: Cell, weights: Weights) -> float:
    """
    Sum the run scores of every line, from `me`'s point of view.

    A four-in-a-row anywhere ends the scan: its +/- win threshold is returned
    as is and nothing else on the board matters.
    """

    grid: List[List[int]] = board.cells.tolist()
    threshold = weights.win_threshold
    rating = 0.0

    for cells, (dcol, drow) in LINES:
        prev = Cell.EMPTY
        count = 0
        for col, row in cells:
            cell = grid[row][col]
            if cell == prev and cell != Cell.EMPTY:
                count += 1
                continue
            if count:
                temp = score_run(grid, prev, count, col, row, dcol, drow, me=me, weights=weights)
                if abs(temp) >= threshold:
                    return temp
                rating += temp
                count = 0
            prev = cell

        if count:
            col, row = cells[-1]
            temp = score_run(grid, prev, count, col + dcol, row + drow, dcol, drow, me=me, weights=weights)
            if abs(temp) >= threshold:
                return temp
            rating += temp

    return rating
