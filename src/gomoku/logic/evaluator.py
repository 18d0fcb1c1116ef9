"""
Single-ply heuristic evaluator for candidate cells.

Each empty cell is scored by the runs a stone placed there would extend, for
the mover (offense) and for the opponent (defense, i.e. the value of
blocking). The tier table weights blocking an opponent's open three above
any offensive pattern short of four.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gomoku.logic.board import Board, get_cell, in_bounds
from gomoku.logic.enums import Stone
from gomoku.logic.exceptions import InvalidMoveError
from gomoku.logic.settings import WIN_LENGTH
from gomoku.logic.win import LINE_DIRECTIONS, walk_run

if TYPE_CHECKING:
    from gomoku.logic.board import Coord

FIVE_SCORE = 100000

# scores for run length 4 (any open end), open 3, half-open 3, open 2
OFFENSE_TIERS = (10000, 1000, 500, 100)
DEFENSE_TIERS = (9000, 8000, 400, 50)


def pattern_score(length: int, open_ends: int, *, is_defense: bool) -> int:
    """Map a (run length, open ends) pattern onto the tier table."""
    if length >= WIN_LENGTH:
        return FIVE_SCORE
    four, open_three, half_three, open_two = DEFENSE_TIERS if is_defense else OFFENSE_TIERS
    if length == 4 and open_ends >= 1:
        return four
    if length == 3 and open_ends == 2:
        return open_three
    if length == 3 and open_ends == 1:
        return half_three
    if length == 2 and open_ends == 2:
        return open_two
    return length * 10


def _is_open_end(board: Board, coord: Coord) -> bool:
    r, c = coord
    return in_bounds(board, r, c) and board.cells[r][c] == Stone.EMPTY


def measure_run(board: Board, row: int, col: int, dr: int, dc: int, stone: Stone) -> tuple[int, int]:
    """
    Measure the run stone would have through (row, col) along one direction.

    Returns (length, open_ends) where length counts the hypothetical stone
    itself and open_ends is how many of the two cells just past the run are
    empty and in bounds.
    """
    length = 1
    open_ends = 0
    for sign in (1, -1):
        run = walk_run(board, row, col, sign * dr, sign * dc, stone)
        length += len(run)
        last_r, last_c = run[-1] if run else (row, col)
        if _is_open_end(board, (last_r + sign * dr, last_c + sign * dc)):
            open_ends += 1
    return length, open_ends


def evaluate_cell(board: Board, row: int, col: int, mover: Stone) -> int:
    """
    Score placing mover's stone on the empty cell (row, col).

    Sums, over the four line directions, the offensive score of mover's run
    and the defensive score of the opponent's run through the same cell.
    Raises InvalidMoveError if the cell is out of range or occupied.
    """
    if get_cell(board, row, col) != Stone.EMPTY:
        raise InvalidMoveError(f"cell ({row}, {col}) is occupied and cannot be evaluated")

    opponent = mover.opponent
    total = 0
    for dr, dc in LINE_DIRECTIONS:
        own_length, own_open = measure_run(board, row, col, dr, dc, mover)
        opp_length, opp_open = measure_run(board, row, col, dr, dc, opponent)
        total += pattern_score(own_length, own_open, is_defense=False)
        total += pattern_score(opp_length, opp_open, is_defense=True)
    return total
