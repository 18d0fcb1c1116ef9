"""
Win-line detection for the connection game.

detect_win() is not a whole-board scan: it only inspects the four lines
through the cell that was just played.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gomoku.logic.board import Board, Coord, in_bounds
from gomoku.logic.settings import WIN_LENGTH

if TYPE_CHECKING:
    from gomoku.logic.enums import Stone

# horizontal, vertical, diagonal, anti-diagonal
LINE_DIRECTIONS: tuple[tuple[int, int], ...] = ((0, 1), (1, 0), (1, 1), (1, -1))


def walk_run(board: Board, row: int, col: int, dr: int, dc: int, stone: Stone) -> list[Coord]:
    """Cells of stone strictly beyond (row, col) in direction (dr, dc), nearest first."""
    cells: list[Coord] = []
    r, c = row + dr, col + dc
    while in_bounds(board, r, c) and board.cells[r][c] == stone:
        cells.append((r, c))
        r += dr
        c += dc
    return cells


def line_through(board: Board, row: int, col: int, dr: int, dc: int, stone: Stone) -> tuple[Coord, ...]:
    """The contiguous run of stone through (row, col), ordered end to end along (dr, dc)."""
    backward = walk_run(board, row, col, -dr, -dc, stone)
    forward = walk_run(board, row, col, dr, dc, stone)
    return (*reversed(backward), (row, col), *forward)


def detect_win(board: Board, row: int, col: int, stone: Stone) -> tuple[Coord, ...] | None:
    """
    Return the winning line created by stone at (row, col), or None.

    The caller must have just placed stone at (row, col). Directions are tried
    in LINE_DIRECTIONS order and the first run of WIN_LENGTH or more wins.
    """
    for dr, dc in LINE_DIRECTIONS:
        line = line_through(board, row, col, dr, dc, stone)
        if len(line) >= WIN_LENGTH:
            return line
    return None
