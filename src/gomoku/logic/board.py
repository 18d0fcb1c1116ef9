"""
Board model for the connection game.

The board is an immutable square grid of Stone values stored row-major.
The only way to obtain a board with one more stone is place_stone(), which
validates the target and returns a new Board; the input is never touched.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from gomoku.logic.enums import Stone
from gomoku.logic.exceptions import InvalidMoveError
from gomoku.logic.settings import DEFAULT_BOARD_SIZE, WIN_LENGTH

if TYPE_CHECKING:
    from collections.abc import Iterator

Coord = tuple[int, int]


class Board(BaseModel):
    """Immutable N x N grid of stones."""

    model_config = ConfigDict(frozen=True)

    size: int = Field(default=DEFAULT_BOARD_SIZE, ge=WIN_LENGTH)
    cells: tuple[tuple[Stone, ...], ...] = ()


def create_board(size: int = DEFAULT_BOARD_SIZE) -> Board:
    """Create an empty size x size board."""
    if size < WIN_LENGTH:
        raise ValueError(f"board size must be at least {WIN_LENGTH}, got {size}")
    row = tuple(Stone.EMPTY for _ in range(size))
    return Board(size=size, cells=tuple(row for _ in range(size)))


def board_from_rows(rows: list[str]) -> Board:
    """
    Build a board from text rows using the serialized symbols (B, W, .).

    Used by tests and by the advisory layer to reason about textual boards.
    """
    symbols = {stone.symbol: stone for stone in Stone}
    size = len(rows)
    cells: list[tuple[Stone, ...]] = []
    for r, text in enumerate(rows):
        if len(text) != size:
            raise ValueError(f"row {r} has length {len(text)}, expected {size}")
        try:
            cells.append(tuple(symbols[ch] for ch in text))
        except KeyError as e:
            raise ValueError(f"unknown cell symbol {e.args[0]!r} in row {r}") from None
    if size < WIN_LENGTH:
        raise ValueError(f"board size must be at least {WIN_LENGTH}, got {size}")
    return Board(size=size, cells=tuple(cells))


def in_bounds(board: Board, row: int, col: int) -> bool:
    return 0 <= row < board.size and 0 <= col < board.size


def get_cell(board: Board, row: int, col: int) -> Stone:
    if not in_bounds(board, row, col):
        raise InvalidMoveError(f"cell ({row}, {col}) is outside the {board.size}x{board.size} board")
    return board.cells[row][col]


def is_empty_cell(board: Board, row: int, col: int) -> bool:
    """True for an in-bounds, unoccupied cell. Out-of-range cells are never empty."""
    return in_bounds(board, row, col) and board.cells[row][col] == Stone.EMPTY


def place_stone(board: Board, row: int, col: int, stone: Stone) -> Board:
    """
    Return a new board with stone placed at (row, col).

    Raises InvalidMoveError if the cell is out of range or occupied, or if
    stone is EMPTY. The target is never corrected to another cell.
    """
    if stone == Stone.EMPTY:
        raise InvalidMoveError("cannot place an empty stone")
    if get_cell(board, row, col) != Stone.EMPTY:
        raise InvalidMoveError(f"cell ({row}, {col}) is already occupied")

    new_row = tuple(stone if c == col else cell for c, cell in enumerate(board.cells[row]))
    cells = (*board.cells[:row], new_row, *board.cells[row + 1 :])
    return board.model_copy(update={"cells": cells})


def iter_cells(board: Board) -> Iterator[tuple[int, int, Stone]]:
    for r, row in enumerate(board.cells):
        for c, cell in enumerate(row):
            yield r, c, cell


def empty_cells(board: Board) -> list[Coord]:
    """All empty cells in row-major order."""
    return [(r, c) for r, c, cell in iter_cells(board) if cell == Stone.EMPTY]


def is_board_empty(board: Board) -> bool:
    return all(cell == Stone.EMPTY for _, _, cell in iter_cells(board))


def is_board_full(board: Board) -> bool:
    return all(cell != Stone.EMPTY for _, _, cell in iter_cells(board))


def board_center(board: Board) -> Coord:
    middle = board.size // 2
    return middle, middle


def count_stones(board: Board, stone: Stone) -> int:
    return sum(1 for _, _, cell in iter_cells(board) if cell == stone)


def serialize_board(board: Board) -> str:
    """Render rows of B/W/. joined by newlines (the advisory wire form)."""
    return "\n".join("".join(cell.symbol for cell in row) for row in board.cells)
