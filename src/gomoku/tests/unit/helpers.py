"""Board builders shared by connection-game tests."""

from gomoku.logic.board import Board, Coord, create_board, place_stone
from gomoku.logic.enums import Stone


def make_board(
    black: list[Coord] | None = None,
    white: list[Coord] | None = None,
    size: int = 13,
) -> Board:
    """Create a board with the given stones placed (order does not matter)."""
    board = create_board(size)
    for row, col in black or []:
        board = place_stone(board, row, col, Stone.BLACK)
    for row, col in white or []:
        board = place_stone(board, row, col, Stone.WHITE)
    return board


def swap_sides(board: Board) -> Board:
    """Same position with BLACK and WHITE exchanged."""
    swapped = {Stone.BLACK: Stone.WHITE, Stone.WHITE: Stone.BLACK, Stone.EMPTY: Stone.EMPTY}
    cells = tuple(tuple(swapped[cell] for cell in row) for row in board.cells)
    return board.model_copy(update={"cells": cells})
