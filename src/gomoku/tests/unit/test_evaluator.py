"""
Unit tests for the single-ply cell evaluator.
"""

import pytest

from gomoku.logic.board import empty_cells
from gomoku.logic.enums import Stone
from gomoku.logic.evaluator import FIVE_SCORE, evaluate_cell, measure_run, pattern_score
from gomoku.logic.exceptions import InvalidMoveError
from gomoku.tests.unit.helpers import make_board, swap_sides


class TestPatternScore:
    @pytest.mark.parametrize(
        ("length", "open_ends", "offense", "defense"),
        [
            (5, 0, 100000, 100000),
            (6, 2, 100000, 100000),
            (4, 1, 10000, 9000),
            (4, 2, 10000, 9000),
            (3, 2, 1000, 8000),
            (3, 1, 500, 400),
            (2, 2, 100, 50),
        ],
    )
    def test_tier_table(self, length, open_ends, offense, defense):
        assert pattern_score(length, open_ends, is_defense=False) == offense
        assert pattern_score(length, open_ends, is_defense=True) == defense

    @pytest.mark.parametrize(("length", "open_ends"), [(4, 0), (3, 0), (2, 1), (2, 0), (1, 2), (1, 0)])
    def test_fallback_is_run_times_ten(self, length, open_ends):
        assert pattern_score(length, open_ends, is_defense=False) == length * 10
        assert pattern_score(length, open_ends, is_defense=True) == length * 10

    def test_blocking_open_three_beats_own_open_three(self):
        assert pattern_score(3, 2, is_defense=True) > pattern_score(3, 2, is_defense=False)


class TestMeasureRun:
    def test_open_run(self):
        board = make_board(black=[(6, 5), (6, 6), (6, 7)])
        assert measure_run(board, 6, 4, 0, 1, Stone.BLACK) == (4, 2)

    def test_blocked_end(self):
        board = make_board(black=[(6, 5), (6, 6)], white=[(6, 7)])
        assert measure_run(board, 6, 4, 0, 1, Stone.BLACK) == (3, 1)

    def test_board_edge_is_not_open(self):
        board = make_board(black=[(0, 1), (0, 2)])
        assert measure_run(board, 0, 0, 0, 1, Stone.BLACK) == (3, 1)

    def test_other_side_does_not_count(self):
        board = make_board(white=[(6, 5)])
        assert measure_run(board, 6, 4, 0, 1, Stone.BLACK) == (1, 1)


class TestEvaluateCell:
    def test_lone_cell_scores_ten_per_side_per_direction(self):
        board = make_board()
        assert evaluate_cell(board, 6, 6, Stone.BLACK) == 80
        assert evaluate_cell(board, 0, 0, Stone.WHITE) == 80

    def test_completing_five_scores_five(self):
        board = make_board(white=[(3, c) for c in range(1, 5)])
        assert evaluate_cell(board, 3, 5, Stone.WHITE) >= FIVE_SCORE

    def test_blocking_open_three_reaches_urgent_tier(self):
        board = make_board(white=[(6, 5), (6, 6), (6, 7)])
        assert evaluate_cell(board, 6, 4, Stone.BLACK) >= 9000

    def test_occupied_cell_rejected(self):
        board = make_board(black=[(2, 2)])
        with pytest.raises(InvalidMoveError):
            evaluate_cell(board, 2, 2, Stone.WHITE)

    def test_out_of_range_rejected(self):
        with pytest.raises(InvalidMoveError):
            evaluate_cell(make_board(), 13, 0, Stone.WHITE)

    def test_symmetric_under_side_swap(self):
        board = make_board(
            black=[(6, 6), (6, 7), (7, 7), (5, 8)],
            white=[(6, 5), (8, 8), (4, 9), (7, 6)],
        )
        swapped = swap_sides(board)
        for row, col in empty_cells(board):
            assert evaluate_cell(board, row, col, Stone.BLACK) == evaluate_cell(swapped, row, col, Stone.WHITE)

    def test_does_not_modify_board(self):
        board = make_board(black=[(6, 6)])
        before = board.model_copy()
        evaluate_cell(board, 6, 7, Stone.WHITE)
        assert board == before
