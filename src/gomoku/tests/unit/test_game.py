import pytest

from gomoku.logic.board import board_from_rows, get_cell
from gomoku.logic.enums import GamePhase, Stone
from gomoku.logic.events import GameOverEvent, StonePlacedEvent
from gomoku.logic.exceptions import GameFinishedError, InvalidMoveError
from gomoku.logic.game import GomokuGameState, apply_move, new_game


def _play(state: GomokuGameState, moves: list[tuple[int, int]]) -> GomokuGameState:
    for row, col in moves:
        state, _ = apply_move(state, row, col)
    return state


class TestApplyMove:
    def test_black_moves_first_and_sides_alternate(self):
        state = new_game()
        assert state.turn == Stone.BLACK
        state, events = apply_move(state, 6, 6)
        assert get_cell(state.board, 6, 6) == Stone.BLACK
        assert state.turn == Stone.WHITE
        assert state.last_move == (6, 6)
        assert state.move_count == 1
        assert events == [StonePlacedEvent(stone=Stone.BLACK, row=6, col=6)]

    def test_input_state_unchanged(self):
        state = new_game()
        apply_move(state, 0, 0)
        assert get_cell(state.board, 0, 0) == Stone.EMPTY
        assert state.move_count == 0

    def test_occupied_cell_rejected_without_mutation(self):
        state = _play(new_game(), [(6, 6)])
        with pytest.raises(InvalidMoveError):
            apply_move(state, 6, 6)
        assert state.turn == Stone.WHITE
        assert state.move_count == 1

    def test_five_in_a_row_wins(self):
        # black builds row 0, white answers on row 1
        moves = [(0, 0), (1, 0), (0, 1), (1, 1), (0, 2), (1, 2), (0, 3), (1, 3)]
        state = _play(new_game(), moves)
        state, events = apply_move(state, 0, 4)
        assert state.phase == GamePhase.FINISHED
        assert state.winner == Stone.BLACK
        assert state.win_line == ((0, 0), (0, 1), (0, 2), (0, 3), (0, 4))
        assert isinstance(events[-1], GameOverEvent)
        assert events[-1].winner == Stone.BLACK

    def test_moves_after_win_rejected(self):
        moves = [(0, 0), (1, 0), (0, 1), (1, 1), (0, 2), (1, 2), (0, 3), (1, 3), (0, 4)]
        state = _play(new_game(), moves)
        with pytest.raises(GameFinishedError):
            apply_move(state, 5, 5)

    def test_full_board_is_a_draw(self):
        board = board_from_rows(["BBWWB", "WWBBW", "BBWWB", "WWBBW", "BBWW."])
        state = GomokuGameState(board=board, turn=Stone.BLACK, move_count=24)
        state, events = apply_move(state, 4, 4)
        assert state.phase == GamePhase.FINISHED
        assert state.winner is None
        assert events[-1] == GameOverEvent(winner=None)
