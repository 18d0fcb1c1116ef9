"""
Connection-game state and the single move transition.

Side A (BLACK) moves first and the sides alternate. A move that completes a
line of five ends the game; a move that fills the last empty cell without a
line ends it in a draw.
"""

from __future__ import annotations

import structlog
from pydantic import BaseModel, ConfigDict

from gomoku.logic.board import Board, Coord, create_board, is_board_full, place_stone
from gomoku.logic.enums import GamePhase, Stone
from gomoku.logic.events import GameOverEvent, GomokuEvent, StonePlacedEvent
from gomoku.logic.exceptions import GameFinishedError
from gomoku.logic.settings import DEFAULT_BOARD_SIZE
from gomoku.logic.win import detect_win

logger = structlog.get_logger()


class GomokuGameState(BaseModel):
    model_config = ConfigDict(frozen=True)

    board: Board
    turn: Stone = Stone.BLACK
    phase: GamePhase = GamePhase.IN_PROGRESS
    winner: Stone | None = None
    win_line: tuple[Coord, ...] = ()
    last_move: Coord | None = None
    move_count: int = 0

    @property
    def is_finished(self) -> bool:
        return self.phase == GamePhase.FINISHED


def new_game(board_size: int = DEFAULT_BOARD_SIZE) -> GomokuGameState:
    return GomokuGameState(board=create_board(board_size))


def apply_move(state: GomokuGameState, row: int, col: int) -> tuple[GomokuGameState, list[GomokuEvent]]:
    """
    Place a stone for the side to move.

    Returns the new state and the events produced. Raises GameFinishedError
    after a terminal outcome and InvalidMoveError for an out-of-range or
    occupied cell; in both cases state is unchanged.
    """
    if state.is_finished:
        raise GameFinishedError("game is over, reset to play again")

    stone = state.turn
    board = place_stone(state.board, row, col, stone)
    events: list[GomokuEvent] = [StonePlacedEvent(stone=stone, row=row, col=col)]
    update: dict[str, object] = {
        "board": board,
        "last_move": (row, col),
        "move_count": state.move_count + 1,
    }

    line = detect_win(board, row, col, stone)
    if line is not None:
        update.update(phase=GamePhase.FINISHED, winner=stone, win_line=line)
        events.append(GameOverEvent(winner=stone, win_line=list(line)))
        logger.info("game won", winner=stone, moves=state.move_count + 1)
    elif is_board_full(board):
        update["phase"] = GamePhase.FINISHED
        events.append(GameOverEvent(winner=None))
        logger.info("game drawn on a full board", moves=state.move_count + 1)
    else:
        update["turn"] = stone.opponent

    return state.model_copy(update=update), events
