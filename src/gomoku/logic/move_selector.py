"""
Move selection for the automated opponent.

find_best_move() runs the evaluator over every empty cell. choose_move()
optionally substitutes an advisory suggestion, but only when the board holds
no urgent threat or winning chance for the local engine to act on.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import structlog
from pydantic import BaseModel, ConfigDict

from gomoku.logic.board import Board, Coord, board_center, empty_cells, is_board_empty, is_empty_cell
from gomoku.logic.enums import MoveSource, Stone
from gomoku.logic.evaluator import evaluate_cell

if TYPE_CHECKING:
    from gomoku.logic.advisory import MoveAdvice

logger = structlog.get_logger()

# local best at or above this is a win, a four, or an open three to block
URGENT_SCORE_THRESHOLD = 8000

# a minus sign directly after a digit is a separator, as in "7-8"
_INT_RE = re.compile(r"(?<!\d)-?\d+")


class ScoredMove(BaseModel):
    model_config = ConfigDict(frozen=True)

    row: int
    col: int
    score: int

    @property
    def coord(self) -> Coord:
        return self.row, self.col


class MoveDecision(BaseModel):
    """Final automated move, with where it came from."""

    model_config = ConfigDict(frozen=True)

    row: int
    col: int
    local_score: int
    source: MoveSource = MoveSource.LOCAL
    rationale: str = ""

    @property
    def coord(self) -> Coord:
        return self.row, self.col


def _center_distance(coord: Coord, center: Coord) -> int:
    return abs(coord[0] - center[0]) + abs(coord[1] - center[1])


def find_best_move(board: Board, mover: Stone) -> ScoredMove:
    """
    Pick the highest-scoring empty cell for mover.

    An empty board yields the exact center. Equal scores prefer the cell
    closer to the center (Manhattan distance), then the first cell in
    row-major order. Raises ValueError on a full board.
    """
    center = board_center(board)
    if is_board_empty(board):
        return ScoredMove(row=center[0], col=center[1], score=0)

    candidates = empty_cells(board)
    if not candidates:
        raise ValueError("no empty cell left to play")

    best: Coord = candidates[0]
    best_score = -1
    for coord in candidates:
        score = evaluate_cell(board, coord[0], coord[1], mover)
        if score > best_score or (
            score == best_score and _center_distance(coord, center) < _center_distance(best, center)
        ):
            best = coord
            best_score = score
    return ScoredMove(row=best[0], col=best[1], score=best_score)


def parse_advisory_move(text: str, board: Board) -> Coord | None:
    """
    Extract (row, col) from free text such as "7,8" or "row 7 col 8".

    Only the first two integers count. Returns None when fewer than two are
    present or the target is out of range or occupied.
    """
    numbers = _INT_RE.findall(text)
    if len(numbers) < 2:
        return None
    row, col = int(numbers[0]), int(numbers[1])
    if not is_empty_cell(board, row, col):
        return None
    return row, col


def choose_move(board: Board, mover: Stone, advice: MoveAdvice | None = None) -> MoveDecision:
    """Combine the local best move with an optional advisory suggestion."""
    local = find_best_move(board, mover)
    decision = MoveDecision(row=local.row, col=local.col, local_score=local.score)
    if advice is None:
        return decision

    rationale = advice.rationale
    if local.score >= URGENT_SCORE_THRESHOLD:
        logger.debug("advisory overridden by urgent local move", local_score=local.score, row=local.row, col=local.col)
        return decision.model_copy(update={"rationale": rationale})

    target = parse_advisory_move(advice.move_text, board)
    if target is None:
        logger.info("advisory move unusable", move_text=advice.move_text)
        return decision.model_copy(update={"rationale": rationale})

    return decision.model_copy(
        update={"row": target[0], "col": target[1], "source": MoveSource.ADVISORY, "rationale": rationale},
    )
