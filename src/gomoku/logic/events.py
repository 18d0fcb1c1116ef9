"""
Typed events emitted by connection-game transitions.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel

from gomoku.logic.enums import MoveSource, Stone


class GomokuEventType(str, Enum):
    STONE_PLACED = "stone_placed"
    GAME_OVER = "game_over"


class GomokuEvent(BaseModel):
    type: GomokuEventType


class StonePlacedEvent(GomokuEvent):
    """A stone landed on the board."""

    type: Literal[GomokuEventType.STONE_PLACED] = GomokuEventType.STONE_PLACED
    stone: Stone
    row: int
    col: int
    source: MoveSource | None = None
    rationale: str = ""


class GameOverEvent(GomokuEvent):
    """The game ended. winner is None for a full-board draw."""

    type: Literal[GomokuEventType.GAME_OVER] = GomokuEventType.GAME_OVER
    winner: Stone | None
    win_line: list[tuple[int, int]] = []
