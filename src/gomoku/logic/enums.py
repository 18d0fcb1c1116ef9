"""
String enum definitions for connection-game concepts.
"""

from __future__ import annotations

from enum import Enum


class Stone(str, Enum):
    """Cell state. BLACK is side A and always moves first."""

    EMPTY = "empty"
    BLACK = "black"
    WHITE = "white"

    @property
    def opponent(self) -> Stone:
        if self is Stone.EMPTY:
            raise ValueError("empty cell has no opponent")
        return Stone.WHITE if self is Stone.BLACK else Stone.BLACK

    @property
    def symbol(self) -> str:
        return _STONE_SYMBOLS[self]


_STONE_SYMBOLS: dict[Stone, str] = {
    Stone.EMPTY: ".",
    Stone.BLACK: "B",
    Stone.WHITE: "W",
}


class GamePhase(str, Enum):
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class GameMode(str, Enum):
    """Who controls the second side."""

    VERSUS_AI = "versus_ai"
    LOCAL_TWO_PLAYER = "local_two_player"


class MoveSource(str, Enum):
    """Which component picked an automated move."""

    LOCAL = "local"
    ADVISORY = "advisory"


class Difficulty(str, Enum):
    """Difficulty tier forwarded to the advisory collaborator."""

    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"
