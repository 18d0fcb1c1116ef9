"""Connection-game settings."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from gomoku.logic.enums import Difficulty, GameMode, Stone
from gomoku.logic.exceptions import UnsupportedSettingsError

WIN_LENGTH = 5
DEFAULT_BOARD_SIZE = 13


class GomokuSettings(BaseModel):
    """
    Configuration for one connection-game session.

    Defaults reproduce the hub's versus-AI game: 13x13 board, the automated
    opponent plays WHITE, and an automated turn never lands sooner than 0.4s
    after it was requested.
    """

    model_config = ConfigDict(frozen=True)

    board_size: int = Field(default=DEFAULT_BOARD_SIZE, ge=WIN_LENGTH)
    mode: GameMode = GameMode.VERSUS_AI
    ai_stone: Stone = Stone.WHITE
    difficulty: Difficulty = Difficulty.HARD

    # pacing of the automated opponent (presentation policy, not correctness)
    min_ai_turn_seconds: float = Field(default=0.4, ge=0)
    advisory_timeout_seconds: float = Field(default=1.0, gt=0)


def validate_settings(settings: GomokuSettings) -> None:
    """Raise UnsupportedSettingsError for settings the engine cannot play."""
    errors: list[str] = []

    if settings.ai_stone == Stone.EMPTY:
        errors.append("ai_stone=EMPTY is not a side")

    if settings.board_size % 2 == 0:
        errors.append(f"board_size={settings.board_size} has no exact center cell (must be odd)")

    if errors:
        raise UnsupportedSettingsError("; ".join(errors))
