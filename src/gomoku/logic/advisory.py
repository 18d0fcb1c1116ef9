"""
Advisory move collaborator for the automated opponent.

The collaborator only ever proposes: it returns free-text move coordinates
and a rationale, and the move selector decides whether to use them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

import structlog
from pydantic import BaseModel, ConfigDict

from gomoku.logic.enums import Difficulty

if TYPE_CHECKING:
    from shared.advisory.client import AdvisoryClient

logger = structlog.get_logger()

GAME_KIND = "gomoku"


class MoveAdviceRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    game_kind: str = GAME_KIND
    serialized_board: str
    difficulty: Difficulty = Difficulty.HARD


class MoveAdvice(BaseModel):
    """Raw suggestion. move_text is expected to hold two integers but is not trusted."""

    model_config = ConfigDict(frozen=True)

    move_text: str
    rationale: str = ""


class MoveAdvisor(Protocol):
    async def advise(self, request: MoveAdviceRequest) -> MoveAdvice | None: ...


class HttpMoveAdvisor:
    """MoveAdvisor backed by the shared advisory HTTP client."""

    def __init__(self, client: AdvisoryClient) -> None:
        self._client = client

    async def advise(self, request: MoveAdviceRequest) -> MoveAdvice | None:
        data = await self._client.request_move(
            request.game_kind,
            request.serialized_board,
            request.difficulty.value,
        )
        if data is None:
            return None

        move = data.get("move")
        if not isinstance(move, str) or not move.strip():
            logger.warning("advisory move missing or not text", move=move)
            return None
        reason = data.get("reason")
        return MoveAdvice(move_text=move, rationale=reason if isinstance(reason, str) else "")
