"""HTTP transport for the external advisory collaborator.

The collaborator proposes a move (connection game) or a discard (tile game)
together with a free-text rationale. Nothing here interprets the payload:
callers validate it against their own board or hand. Every failure mode
(connection errors, timeouts, non-2xx responses, non-JSON bodies) collapses
to ``None`` so that advice can never block a local decision.
"""

from http import HTTPStatus
from typing import Any

import httpx
import structlog

from shared.advisory.settings import AdvisorySettings

logger = structlog.get_logger()


class AdvisoryClient:
    def __init__(
        self,
        settings: AdvisorySettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AdvisorySettings()
        self._transport = transport

    @property
    def settings(self) -> AdvisorySettings:
        return self._settings

    async def request_move(
        self,
        game_kind: str,
        serialized_board: str,
        difficulty: str | None = None,
    ) -> dict[str, Any] | None:
        """Ask for a move on a serialized board. Expected reply: {"move": "r,c", "reason": "..."}."""
        return await self._post(
            "/move",
            {
                "game_kind": game_kind,
                "board": serialized_board,
                "difficulty": difficulty or self._settings.difficulty,
            },
        )

    async def request_discard(self, tiles: list[str]) -> dict[str, Any] | None:
        """Ask which tile to discard. Expected reply: {"discard": "<tile name>", "explanation": "..."}."""
        return await self._post("/discard", {"tiles": tiles})

    async def _post(self, path: str, payload: dict[str, Any]) -> dict[str, Any] | None:
        if self._settings.base_url is None:
            return None

        url = f"{self._settings.base_url}{path}"
        async with httpx.AsyncClient(timeout=self._settings.timeout_seconds, transport=self._transport) as client:
            try:
                response = await client.post(url, json=payload)
            except httpx.HTTPError as e:
                logger.warning("advisory request failed", url=url, error=str(e))
                return None

        if response.status_code != HTTPStatus.OK:
            logger.warning("advisory request rejected", url=url, status_code=response.status_code)
            return None

        try:
            data = response.json()
        except ValueError:
            # ValueError covers JSON decode errors from non-JSON bodies
            logger.warning("advisory response is not JSON", url=url)
            return None

        if not isinstance(data, dict):
            logger.warning("advisory response is not an object", url=url)
            return None
        return data
