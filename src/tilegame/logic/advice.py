"""
Advisory discard recommendation for the single-player table.

The collaborator sees readable tile names and answers with a tile name and
an explanation. Its answer is only used when it names a tile actually in
hand; on any failure the first tile in hand is recommended.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, Protocol

import structlog
from pydantic import BaseModel, ConfigDict

from tilegame.logic.tiles import parse_tile_name, tile_name, tile_to_34

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = structlog.get_logger()

FALLBACK_RATIONALE = "No advice available, discarding the first tile."
DEFAULT_TIMEOUT_SECONDS = 5.0


class DiscardAdvisor(Protocol):
    async def request_discard(self, tiles: list[str]) -> dict[str, Any] | None: ...


class DiscardRecommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    tile_id: int
    rationale: str
    is_fallback: bool = False


async def recommend_discard(
    tiles: Sequence[int],
    advisor: DiscardAdvisor | None,
    *,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
) -> DiscardRecommendation:
    """Ask the advisor which tile to discard, falling back to the first tile."""
    if not tiles:
        raise ValueError("cannot recommend a discard from an empty hand")

    fallback = DiscardRecommendation(tile_id=tiles[0], rationale=FALLBACK_RATIONALE, is_fallback=True)
    if advisor is None:
        return fallback

    try:
        data = await asyncio.wait_for(advisor.request_discard([tile_name(t) for t in tiles]), timeout=timeout_seconds)
    except TimeoutError:
        logger.warning("advisory discard timed out", timeout=timeout_seconds)
        return fallback
    except Exception:
        logger.exception("advisory discard failed, using first tile")
        return fallback

    if data is None:
        return fallback

    name = data.get("discard")
    if not isinstance(name, str):
        logger.warning("advisory discard missing", payload_keys=sorted(data))
        return fallback
    try:
        tile_34 = parse_tile_name(name)
    except ValueError:
        logger.warning("advisory discard is not a tile name", discard=name)
        return fallback

    tile_id = next((t for t in tiles if tile_to_34(t) == tile_34), None)
    if tile_id is None:
        logger.warning("advisory discard is not in hand", discard=name)
        return fallback

    explanation = data.get("explanation")
    return DiscardRecommendation(tile_id=tile_id, rationale=explanation if isinstance(explanation, str) else "")
