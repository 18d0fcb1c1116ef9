"""
Inputs accepted by the table service.

Human actions and timer expiries are all expressed as these inputs and go
through the same queue. Each input is stamped with the generation it was
created for; a Reset starts a new generation and older inputs are dropped.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict

from tilegame.logic.enums import ClaimAction


class TableInputType(str, Enum):
    DISCARD = "discard"
    CLAIM_SUBMITTED = "claim_submitted"
    CLAIM_WINDOW_EXPIRED = "claim_window_expired"
    RESET = "reset"


class TableInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: TableInputType
    generation: int


class Discard(TableInput):
    type: Literal[TableInputType.DISCARD] = TableInputType.DISCARD
    seat: int
    tile_id: int


class ClaimSubmitted(TableInput):
    type: Literal[TableInputType.CLAIM_SUBMITTED] = TableInputType.CLAIM_SUBMITTED
    seat: int
    action: ClaimAction


class ClaimWindowExpired(TableInput):
    """Timeout for the window opened on tile_id; ignored if that window is gone."""

    type: Literal[TableInputType.CLAIM_WINDOW_EXPIRED] = TableInputType.CLAIM_WINDOW_EXPIRED
    tile_id: int
    from_seat: int


class Reset(TableInput):
    """Start a new game. Never dropped; seed None keeps the current seed."""

    type: Literal[TableInputType.RESET] = TableInputType.RESET
    generation: int = 0
    seed: str | None = None
