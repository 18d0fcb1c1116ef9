"""
Typed events emitted by tile-game transitions.

Events describe what changed; listeners of the table session receive them
in the order the transitions produced them.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel

from tilegame.logic.enums import ClaimWindowKind, RevealedSetKind
from tilegame.logic.state import ClaimOptions, Outcome


class TableEventType(str, Enum):
    DRAW = "draw"
    DISCARD = "discard"
    CLAIM_WINDOW = "claim_window"
    REVEAL = "reveal"
    GAME_END = "game_end"


class TableEvent(BaseModel):
    type: TableEventType


class DrawEvent(TableEvent):
    """A seat drew a tile; is_supplementary marks the draw after a quad."""

    type: Literal[TableEventType.DRAW] = TableEventType.DRAW
    seat: int
    tile_id: int
    is_supplementary: bool = False


class DiscardEvent(TableEvent):
    type: Literal[TableEventType.DISCARD] = TableEventType.DISCARD
    seat: int
    tile_id: int


class ClaimWindowEvent(TableEvent):
    """A claim window opened; eligible maps seat to what it may claim."""

    type: Literal[TableEventType.CLAIM_WINDOW] = TableEventType.CLAIM_WINDOW
    kind: ClaimWindowKind
    tile_id: int
    from_seat: int
    eligible: dict[int, ClaimOptions]


class RevealEvent(TableEvent):
    type: Literal[TableEventType.REVEAL] = TableEventType.REVEAL
    seat: int
    kind: RevealedSetKind
    tile_ids: list[int]
    from_seat: int | None = None
    is_concealed: bool = False
    is_added: bool = False  # quad built on an existing revealed triplet


class GameEndEvent(TableEvent):
    type: Literal[TableEventType.GAME_END] = TableEventType.GAME_END
    outcome: Outcome
