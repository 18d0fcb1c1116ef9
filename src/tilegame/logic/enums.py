"""
String enum definitions for tile-game concepts.
"""

from enum import Enum


class TablePhase(str, Enum):
    AWAIT_DISCARD = "await_discard"
    CLAIM_WINDOW = "claim_window"
    TERMINAL = "terminal"


class ClaimWindowKind(str, Enum):
    """DISCARD windows follow another seat's discard; SELF_DRAW follows the seat's own draw."""

    DISCARD = "discard"
    SELF_DRAW = "self_draw"


class ClaimAction(str, Enum):
    WIN = "win"
    TRIPLET = "triplet"
    QUAD = "quad"
    PASS = "pass"  # noqa: S105


class RevealedSetKind(str, Enum):
    TRIPLET = "triplet"
    QUAD = "quad"


class OutcomeKind(str, Enum):
    SELF_DRAWN_WIN = "self_drawn_win"
    DISCARD_WIN = "discard_win"
    DRAWN_OUT = "drawn_out"


class AIPlayerStrategy(str, Enum):
    """How an autonomous seat picks discards and claims."""

    RANDOM = "random"
    SHANTEN = "shanten"


# lower value wins when several seats claim the same discard
CLAIM_PRIORITY: dict[ClaimAction, int] = {
    ClaimAction.WIN: 0,
    ClaimAction.TRIPLET: 1,
    ClaimAction.QUAD: 2,
}
