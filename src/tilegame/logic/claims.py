"""
Claim detection and arbitration.

Detection answers what a seat may claim on a tile. Arbitration picks the
single claim that takes effect when several seats respond to one discard:
win beats triplet beats quad, and between equal claims the seat closer in
turn order after the discarder wins. Submission order never matters.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tilegame.logic.enums import CLAIM_PRIORITY, ClaimAction, RevealedSetKind
from tilegame.logic.hand import can_win_with, is_winning_hand
from tilegame.logic.state import ClaimOptions, ClaimResponse, ClaimWindow, SeatState, seat_distance
from tilegame.logic.tiles import tile_to_34

if TYPE_CHECKING:
    from tilegame.logic.state import RevealedSet


def count_of_type(tiles: tuple[int, ...] | list[int], tile_34: int) -> int:
    return sum(1 for t in tiles if tile_to_34(t) == tile_34)


def find_discard_claim_options(seat_state: SeatState, tile_id: int) -> ClaimOptions:
    """What seat_state may claim on another seat's discard."""
    copies = count_of_type(seat_state.tiles, tile_to_34(tile_id))
    return ClaimOptions(
        can_win=can_win_with(seat_state.tiles, tile_id),
        can_triplet=copies >= 2,  # noqa: PLR2004
        can_quad=copies == 3,  # noqa: PLR2004
    )


def find_revealed_triplet(seat_state: SeatState, tile_34: int) -> RevealedSet | None:
    for revealed in seat_state.revealed:
        if revealed.kind == RevealedSetKind.TRIPLET and revealed.tile_34 == tile_34:
            return revealed
    return None


def find_self_draw_options(seat_state: SeatState, drawn_tile: int) -> ClaimOptions:
    """
    What the drawing seat may declare on its own draw.

    The hand already contains drawn_tile. A quad is available when the hand
    holds all four copies of the drawn tile (concealed quad) or the drawn
    tile matches one of the seat's revealed triplets (added quad).
    """
    tile_34 = tile_to_34(drawn_tile)
    can_quad = (
        count_of_type(seat_state.tiles, tile_34) == 4  # noqa: PLR2004
        or find_revealed_triplet(seat_state, tile_34) is not None
    )
    return ClaimOptions(can_win=is_winning_hand(seat_state.tiles), can_quad=can_quad)


def claim_sort_key(response: ClaimResponse, from_seat: int) -> tuple[int, int]:
    return CLAIM_PRIORITY[response.action], seat_distance(from_seat, response.seat)


def pick_winning_claim(window: ClaimWindow) -> ClaimResponse | None:
    """Highest-priority non-pass response, or None when every seat passed."""
    claims = [r for r in window.responses if r.action != ClaimAction.PASS]
    if not claims:
        return None
    return min(claims, key=lambda r: claim_sort_key(r, window.from_seat))
