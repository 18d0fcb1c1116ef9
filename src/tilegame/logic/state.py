"""
Table state models for the tile game.

Every model is frozen; transitions in turn.py build new instances with
model_copy(update=...). The tile-conservation invariant is that hands,
revealed sets, discard histories and the remaining pile always hold all
136 tiles exactly once. A tile discarded into an open claim window stays in
its seat's discard history until a claim retracts it.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from tilegame.logic.enums import (
    ClaimAction,
    ClaimWindowKind,
    OutcomeKind,
    RevealedSetKind,
    TablePhase,
)
from tilegame.logic.tiles import tile_to_34
from tilegame.logic.wall import NUM_SEATS, Wall


class RevealedSet(BaseModel):
    """A triplet or quad laid face up (or a concealed quad)."""

    model_config = ConfigDict(frozen=True)

    kind: RevealedSetKind
    tile_ids: tuple[int, ...]
    from_seat: int | None = None  # seat whose discard completed the set
    is_concealed: bool = False

    @property
    def tile_34(self) -> int:
        return tile_to_34(self.tile_ids[0])


class SeatState(BaseModel):
    model_config = ConfigDict(frozen=True)

    seat: int
    name: str
    is_autonomous: bool = True
    tiles: tuple[int, ...] = ()  # concealed hand, 136-format
    revealed: tuple[RevealedSet, ...] = ()
    discards: tuple[int, ...] = ()


class ClaimOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    can_win: bool = False
    can_triplet: bool = False
    can_quad: bool = False

    @property
    def has_any(self) -> bool:
        return self.can_win or self.can_triplet or self.can_quad

    def allows(self, action: ClaimAction) -> bool:
        if action == ClaimAction.PASS:
            return True
        return {
            ClaimAction.WIN: self.can_win,
            ClaimAction.TRIPLET: self.can_triplet,
            ClaimAction.QUAD: self.can_quad,
        }[action]

    def available_actions(self) -> list[ClaimAction]:
        """Allowed actions in priority order, PASS last."""
        actions = [a for a in (ClaimAction.WIN, ClaimAction.TRIPLET, ClaimAction.QUAD) if self.allows(a)]
        actions.append(ClaimAction.PASS)
        return actions


class ClaimResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    seat: int
    action: ClaimAction


class ClaimWindow(BaseModel):
    """
    Open claim opportunity on one tile.

    DISCARD windows are offered to other seats after a discard; SELF_DRAW
    windows are offered only to the seat that just drew (win or quad).
    """

    model_config = ConfigDict(frozen=True)

    kind: ClaimWindowKind
    tile_id: int
    from_seat: int
    eligible: dict[int, ClaimOptions]
    pending_seats: frozenset[int]
    responses: tuple[ClaimResponse, ...] = ()


class DiscardRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    tile_id: int
    seat: int


class Outcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: OutcomeKind
    winner_seat: int | None = None
    winning_tile: int | None = None
    from_seat: int | None = None  # discarder for DISCARD_WIN


class TableState(BaseModel):
    model_config = ConfigDict(frozen=True)

    wall: Wall
    seats: tuple[SeatState, ...]
    current_seat: int = 0
    phase: TablePhase = TablePhase.AWAIT_DISCARD
    last_drawn: int | None = None
    last_discard: DiscardRecord | None = None
    claim_window: ClaimWindow | None = None
    outcome: Outcome | None = None
    turn_count: int = 0
    game_number: int = 0
    seed: str = ""

    @property
    def is_finished(self) -> bool:
        return self.phase == TablePhase.TERMINAL


def next_seat(seat: int) -> int:
    return (seat + 1) % NUM_SEATS


def seat_distance(from_seat: int, to_seat: int) -> int:
    """Steps in turn order from from_seat to to_seat (1 = next seat)."""
    return (to_seat - from_seat) % NUM_SEATS


def update_seat(state: TableState, seat_state: SeatState) -> TableState:
    """Return state with one seat replaced."""
    seats = tuple(seat_state if s.seat == seat_state.seat else s for s in state.seats)
    return state.model_copy(update={"seats": seats})


def count_tiles_in_play(state: TableState) -> int:
    """Hands + revealed sets + discard histories + pile; 136 in every reachable state."""
    total = len(state.wall.tiles)
    for seat in state.seats:
        total += len(seat.tiles) + len(seat.discards)
        total += sum(len(s.tile_ids) for s in seat.revealed)
    return total


def all_tile_ids(state: TableState) -> list[int]:
    """Every tile instance currently placed anywhere on the table."""
    tiles = list(state.wall.tiles)
    for seat in state.seats:
        tiles.extend(seat.tiles)
        tiles.extend(seat.discards)
        for revealed in seat.revealed:
            tiles.extend(revealed.tile_ids)
    return tiles
