"""
Turn and claim state machine for the tile game.

Every transition is a pure function taking a TableState and returning
(new_state, events). Invalid input raises a GameRuleError subclass and
leaves the input state untouched; the caller simply keeps the old state.

Phases:
- AWAIT_DISCARD: current_seat holds a full hand and must discard.
- CLAIM_WINDOW: a DISCARD window (other seats may claim the discard) or a
  SELF_DRAW window (the seat that just drew may declare a win or a quad).
- TERMINAL: a win or an exhausted pile; no further transition is accepted.
"""

from __future__ import annotations

import structlog

from tilegame.logic.claims import (
    count_of_type,
    find_discard_claim_options,
    find_revealed_triplet,
    find_self_draw_options,
    pick_winning_claim,
)
from tilegame.logic.enums import (
    ClaimAction,
    ClaimWindowKind,
    OutcomeKind,
    RevealedSetKind,
    TablePhase,
)
from tilegame.logic.events import (
    ClaimWindowEvent,
    DiscardEvent,
    DrawEvent,
    GameEndEvent,
    RevealEvent,
    TableEvent,
)
from tilegame.logic.exceptions import (
    GameFinishedError,
    InvalidActionError,
    InvalidClaimError,
    InvalidDiscardError,
)
from tilegame.logic.rng import generate_seed
from tilegame.logic.settings import TableSettings, validate_settings
from tilegame.logic.state import (
    ClaimOptions,
    ClaimResponse,
    ClaimWindow,
    DiscardRecord,
    Outcome,
    RevealedSet,
    SeatState,
    TableState,
    next_seat,
    update_seat,
)
from tilegame.logic.tiles import sort_tiles, tile_to_34
from tilegame.logic.wall import NUM_SEATS, Wall, create_wall, deal_initial_hands, draw_tile

logger = structlog.get_logger()

DEALER_SEAT = 0


def _ensure_in_progress(state: TableState) -> None:
    if state.is_finished:
        raise GameFinishedError("game is over, reset to play again")


def _claim_eligible_seats(settings: TableSettings, discarder: int) -> list[int]:
    """Seats offered a claim on discarder's tile, in turn order after the discarder."""
    others = [(discarder + offset) % NUM_SEATS for offset in range(1, NUM_SEATS)]
    if settings.contested_discard_claims:
        return others
    return [seat for seat in others if seat == settings.human_seat]


def start_game(
    settings: TableSettings,
    seed: str | None = None,
    game_number: int = 0,
    wall: Wall | None = None,
) -> tuple[TableState, list[TableEvent]]:
    """
    Shuffle, deal 13 tiles to each seat and let the dealer draw.

    An explicit wall overrides the seeded shuffle (tests and replays).
    """
    validate_settings(settings)
    seed = seed or generate_seed()
    if wall is None:
        wall = create_wall(seed, game_number)
    wall, hands = deal_initial_hands(wall, DEALER_SEAT)

    seats = tuple(
        SeatState(
            seat=seat,
            name=settings.seat_names[seat],
            is_autonomous=seat != settings.human_seat,
            tiles=tuple(hands[seat]),
        )
        for seat in range(NUM_SEATS)
    )
    state = TableState(wall=wall, seats=seats, current_seat=DEALER_SEAT, game_number=game_number, seed=seed)
    logger.info("game started", game_number=game_number, human_seat=settings.human_seat)
    return process_draw_phase(state)


def process_draw_phase(state: TableState, *, is_supplementary: bool = False) -> tuple[TableState, list[TableEvent]]:
    """
    Draw one tile for current_seat.

    An exhausted pile ends the game drawn out. If the drawn tile makes a win
    or a quad available, a SELF_DRAW window opens for the drawing seat only.
    """
    _ensure_in_progress(state)
    seat = state.current_seat
    wall, tile = draw_tile(state.wall)
    if tile is None:
        outcome = Outcome(kind=OutcomeKind.DRAWN_OUT)
        logger.info("pile exhausted, game drawn out", turn_count=state.turn_count)
        new_state = state.model_copy(
            update={"phase": TablePhase.TERMINAL, "outcome": outcome, "claim_window": None, "last_drawn": None},
        )
        return new_state, [GameEndEvent(outcome=outcome)]

    seat_state = state.seats[seat]
    seat_state = seat_state.model_copy(update={"tiles": (*seat_state.tiles, tile)})
    new_state = update_seat(state, seat_state).model_copy(
        update={
            "wall": wall,
            "last_drawn": tile,
            "last_discard": None,
            "claim_window": None,
            "phase": TablePhase.AWAIT_DISCARD,
            "turn_count": state.turn_count + 1,
        },
    )
    events: list[TableEvent] = [DrawEvent(seat=seat, tile_id=tile, is_supplementary=is_supplementary)]

    options = find_self_draw_options(seat_state, tile)
    if options.has_any:
        window = ClaimWindow(
            kind=ClaimWindowKind.SELF_DRAW,
            tile_id=tile,
            from_seat=seat,
            eligible={seat: options},
            pending_seats=frozenset({seat}),
        )
        new_state = new_state.model_copy(update={"phase": TablePhase.CLAIM_WINDOW, "claim_window": window})
        events.append(ClaimWindowEvent(kind=window.kind, tile_id=tile, from_seat=seat, eligible=window.eligible))
    return new_state, events


def discard_tile(
    state: TableState,
    settings: TableSettings,
    seat: int,
    tile_id: int,
) -> tuple[TableState, list[TableEvent]]:
    """
    Discard tile_id from seat's hand.

    Only the current seat may discard, only a tile it holds. Discarding while
    the seat's own SELF_DRAW window is open declines that window. If another
    seat may claim the tile a DISCARD window opens; otherwise the next seat
    draws.
    """
    _ensure_in_progress(state)
    window = state.claim_window
    if state.phase == TablePhase.CLAIM_WINDOW:
        if window is None or window.kind != ClaimWindowKind.SELF_DRAW or window.from_seat != seat:
            raise InvalidDiscardError(f"seat {seat} cannot discard while a claim window is open")
    elif state.phase != TablePhase.AWAIT_DISCARD:
        raise InvalidDiscardError(f"cannot discard in phase {state.phase.value}")
    if seat != state.current_seat:
        raise InvalidDiscardError(f"seat {seat} is not the current seat ({state.current_seat})")

    seat_state = state.seats[seat]
    if tile_id not in seat_state.tiles:
        raise InvalidDiscardError(f"tile {tile_id} is not in seat {seat}'s hand")

    hand = list(seat_state.tiles)
    hand.remove(tile_id)
    seat_state = seat_state.model_copy(
        update={"tiles": tuple(sort_tiles(hand)), "discards": (*seat_state.discards, tile_id)},
    )
    new_state = update_seat(state, seat_state).model_copy(
        update={
            "phase": TablePhase.AWAIT_DISCARD,
            "claim_window": None,
            "last_drawn": None,
            "last_discard": DiscardRecord(tile_id=tile_id, seat=seat),
        },
    )
    events: list[TableEvent] = [DiscardEvent(seat=seat, tile_id=tile_id)]

    eligible: dict[int, ClaimOptions] = {}
    for other in _claim_eligible_seats(settings, seat):
        options = find_discard_claim_options(new_state.seats[other], tile_id)
        if options.has_any:
            eligible[other] = options

    if not eligible:
        new_state, draw_events = _advance_after(new_state, seat)
        return new_state, events + draw_events

    window = ClaimWindow(
        kind=ClaimWindowKind.DISCARD,
        tile_id=tile_id,
        from_seat=seat,
        eligible=eligible,
        pending_seats=frozenset(eligible),
    )
    new_state = new_state.model_copy(update={"phase": TablePhase.CLAIM_WINDOW, "claim_window": window})
    events.append(ClaimWindowEvent(kind=window.kind, tile_id=tile_id, from_seat=seat, eligible=eligible))
    logger.debug("claim window opened", tile_id=tile_id, from_seat=seat, eligible=sorted(eligible))
    return new_state, events


def submit_claim(state: TableState, seat: int, action: ClaimAction) -> tuple[TableState, list[TableEvent]]:
    """
    Record seat's answer to the open claim window.

    A SELF_DRAW window is answered by its single seat and acts at once. A
    DISCARD window resolves once every eligible seat has answered.
    """
    _ensure_in_progress(state)
    window = state.claim_window
    if state.phase != TablePhase.CLAIM_WINDOW or window is None:
        raise InvalidActionError("no claim window is open")
    if seat not in window.pending_seats:
        raise InvalidClaimError(f"seat {seat} has no pending claim on tile {window.tile_id}")
    if not window.eligible[seat].allows(action):
        raise InvalidClaimError(f"seat {seat} cannot claim {action.value} on tile {window.tile_id}")

    if window.kind == ClaimWindowKind.SELF_DRAW:
        return _resolve_self_draw(state, window, action)

    window = window.model_copy(
        update={
            "pending_seats": window.pending_seats - {seat},
            "responses": (*window.responses, ClaimResponse(seat=seat, action=action)),
        },
    )
    new_state = state.model_copy(update={"claim_window": window})
    if window.pending_seats:
        return new_state, []
    return _resolve_discard_window(new_state, window)


def expire_claim_window(state: TableState) -> tuple[TableState, list[TableEvent]]:
    """Close the open window; every seat that has not answered passes."""
    _ensure_in_progress(state)
    window = state.claim_window
    if state.phase != TablePhase.CLAIM_WINDOW or window is None:
        raise InvalidActionError("no claim window is open")

    if window.kind == ClaimWindowKind.SELF_DRAW:
        return _resolve_self_draw(state, window, ClaimAction.PASS)

    passes = tuple(ClaimResponse(seat=s, action=ClaimAction.PASS) for s in sorted(window.pending_seats))
    window = window.model_copy(update={"pending_seats": frozenset(), "responses": window.responses + passes})
    return _resolve_discard_window(state.model_copy(update={"claim_window": window}), window)


def _advance_after(state: TableState, seat: int) -> tuple[TableState, list[TableEvent]]:
    """Hand the turn to the seat after seat and let it draw."""
    new_state = state.model_copy(
        update={"current_seat": next_seat(seat), "phase": TablePhase.AWAIT_DISCARD, "claim_window": None},
    )
    return process_draw_phase(new_state)


def _take_from_hand(tiles: tuple[int, ...], tile_34: int, count: int) -> tuple[tuple[int, ...], list[int]]:
    """Remove count tiles of type tile_34 (lowest ids first); returns (remaining, taken)."""
    taken = [t for t in sort_tiles(tiles) if tile_to_34(t) == tile_34][:count]
    remaining = list(tiles)
    for t in taken:
        remaining.remove(t)
    return tuple(remaining), taken


def _retract_discard(seat_state: SeatState, tile_id: int) -> SeatState:
    """Remove the claimed tile from the end of the discarder's history."""
    if not seat_state.discards or seat_state.discards[-1] != tile_id:
        raise InvalidClaimError(f"tile {tile_id} is not seat {seat_state.seat}'s last discard")
    return seat_state.model_copy(update={"discards": seat_state.discards[:-1]})


def _finish_with_win(state: TableState, outcome: Outcome) -> tuple[TableState, list[TableEvent]]:
    logger.info("game won", winner_seat=outcome.winner_seat, kind=outcome.kind, tile_id=outcome.winning_tile)
    new_state = state.model_copy(
        update={"phase": TablePhase.TERMINAL, "outcome": outcome, "claim_window": None},
    )
    return new_state, [GameEndEvent(outcome=outcome)]


def _resolve_self_draw(
    state: TableState,
    window: ClaimWindow,
    action: ClaimAction,
) -> tuple[TableState, list[TableEvent]]:
    seat = window.from_seat
    if action == ClaimAction.WIN:
        return _finish_with_win(
            state,
            Outcome(kind=OutcomeKind.SELF_DRAWN_WIN, winner_seat=seat, winning_tile=window.tile_id),
        )

    if action == ClaimAction.PASS:
        new_state = state.model_copy(update={"phase": TablePhase.AWAIT_DISCARD, "claim_window": None})
        return new_state, []

    # QUAD: concealed if all four copies are in hand, otherwise added to a revealed triplet
    seat_state = state.seats[seat]
    tile_34 = tile_to_34(window.tile_id)
    if count_of_type(seat_state.tiles, tile_34) == 4:  # noqa: PLR2004
        remaining, taken = _take_from_hand(seat_state.tiles, tile_34, 4)
        revealed = RevealedSet(kind=RevealedSetKind.QUAD, tile_ids=tuple(taken), is_concealed=True)
        seat_state = seat_state.model_copy(update={"tiles": remaining, "revealed": (*seat_state.revealed, revealed)})
        event = RevealEvent(seat=seat, kind=revealed.kind, tile_ids=taken, is_concealed=True)
    else:
        triplet = find_revealed_triplet(seat_state, tile_34)
        if triplet is None:
            raise InvalidClaimError(f"seat {seat} has no quad on tile {window.tile_id}")
        remaining, taken = _take_from_hand(seat_state.tiles, tile_34, 1)
        revealed = triplet.model_copy(
            update={"kind": RevealedSetKind.QUAD, "tile_ids": (*triplet.tile_ids, *taken)},
        )
        sets = tuple(revealed if s is triplet else s for s in seat_state.revealed)
        seat_state = seat_state.model_copy(update={"tiles": remaining, "revealed": sets})
        event = RevealEvent(
            seat=seat,
            kind=revealed.kind,
            tile_ids=list(revealed.tile_ids),
            from_seat=revealed.from_seat,
            is_added=True,
        )

    new_state = update_seat(state, seat_state).model_copy(update={"claim_window": None})
    logger.debug("quad declared on own draw", seat=seat, tile_id=window.tile_id, added=event.is_added)
    new_state, draw_events = process_draw_phase(new_state, is_supplementary=True)
    return new_state, [event, *draw_events]


def _resolve_discard_window(state: TableState, window: ClaimWindow) -> tuple[TableState, list[TableEvent]]:
    """Apply the winning claim on a discard, or move on when everyone passed."""
    best = pick_winning_claim(window)
    if best is None:
        logger.debug("all seats passed", tile_id=window.tile_id, from_seat=window.from_seat)
        return _advance_after(state, window.from_seat)

    discarder = _retract_discard(state.seats[window.from_seat], window.tile_id)
    new_state = update_seat(state, discarder)
    claimer = new_state.seats[best.seat]

    if best.action == ClaimAction.WIN:
        claimer = claimer.model_copy(update={"tiles": (*claimer.tiles, window.tile_id)})
        return _finish_with_win(
            update_seat(new_state, claimer),
            Outcome(
                kind=OutcomeKind.DISCARD_WIN,
                winner_seat=best.seat,
                winning_tile=window.tile_id,
                from_seat=window.from_seat,
            ),
        )

    is_quad = best.action == ClaimAction.QUAD
    remaining, taken = _take_from_hand(claimer.tiles, tile_to_34(window.tile_id), 3 if is_quad else 2)
    revealed = RevealedSet(
        kind=RevealedSetKind.QUAD if is_quad else RevealedSetKind.TRIPLET,
        tile_ids=tuple(sort_tiles([*taken, window.tile_id])),
        from_seat=window.from_seat,
    )
    claimer = claimer.model_copy(update={"tiles": remaining, "revealed": (*claimer.revealed, revealed)})
    new_state = update_seat(new_state, claimer).model_copy(
        update={
            "current_seat": best.seat,
            "phase": TablePhase.AWAIT_DISCARD,
            "claim_window": None,
            "last_discard": None,
        },
    )
    events: list[TableEvent] = [
        RevealEvent(seat=best.seat, kind=revealed.kind, tile_ids=list(revealed.tile_ids), from_seat=window.from_seat),
    ]
    logger.debug("claim resolved", seat=best.seat, action=best.action, tile_id=window.tile_id)

    if is_quad:
        new_state, draw_events = process_draw_phase(new_state, is_supplementary=True)
        events.extend(draw_events)
    return new_state, events
