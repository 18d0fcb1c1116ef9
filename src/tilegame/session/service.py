"""
Serialized event session for one tile-game table.

TableService is the only owner of the live TableState. Inputs (human
discards and claims, timer expiries, resets) are queued and applied one at a
time by a single worker task, so a claim window and an autonomous decision
are never in flight together. Autonomous seats answer claim windows
immediately inside the same step; their discards are delayed by an
ActionTimer that feeds a Discard input back into the queue.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import TYPE_CHECKING

import structlog

from shared.timer import ActionTimer
from tilegame.logic.ai_player import AIPlayerController
from tilegame.logic.enums import TablePhase
from tilegame.logic.exceptions import GameRuleError
from tilegame.logic.rng import DecisionRng, generate_seed
from tilegame.logic.settings import TableSettings, validate_settings
from tilegame.logic.turn import discard_tile, expire_claim_window, start_game, submit_claim
from tilegame.session.inputs import ClaimSubmitted, ClaimWindowExpired, Discard, Reset, TableInput

if TYPE_CHECKING:
    from tilegame.logic.enums import ClaimAction
    from tilegame.logic.events import TableEvent
    from tilegame.logic.state import TableState

logger = structlog.get_logger()

EventListener = Callable[[list["TableEvent"]], None]


class TableService:
    def __init__(self, settings: TableSettings | None = None, *, seed: str | None = None) -> None:
        self._settings = settings or TableSettings()
        validate_settings(self._settings)
        self._seed = seed or generate_seed()
        self._game_number = -1
        self._generation = 0
        self._state: TableState | None = None
        self._controller: AIPlayerController | None = None
        self._queue: asyncio.Queue[TableInput] = asyncio.Queue()
        self._worker: asyncio.Task[None] | None = None
        self._discard_timer = ActionTimer()
        self._claim_timer = ActionTimer()
        self._finished = asyncio.Event()
        self._listeners: list[EventListener] = []

    @property
    def settings(self) -> TableSettings:
        return self._settings

    @property
    def state(self) -> TableState:
        if self._state is None:
            raise RuntimeError("table has not been started")
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def seed(self) -> str:
        return self._seed

    def add_listener(self, listener: EventListener) -> None:
        self._listeners.append(listener)

    async def start(self) -> None:
        """Deal the first game and start processing inputs."""
        if self._worker is not None:
            return
        self._worker = asyncio.create_task(self._run())
        self._apply_reset(Reset(generation=self._generation))

    async def stop(self) -> None:
        self._discard_timer.cancel()
        self._claim_timer.cancel()
        worker = self._worker
        self._worker = None
        if worker is not None:
            worker.cancel()
            try:
                await worker
            except asyncio.CancelledError:
                pass

    def submit(self, item: TableInput) -> None:
        self._queue.put_nowait(item)

    def discard(self, seat: int, tile_id: int) -> None:
        self.submit(Discard(generation=self._generation, seat=seat, tile_id=tile_id))

    def claim(self, seat: int, action: ClaimAction) -> None:
        self.submit(ClaimSubmitted(generation=self._generation, seat=seat, action=action))

    def reset(self, seed: str | None = None) -> None:
        self.submit(Reset(generation=self._generation, seed=seed))

    async def drain(self) -> None:
        """Wait until every queued input has been applied."""
        await self._queue.join()

    async def wait_until_finished(self) -> TableState:
        """Wait for the current game to reach a terminal state."""
        await self._finished.wait()
        return self.state

    async def _run(self) -> None:
        while True:
            item = await self._queue.get()
            try:
                self._handle(item)
            except Exception:
                logger.exception("unexpected error while applying table input", input_type=item.type)
            finally:
                self._queue.task_done()

    def _handle(self, item: TableInput) -> None:
        if isinstance(item, Reset):
            self._apply_reset(item)
            return
        if item.generation != self._generation:
            logger.info("dropping stale input", input_type=item.type, generation=item.generation)
            return

        state = self.state
        try:
            if isinstance(item, Discard):
                new_state, events = discard_tile(state, self._settings, item.seat, item.tile_id)
            elif isinstance(item, ClaimSubmitted):
                new_state, events = submit_claim(state, item.seat, item.action)
            elif isinstance(item, ClaimWindowExpired):
                window = state.claim_window
                if window is None or (window.tile_id, window.from_seat) != (item.tile_id, item.from_seat):
                    logger.debug("ignoring expiry for a closed claim window", tile_id=item.tile_id)
                    return
                new_state, events = expire_claim_window(state)
            else:
                raise TypeError(f"unknown table input {item.type}")
        except GameRuleError as e:
            logger.warning("table input rejected", input_type=item.type, error=str(e))
            return

        self._commit(new_state, events)

    def _apply_reset(self, item: Reset) -> None:
        self._discard_timer.cancel()
        self._claim_timer.cancel()
        self._finished.clear()
        if item.seed is not None:
            self._seed = item.seed
            self._game_number = -1
        self._generation += 1
        self._game_number += 1

        self._controller = AIPlayerController.for_settings(
            self._settings,
            DecisionRng(self._seed, self._game_number),
        )
        state, events = start_game(self._settings, self._seed, self._game_number)
        logger.info("table reset", generation=self._generation, game_number=self._game_number)
        self._commit(state, events)

    def _commit(self, state: TableState, events: list[TableEvent]) -> None:
        """Store state, let autonomous seats answer claim windows, then schedule timers."""
        self._discard_timer.cancel()
        self._claim_timer.cancel()
        state, events = self._settle_autonomous_claims(state, events)
        self._state = state

        for listener in self._listeners:
            listener(events)

        if state.is_finished:
            self._finished.set()
            return
        self._schedule_timers(state)

    def _settle_autonomous_claims(
        self,
        state: TableState,
        events: list[TableEvent],
    ) -> tuple[TableState, list[TableEvent]]:
        controller = self._controller
        if controller is None:
            return state, events
        while state.phase == TablePhase.CLAIM_WINDOW and state.claim_window is not None:
            answered = False
            for seat in sorted(state.claim_window.pending_seats):
                action = controller.get_claim_response(seat, state)
                if action is None:
                    continue
                state, more = submit_claim(state, seat, action)
                events = events + more
                answered = True
                break
            if not answered:
                break
        return state, events

    def _schedule_timers(self, state: TableState) -> None:
        controller = self._controller
        generation = self._generation

        if state.phase == TablePhase.AWAIT_DISCARD and controller is not None:
            seat = state.current_seat
            tile_id = controller.get_discard(seat, state)
            if tile_id is not None:
                delay = controller.get_player(seat).think_delay(self._settings)
                item = Discard(generation=generation, seat=seat, tile_id=tile_id)
                self._discard_timer.start(delay, lambda: self._enqueue(item))
            return

        window = state.claim_window
        if state.phase == TablePhase.CLAIM_WINDOW and window is not None and self._settings.claim_window_seconds:
            item = ClaimWindowExpired(generation=generation, tile_id=window.tile_id, from_seat=window.from_seat)
            self._claim_timer.start(self._settings.claim_window_seconds, lambda: self._enqueue(item))

    async def _enqueue(self, item: TableInput) -> None:
        self.submit(item)
