"""
Unit tests for TableService: serialized inputs, autonomous pacing and resets.
"""

import asyncio

import pytest

from tilegame.logic.enums import ClaimAction, TablePhase
from tilegame.logic.events import DiscardEvent
from tilegame.logic.settings import TableSettings
from tilegame.logic.state import all_tile_ids, count_tiles_in_play
from tilegame.logic.turn import discard_tile
from tilegame.session.inputs import ClaimWindowExpired, Discard
from tilegame.session.service import TableService
from tilegame.tests.unit.helpers import FIXED_SEED, TileAllocator, make_table, of_type

ALL_AI = TableSettings(human_seat=None, think_delay_seconds=0, think_jitter_seconds=0)
SLOW_AI = TableSettings(think_delay_seconds=30, think_jitter_seconds=0)


async def _started(settings, seed=FIXED_SEED):
    service = TableService(settings, seed=seed)
    await service.start()
    return service


class TestStart:
    async def test_state_requires_start(self):
        service = TableService(seed=FIXED_SEED)
        with pytest.raises(RuntimeError, match="not been started"):
            service.state  # noqa: B018

    async def test_start_deals_first_game(self):
        service = await _started(SLOW_AI)
        try:
            assert service.generation == 1
            assert service.state.game_number == 0
            assert service.state.current_seat == 0
            assert count_tiles_in_play(service.state) == 136
        finally:
            await service.stop()


class TestAutonomousGame:
    async def test_all_autonomous_game_runs_to_the_end(self):
        service = await _started(ALL_AI)
        try:
            state = await asyncio.wait_for(service.wait_until_finished(), timeout=10)
            assert state.is_finished
            assert state.outcome is not None
            assert count_tiles_in_play(state) == 136
        finally:
            await service.stop()

    async def test_same_seed_replays_same_game(self):
        outcomes = []
        for _ in range(2):
            service = await _started(ALL_AI)
            try:
                state = await asyncio.wait_for(service.wait_until_finished(), timeout=10)
                outcomes.append((state.outcome, state.turn_count, [s.discards for s in state.seats]))
            finally:
                await service.stop()
        assert outcomes[0] == outcomes[1]

    async def test_listeners_see_discards(self):
        seen = []
        service = TableService(ALL_AI, seed=FIXED_SEED)
        service.add_listener(seen.extend)
        await service.start()
        try:
            await asyncio.wait_for(service.wait_until_finished(), timeout=10)
        finally:
            await service.stop()
        assert any(isinstance(e, DiscardEvent) for e in seen)


class TestHumanInput:
    async def test_human_discard_hands_turn_to_next_seat(self):
        service = await _started(SLOW_AI)
        try:
            tile_id = service.state.seats[0].tiles[0]
            service.discard(0, tile_id)
            await service.drain()
            assert service.state.seats[0].discards == (tile_id,)
            assert service.state.current_seat == 1
            assert service._discard_timer.is_pending
        finally:
            await service.stop()

    async def test_rejected_input_keeps_state(self):
        service = await _started(SLOW_AI)
        try:
            before = service.state
            service.discard(2, service.state.seats[2].tiles[0])
            service.claim(0, ClaimAction.WIN)
            await service.drain()
            assert service.state is before
        finally:
            await service.stop()

    async def test_autonomous_discard_arrives_after_delay(self):
        settings = TableSettings(think_delay_seconds=0.01, think_jitter_seconds=0)
        service = await _started(settings)
        try:
            service.discard(0, service.state.seats[0].tiles[0])
            await service.drain()
            await asyncio.sleep(0.1)
            await service.drain()
            assert len(service.state.seats[1].discards) == 1 or service.state.is_finished
        finally:
            await service.stop()


class TestReset:
    async def test_reset_starts_next_game(self):
        service = await _started(SLOW_AI)
        try:
            service.discard(0, service.state.seats[0].tiles[0])
            await service.drain()
            first = service.state
            assert first.seats[0].discards
            service.reset()
            await service.drain()
            assert service.generation == 2
            assert service.state.game_number == 1
            assert service.state != first
            assert count_tiles_in_play(service.state) == 136
            assert sorted(all_tile_ids(service.state)) == list(range(136))
            assert all(seat.discards == () for seat in service.state.seats)
        finally:
            await service.stop()

    async def test_reset_with_new_seed_restarts_numbering(self):
        service = await _started(SLOW_AI)
        try:
            service.reset(seed="cd" * 96)
            await service.drain()
            assert service.seed == "cd" * 96
            assert service.state.game_number == 0
        finally:
            await service.stop()

    async def test_stale_input_dropped(self):
        service = await _started(SLOW_AI)
        try:
            old_generation = service.generation
            tile_id = service.state.seats[0].tiles[0]
            service.reset()
            await service.drain()
            service.submit(Discard(generation=old_generation, seat=0, tile_id=tile_id))
            await service.drain()
            assert service.state.seats[0].discards == ()
        finally:
            await service.stop()

    async def test_reset_cancels_pending_autonomous_discard(self):
        service = await _started(SLOW_AI)
        try:
            service.discard(0, service.state.seats[0].tiles[0])
            await service.drain()
            assert service._discard_timer.is_pending
            service.reset()
            await service.drain()
            assert not service._discard_timer.is_pending
            assert service.state.current_seat == 0
        finally:
            await service.stop()


class TestClaimWindowTimer:
    @staticmethod
    def _window_table():
        allocator = TileAllocator()
        human = allocator.take(man="1357", pin="55", sou="13579", honors="12")
        seat1 = allocator.take(pin="5", man="2468", sou="2468", honors="33346")
        state = make_table(allocator, {0: human, 1: seat1}, draw_order=allocator.take(honors="77"), current_seat=1)
        return state, of_type(seat1, "5p")[0]

    async def test_window_expires_into_pass(self):
        settings = TableSettings(claim_window_seconds=0.01, think_delay_seconds=30, think_jitter_seconds=0)
        service = await _started(settings)
        try:
            state, five = self._window_table()
            state, events = discard_tile(state, settings, 1, five)
            assert state.phase == TablePhase.CLAIM_WINDOW
            service._commit(state, events)
            assert service._claim_timer.is_pending

            await asyncio.sleep(0.1)
            await service.drain()
            assert service.state.claim_window is None
            assert service.state.current_seat == 2
            assert service.state.seats[0].revealed == ()
        finally:
            await service.stop()

    async def test_claim_before_expiry_wins_the_race(self):
        settings = TableSettings(claim_window_seconds=0.05, think_delay_seconds=30, think_jitter_seconds=0)
        service = await _started(settings)
        try:
            state, five = self._window_table()
            state, events = discard_tile(state, settings, 1, five)
            service._commit(state, events)
            service.claim(0, ClaimAction.TRIPLET)
            await service.drain()
            assert not service._claim_timer.is_pending
            assert service.state.seats[0].revealed[0].from_seat == 1

            # a late expiry for the closed window changes nothing
            before = service.state
            service.submit(ClaimWindowExpired(generation=service.generation, tile_id=five, from_seat=1))
            await service.drain()
            assert service.state is before
        finally:
            await service.stop()
