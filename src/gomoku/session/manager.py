"""
Connection-game session with an optional automated opponent.

The session owns the only mutable reference to the current game state.
Engine calls receive immutable snapshots; the session commits their results.
At most one opponent turn is in flight, and reset() cancels it.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import TYPE_CHECKING

import structlog

from gomoku.logic.advisory import MoveAdviceRequest
from gomoku.logic.board import serialize_board
from gomoku.logic.enums import GameMode
from gomoku.logic.exceptions import GameRuleError
from gomoku.logic.game import GomokuGameState, apply_move, new_game
from gomoku.logic.move_selector import MoveDecision, choose_move
from gomoku.logic.settings import GomokuSettings, validate_settings

if TYPE_CHECKING:
    from gomoku.logic.advisory import MoveAdvice, MoveAdvisor
    from gomoku.logic.events import GomokuEvent

logger = structlog.get_logger()

EventListener = Callable[[list["GomokuEvent"]], None]


class GomokuSession:
    """
    Drive one connection game between a human and either a second human
    (LOCAL_TWO_PLAYER) or the automated opponent (VERSUS_AI).

    Human input goes through play(). Rule violations are logged and ignored
    here so a stray click never corrupts the game.
    """

    def __init__(
        self,
        settings: GomokuSettings | None = None,
        advisor: MoveAdvisor | None = None,
    ) -> None:
        self._settings = settings or GomokuSettings()
        validate_settings(self._settings)
        self._advisor = advisor
        self._state = new_game(self._settings.board_size)
        self._generation = 0
        self._opponent_task: asyncio.Task[None] | None = None
        self._last_decision: MoveDecision | None = None
        self._listeners: list[EventListener] = []

    @property
    def settings(self) -> GomokuSettings:
        return self._settings

    @property
    def state(self) -> GomokuGameState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def last_decision(self) -> MoveDecision | None:
        """The most recent automated move, including any advisory rationale."""
        return self._last_decision

    @property
    def is_thinking(self) -> bool:
        return self._opponent_task is not None and not self._opponent_task.done()

    def add_listener(self, listener: EventListener) -> None:
        self._listeners.append(listener)

    def start(self) -> None:
        """Kick off the opponent if it moves first."""
        self._maybe_schedule_opponent()

    def play(self, row: int, col: int) -> bool:
        """
        Apply a human move. Returns True if the move was applied.

        Rejected while the opponent is thinking, when it is the opponent's
        turn, or when the engine refuses the move.
        """
        if self._is_opponent_turn() or self.is_thinking:
            logger.warning("move ignored, not the human's turn", row=row, col=col, turn=self._state.turn)
            return False
        if not self._commit_move(row, col):
            return False
        self._maybe_schedule_opponent()
        return True

    async def wait_for_opponent(self) -> None:
        """Wait until the in-flight opponent turn (if any) has been applied."""
        task = self._opponent_task
        if task is not None and not task.done():
            await task

    def reset(self) -> None:
        """Start a fresh game; an in-flight opponent turn is cancelled and its result dropped."""
        if self._opponent_task is not None and not self._opponent_task.done():
            self._opponent_task.cancel()
        self._opponent_task = None
        self._generation += 1
        self._state = new_game(self._settings.board_size)
        self._last_decision = None
        logger.info("game reset", generation=self._generation)
        self._maybe_schedule_opponent()

    async def close(self) -> None:
        task = self._opponent_task
        self._opponent_task = None
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

    def _is_opponent_turn(self) -> bool:
        return (
            self._settings.mode == GameMode.VERSUS_AI
            and not self._state.is_finished
            and self._state.turn == self._settings.ai_stone
        )

    def _maybe_schedule_opponent(self) -> None:
        if self._is_opponent_turn() and not self.is_thinking:
            self._opponent_task = asyncio.create_task(self._run_opponent_turn(self._generation))

    def _commit_move(self, row: int, col: int) -> bool:
        try:
            self._state, events = apply_move(self._state, row, col)
        except GameRuleError as e:
            logger.warning("move rejected", row=row, col=col, error=str(e))
            return False
        for listener in self._listeners:
            listener(events)
        return True

    async def _run_opponent_turn(self, generation: int) -> None:
        try:
            await self._play_opponent_turn(generation)
        except Exception:
            logger.exception("opponent turn failed", generation=generation)

    async def _play_opponent_turn(self, generation: int) -> None:
        loop = asyncio.get_running_loop()
        started = loop.time()
        snapshot = self._state

        advice = await self._fetch_advice(snapshot)
        decision = choose_move(snapshot.board, self._settings.ai_stone, advice)

        remaining = self._settings.min_ai_turn_seconds - (loop.time() - started)
        if remaining > 0:
            await asyncio.sleep(remaining)

        if generation != self._generation or self._state is not snapshot:
            logger.info("dropping stale opponent move", generation=generation, current=self._generation)
            return

        self._last_decision = decision
        logger.debug(
            "opponent move chosen",
            row=decision.row,
            col=decision.col,
            source=decision.source,
            local_score=decision.local_score,
        )
        self._commit_move(decision.row, decision.col)

    async def _fetch_advice(self, snapshot: GomokuGameState) -> MoveAdvice | None:
        if self._advisor is None:
            return None
        request = MoveAdviceRequest(
            serialized_board=serialize_board(snapshot.board),
            difficulty=self._settings.difficulty,
        )
        try:
            return await asyncio.wait_for(
                self._advisor.advise(request),
                timeout=self._settings.advisory_timeout_seconds,
            )
        except TimeoutError:
            logger.warning("advisory timed out", timeout=self._settings.advisory_timeout_seconds)
        except Exception:
            logger.exception("advisory failed, using local move")
        return None
