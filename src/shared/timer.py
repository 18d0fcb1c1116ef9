"""
Cancellable one-shot delay used to pace automated turns.

Timers never mutate game state themselves. On expiry they run a callback
that feeds an ordinary input (a discard, a claim-window expiry, an opponent
move) back into the owning session, so the engines stay timer-free.
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING

import structlog

logger = structlog.get_logger()

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


class ActionTimer:
    """
    Hold at most one pending delayed callback.

    Starting a new delay cancels the previous one, and cancel() guarantees
    the pending callback will not run.
    """

    def __init__(self) -> None:
        self._active_task: asyncio.Task[None] | None = None
        self._deadline: float | None = None

    @property
    def is_pending(self) -> bool:
        return self._active_task is not None and not self._active_task.done()

    @property
    def remaining(self) -> float:
        """Seconds until the pending callback fires, 0 when idle."""
        if self._deadline is None or not self.is_pending:
            return 0.0
        return max(0.0, self._deadline - time.monotonic())

    def start(self, seconds: float, on_expire: Callable[[], Awaitable[None]]) -> None:
        """Schedule on_expire after the given delay, replacing any pending one."""
        self.cancel()
        self._deadline = time.monotonic() + max(0.0, seconds)
        self._active_task = asyncio.create_task(self._run(max(0.0, seconds), on_expire))

    def cancel(self) -> None:
        if self._active_task is not None and not self._active_task.done():
            self._active_task.cancel()
        self._active_task = None
        self._deadline = None

    async def _run(self, seconds: float, on_expire: Callable[[], Awaitable[None]]) -> None:
        try:
            await asyncio.sleep(seconds)
            await on_expire()
        except asyncio.CancelledError:
            pass
        except Exception:
            logger.exception("timer callback failed")
