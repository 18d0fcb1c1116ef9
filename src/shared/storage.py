"""Storage for the dice-roll history log.

The free-dice game keeps an append-only history of rolls per session, where
each roll is the ordered list of die faces. Only the most recent
MAX_ROLL_HISTORY rolls are retained. History files are rewritten atomically
via temp-file-then-rename so a crash never leaves a half-written log.
"""

import contextlib
import json
import os
import re
import tempfile
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

import structlog

logger = structlog.get_logger()

MAX_ROLL_HISTORY = 500
MIN_DIE_FACE = 1
MAX_DIE_FACE = 6

_SESSION_KEY_RE = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def append_roll(history: Sequence[Sequence[int]], roll: Sequence[int]) -> list[list[int]]:
    """Return a new history with roll appended, truncated to the most recent rolls."""
    if not roll:
        raise ValueError("roll must contain at least one die")
    if any(not MIN_DIE_FACE <= face <= MAX_DIE_FACE for face in roll):
        raise ValueError(f"die faces must be in [{MIN_DIE_FACE}, {MAX_DIE_FACE}], got {list(roll)}")
    updated = [list(r) for r in history]
    updated.append(list(roll))
    return updated[-MAX_ROLL_HISTORY:]


class RollHistoryStorage(Protocol):
    """Protocol for persisting per-session roll history."""

    def load_history(self, session_key: str) -> list[list[int]]: ...

    def save_history(self, session_key: str, history: Sequence[Sequence[int]]) -> None: ...


class LocalRollHistoryStorage:
    """Keeps one JSON file per session key under a directory."""

    def __init__(self, history_dir: str | Path) -> None:
        self._history_dir = Path(history_dir).resolve()

    def _path_for(self, session_key: str) -> Path:
        if not _SESSION_KEY_RE.match(session_key):
            raise ValueError(f"invalid session key {session_key!r}")
        return self._history_dir / f"{session_key}.json"

    def load_history(self, session_key: str) -> list[list[int]]:
        """Load history for a session; missing or corrupt files yield an empty history."""
        path = self._path_for(session_key)
        if not path.is_file():
            return []
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("unreadable roll history, starting fresh", session_key=session_key)
            return []
        if not isinstance(data, list) or not all(isinstance(r, list) for r in data):
            logger.warning("malformed roll history, starting fresh", session_key=session_key)
            return []
        return [list(r) for r in data][-MAX_ROLL_HISTORY:]

    def save_history(self, session_key: str, history: Sequence[Sequence[int]]) -> None:
        target = self._path_for(session_key)
        self._history_dir.mkdir(parents=True, exist_ok=True)
        content = json.dumps([list(r) for r in history][-MAX_ROLL_HISTORY:])

        fd, tmp_path = tempfile.mkstemp(dir=str(self._history_dir), suffix=".tmp", prefix=".rolls_")
        fd_owned = True
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                fd_owned = False  # os.fdopen took ownership; it will close fd
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            Path(tmp_path).replace(target)
        except BaseException:
            if fd_owned:
                with contextlib.suppress(OSError):
                    os.close(fd)
            with contextlib.suppress(OSError):
                Path(tmp_path).unlink()
            raise
        logger.debug("saved roll history", session_key=session_key, rolls=len(history))

    def record_roll(self, session_key: str, roll: Sequence[int]) -> list[list[int]]:
        """Append one roll to the stored history and persist it."""
        history = append_roll(self.load_history(session_key), roll)
        self.save_history(session_key, history)
        return history
