"""Room-join pairing supplied to the games by the lobby flow.

The join-by-code flow is simulated locally: a host is handed a random
3-digit code, a guest types one in. The engines only ever see the resulting
(code, role) pairing and never depend on how it was transported.
"""

from __future__ import annotations

import random
import re

from pydantic import BaseModel, ConfigDict, Field

ROOM_CODE_LENGTH = 3
ROOM_CODE_MIN = 100
ROOM_CODE_MAX = 999

_ROOM_CODE_RE = re.compile(rf"^\d{{{ROOM_CODE_LENGTH}}}$")


class InvalidRoomCodeError(ValueError):
    """Room code is not a 3-digit numeric string."""


class RoomPairing(BaseModel):
    """Outcome of creating or joining a room."""

    model_config = ConfigDict(frozen=True)

    room_code: str = Field(pattern=r"^\d{3}$")
    is_host: bool


def generate_room_code(rng: random.Random | None = None) -> str:
    """Pick a code in 100-999 so it never has a leading zero."""
    rng = rng or random.Random()  # noqa: S311
    return str(rng.randint(ROOM_CODE_MIN, ROOM_CODE_MAX))


def create_room(rng: random.Random | None = None) -> RoomPairing:
    return RoomPairing(room_code=generate_room_code(rng), is_host=True)


def join_room(code: str) -> RoomPairing:
    """Validate a typed-in code and pair the caller as a guest."""
    normalized = code.strip()
    if not _ROOM_CODE_RE.match(normalized):
        raise InvalidRoomCodeError(f"room code must be {ROOM_CODE_LENGTH} digits, got {code!r}")
    return RoomPairing(room_code=normalized, is_host=False)
