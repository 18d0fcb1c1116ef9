"""
Deterministic randomness for the draw pile and autonomous seats.

Every random choice in a game comes from a hex seed:
- the draw pile for game N is a Fisher-Yates shuffle driven by a PCG64DXSM
  stream derived from SHA-512(wall prefix + seed + N);
- autonomous seat decisions (random discards, think delays) come from a
  second stream derived the same way under a different prefix, so replaying
  a seed replays the whole game.
"""

import hashlib
import secrets
from collections.abc import Sequence
from typing import TypeVar

from tilegame.logic.tiles import TOTAL_TILES

T = TypeVar("T")

SEED_BYTES = 96  # 768 bits, more than log2(136!) so every pile order is reachable
_WALL_DOMAIN = b"tilehub-wall-v1:"
_DECISION_DOMAIN = b"tilehub-decisions-v1:"

_PCG_MULTIPLIER = 0x2360ED051FC65DA44385DF649FCCF645
_PCG_DXSM_MUL = 0xDA942042E4DD58B5
_UINT128_MASK = (1 << 128) - 1
_UINT64_MASK = (1 << 64) - 1


def validate_seed_hex(seed_hex: str) -> None:
    """Raise TypeError/ValueError unless seed_hex is SEED_BYTES of hex."""
    if not isinstance(seed_hex, str):
        raise TypeError(f"seed must be a string, got {type(seed_hex).__name__}")
    if len(seed_hex) != SEED_BYTES * 2:
        raise ValueError(f"seed must be exactly {SEED_BYTES * 2} hex characters, got {len(seed_hex)}")
    try:
        bytes.fromhex(seed_hex)
    except ValueError:
        raise ValueError("seed contains invalid hex characters") from None


def generate_seed() -> str:
    return secrets.token_bytes(SEED_BYTES).hex()


class PCG64DXSM:
    """
    128-bit LCG state with the DXSM output permutation (64-bit outputs).

    Same multiplier constants as NumPy's PCG64DXSM bit generator.
    """

    def __init__(self, state: int, increment: int) -> None:
        self._inc = ((increment << 1) | 1) & _UINT128_MASK
        self._state = (state + self._inc) & _UINT128_MASK
        # two warm-up steps move away from the raw seed material
        for _ in range(2):
            self._state = (self._state * _PCG_MULTIPLIER + self._inc) & _UINT128_MASK

    def next_uint64(self) -> int:
        state = self._state
        hi = (state >> 64) & _UINT64_MASK
        lo = (state & _UINT64_MASK) | 1

        hi ^= hi >> 32
        hi = (hi * _PCG_DXSM_MUL) & _UINT64_MASK
        hi ^= hi >> 48
        hi = (hi * lo) & _UINT64_MASK

        self._state = (state * _PCG_MULTIPLIER + self._inc) & _UINT128_MASK
        return hi

    def below(self, bound: int) -> int:
        """Unbiased integer in [0, bound), rejecting draws from the partial last bucket."""
        if bound <= 0 or bound > (1 << 64):
            raise ValueError("bound must be in (0, 2^64]")
        limit = (1 << 64) - ((1 << 64) % bound)
        while True:
            value = self.next_uint64()
            if value < limit:
                return value % bound


def _derive_pcg(domain: bytes, seed_hex: str, game_number: int) -> PCG64DXSM:
    """First 16 bytes of SHA-512(domain + seed + game) seed the state, the next 16 the stream."""
    if not 0 <= game_number < 2**32:
        raise ValueError("game_number must be in [0, 2^32)")
    validate_seed_hex(seed_hex)
    digest = hashlib.sha512(domain + bytes.fromhex(seed_hex) + game_number.to_bytes(4, "little")).digest()
    return PCG64DXSM(
        int.from_bytes(digest[:16], byteorder="little"),
        int.from_bytes(digest[16:32], byteorder="little"),
    )


def fisher_yates_shuffle(items: Sequence[T], pcg: PCG64DXSM) -> list[T]:
    """Return a shuffled copy; the input is left untouched."""
    result = list(items)
    n = len(result)
    for i in range(n - 1):
        j = i + pcg.below(n - i)
        result[i], result[j] = result[j], result[i]
    return result


def generate_shuffled_tiles(seed_hex: str, game_number: int) -> list[int]:
    """All 136 tile ids in draw order for one game."""
    return fisher_yates_shuffle(range(TOTAL_TILES), _derive_pcg(_WALL_DOMAIN, seed_hex, game_number))


class DecisionRng:
    """
    Injected source of randomness for autonomous seats.

    Seeded from the game seed so a replay makes the same choices; tests may
    pass any seed and assert exact sequences.
    """

    def __init__(self, seed_hex: str, game_number: int = 0) -> None:
        self._pcg = _derive_pcg(_DECISION_DOMAIN, seed_hex, game_number)

    def randbelow(self, bound: int) -> int:
        return self._pcg.below(bound)

    def choice(self, items: Sequence[T]) -> T:
        if not items:
            raise IndexError("cannot choose from an empty sequence")
        return items[self._pcg.below(len(items))]

    def uniform(self, low: float, high: float) -> float:
        """Float in [low, high) with 53 bits of precision."""
        fraction = (self._pcg.next_uint64() >> 11) / float(1 << 53)
        return low + (high - low) * fraction
