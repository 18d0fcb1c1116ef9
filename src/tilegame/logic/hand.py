"""
Winning-hand validation by recursive decomposition.

A winning concealed hand is one pair plus groups of three, where a group is
either three identical tiles or a run of three consecutive ranks in one
numbered suit. Honors never form runs.

All work happens on immutable 34-format count tuples: every recursive step
builds a new tuple, so no scratch state is shared between branches and the
input order of tiles never matters.
"""

from collections.abc import Iterable

from tilegame.logic.tiles import RANKS_PER_SUIT, hand_to_34_array, is_numbered, rank_of


def _remove(counts: tuple[int, ...], tile_types: Iterable[int]) -> tuple[int, ...]:
    updated = list(counts)
    for tile_34 in tile_types:
        updated[tile_34] -= 1
    return tuple(updated)


def _decomposes_into_groups(counts: tuple[int, ...]) -> bool:
    """True if counts split completely into triplets and same-suit runs."""
    lowest = next((tile_34 for tile_34, count in enumerate(counts) if count), None)
    if lowest is None:
        return True

    if counts[lowest] >= 3 and _decomposes_into_groups(_remove(counts, (lowest, lowest, lowest))):
        return True

    # lowest tile can only start a run; ranks 8 and 9 would cross into the next suit
    if (
        is_numbered(lowest)
        and rank_of(lowest) <= RANKS_PER_SUIT - 2
        and counts[lowest + 1]
        and counts[lowest + 2]
    ):
        return _decomposes_into_groups(_remove(counts, (lowest, lowest + 1, lowest + 2)))

    return False


def is_winning_counts(counts: Iterable[int]) -> bool:
    """is_winning_hand() for a 34-format count array."""
    counts = tuple(counts)
    if sum(counts) % 3 != 2:
        return False
    for tile_34, count in enumerate(counts):
        if count >= 2 and _decomposes_into_groups(_remove(counts, (tile_34, tile_34))):
            return True
    return False


def is_winning_hand(tiles: Iterable[int]) -> bool:
    """
    Check whether concealed tiles (136-format ids) form a complete hand.

    The tile count must be 2 mod 3 (14 with no revealed sets, 11 with one,
    and so on). Every candidate pair is tried; the remainder must decompose
    into groups of three with nothing left over.
    """
    return is_winning_counts(hand_to_34_array(list(tiles)))


def can_win_with(tiles: Iterable[int], tile_id: int) -> bool:
    """Whether adding tile_id to the hand completes it."""
    return is_winning_hand([*tiles, tile_id])
