"""
Draw pile for the tile game.

The whole 136-tile set is shuffled once per game. Hands are dealt from the
front and every later draw (including the supplementary draw after a quad)
also comes from the front; there is no separate reserve.
"""

from pydantic import BaseModel, ConfigDict

from tilegame.logic.rng import generate_shuffled_tiles
from tilegame.logic.tiles import TOTAL_TILES, sort_tiles

NUM_SEATS = 4
HAND_SIZE = 13
TILES_PER_DEAL_BLOCK = 4
DEAL_BLOCKS = 3


class Wall(BaseModel):
    """Immutable remaining draw pile, next tile first."""

    model_config = ConfigDict(frozen=True)

    tiles: tuple[int, ...] = ()


def create_wall(seed: str, game_number: int) -> Wall:
    return Wall(tiles=tuple(generate_shuffled_tiles(seed, game_number)))


def create_wall_from_tiles(tiles: list[int]) -> Wall:
    """
    Build a pile from an explicit draw order (tests and replays).

    The order must be a permutation of all 136 tile ids.
    """
    if len(tiles) != TOTAL_TILES:
        raise ValueError(f"expected {TOTAL_TILES} tiles, got {len(tiles)}")
    if not all(isinstance(t, int) and 0 <= t < TOTAL_TILES for t in tiles):
        raise ValueError(f"all tile ids must be integers in [0, {TOTAL_TILES - 1}]")
    if len(set(tiles)) != TOTAL_TILES:
        raise ValueError("all tile ids must be unique (full permutation)")
    return Wall(tiles=tuple(tiles))


def deal_initial_hands(wall: Wall, dealer_seat: int = 0) -> tuple[Wall, list[list[int]]]:
    """
    Deal 13 tiles to each seat from the front of the pile.

    Starting from the dealer: three rounds of 4 tiles, then 1 more each.
    Returns (remaining pile, hands by seat), hands sorted by tile id.
    """
    needed = NUM_SEATS * HAND_SIZE
    if len(wall.tiles) < needed:
        raise ValueError(f"pile has {len(wall.tiles)} tiles, need at least {needed} to deal")

    pile = list(wall.tiles)
    hands: list[list[int]] = [[] for _ in range(NUM_SEATS)]
    pos = 0
    for block in (*([TILES_PER_DEAL_BLOCK] * DEAL_BLOCKS), 1):
        for offset in range(NUM_SEATS):
            seat = (dealer_seat + offset) % NUM_SEATS
            hands[seat].extend(pile[pos : pos + block])
            pos += block

    return wall.model_copy(update={"tiles": tuple(pile[pos:])}), [sort_tiles(hand) for hand in hands]


def draw_tile(wall: Wall) -> tuple[Wall, int | None]:
    """Draw from the front. Returns (new_wall, tile) or (wall, None) if empty."""
    if not wall.tiles:
        return wall, None
    return wall.model_copy(update={"tiles": wall.tiles[1:]}), wall.tiles[0]


def tiles_remaining(wall: Wall) -> int:
    return len(wall.tiles)


def is_wall_exhausted(wall: Wall) -> bool:
    return not wall.tiles
