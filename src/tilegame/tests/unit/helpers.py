"""Table builders shared by tile-game tests."""

from mahjong.tile import TilesConverter

from tilegame.logic.enums import TablePhase
from tilegame.logic.settings import DEFAULT_SEAT_NAMES
from tilegame.logic.state import RevealedSet, SeatState, TableState
from tilegame.logic.tiles import COPIES_PER_TILE, TOTAL_TILES, parse_tile_name, tile_to_34
from tilegame.logic.wall import HAND_SIZE, NUM_SEATS, Wall

FIXED_SEED = "ab" * 96


class TileAllocator:
    """
    Hand out distinct tile ids from readable strings.

    TilesConverter always picks the lowest copies of each type, so two calls
    for the same tile would collide. The allocator tracks which copies are
    taken and returns the next free one.
    """

    def __init__(self) -> None:
        self.used: set[int] = set()

    def take(self, man: str = "", pin: str = "", sou: str = "", honors: str = "") -> list[int]:
        counts = TilesConverter.string_to_34_array(man=man, pin=pin, sou=sou, honors=honors)
        result: list[int] = []
        for tile_34, count in enumerate(counts):
            free = [
                t
                for t in range(tile_34 * COPIES_PER_TILE, (tile_34 + 1) * COPIES_PER_TILE)
                if t not in self.used
            ]
            if len(free) < count:
                raise ValueError(f"not enough copies left of tile type {tile_34}")
            result.extend(free[:count])
            self.used.update(free[:count])
        return sorted(result)

    def rest(self) -> list[int]:
        return [t for t in range(TOTAL_TILES) if t not in self.used]


def of_type(tiles: list[int] | tuple[int, ...], name: str) -> list[int]:
    """Tile ids in tiles whose type is the named tile ("5p", "Red"...)."""
    tile_34 = parse_tile_name(name)
    return [t for t in tiles if tile_to_34(t) == tile_34]


def make_table(  # noqa: PLR0913
    allocator: TileAllocator,
    hands: dict[int, list[int]],
    *,
    draw_order: list[int] | None = None,
    current_seat: int = 0,
    human_seat: int | None = 0,
    revealed: dict[int, list[RevealedSet]] | None = None,
    phase: TablePhase = TablePhase.AWAIT_DISCARD,
) -> TableState:
    """
    Build a table where every one of the 136 tiles is placed exactly once.

    Seats missing from hands get 13 filler tiles; the pile is draw_order
    followed by every tile not used anywhere else.
    """
    draw_order = draw_order or []
    allocator.used.update(draw_order)
    seats = []
    for seat in range(NUM_SEATS):
        tiles = hands.get(seat)
        if tiles is None:
            tiles = allocator.rest()[:HAND_SIZE]
            allocator.used.update(tiles)
        seats.append(
            SeatState(
                seat=seat,
                name=DEFAULT_SEAT_NAMES[seat],
                is_autonomous=seat != human_seat,
                tiles=tuple(tiles),
                revealed=tuple((revealed or {}).get(seat, [])),
            )
        )
    wall = Wall(tiles=(*draw_order, *allocator.rest()))
    return TableState(
        wall=wall,
        seats=tuple(seats),
        current_seat=current_seat,
        phase=phase,
        seed=FIXED_SEED,
    )
