"""
Tile representation utilities for the tile game.
"""

# tile ranges in 136-format (4 copies of each tile)
# characters (m): 0-35, dots (p): 36-71, bamboo (s): 72-107
# honors: 108-135 (East, South, West, North, White, Green, Red)

TOTAL_TILES = 136
COPIES_PER_TILE = 4

# tile ranges in 34-format (each unique tile type)
HONOR_34_START = 27
HONOR_34_END = 33
TILE_TYPES = 34
RANKS_PER_SUIT = 9

SUIT_LETTERS = "mps"
HONOR_NAMES = ("East", "South", "West", "North", "White", "Green", "Red")


def tile_to_34(tile_id: int) -> int:
    """
    Convert 136-format tile ID to 34-format.

    Each tile type has 4 copies, so tile_id // 4 gives the type.
    """
    return tile_id // COPIES_PER_TILE


def is_honor(tile_34: int) -> bool:
    """Check if tile is an honor (wind or dragon)."""
    return HONOR_34_START <= tile_34 <= HONOR_34_END


def is_numbered(tile_34: int) -> bool:
    return 0 <= tile_34 < HONOR_34_START


def suit_of(tile_34: int) -> int:
    """Suit index (0 characters, 1 dots, 2 bamboo) of a numbered tile type."""
    if not is_numbered(tile_34):
        raise ValueError(f"tile type {tile_34} has no suit")
    return tile_34 // RANKS_PER_SUIT


def rank_of(tile_34: int) -> int:
    """Rank 1-9 of a numbered tile type."""
    if not is_numbered(tile_34):
        raise ValueError(f"tile type {tile_34} has no rank")
    return tile_34 % RANKS_PER_SUIT + 1


def sort_tiles(tiles: list[int] | tuple[int, ...]) -> list[int]:
    """Sort tiles by ID, which also groups them by 34-format type."""
    return sorted(tiles)


def hand_to_34_array(tiles: list[int] | tuple[int, ...]) -> list[int]:
    """
    Convert a list of 136-format tile IDs to a 34-array (tile counts).

    Each index is a tile type and the value is how many of it the hand holds.
    """
    tiles_34 = [0] * TILE_TYPES
    for tile_id in tiles:
        tiles_34[tile_to_34(tile_id)] += 1
    return tiles_34


def type_name(tile_34: int) -> str:
    """Readable name of a tile type: "3m", "7p", "9s", "East", "Red"..."""
    if is_numbered(tile_34):
        return f"{rank_of(tile_34)}{SUIT_LETTERS[suit_of(tile_34)]}"
    if is_honor(tile_34):
        return HONOR_NAMES[tile_34 - HONOR_34_START]
    raise ValueError(f"tile type {tile_34} is out of range")


def tile_name(tile_id: int) -> str:
    if not 0 <= tile_id < TOTAL_TILES:
        raise ValueError(f"tile id {tile_id} is out of range")
    return type_name(tile_to_34(tile_id))


def parse_tile_name(name: str) -> int:
    """
    Parse a readable tile name back to its 34-format type.

    Accepts "3m"/"7p"/"9s" style names and honor names, case-insensitive.
    Raises ValueError for anything else.
    """
    text = name.strip()
    lowered = text.lower()
    for index, honor in enumerate(HONOR_NAMES):
        if lowered == honor.lower():
            return HONOR_34_START + index
    if len(text) == 2 and text[0] in "123456789" and lowered[1] in SUIT_LETTERS:
        return SUIT_LETTERS.index(lowered[1]) * RANKS_PER_SUIT + int(text[0]) - 1
    raise ValueError(f"unknown tile name {name!r}")
