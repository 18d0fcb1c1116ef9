"""
Shanten calculation for this table's win rule.

A hand only wins as one pair plus groups of three, so only the regular hand
shape is measured. Seven pairs and thirteen orphans are never complete here
and must not pull the autonomous players toward them.
"""

import structlog
from mahjong.shanten import Shanten

logger = structlog.get_logger()

WINNING_SHANTEN: int = -1

# only 3n+1 or 3n+2 concealed tiles are meaningful; anything else is treated as far from ready
_FAR_FROM_READY: int = 8


def calculate_shanten(tiles_34: list[int]) -> int:
    """Tiles still needed to be ready (0 = ready, -1 = complete) for a 34-format count array."""
    total = sum(tiles_34)
    if total == 0 or total % 3 not in (1, 2):
        if total > 0:
            logger.warning("unexpected tile count in shanten calculation", tile_count=total)
        return _FAR_FROM_READY
    return Shanten().calculate_shanten_for_regular_hand(list(tiles_34))
