from __future__ import annotations

from itertools import combinations
from typing import List, Sequence

from sumstack.systems.board_ops import TileSnapshot


def find_matching_subset(
    tiles: Sequence[TileSnapshot],
    target: int,
    *,
    max_terms: int | None = 4,
) -> List[TileSnapshot]:
    """Return the smallest group of tiles whose values add up to ``target``.

    Bottom-most tiles are preferred among groups of equal size. An empty list
    means no group of at most ``max_terms`` tiles reaches the target.
    """
    ordered = sorted(tiles, key=lambda t: (-t.row, t.col))
    limit = len(ordered) if max_terms is None else min(max_terms, len(ordered))
    for size in range(1, limit + 1):
        for group in combinations(ordered, size):
            if sum(tile.value for tile in group) == target:
                return list(group)
    return []
