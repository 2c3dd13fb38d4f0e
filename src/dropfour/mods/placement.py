from __future__ import annotations

import random
from typing import List, Tuple

from dropfour.components.feature_placement import FeaturePlacement

Position = Tuple[int, int]


def select_unclaimed_positions(
    placement: FeaturePlacement,
    slug: str,
    count: int,
    rows: int,
    cols: int,
    rng: random.Random,
) -> List[Position]:
    """Sample up to count cells that no other mod has claimed.

    The pool is every board cell minus the union of the other mods' claims,
    sampled uniformly without replacement. Fewer than count positions come back
    when the pool is too small; an empty list means the mod has no feature.
    """
    if count <= 0:
        return []
    taken = placement.claimed_by_others(slug)
    pool = [(row, col) for row in range(rows) for col in range(cols) if (row, col) not in taken]
    if not pool:
        return []
    return rng.sample(pool, min(count, len(pool)))
