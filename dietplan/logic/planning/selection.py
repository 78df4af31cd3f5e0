"""Random selection of recipes from a catalog bucket."""
import random
from typing import Callable, List, Optional, Sequence, TypeVar

T = TypeVar("T")

# Returns a float in [0, 1); random.random and random.Random(seed).random both fit.
RandomSource = Callable[[], float]


def pick(bucket: Sequence[T], count: int, rng: Optional[RandomSource] = None) -> List[T]:
    """Return up to ``count`` distinct entries of ``bucket`` in random order.

    Fisher-Yates shuffle of a copy, truncated. Never pads and never repeats
    an entry within one call; the bucket itself is left untouched.
    """
    if count <= 0 or not bucket:
        return []
    rand = rng or random.random
    items = list(bucket)
    for i in range(len(items) - 1, 0, -1):
        j = min(int(rand() * (i + 1)), i)
        items[i], items[j] = items[j], items[i]
    return items[:count]


__all__ = ["RandomSource", "pick"]
