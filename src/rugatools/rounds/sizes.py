from __future__ import annotations

from math import comb
from typing import List, Sequence


def group_sizes(n: int, k: int) -> List[int]:
    """
    Group sizes of one balanced round on n vertices with minimum size k.

    n // k groups of size k, with the n % k leftover vertices handed out one
    at a time starting from the first group:
      group_sizes(7, 2) == [3, 2, 2]
      group_sizes(8, 3) == [4, 4]
    Empty when n < k.
    """
    count = n // k
    if count == 0:
        return []
    sizes = [k] * count
    for i in range(n % k):
        sizes[i % count] += 1
    return sizes


def round_edge_cost(sizes: Sequence[int]) -> int:
    """Edges consumed by one round with the given group sizes."""
    return sum(comb(s, 2) for s in sizes)
