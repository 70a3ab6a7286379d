"""Remaining-pairs graph for the RUGA search.

An edge u~v means u and v have not been grouped together yet (and were not
declared in conflict up front).  Adjacency is stored as one bitset per vertex:
adj[u] has bit v set iff u~v.  Instances are immutable; every round applied
yields a fresh state so sibling branches never see each other's removals.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from rugatools.errors import InvalidParameterError, MalformedGraphError

Pair = Tuple[int, int]


def popcount(mask: int) -> int:
    return bin(mask).count("1")


def iter_bits(mask: int) -> Iterator[int]:
    """Yield set bit positions of mask in increasing order."""
    while mask:
        lsb = mask & -mask
        yield lsb.bit_length() - 1
        mask ^= lsb


def mask_of(vertices: Iterable[int]) -> int:
    m = 0
    for v in vertices:
        m |= 1 << v
    return m


def _normalize_pairs(n: int, pairs: Iterable[Sequence[int]]) -> List[Pair]:
    """Validate caller pairs: in range, no self pair, no duplicate in either orientation."""
    seen: Set[Pair] = set()
    out: List[Pair] = []
    for pair in pairs:
        try:
            u, v = pair
        except (TypeError, ValueError):
            raise MalformedGraphError(f"Expected a vertex pair, got {pair!r}.") from None
        if not (isinstance(u, int) and isinstance(v, int)):
            raise MalformedGraphError(f"Vertex indices must be integers, got {pair!r}.")
        if not (0 <= u < n and 0 <= v < n):
            raise MalformedGraphError(f"Pair {pair!r} references a vertex outside 0..{n - 1}.")
        if u == v:
            raise MalformedGraphError(f"Self pair ({u}, {v}) is not allowed.")
        p = (u, v) if u < v else (v, u)
        if p in seen:
            raise MalformedGraphError(f"Duplicate pair {p}.")
        seen.add(p)
        out.append(p)
    return out


@dataclass(frozen=True)
class RemainingGraphState:
    n: int
    adj: Tuple[int, ...]

    # ------------------------------------------------------------------
    # constructors
    # ------------------------------------------------------------------

    @classmethod
    def complete(cls, n: int) -> "RemainingGraphState":
        if n < 0:
            raise InvalidParameterError("n must be >= 0.")
        full = (1 << n) - 1
        return cls(n, tuple(full & ~(1 << u) for u in range(n)))

    @classmethod
    def from_conflicts(
        cls, n: int, conflicts: Optional[Iterable[Sequence[int]]] = None
    ) -> "RemainingGraphState":
        """Complete graph on n vertices minus the given conflict pairs."""
        state = cls.complete(n)
        if not conflicts:
            return state
        adj = list(state.adj)
        for u, v in _normalize_pairs(n, conflicts):
            adj[u] &= ~(1 << v)
            adj[v] &= ~(1 << u)
        return cls(n, tuple(adj))

    @classmethod
    def from_edges(cls, n: int, edges: Iterable[Sequence[int]]) -> "RemainingGraphState":
        """Graph on n vertices whose edges are exactly the given compatible pairs."""
        if n < 0:
            raise InvalidParameterError("n must be >= 0.")
        adj = [0] * n
        for u, v in _normalize_pairs(n, edges):
            adj[u] |= 1 << v
            adj[v] |= 1 << u
        return cls(n, tuple(adj))

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------

    def _check(self, v: int) -> None:
        if not 0 <= v < self.n:
            raise IndexError(f"vertex {v} out of range for n={self.n}")

    @property
    def all_mask(self) -> int:
        return (1 << self.n) - 1

    def has_edge(self, u: int, v: int) -> bool:
        self._check(u)
        self._check(v)
        return bool(self.adj[u] >> v & 1)

    def neighbor_mask(self, v: int) -> int:
        self._check(v)
        return self.adj[v]

    def neighbors(self, v: int) -> Set[int]:
        return set(iter_bits(self.neighbor_mask(v)))

    def degree(self, v: int, within: Optional[int] = None) -> int:
        m = self.neighbor_mask(v)
        if within is not None:
            m &= within
        return popcount(m)

    def edge_count(self, within: Optional[int] = None) -> int:
        """Number of edges, optionally restricted to both endpoints in the mask `within`."""
        if within is None:
            return sum(popcount(a) for a in self.adj) // 2
        return sum(popcount(self.adj[u] & within) for u in iter_bits(within)) // 2

    def min_degree(self, vertices: Optional[Iterable[int]] = None) -> int:
        """
        Minimum degree over `vertices` (default: all vertices).
        Returns 0 for an empty vertex set.
        """
        vs = range(self.n) if vertices is None else vertices
        degs = [self.degree(v) for v in vs]
        return min(degs) if degs else 0

    def is_clique(self, vertices: Iterable[int]) -> bool:
        vs = list(vertices)
        for v in vs:
            self._check(v)
        m = mask_of(vs)
        return all((self.adj[v] | (1 << v)) & m == m for v in vs)

    def edges(self) -> List[Pair]:
        return [(u, v) for u in range(self.n) for v in iter_bits(self.adj[u]) if v > u]

    # ------------------------------------------------------------------
    # derivation
    # ------------------------------------------------------------------

    def with_groups_removed(self, groups: Iterable[Iterable[int]]) -> "RemainingGraphState":
        """Return a new state with every intra-group pair removed; self is untouched."""
        adj = list(self.adj)
        for g in groups:
            members = list(g)
            for v in members:
                self._check(v)
            gm = mask_of(members)
            for v in members:
                adj[v] &= ~gm
        return RemainingGraphState(self.n, tuple(adj))

