"""Enumeration of single rounds: disjoint clique partitions of a remaining graph.

Both policies share one recursion: take the free vertex with the fewest free
neighbours (lowest index on ties), try every clique through it, recurse on what
is left.  Groups within a partition are unordered, and because the branching
vertex always lands in exactly one group or in the left-out set, each
partition is produced once.
"""
from __future__ import annotations

from typing import FrozenSet, Iterable, Iterator, List, Optional, Sequence, Tuple

from rugatools.config import BALANCED, MAXIMAL, check_policy
from rugatools.errors import InvalidParameterError
from rugatools.graph.state import RemainingGraphState, iter_bits, mask_of, popcount
from rugatools.rounds.sizes import group_sizes

Group = Tuple[int, ...]
Round = Tuple[Group, ...]


def check_k(k: int) -> None:
    if not isinstance(k, int) or k < 2:
        raise InvalidParameterError(f"minimum group size k must be an integer >= 2, got {k!r}.")


# ---------------------------------------------------------------------------
# Bitset clique helpers
# ---------------------------------------------------------------------------

def _has_clique(adj: Sequence[int], cand: int, size: int) -> bool:
    """True iff the vertices of `cand` contain a clique of `size` vertices."""
    if size <= 0:
        return True
    while popcount(cand) >= size:
        lsb = cand & -cand
        u = lsb.bit_length() - 1
        cand ^= lsb
        if _has_clique(adj, cand & adj[u], size - 1):
            return True
    return False


def _cliques_through(
    adj: Sequence[int],
    v: int,
    cand: int,
    allowed: FrozenSet[int],
    max_size: int,
) -> Iterator[Group]:
    """
    Yield every clique {v} | S with S drawn from `cand` and |{v} | S| in `allowed`.

    Members are added in increasing index order, so each subset appears once;
    smaller cliques come out before their extensions.
    """
    min_size = min(allowed)
    members: List[int] = [v]

    def extend(cand: int) -> Iterator[Group]:
        size = len(members)
        if size in allowed:
            yield tuple(sorted(members))
        if size >= max_size or size + popcount(cand) < min_size:
            return
        while cand:
            lsb = cand & -cand
            u = lsb.bit_length() - 1
            cand ^= lsb
            members.append(u)
            yield from extend(cand & adj[u])
            members.pop()

    yield from extend(cand)


def _pick_vertex(adj: Sequence[int], free: int) -> Tuple[int, int]:
    """Most constrained free vertex and its free degree."""
    best_v, best_d = -1, -1
    for v in iter_bits(free):
        d = popcount(adj[v] & free)
        if best_v < 0 or d < best_d:
            best_v, best_d = v, d
    return best_v, best_d


def _as_round(groups: Iterable[Group]) -> Round:
    return tuple(sorted(groups))


# ---------------------------------------------------------------------------
# Round enumeration
# ---------------------------------------------------------------------------

def _balanced_rounds(
    adj: Sequence[int],
    free: int,
    sizes: Tuple[int, ...],
    groups: List[Group],
) -> Iterator[Round]:
    # free vertices beyond sum(sizes) sit the round out
    if not sizes:
        yield _as_round(groups)
        return
    spare = popcount(free) - sum(sizes)
    if spare < 0:
        return
    v, d = _pick_vertex(adj, free)
    if d + 1 >= sizes[0]:
        for g in _cliques_through(adj, v, adj[v] & free, frozenset(sizes), sizes[-1]):
            rest = list(sizes)
            rest.remove(len(g))
            groups.append(g)
            yield from _balanced_rounds(adj, free & ~mask_of(g), tuple(rest), groups)
            groups.pop()
    if spare:
        yield from _balanced_rounds(adj, free & ~(1 << v), sizes, groups)


def _maximal_rounds(
    adj: Sequence[int],
    k: int,
    free: int,
    left: int,
    groups: List[Group],
    group_masks: List[int],
) -> Iterator[Round]:
    # Invariants kept on every call: no left-out vertex is adjacent to all of
    # any group, and the left-out set holds no k-clique.  A leaf is maximal.
    if not free:
        yield _as_round(groups)
        return
    v, _ = _pick_vertex(adj, free)
    n_free = popcount(free)

    if n_free >= k:
        allowed = frozenset(range(k, n_free + 1))
        for g in _cliques_through(adj, v, adj[v] & free, allowed, n_free):
            gm = mask_of(g)
            if any(adj[u] & gm == gm for u in iter_bits(left)):
                continue
            groups.append(g)
            group_masks.append(gm)
            yield from _maximal_rounds(adj, k, free & ~gm, left, groups, group_masks)
            groups.pop()
            group_masks.pop()

    # v sits this round out
    if any(adj[v] & gm == gm for gm in group_masks):
        return
    if _has_clique(adj, adj[v] & left, k - 1):
        return
    vbit = 1 << v
    yield from _maximal_rounds(adj, k, free & ~vbit, left | vbit, groups, group_masks)


def enumerate_rounds(
    state: RemainingGraphState,
    k: int,
    *,
    policy: str = BALANCED,
    active: Optional[Iterable[int]] = None,
    sizes: Optional[Sequence[int]] = None,
) -> Iterator[Round]:
    """
    Lazily enumerate the rounds available on `state`.

    Parameters
    ----------
    state : RemainingGraphState
        Pairs still allowed to share a group.
    k : int
        Minimum group size (>= 2).
    policy : str
        "balanced": split `active` vertices into groups whose sizes are the
        multiset `sizes`; active vertices beyond sum(sizes) sit out.  The
        default is group_sizes(balanced_cover_size(state, k, active), k).
        "maximal": groups of any size >= k, vertices may sit out, and the
        round cannot be extended.  Yields a single empty round when the state
        holds no k-clique.
    active : iterable of int, optional
        Balanced only. Defaults to active_vertices(state, k).
    sizes : sequence of int, optional
        Balanced only. Must not sum to more than the number of active vertices.

    Yields
    ------
    Round
        Tuple of sorted groups, groups ordered by first vertex.
    """
    check_k(k)
    check_policy(policy)

    if policy == MAXIMAL:
        return _maximal_rounds(state.adj, k, state.all_mask, 0, [], [])

    act = active_vertices(state, k) if active is None else sorted(active)
    sz = group_sizes(balanced_cover_size(state, k, act), k) if sizes is None else list(sizes)
    if sum(sz) > len(act):
        raise InvalidParameterError(
            f"group sizes {sz} need more than the {len(act)} active vertices."
        )
    if not sz:
        return iter(())
    return _balanced_rounds(state.adj, mask_of(act), tuple(sorted(sz)), [])


def balanced_cover_size(
    state: RemainingGraphState,
    k: int,
    active: Optional[Iterable[int]] = None,
) -> int:
    """
    Largest t <= |active| such that t of the active vertices can be split into
    cliques of sizes group_sizes(t, k).  0 when not even one k-clique exists.
    """
    check_k(k)
    act = active_vertices(state, k) if active is None else sorted(active)
    free = mask_of(act)
    for t in range(len(act), k - 1, -1):
        sizes = tuple(sorted(group_sizes(t, k)))
        if next(_balanced_rounds(state.adj, free, sizes, []), None) is not None:
            return t
    return 0


# ---------------------------------------------------------------------------
# Candidate groups and checks
# ---------------------------------------------------------------------------

def potential_groups(
    state: RemainingGraphState,
    size: int,
    skip: Iterable[int] = (),
) -> List[Group]:
    """All cliques of exactly `size` vertices avoiding `skip`, in lexicographic order."""
    if size < 1:
        return []
    allowed = state.all_mask & ~mask_of(skip)
    out: List[Group] = []
    for v in iter_bits(allowed):
        higher = allowed & ~((1 << (v + 1)) - 1)
        out.extend(_cliques_through(state.adj, v, state.adj[v] & higher, frozenset((size,)), size))
    return out


def active_vertices(state: RemainingGraphState, k: int) -> List[int]:
    """Vertices lying in at least one k-clique; the rest can never be grouped."""
    check_k(k)
    return [v for v in range(state.n) if _has_clique(state.adj, state.adj[v], k - 1)]


def is_maximal_round(state: RemainingGraphState, rnd: Iterable[Iterable[int]], k: int) -> bool:
    """
    Check a round directly against `state`: groups of size >= k, cliques,
    pairwise disjoint, no left-out vertex fits an existing group, and no
    k left-out vertices are pairwise compatible.
    """
    used = 0
    masks: List[int] = []
    for g in rnd:
        members = list(g)
        gm = mask_of(members)
        if len(members) < k or popcount(gm) != len(members):
            return False
        if gm & used or not state.is_clique(members):
            return False
        used |= gm
        masks.append(gm)
    left = [v for v in range(state.n) if not used >> v & 1]
    for u in left:
        if any(state.adj[u] & gm == gm for gm in masks):
            return False
    return not potential_groups(state, k, skip=iter_bits(used))
