from __future__ import annotations

from itertools import combinations
from typing import Iterable, List, Optional, Sequence

import networkx as nx

from rugatools.config import BALANCED, MAXIMAL, check_policy
from rugatools.io.graph6 import state_from_nx
from rugatools.rounds.partition import active_vertices, balanced_cover_size, is_maximal_round
from rugatools.rounds.sizes import group_sizes


def _initial_graph(n: int, conflicts: Optional[Iterable[Sequence[int]]]) -> nx.Graph:
    G = nx.complete_graph(n)
    if conflicts:
        G.remove_edges_from(conflicts)
    return G


def sequence_violations(
    n: int,
    k: int,
    sequence: Iterable[Iterable[Iterable[int]]],
    conflicts: Optional[Iterable[Sequence[int]]] = None,
    *,
    policy: str = BALANCED,
) -> List[str]:
    """
    Replay a sequence on a networkx graph and describe everything wrong with it.

    Checked per round: group sizes >= k, every group a clique of the pairs
    still open, groups disjoint; then either the balanced shape
    (active vertices only, sizes fixed by the largest coverable subset) or
    maximality.
    An empty list means the sequence is valid.
    """
    check_policy(policy)
    G = _initial_graph(n, conflicts)
    initial = state_from_nx(G)
    active = set(active_vertices(initial, k))
    expected = sorted(group_sizes(balanced_cover_size(initial, k), k)) if policy == BALANCED else []
    problems: List[str] = []

    for r, rnd in enumerate(sequence):
        groups = [sorted(g) for g in rnd]
        seen: set = set()
        for g in groups:
            if len(g) < k:
                problems.append(f"round {r}: group {g} smaller than k={k}")
            missing = [p for p in combinations(g, 2) if not G.has_edge(*p)]
            if missing:
                problems.append(f"round {r}: group {g} reuses or conflicts on pairs {missing}")
            overlap = seen.intersection(g)
            if overlap:
                problems.append(f"round {r}: vertices {sorted(overlap)} in more than one group")
            seen.update(g)

        if policy == BALANCED:
            if not seen <= active:
                problems.append(f"round {r}: grouped inactive vertices {sorted(seen - active)}")
            if sorted(len(g) for g in groups) != expected:
                problems.append(f"round {r}: group sizes differ from {expected}")
        elif policy == MAXIMAL and not is_maximal_round(state_from_nx(G), groups, k):
            problems.append(f"round {r}: not a maximal round")

        for g in groups:
            G.remove_edges_from(combinations(g, 2))

    return problems


def is_valid_sequence(
    n: int,
    k: int,
    sequence: Iterable[Iterable[Iterable[int]]],
    conflicts: Optional[Iterable[Sequence[int]]] = None,
    *,
    policy: str = BALANCED,
) -> bool:
    return not sequence_violations(n, k, sequence, conflicts, policy=policy)
