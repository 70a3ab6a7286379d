from __future__ import annotations

from itertools import combinations
from typing import List, Tuple

import networkx as nx

from rugatools.errors import MalformedGraphError
from rugatools.graph.state import RemainingGraphState


def _check_nodes(G: nx.Graph) -> int:
    n = G.number_of_nodes()
    if set(G.nodes()) != set(range(n)):
        raise MalformedGraphError("graph nodes must be exactly 0..n-1.")
    if nx.number_of_selfloops(G):
        raise MalformedGraphError("graph has self-loops.")
    return n


def state_from_nx(G: nx.Graph) -> RemainingGraphState:
    """
    Remaining-pairs state whose edges are the edges of G
    (an edge means the two entities may still share a group).
    """
    n = _check_nodes(G)
    return RemainingGraphState.from_edges(n, G.edges())


def conflicts_from_nx(G: nx.Graph) -> List[Tuple[int, int]]:
    """Pairs of G's vertex set that are *not* edges, i.e. the solve() conflicts."""
    n = _check_nodes(G)
    return [(u, v) for u, v in combinations(range(n), 2) if not G.has_edge(u, v)]


def state_to_nx(state: RemainingGraphState) -> nx.Graph:
    G = nx.Graph()
    G.add_nodes_from(range(state.n))
    G.add_edges_from(state.edges())
    return G


def state_from_g6(g6: str) -> RemainingGraphState:
    """
    Remaining-pairs state from a graph6 string of the compatibility graph.
    A leading ">>graph6<<" header and surrounding whitespace are ignored.
    """
    s = g6.strip()
    if s.startswith(">>graph6<<"):
        s = s[len(">>graph6<<") :].strip()
    try:
        G = nx.from_graph6_bytes(s.encode("ascii"))
    except (nx.NetworkXError, ValueError, UnicodeEncodeError) as exc:
        raise MalformedGraphError(f"not a graph6 string: {g6!r}") from exc
    return state_from_nx(G)
