from __future__ import annotations

from dataclasses import dataclass, field
from math import comb
from typing import Optional, Sequence, Tuple

from rugatools.config import BALANCED, check_policy
from rugatools.graph.state import RemainingGraphState, iter_bits, mask_of, popcount
from rugatools.rounds.partition import active_vertices, balanced_cover_size
from rugatools.rounds.sizes import group_sizes, round_edge_cost


@dataclass(frozen=True)
class BoundEstimator:
    """
    Upper bound on the number of further rounds from a state; used only to prune.

    Two counts, both floor divisions:
      edge budget: edges among active vertices // edges one round must consume
      min degree:  smallest active degree // edges one round takes off a grouped vertex

    The min-degree count needs every active vertex grouped in every round, so
    it applies only to the balanced policy with sizes covering all of `active`.
    """

    k: int
    policy: str = BALANCED
    active: Tuple[int, ...] = ()
    sizes: Optional[Tuple[int, ...]] = None
    _active_mask: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        check_policy(self.policy)
        if self.policy == BALANCED and self.sizes is None:
            object.__setattr__(self, "sizes", tuple(group_sizes(len(self.active), self.k)))
        object.__setattr__(self, "_active_mask", mask_of(self.active))

    @classmethod
    def for_state(
        cls,
        state: RemainingGraphState,
        k: int,
        policy: str = BALANCED,
        active: Optional[Sequence[int]] = None,
    ) -> "BoundEstimator":
        """
        Estimator matching the rounds enumerate_rounds would produce on `state`.

        Balanced: active vertices default to active_vertices(state, k), sizes to
        group_sizes(balanced_cover_size(...), k).  Maximal: every vertex counts.
        """
        check_policy(policy)
        if policy != BALANCED:
            act = tuple(range(state.n)) if active is None else tuple(sorted(active))
            return cls(k=k, policy=policy, active=act)
        act = tuple(active_vertices(state, k)) if active is None else tuple(sorted(active))
        sizes = tuple(group_sizes(balanced_cover_size(state, k, act), k))
        return cls(k=k, policy=policy, active=act, sizes=sizes)

    @property
    def full_cover(self) -> bool:
        """True when every round groups every active vertex."""
        return self.sizes is not None and sum(self.sizes) == len(self.active)

    @property
    def edges_per_round(self) -> int:
        if self.policy == BALANCED:
            return round_edge_cost(self.sizes)
        return comb(self.k, 2)

    def edge_budget_bound(self, state: RemainingGraphState) -> int:
        per_round = self.edges_per_round
        if per_round == 0:
            return 0
        return state.edge_count(within=self._active_mask) // per_round

    def min_degree_bound(self, state: RemainingGraphState) -> Optional[int]:
        if self.policy != BALANCED:
            return None
        if not self.sizes:
            return 0
        if not self.full_cover:
            return None
        adj = state.adj
        low = min(popcount(adj[v] & self._active_mask) for v in iter_bits(self._active_mask))
        return low // (min(self.sizes) - 1)

    def upper_bound(self, state: RemainingGraphState) -> int:
        bound = self.edge_budget_bound(state)
        deg = self.min_degree_bound(state)
        if deg is not None:
            bound = min(bound, deg)
        return bound
