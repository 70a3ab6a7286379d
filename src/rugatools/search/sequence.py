from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Tuple

from rugatools.config import BALANCED, check_policy
from rugatools.graph.state import RemainingGraphState
from rugatools.rounds.partition import (
    Round,
    active_vertices,
    balanced_cover_size,
    check_k,
    enumerate_rounds,
)
from rugatools.rounds.sizes import group_sizes
from rugatools.search.bounds import BoundEstimator
from rugatools.search.collector import RoundSequence, SolutionCollector


class SequenceSearch:
    """
    Depth-first search for the longest round sequences.

    At every node:
      1. bound U on further rounds from the current state
      2. prune if depth + U cannot reach the best length
         (strictly below it when keeping ties, at or below it otherwise)
      3. no nonempty round available -> terminal, hand the path to the collector
      4. otherwise apply each round, recurse, pop

    The active vertex set and the balanced group sizes are fixed from the
    state the search starts on: the sizes are group_sizes of the largest
    coverable subset of the active vertices, so a graph with any k-clique
    yields at least one round.
    """

    def __init__(
        self,
        k: int,
        *,
        policy: str = BALANCED,
        active: Optional[Sequence[int]] = None,
        collector: Optional[SolutionCollector] = None,
        keep_ties: bool = True,
    ) -> None:
        check_k(k)
        self.k = k
        self.policy = check_policy(policy)
        self.keep_ties = keep_ties
        self.collector = collector if collector is not None else SolutionCollector(keep_ties)
        self._given_active: Optional[Tuple[int, ...]] = None if active is None else tuple(sorted(active))
        self._active: Optional[Tuple[int, ...]] = self._given_active
        self._bounds: Optional[BoundEstimator] = None
        self._sizes: Tuple[int, ...] = ()
        self.nodes = 0

    def prepare(self, state: RemainingGraphState) -> None:
        """Fix active vertices, group sizes and bounds for searches rooted at `state`."""
        if self._given_active is None:
            self._active = tuple(active_vertices(state, self.k))
        else:
            self._active = self._given_active
        if self.policy == BALANCED:
            cover = balanced_cover_size(state, self.k, self._active)
            self._sizes = tuple(group_sizes(cover, self.k))
            self._bounds = BoundEstimator(self.k, self.policy, self._active, self._sizes)
        else:
            self._bounds = BoundEstimator.for_state(state, self.k, self.policy)

    @property
    def active(self) -> Tuple[int, ...]:
        return self._active or ()

    def candidate_rounds(self, state: RemainingGraphState) -> Iterator[Round]:
        """Nonempty rounds available on `state`, in enumeration order."""
        if self._bounds is None:
            self.prepare(state)
        rounds = enumerate_rounds(
            state,
            self.k,
            policy=self.policy,
            active=self._active,
            sizes=self._sizes if self.policy == BALANCED else None,
        )
        return (r for r in rounds if r)

    def _pruned(self, depth: int, bound: int) -> bool:
        best = self.collector.best_length
        if self.keep_ties:
            return depth + bound < best
        return depth + bound <= best

    def explore(self, state: RemainingGraphState, path: List[Round]) -> None:
        """Search below `state`; `path` holds the rounds already applied."""
        if self._bounds is None:
            self.prepare(state)
        self.nodes += 1
        depth = len(path)
        if self._pruned(depth, self._bounds.upper_bound(state)):
            return

        terminal = True
        for rnd in self.candidate_rounds(state):
            terminal = False
            path.append(rnd)
            self.explore(state.with_groups_removed(rnd), path)
            path.pop()
            # the best may have moved during the recursion
            if self._pruned(depth, self._bounds.upper_bound(state)):
                return

        if terminal:
            self.collector.consider(path)

    def run(self, state: RemainingGraphState) -> Tuple[int, List[RoundSequence]]:
        self.collector.reset()
        self.nodes = 0
        self.prepare(state)
        self.explore(state, [])
        return self.collector.finalize()
