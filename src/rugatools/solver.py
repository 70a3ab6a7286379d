from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from rugatools.config import SearchConfig
from rugatools.errors import InvalidParameterError
from rugatools.graph.state import RemainingGraphState
from rugatools.rounds.partition import check_k
from rugatools.search.collector import RoundSequence, SolutionCollector
from rugatools.search.parallel import parallel_sequence_search
from rugatools.search.sequence import SequenceSearch


@dataclass(frozen=True)
class RugaResult:
    """
    Outcome of solve().

    best_length: number of rounds in the longest sequence found (>= 0).
    sequences:   every sequence of that length, in search order.  A
                 zero-round outcome holds the single empty sequence.
    """

    n: int
    k: int
    policy: str
    best_length: int
    sequences: Tuple[RoundSequence, ...]

    def to_lists(self) -> List[List[List[List[int]]]]:
        """Sequences as plain nested lists: sequence -> round -> group -> vertex."""
        return [[[list(g) for g in rnd] for rnd in seq] for seq in self.sequences]

    def first(self) -> RoundSequence:
        return self.sequences[0]


def check_parameters(n: int, k: int) -> None:
    if not isinstance(n, int) or isinstance(n, bool):
        raise InvalidParameterError(f"n must be an integer, got {n!r}.")
    if n < 0:
        raise InvalidParameterError(f"n must be >= 0, got {n}.")
    check_k(k)
    if n < k:
        raise InvalidParameterError(f"n={n} is smaller than the minimum group size k={k}.")


def solve(
    n: int,
    k: int,
    conflicts: Optional[Iterable[Sequence[int]]] = None,
    *,
    config: Optional[SearchConfig] = None,
) -> RugaResult:
    """
    Longest sequence(s) of rounds on n entities with minimum group size k.

    conflicts: pairs that may never share a group (already grouped or
    incompatible); None means the complete graph.  All parameter and graph
    errors are raised here, before the search starts.
    """
    check_parameters(n, k)
    state = RemainingGraphState.from_conflicts(n, conflicts)
    cfg = config if config is not None else SearchConfig.from_env()

    if cfg.verbose:
        print(
            f"[ruga n={n} k={k}] {cfg.policy} search, {state.edge_count()} open pairs",
            file=sys.stderr,
        )

    if cfg.processes is not None and cfg.processes > 1:
        best, sequences = parallel_sequence_search(
            state,
            k,
            policy=cfg.policy,
            keep_ties=cfg.keep_ties,
            processes=cfg.processes,
            verbose=cfg.verbose,
        )
    else:
        search = SequenceSearch(
            k,
            policy=cfg.policy,
            collector=SolutionCollector(cfg.keep_ties),
            keep_ties=cfg.keep_ties,
        )
        best, sequences = search.run(state)
        if cfg.verbose:
            print(f"[ruga n={n} k={k}] visited {search.nodes} nodes", file=sys.stderr)

    if cfg.verbose:
        print(
            f"[ruga n={n} k={k}] best length {best}, {len(sequences)} sequence(s)",
            file=sys.stderr,
        )
    return RugaResult(n=n, k=k, policy=cfg.policy, best_length=best, sequences=tuple(sequences))
