from __future__ import annotations

import sys
from multiprocessing import Pool, Value, cpu_count
from typing import List, Optional, Sequence, Tuple

from rugatools.config import BALANCED
from rugatools.graph.state import RemainingGraphState
from rugatools.rounds.partition import Round
from rugatools.search.collector import RoundSequence, SolutionCollector
from rugatools.search.sequence import SequenceSearch


# Best length shared by all workers of one pool, set by the initializer.
_SHARED_BEST = None


def _worker_init(shared_best) -> None:
    global _SHARED_BEST
    _SHARED_BEST = shared_best


class SharedBestCollector(SolutionCollector):
    """
    Collector whose best length is published through a multiprocessing.Value.

    Reads take the larger of the local and the shared value so a worker prunes
    against results found by its siblings.  Updates go through the Value's
    lock as a compare-and-update.
    """

    def __init__(self, shared_best, keep_ties: bool = True) -> None:
        super().__init__(keep_ties)
        self._shared = shared_best

    @property
    def local_best(self) -> int:
        return self._best

    @property
    def best_length(self) -> int:
        return max(self._best, self._shared.value)

    def consider(self, sequence: Sequence[Round]) -> bool:
        length = len(sequence)
        if length < self._shared.value:
            return False
        kept = super().consider(sequence)
        if kept:
            with self._shared.get_lock():
                if length > self._shared.value:
                    self._shared.value = length
        return kept


def _worker(
    job: Tuple[RemainingGraphState, Round, int, str, Tuple[int, ...], bool],
) -> Tuple[int, List[RoundSequence]]:
    """
    Search the subtree below one depth-0 round.
    Returns (local_best, sequences), local_best = -1 when everything was pruned.
    """
    state, first, k, policy, active, keep_ties = job
    collector = SharedBestCollector(_SHARED_BEST, keep_ties=keep_ties)
    search = SequenceSearch(k, policy=policy, active=active, collector=collector, keep_ties=keep_ties)
    search.prepare(state)
    search.explore(state.with_groups_removed(first), [first])
    if collector.local_best < 0:
        return -1, []
    return collector.finalize()


def parallel_sequence_search(
    state: RemainingGraphState,
    k: int,
    *,
    policy: str = BALANCED,
    active: Optional[Sequence[int]] = None,
    keep_ties: bool = True,
    processes: int = max(1, cpu_count() - 1),
    verbose: bool = False,
) -> Tuple[int, List[RoundSequence]]:
    """
    SequenceSearch with the depth-0 rounds spread over a process pool.

    Subtrees are independent once each worker derives its own state; the only
    shared value is the best length.  Results are merged in depth-0 order, so
    with keep_ties=True the output matches the serial search exactly.
    """
    root = SequenceSearch(k, policy=policy, active=active, keep_ties=keep_ties)
    root.prepare(state)
    firsts = list(root.candidate_rounds(state))
    if verbose:
        print(
            f"[ruga n={state.n} k={k}] {len(firsts)} first rounds over {processes} processes",
            file=sys.stderr,
        )
    if not firsts:
        return root.run(state)

    shared_best = Value("i", -1)
    jobs = [(state, first, k, policy, root.active, keep_ties) for first in firsts]
    merged = SolutionCollector(keep_ties)

    with Pool(processes=processes, initializer=_worker_init, initargs=(shared_best,)) as pool:
        for length, sequences in pool.imap(_worker, jobs, chunksize=1):
            merged.merge(length, sequences)

    return merged.finalize()
