from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from rugatools.rounds.partition import Round

RoundSequence = Tuple[Round, ...]


class SolutionCollector:
    """
    Best-so-far terminal sequences.

    consider() applies the rule used at every terminal node:
      longer than best -> replace the set
      equal to best    -> append (only when keep_ties)
      shorter          -> discard

    best_length is -1 until the first terminal sequence arrives.
    """

    def __init__(self, keep_ties: bool = True) -> None:
        self.keep_ties = keep_ties
        self._best = -1
        self._sequences: List[RoundSequence] = []

    @property
    def best_length(self) -> int:
        return self._best

    def reset(self) -> None:
        """Forget everything collected so far."""
        self._best = -1
        self._sequences = []

    def consider(self, sequence: Sequence[Round]) -> bool:
        """Offer a terminal sequence. Returns True if it was kept."""
        length = len(sequence)
        if length > self._best:
            self._best = length
            self._sequences = [tuple(sequence)]
            return True
        if length == self._best and self.keep_ties:
            self._sequences.append(tuple(sequence))
            return True
        return False

    def merge(self, length: int, sequences: Iterable[Sequence[Round]]) -> None:
        """Fold in the (best_length, sequences) result of another collector."""
        if length < 0:
            return
        for seq in sequences:
            if len(seq) != length:
                raise ValueError(f"sequence of length {len(seq)} merged under length {length}")
            self.consider(seq)

    def finalize(self) -> Tuple[int, List[RoundSequence]]:
        if self._best < 0:
            return 0, [()]
        return self._best, list(self._sequences)
