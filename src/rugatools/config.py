from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional

from rugatools.errors import InvalidParameterError

BALANCED = "balanced"
MAXIMAL = "maximal"
POLICIES = (BALANCED, MAXIMAL)


def check_policy(policy: str) -> str:
    if policy not in POLICIES:
        raise InvalidParameterError(
            f"Unknown round policy {policy!r}; expected one of {', '.join(POLICIES)}."
        )
    return policy


@dataclass(frozen=True)
class SearchConfig:
    """
    Knobs for a single solve() call.

    policy:    "balanced" (every active vertex grouped, fixed group sizes) or
               "maximal" (groups of any size >= k, rounds maximal).
    keep_ties: report every sequence of the best length, not just the first.
    processes: worker count for the depth-0 fan-out; None runs serially.
    verbose:   progress lines on stderr.
    """

    policy: str = BALANCED
    keep_ties: bool = True
    processes: Optional[int] = None
    verbose: bool = False

    def __post_init__(self) -> None:
        check_policy(self.policy)
        if self.processes is not None and self.processes < 1:
            raise InvalidParameterError("processes must be >= 1 (or None for serial).")

    def with_overrides(self, **changes) -> "SearchConfig":
        return replace(self, **changes)

    @classmethod
    def from_env(cls) -> "SearchConfig":
        """Read RUGA_POLICY, RUGA_PROCESSES and RUGA_VERBOSE."""
        policy = os.environ.get("RUGA_POLICY", BALANCED)
        raw_procs = os.environ.get("RUGA_PROCESSES", "").strip()
        try:
            processes = int(raw_procs) if raw_procs else None
        except ValueError:
            raise InvalidParameterError(
                f"RUGA_PROCESSES must be an integer, got {raw_procs!r}."
            ) from None
        verbose = os.environ.get("RUGA_VERBOSE", "").lower() in ("1", "true", "yes")
        return cls(policy=policy, processes=processes, verbose=verbose)
