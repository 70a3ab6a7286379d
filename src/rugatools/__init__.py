"""
rugatools: exact search for the Repeated Unique Group Assignment problem.

Split n entities into groups of at least k, round after round, without ever
putting the same pair together twice, for as many rounds as possible; report
every longest schedule.
"""

from .errors import RugaError, InvalidParameterError, MalformedGraphError
from .config import SearchConfig, BALANCED, MAXIMAL
from .graph.state import RemainingGraphState
from .rounds.sizes import group_sizes
from .rounds.partition import (
    enumerate_rounds,
    balanced_cover_size,
    potential_groups,
    active_vertices,
    is_maximal_round,
)
from .search.bounds import BoundEstimator
from .search.collector import SolutionCollector
from .search.sequence import SequenceSearch
from .search.parallel import parallel_sequence_search
from .solver import RugaResult, solve

# Boundary helpers
from .io.graph6 import state_from_nx, state_to_nx, conflicts_from_nx, state_from_g6
from .utils.validation import sequence_violations, is_valid_sequence

__all__ = [
    # Errors
    "RugaError",
    "InvalidParameterError",
    "MalformedGraphError",
    # Config
    "SearchConfig",
    "BALANCED",
    "MAXIMAL",
    # Graph state
    "RemainingGraphState",
    # Rounds
    "group_sizes",
    "enumerate_rounds",
    "balanced_cover_size",
    "potential_groups",
    "active_vertices",
    "is_maximal_round",
    # Search
    "BoundEstimator",
    "SolutionCollector",
    "SequenceSearch",
    "parallel_sequence_search",
    # Solver
    "RugaResult",
    "solve",
    # IO
    "state_from_nx",
    "state_to_nx",
    "conflicts_from_nx",
    "state_from_g6",
    # Utils
    "sequence_violations",
    "is_valid_sequence",
]
