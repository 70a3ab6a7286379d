from .bounds import BoundEstimator
from .collector import RoundSequence, SolutionCollector
from .sequence import SequenceSearch
from .parallel import SharedBestCollector, parallel_sequence_search

__all__ = [
    "BoundEstimator",
    "RoundSequence",
    "SolutionCollector",
    "SequenceSearch",
    "SharedBestCollector",
    "parallel_sequence_search",
]
