from .sizes import group_sizes, round_edge_cost
from .partition import (
    Group,
    Round,
    enumerate_rounds,
    balanced_cover_size,
    potential_groups,
    active_vertices,
    is_maximal_round,
)

__all__ = [
    "group_sizes",
    "round_edge_cost",
    "Group",
    "Round",
    "enumerate_rounds",
    "balanced_cover_size",
    "potential_groups",
    "active_vertices",
    "is_maximal_round",
]
