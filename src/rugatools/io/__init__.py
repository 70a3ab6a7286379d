from .graph6 import (
    state_from_nx,
    state_to_nx,
    conflicts_from_nx,
    state_from_g6,
)

__all__ = [
    "state_from_nx",
    "state_to_nx",
    "conflicts_from_nx",
    "state_from_g6",
]
