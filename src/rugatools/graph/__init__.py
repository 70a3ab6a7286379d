from .state import RemainingGraphState, iter_bits, mask_of, popcount

__all__ = [
    "RemainingGraphState",
    "iter_bits",
    "mask_of",
    "popcount",
]
