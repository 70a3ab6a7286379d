from .validation import sequence_violations, is_valid_sequence

__all__ = [
    "sequence_violations",
    "is_valid_sequence",
]
