from __future__ import annotations


class RugaError(Exception):
    """Base class for errors raised at the solver boundary."""


class InvalidParameterError(RugaError, ValueError):
    """Bad n, k, policy or worker count; raised before any search starts."""


class MalformedGraphError(RugaError, ValueError):
    """Caller-supplied conflict data does not describe a simple graph on 0..n-1."""
