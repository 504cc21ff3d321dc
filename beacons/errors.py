"""Exceptions raised by the beacon engine."""

from __future__ import annotations


class BeaconError(Exception):
    """Base exception for all beacon-specific errors."""


class InvalidAnswerCount(BeaconError):
    """Raised when a beacon's answer list is empty or has too many entries.

    Not a ``ValueError`` subclass, so pydantic validators let it through
    to the caller instead of folding it into a ``ValidationError``.
    """

    def __init__(self, count: int, bound: str, limit: int) -> None:
        self.count = count
        self.bound = bound
        self.limit = limit
        if bound == "min":
            detail = f"not enough answers: got {count}, need at least {limit}"
        else:
            detail = f"too many answers: got {count}, at most {limit} allowed"
        super().__init__(detail)
