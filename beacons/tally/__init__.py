"""Beacon result aggregation.

Provides selection validation, result compilation with last-response-wins
semantics, leaderboard ordering and fallback text generation.
"""

from beacons.tally.compiler import compile_results, order_by_submission
from beacons.tally.presenter import generate_fallback_text, sorted_results, vote_counts
from beacons.tally.validation import validate_selections

__all__ = [
    "compile_results",
    "generate_fallback_text",
    "order_by_submission",
    "sorted_results",
    "validate_selections",
    "vote_counts",
]
