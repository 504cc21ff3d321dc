"""Beacon Tally: response aggregation for federated beacon polls."""

__version__ = "0.1.0"

from beacons.errors import BeaconError, InvalidAnswerCount
from beacons.schemas.beacon import Answer, BeaconDefinition, BeaconKind, ResponseRecord
from beacons.schemas.results import BeaconEndRecord, BeaconResults, LeaderboardEntry, Tally
from beacons.tally import (
    compile_results,
    generate_fallback_text,
    order_by_submission,
    sorted_results,
    validate_selections,
    vote_counts,
)

__all__ = [
    "Answer",
    "BeaconDefinition",
    "BeaconEndRecord",
    "BeaconError",
    "BeaconKind",
    "BeaconResults",
    "InvalidAnswerCount",
    "LeaderboardEntry",
    "ResponseRecord",
    "Tally",
    "compile_results",
    "generate_fallback_text",
    "order_by_submission",
    "sorted_results",
    "validate_selections",
    "vote_counts",
]
