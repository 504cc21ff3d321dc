"""Pydantic schemas for beacon definitions, responses and results."""

from beacons.schemas.beacon import Answer, BeaconDefinition, BeaconKind, ResponseRecord
from beacons.schemas.results import BeaconEndRecord, BeaconResults, LeaderboardEntry, Tally

__all__ = [
    "Answer",
    "BeaconDefinition",
    "BeaconEndRecord",
    "BeaconKind",
    "BeaconResults",
    "LeaderboardEntry",
    "ResponseRecord",
    "Tally",
]
