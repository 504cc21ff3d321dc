"""Selection validation against a beacon's answer set."""

from __future__ import annotations

from collections.abc import Sequence

from beacons.schemas.beacon import BeaconDefinition


def validate_selections(
    beacon: BeaconDefinition,
    selections: Sequence[str],
    max_selections: int | None = None,
) -> list[str] | None:
    """Keep the selections that name one of the beacon's answers.

    Unknown IDs are dropped, order and duplicates are preserved, and the
    result is cut to the first ``max_selections`` entries (the beacon's own
    limit when not given).

    Returns:
        The valid selections, or None if none survive.
    """
    limit = beacon.max_selections if max_selections is None else max_selections
    answer_ids = beacon.answer_ids
    valid = [s for s in selections if s in answer_ids][:limit]
    return valid or None
