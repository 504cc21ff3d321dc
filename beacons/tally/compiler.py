"""Compiling beacon responses into a tally.

Each participant contributes their last valid response, in the order the
responses are given. Callers that want "most recent wins" should pass
responses through order_by_submission() first.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from beacons.schemas.beacon import BeaconDefinition, ResponseRecord
from beacons.schemas.results import Tally
from beacons.tally.validation import validate_selections

logger = logging.getLogger(__name__)


def order_by_submission(responses: Iterable[ResponseRecord]) -> list[ResponseRecord]:
    """Stable sort of responses by submission time, oldest first."""
    return sorted(responses, key=lambda r: r.submitted_at)


def compile_results(
    beacon: BeaconDefinition,
    responses: Iterable[ResponseRecord],
    cutoff: int | None = None,
) -> Tally:
    """Fold responses into a mapping of answer ID → participants.

    Args:
        beacon: The beacon the responses refer to.
        responses: Response records, consumed once in the given order.
        cutoff: Responses submitted strictly after this time (ms since the
            epoch) are ignored. None disables time filtering.

    Returns:
        Tally keyed by answer ID in ascending order. Answers nobody
        selected are absent.
    """
    latest: dict[str, tuple[list[str], int]] = {}
    skipped = 0

    for record in responses:
        if cutoff is not None and record.submitted_at > cutoff:
            logger.debug(
                "Ignoring response from %s at %d: after cutoff %d",
                record.sender, record.submitted_at, cutoff,
            )
            skipped += 1
            continue

        valid = validate_selections(beacon, record.selections)
        if valid is None:
            logger.debug("Ignoring response from %s: no valid selection", record.sender)
            skipped += 1
            continue

        latest[record.sender] = (valid, record.submitted_at)

    voters: dict[str, set[str]] = {}
    for sender, (selections, _) in latest.items():
        for answer_id in selections:
            voters.setdefault(answer_id, set()).add(sender)

    tally: Tally = {answer_id: frozenset(voters[answer_id]) for answer_id in sorted(voters)}

    logger.info(
        "Compiled %d participant(s) across %d answer(s), %d response(s) skipped",
        len(latest), len(tally), skipped,
    )
    return tally
