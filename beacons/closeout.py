"""Closing a beacon: compile its responses into a terminal end record.

Runs the compiler, orders the leaderboard, renders the fallback text and
wraps everything in a BeaconEndRecord referencing the beacon start event.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Mapping

from beacons.schemas.beacon import BeaconDefinition, ResponseRecord
from beacons.schemas.results import BeaconEndRecord, BeaconResults
from beacons.settings import TallySettings
from beacons.tally.compiler import compile_results, order_by_submission
from beacons.tally.presenter import generate_fallback_text, sorted_results, vote_counts

logger = logging.getLogger(__name__)


def now_ms() -> int:
    """Current wall-clock time in ms since the epoch."""
    return int(time.time() * 1000)


def close_beacon(
    beacon: BeaconDefinition,
    responses: Iterable[ResponseRecord],
    beacon_id: str,
    cutoff: int | None = None,
    labels: Mapping[str, str] | None = None,
    settings: TallySettings | None = None,
) -> BeaconEndRecord:
    """Compile a beacon's responses into its end record.

    Args:
        beacon: The beacon being closed.
        responses: All responses seen for the beacon.
        beacon_id: Event ID of the beacon start event.
        cutoff: Ignore responses after this time (ms since the epoch).
            When None and ``settings.cutoff_now`` is set, the current
            time is used.
        labels: Answer ID → display label. Defaults to the beacon's own
            answer texts.
        settings: Tally settings. Defaults to TallySettings().

    Returns:
        BeaconEndRecord with fallback text and vote counts.
    """
    settings = settings or TallySettings()
    if cutoff is None and settings.cutoff_now:
        cutoff = now_ms()
    if settings.order_by_submission:
        responses = order_by_submission(responses)

    tally = compile_results(beacon, responses, cutoff)
    leaderboard = sorted_results(tally)
    text = generate_fallback_text(
        labels if labels is not None else beacon.labels(),
        leaderboard,
        separator=settings.fallback_separator,
        placeholder=settings.empty_placeholder,
    )

    if leaderboard:
        logger.info(
            "Closing beacon %s: top answer %s with %d vote(s)",
            beacon_id, leaderboard[0].answer_id, leaderboard[0].vote_count,
        )
    else:
        logger.info("Closing beacon %s with no votes", beacon_id)

    return BeaconEndRecord(
        beacon_id=beacon_id,
        text=text,
        results=BeaconResults(counts=vote_counts(tally)),
    )
