"""Leaderboard ordering and plain-text rendering of beacon results."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from beacons.schemas.results import BeaconResults, LeaderboardEntry, Tally

DEFAULT_SEPARATOR = "\n"
EMPTY_PLACEHOLDER = "No votes were cast."


def vote_counts(tally: Tally) -> dict[str, int]:
    """Answer ID → number of distinct participants, keeping key order."""
    return {answer_id: len(senders) for answer_id, senders in tally.items()}


def sorted_results(tally: Tally) -> list[LeaderboardEntry]:
    """Order a tally from most to fewest votes.

    Ties keep ascending answer-ID order, so repeated calls on the same
    tally always produce the same leaderboard.
    """
    return BeaconResults(counts=vote_counts(tally)).sorted()


def generate_fallback_text(
    labels: Mapping[str, str],
    results: Iterable[LeaderboardEntry | tuple[str, int]],
    separator: str | None = None,
    placeholder: str = EMPTY_PLACEHOLDER,
) -> str:
    """Render results as one "<label>: <count> vote(s)" line per answer.

    Entries are listed in the order given, zero counts included. An answer
    without a label is shown by its ID.

    Args:
        labels: Answer ID → display label.
        results: Leaderboard entries or (answer ID, count) pairs.
        separator: Joins the lines. Defaults to a newline.
        placeholder: Returned when there are no results at all.

    Returns:
        The fallback summary text.
    """
    lines: list[str] = []
    for entry in results:
        if isinstance(entry, LeaderboardEntry):
            answer_id, count = entry.answer_id, entry.vote_count
        else:
            answer_id, count = entry
        lines.append(f"{labels.get(answer_id, answer_id)}: {count} vote(s)")

    if not lines:
        return placeholder
    return (DEFAULT_SEPARATOR if separator is None else separator).join(lines)
