"""Result schemas for compiled beacons.

Defines the compiler's Tally shape, the presenter's LeaderboardEntry,
the vote-count block embedded in end records (BeaconResults), and the
schema-independent terminal record (BeaconEndRecord).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# Answer ID → distinct participants whose final valid response selected it.
# Keys are in ascending answer-ID order; zero-vote answers are absent.
Tally = dict[str, frozenset[str]]


class LeaderboardEntry(BaseModel):
    """One row of a sorted leaderboard."""

    model_config = ConfigDict(frozen=True)

    answer_id: str = Field(description="Answer ID")
    vote_count: int = Field(ge=0, description="Number of distinct participants")


class BeaconResults(BaseModel):
    """Vote counts per answer, as carried by a stable end record."""

    counts: dict[str, int] = Field(
        default_factory=dict,
        description="Answer ID → number of votes received",
    )

    def sorted(self) -> list[LeaderboardEntry]:
        """Entries from most to fewest votes, ties by ascending answer ID."""
        ordered = sorted(self.counts.items(), key=lambda item: (-item[1], item[0]))
        return [LeaderboardEntry(answer_id=k, vote_count=c) for k, c in ordered]


class BeaconEndRecord(BaseModel):
    """The compiled close-out of a beacon, before wire serialization."""

    beacon_id: str = Field(description="Event ID of the beacon start this closes")
    text: str = Field(description="Plain-text fallback summary of the results")
    results: BeaconResults | None = Field(
        default=None, description="Structured vote counts, if included",
    )
