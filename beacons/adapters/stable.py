"""Adapter for the stable ``m.beacon.*`` event schema.

Answer IDs live under ``m.id`` and every text is a rich-text block. The
end record carries both the fallback text and the structured vote counts.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, Field

from beacons.adapters.common import (
    EventEnvelope,
    Reference,
    collect_responses,
    reference,
    truncate_answers,
)
from beacons.adapters.text import TextRepresentation, find_plain, plain_block
from beacons.schemas.beacon import Answer, BeaconDefinition, BeaconKind, ResponseRecord
from beacons.schemas.results import BeaconEndRecord

START_TYPE = "m.beacon.start"
RESPONSE_TYPE = "m.beacon.response"
END_TYPE = "m.beacon.end"


class StableAnswer(BaseModel):
    id: str = Field(alias="m.id")
    text: list[TextRepresentation] = Field(alias="m.text")


class StableQuestion(BaseModel):
    text: list[TextRepresentation] = Field(alias="m.text")


class StableBeaconBlock(BaseModel):
    """The ``m.beacon`` block of a start event."""

    question: StableQuestion
    kind: str = Field(default=BeaconKind.UNDISCLOSED.value)
    max_selections: int = Field(default=1, ge=1)
    answers: list[StableAnswer]


class StableStartContent(BaseModel):
    beacon: StableBeaconBlock = Field(alias="m.beacon")
    text: list[TextRepresentation] = Field(default_factory=list, alias="m.text")


class StableResponseContent(BaseModel):
    selections: list[str] = Field(alias="m.selections")
    relates_to: Reference = Field(alias="m.relates_to")


class StableResponseEvent(EventEnvelope):
    content: StableResponseContent


def parse_start(content: Mapping[str, Any]) -> BeaconDefinition:
    """Build a BeaconDefinition from ``m.beacon.start`` content.

    Answers beyond the 20th are dropped. A label falls back to the answer
    ID when the answer has no plain-text representation.

    Raises:
        pydantic.ValidationError: If the content does not match the schema.
        InvalidAnswerCount: If the content lists no answers.
    """
    block = StableStartContent.model_validate(content).beacon
    answers = truncate_answers(block.answers, "stable")
    return BeaconDefinition(
        question=find_plain(block.question.text) or "",
        kind=block.kind,
        max_selections=block.max_selections,
        answers=tuple(
            Answer(id=a.id, text=find_plain(a.text) or a.id) for a in answers
        ),
    )


def dump_start(beacon: BeaconDefinition, fallback: str | None = None) -> dict[str, Any]:
    """Serialize a BeaconDefinition as ``m.beacon.start`` content."""
    block: dict[str, Any] = {
        "question": {"m.text": plain_block(beacon.question)},
        "answers": [
            {"m.id": a.id, "m.text": plain_block(a.text)} for a in beacon.answers
        ],
    }
    if beacon.kind != BeaconKind.UNDISCLOSED:
        block["kind"] = str(beacon.kind)
    if beacon.max_selections != 1:
        block["max_selections"] = beacon.max_selections

    if fallback is None:
        numbered = "\n".join(f"{i}. {a.text}" for i, a in enumerate(beacon.answers, 1))
        fallback = f"{beacon.question}\n{numbered}"
    return {"m.beacon": block, "m.text": plain_block(fallback)}


def _parse_response_event(event: Mapping[str, Any]) -> tuple[ResponseRecord, str]:
    parsed = StableResponseEvent.model_validate(event)
    record = ResponseRecord(
        sender=parsed.sender,
        submitted_at=parsed.origin_server_ts,
        selections=tuple(parsed.content.selections),
    )
    return record, parsed.content.relates_to.event_id


def parse_response(event: Mapping[str, Any]) -> ResponseRecord:
    """Extract a ResponseRecord from an ``m.beacon.response`` event.

    Raises:
        pydantic.ValidationError: If the event does not match the schema.
    """
    return _parse_response_event(event)[0]


def parse_responses(
    events: Iterable[Mapping[str, Any]], beacon_id: str | None = None,
) -> list[ResponseRecord]:
    """Parse many response events, skipping malformed ones."""
    return collect_responses(events, _parse_response_event, beacon_id)


def build_end(record: BeaconEndRecord) -> dict[str, Any]:
    """Serialize an end record as ``m.beacon.end`` content."""
    content: dict[str, Any] = {"m.text": plain_block(record.text)}
    if record.results is not None:
        content["m.beacon.results"] = dict(record.results.counts)
    content["m.relates_to"] = reference(record.beacon_id)
    return content
