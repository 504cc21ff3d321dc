"""Adapter for the legacy ``org.matrix.msc3489.beacon.*`` event schema.

Answer IDs live under ``id`` and texts are plain strings. Well-known kinds
carry the unstable prefix on the wire. The end record has no structured
results, only the fallback text.
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
from beacons.schemas.beacon import Answer, BeaconDefinition, BeaconKind, ResponseRecord
from beacons.schemas.results import BeaconEndRecord

START_TYPE = "org.matrix.msc3489.beacon.start"
RESPONSE_TYPE = "org.matrix.msc3489.beacon.response"
END_TYPE = "org.matrix.msc3489.beacon.end"

TEXT_KEY = "org.matrix.msc1767.text"

_KIND_TO_WIRE = {
    BeaconKind.UNDISCLOSED: "org.matrix.msc3489.beacon.undisclosed",
    BeaconKind.DISCLOSED: "org.matrix.msc3489.beacon.disclosed",
}
_KIND_FROM_WIRE = {wire: kind for kind, wire in _KIND_TO_WIRE.items()}


def kind_from_wire(value: str) -> BeaconKind | str:
    return _KIND_FROM_WIRE.get(value, value)


def kind_to_wire(kind: BeaconKind | str) -> str:
    if isinstance(kind, BeaconKind):
        return _KIND_TO_WIRE[kind]
    return kind


class LegacyAnswer(BaseModel):
    id: str
    text: str | None = Field(default=None, alias=TEXT_KEY)


class LegacyQuestion(BaseModel):
    text: str = Field(default="", alias=TEXT_KEY)


class LegacyStartBlock(BaseModel):
    """The ``org.matrix.msc3489.beacon.start`` block of a start event."""

    question: LegacyQuestion
    kind: str = Field(default=_KIND_TO_WIRE[BeaconKind.UNDISCLOSED])
    max_selections: int = Field(default=1, ge=1)
    answers: list[LegacyAnswer]


class LegacyStartContent(BaseModel):
    beacon_start: LegacyStartBlock = Field(alias=START_TYPE)
    text: str | None = Field(default=None, alias=TEXT_KEY)


class LegacyResponseBlock(BaseModel):
    answers: list[str]


class LegacyResponseContent(BaseModel):
    beacon_response: LegacyResponseBlock = Field(alias=RESPONSE_TYPE)
    relates_to: Reference = Field(alias="m.relates_to")


class LegacyResponseEvent(EventEnvelope):
    content: LegacyResponseContent


def parse_start(content: Mapping[str, Any]) -> BeaconDefinition:
    """Build a BeaconDefinition from legacy start content.

    Answers beyond the 20th are dropped. An answer without text is
    labelled by its ID. Only the prefixed well-known kinds map to
    BeaconKind; any other kind string, including the stable spellings,
    is kept verbatim.

    Raises:
        pydantic.ValidationError: If the content does not match the schema.
        InvalidAnswerCount: If the content lists no answers.
    """
    block = LegacyStartContent.model_validate(content).beacon_start
    answers = truncate_answers(block.answers, "legacy")
    return BeaconDefinition.model_validate(
        {
            "question": block.question.text,
            "kind": kind_from_wire(block.kind),
            "max_selections": block.max_selections,
            "answers": tuple(Answer(id=a.id, text=a.text or a.id) for a in answers),
        },
        context={"verbatim_kind": True},
    )


def dump_start(beacon: BeaconDefinition, fallback: str | None = None) -> dict[str, Any]:
    """Serialize a BeaconDefinition as legacy start content."""
    block = {
        "question": {TEXT_KEY: beacon.question},
        "kind": kind_to_wire(beacon.kind),
        "max_selections": beacon.max_selections,
        "answers": [{"id": a.id, TEXT_KEY: a.text} for a in beacon.answers],
    }
    if fallback is None:
        numbered = "\n".join(f"{i}. {a.text}" for i, a in enumerate(beacon.answers, 1))
        fallback = f"{beacon.question}\n{numbered}"
    return {START_TYPE: block, TEXT_KEY: fallback}


def _parse_response_event(event: Mapping[str, Any]) -> tuple[ResponseRecord, str]:
    parsed = LegacyResponseEvent.model_validate(event)
    record = ResponseRecord(
        sender=parsed.sender,
        submitted_at=parsed.origin_server_ts,
        selections=tuple(parsed.content.beacon_response.answers),
    )
    return record, parsed.content.relates_to.event_id


def parse_response(event: Mapping[str, Any]) -> ResponseRecord:
    """Extract a ResponseRecord from a legacy response event.

    Raises:
        pydantic.ValidationError: If the event does not match the schema.
    """
    return _parse_response_event(event)[0]


def parse_responses(
    events: Iterable[Mapping[str, Any]], beacon_id: str | None = None,
) -> list[ResponseRecord]:
    """Parse many legacy response events, skipping malformed ones."""
    return collect_responses(events, _parse_response_event, beacon_id)


def build_end(record: BeaconEndRecord) -> dict[str, Any]:
    """Serialize an end record as legacy end content.

    Structured results are not part of this schema and are left out.
    """
    return {
        TEXT_KEY: record.text,
        END_TYPE: {},
        "m.relates_to": reference(record.beacon_id),
    }
