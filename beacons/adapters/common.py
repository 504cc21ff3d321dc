"""Pieces shared by the stable and legacy wire adapters."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, Field, ValidationError

from beacons.schemas.beacon import BeaconDefinition, ResponseRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")

REFERENCE_REL_TYPE = "m.reference"


class Reference(BaseModel):
    """An ``m.relates_to`` reference to the beacon start event."""

    rel_type: str = Field(default=REFERENCE_REL_TYPE, description="Relation type")
    event_id: str = Field(description="Event ID of the referenced beacon start")


class EventEnvelope(BaseModel):
    """The parts of a timeline event the engine needs besides its content."""

    sender: str = Field(description="User ID of the event's sender")
    origin_server_ts: int = Field(ge=0, description="Send time in ms since the epoch")


def reference(event_id: str) -> dict[str, str]:
    return {"rel_type": REFERENCE_REL_TYPE, "event_id": event_id}


def truncate_answers(answers: list[T], schema: str) -> list[T]:
    """Drop answers beyond BeaconDefinition.MAX_ANSWERS.

    Producers may over-supply answers; consumers keep the first ones
    rather than rejecting the beacon.
    """
    limit = BeaconDefinition.MAX_ANSWERS
    if len(answers) > limit:
        logger.warning(
            "%s beacon has %d answers, keeping the first %d",
            schema, len(answers), limit,
        )
        return answers[:limit]
    return answers


def collect_responses(
    events: Iterable[Mapping[str, Any]],
    parse: Callable[[Mapping[str, Any]], tuple[ResponseRecord, str]],
    beacon_id: str | None = None,
) -> list[ResponseRecord]:
    """Parse response events with ``parse``, keeping arrival order.

    Events that fail schema validation are logged and left out so one
    malformed event cannot block the rest. When ``beacon_id`` is given,
    responses referencing another beacon are left out too.
    """
    records: list[ResponseRecord] = []
    for event in events:
        try:
            record, related_to = parse(event)
        except ValidationError as e:
            sender = event.get("sender") if isinstance(event, Mapping) else None
            logger.warning(
                "Skipping malformed response event from %s: %d error(s)",
                sender or "<unknown>", e.error_count(),
            )
            continue
        if beacon_id is not None and related_to != beacon_id:
            logger.debug("Skipping response for other beacon %s", related_to)
            continue
        records.append(record)
    return records
