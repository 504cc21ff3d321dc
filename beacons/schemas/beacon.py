"""Beacon definition and response schemas.

Defines the schema-independent view of a beacon (BeaconDefinition and its
Answer entries) and of a single participant's response (ResponseRecord).
Both wire schemas are normalized into these models by the adapters.
"""

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from beacons.errors import InvalidAnswerCount


class BeaconKind(StrEnum):
    """Whether interim results may be shown before the beacon closes.

    Unknown kinds are kept as plain strings on BeaconDefinition.kind.
    """

    UNDISCLOSED = "m.undisclosed"
    DISCLOSED = "m.disclosed"


class Answer(BaseModel):
    """One selectable answer of a beacon."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Answer ID, unique among the beacon's answers")
    text: str = Field(description="Plain-text display label")


class BeaconDefinition(BaseModel):
    """The question, its bounded answer list, and the selection limit.

    Construction fails with InvalidAnswerCount when ``answers`` is empty
    or longer than MAX_ANSWERS. Wire adapters truncate over-supplied
    answer lists before getting here.
    """

    model_config = ConfigDict(frozen=True)

    MIN_ANSWERS: ClassVar[int] = 1
    MAX_ANSWERS: ClassVar[int] = 20

    question: str = Field(description="Display text of the question")
    kind: BeaconKind | str = Field(
        default=BeaconKind.UNDISCLOSED,
        description="Disclosure kind; custom kinds are kept verbatim",
    )
    max_selections: int = Field(
        default=1, ge=1, description="How many answers one participant may select",
    )
    answers: tuple[Answer, ...] = Field(description="Ordered answers (1 to 20)")

    @field_validator("kind", mode="before")
    @classmethod
    def _known_kind(cls, v: object, info: ValidationInfo) -> object:
        # Wire adapters with their own kind spellings pass verbatim_kind so
        # an unmapped string stays a custom kind.
        if info.context and info.context.get("verbatim_kind"):
            return v
        if isinstance(v, str) and not isinstance(v, BeaconKind):
            try:
                return BeaconKind(v)
            except ValueError:
                return v
        return v

    @field_validator("answers")
    @classmethod
    def _answer_count(cls, v: tuple[Answer, ...]) -> tuple[Answer, ...]:
        if len(v) < cls.MIN_ANSWERS:
            raise InvalidAnswerCount(len(v), "min", cls.MIN_ANSWERS)
        if len(v) > cls.MAX_ANSWERS:
            raise InvalidAnswerCount(len(v), "max", cls.MAX_ANSWERS)
        return v

    @property
    def answer_ids(self) -> frozenset[str]:
        return frozenset(a.id for a in self.answers)

    def labels(self) -> dict[str, str]:
        """Answer ID → display label, in answer order."""
        return {a.id: a.text for a in self.answers}


class ResponseRecord(BaseModel):
    """A participant's selections, as extracted from one response event."""

    model_config = ConfigDict(frozen=True)

    sender: str = Field(description="Opaque participant identity")
    submitted_at: int = Field(ge=0, description="Submission time in ms since the epoch")
    selections: tuple[str, ...] = Field(
        default=(), description="Raw answer IDs as submitted, unvalidated",
    )
