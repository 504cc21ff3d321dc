"""Rich-text content blocks used by the stable schema.

A text block is a list of representations of the same text in different
mimetypes. Clients that only render plain text pick the ``text/plain``
entry.
"""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, Field

PLAIN_MIMETYPE = "text/plain"


class TextRepresentation(BaseModel):
    """One rendering of a text block."""

    body: str = Field(description="The text in this representation's mimetype")
    mimetype: str = Field(default=PLAIN_MIMETYPE, description="Mimetype of the body")


def find_plain(block: Sequence[TextRepresentation]) -> str | None:
    """Return the first plain-text body in the block, if any."""
    for representation in block:
        if representation.mimetype == PLAIN_MIMETYPE:
            return representation.body
    return None


def plain_block(text: str) -> list[dict[str, str]]:
    """Serialize a plain-text-only block.

    The mimetype is omitted since plain text is the default.
    """
    return [{"body": text}]
