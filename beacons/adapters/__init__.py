"""Wire schema adapters.

Each adapter module turns one event schema into BeaconDefinition and
ResponseRecord instances and serializes end records back. They share the
interface ``parse_start``, ``dump_start``, ``parse_response``,
``parse_responses`` and ``build_end``.
"""

from __future__ import annotations

from enum import StrEnum
from types import ModuleType

from beacons.adapters import legacy, stable


class WireSchema(StrEnum):
    """Supported event schemas."""

    STABLE = "stable"
    LEGACY = "legacy"


_ADAPTERS: dict[WireSchema, ModuleType] = {
    WireSchema.STABLE: stable,
    WireSchema.LEGACY: legacy,
}


def get_adapter(schema: WireSchema | str) -> ModuleType:
    """Return the adapter module for a schema name.

    Raises:
        ValueError: If the schema is unknown.
    """
    return _ADAPTERS[WireSchema(schema)]


__all__ = ["WireSchema", "get_adapter", "legacy", "stable"]
