"""Tally settings and TOML configuration loader.

Loads defaults from beacons/config/defaults.toml, or from a file given
by the caller.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

from pydantic import BaseModel, Field

from beacons.tally.presenter import DEFAULT_SEPARATOR, EMPTY_PLACEHOLDER

# Default config directory relative to the beacons package
_CONFIG_DIR = Path(__file__).parent / "config"

DEFAULT_CONFIG_PATH = _CONFIG_DIR / "defaults.toml"


class TallySettings(BaseModel):
    """Settings applied when closing a beacon."""

    fallback_separator: str = Field(
        default=DEFAULT_SEPARATOR, description="Separator between fallback text lines",
    )
    empty_placeholder: str = Field(
        default=EMPTY_PLACEHOLDER, description="Fallback text when there are no votes",
    )
    cutoff_now: bool = Field(
        default=False, description="Use the current time when no cutoff is given",
    )
    order_by_submission: bool = Field(
        default=False, description="Sort responses by submission time before compiling",
    )


def load_settings(config_path: Path | None = None) -> TallySettings:
    """Load tally settings from a TOML file.

    Args:
        config_path: Path to a TOML file. Defaults to beacons/config/defaults.toml.

    Returns:
        TallySettings with values from the file's [tally] table.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ValueError: If the [tally] entry is not a table.
    """
    path = config_path or DEFAULT_CONFIG_PATH
    if not path.exists():
        raise FileNotFoundError(f"Tally config not found: {path}")

    with open(path, "rb") as f:
        raw = tomllib.load(f)

    section = raw.get("tally", {})
    if not isinstance(section, dict):
        raise ValueError(f"[tally] in {path} must be a table")

    return TallySettings(**section)
