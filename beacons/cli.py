"""Beacons CLI: Typer + Rich terminal interface.

Commands: compile, config show, config path.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from beacons import __version__
from beacons.adapters import WireSchema, get_adapter
from beacons.closeout import close_beacon
from beacons.errors import BeaconError
from beacons.settings import DEFAULT_CONFIG_PATH, TallySettings, load_settings

console = Console()

# ── App and sub-apps ─────────────────────────────────────────────

app = typer.Typer(
    name="beacons",
    help="Compile beacon poll responses into results.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(
    name="config",
    help="Show tally configuration.",
    no_args_is_help=True,
)
app.add_typer(config_app, name="config")


# ── Version callback ───────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"beacons {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Beacons: response aggregation for federated polls."""


# ── Helpers ──────────────────────────────────────────────────────


def _load_settings(config: Path | None) -> TallySettings:
    """Load tally settings, exit on error."""
    try:
        return load_settings(config)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error loading config:[/red] {e}")
        raise typer.Exit(1) from None


def _read_json(path: Path) -> Any:
    """Read a JSON file, exit on error."""
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        console.print(f"[red]File not found:[/red] {path}")
        raise typer.Exit(1) from None
    except json.JSONDecodeError as e:
        console.print(f"[red]Invalid JSON in {path}:[/red] {e}")
        raise typer.Exit(1) from None


def _unwrap_start(data: Any) -> tuple[dict[str, Any], str | None]:
    """Accept either a full start event or bare start content."""
    if isinstance(data, dict) and isinstance(data.get("content"), dict):
        return data["content"], data.get("event_id")
    return data, None


# ── beacons compile ──────────────────────────────────────────────


@app.command("compile")
def compile_command(
    start: Path = typer.Argument(..., help="JSON file with the beacon start event or content"),
    responses: Path = typer.Argument(..., help="JSON file with an array of response events"),
    schema: str = typer.Option(
        "stable", "--schema", "-s",
        help="Wire schema of the events: stable, legacy",
    ),
    cutoff: int = typer.Option(
        None, "--cutoff",
        help="Ignore responses sent after this time (ms since the epoch)",
    ),
    beacon_id: str = typer.Option(
        None, "--beacon-id",
        help="Event ID of the beacon start (default: read from START)",
    ),
    as_json: bool = typer.Option(
        False, "--json",
        help="Print the end event content as JSON",
    ),
    config: Path = typer.Option(
        None, "--config", "-c",
        help="TOML file with tally settings",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Log skipped responses",
    ),
) -> None:
    """Compile responses to a beacon and show the results."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )

    settings = _load_settings(config)
    try:
        adapter = get_adapter(schema)
    except ValueError:
        valid = ", ".join(s.value for s in WireSchema)
        console.print(f"[red]Unknown schema:[/red] '{schema}' (expected one of: {valid})")
        raise typer.Exit(1) from None

    content, event_id = _unwrap_start(_read_json(start))
    beacon_id = beacon_id or event_id
    if not beacon_id:
        console.print(
            "[red]Error:[/red] No beacon event ID. "
            "Pass --beacon-id or give a full start event with 'event_id'."
        )
        raise typer.Exit(1) from None

    events = _read_json(responses)
    if not isinstance(events, list):
        console.print(f"[red]Error:[/red] Responses must be a JSON array of events: {responses}")
        raise typer.Exit(1) from None

    try:
        beacon = adapter.parse_start(content)
    except (BeaconError, ValidationError) as e:
        console.print(f"[red]Invalid beacon start:[/red] {escape(str(e))}")
        raise typer.Exit(1) from None

    records = adapter.parse_responses(events, beacon_id)
    end = close_beacon(beacon, records, beacon_id, cutoff=cutoff, settings=settings)

    if as_json:
        console.print_json(json.dumps(adapter.build_end(end)))
        return

    labels = beacon.labels()
    leaderboard = end.results.sorted() if end.results else []

    table = Table(title=Text(beacon.question or "Beacon Results"), show_lines=True)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Answer", style="bold cyan")
    table.add_column("ID", style="dim")
    table.add_column("Votes", justify="right")

    for rank, entry in enumerate(leaderboard, 1):
        table.add_row(
            str(rank),
            Text(labels.get(entry.answer_id, entry.answer_id)),
            Text(entry.answer_id),
            str(entry.vote_count),
        )

    console.print(table)
    console.print(f"\n[dim]{len(records)} response(s) read, schema {schema}[/dim]")
    console.print(Panel(Text(end.text), title="Fallback Text", border_style="dim"))


# ── beacons config ───────────────────────────────────────────────


@config_app.command("show")
def config_show(
    config: Path = typer.Option(
        None, "--config", "-c",
        help="TOML file with tally settings",
    ),
) -> None:
    """Show current tally configuration."""
    settings = _load_settings(config)

    table = Table(title="Tally Configuration", show_header=False, show_lines=True)
    table.add_column("Setting", style="bold")
    table.add_column("Value")

    table.add_row("Fallback Separator", repr(settings.fallback_separator))
    table.add_row("Empty Placeholder", Text(settings.empty_placeholder))
    table.add_row("Cutoff Now", str(settings.cutoff_now))
    table.add_row("Order By Submission", str(settings.order_by_submission))

    console.print(table)


@config_app.command("path")
def config_path() -> None:
    """Show configuration file location."""
    console.print(f"Defaults: {DEFAULT_CONFIG_PATH}")
