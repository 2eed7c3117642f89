#!/usr/bin/env python3
"""
Verdict CLI - Cucumber JSON Report Builder

Usage:
    verdict build <events.yaml> [OPTIONS]
    verdict validate <events.yaml>
    verdict --version
"""

import logging
import re
from enum import Enum
from pathlib import Path
from typing import Iterable

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from . import __version__
from .events import (
    EventLog,
    FeatureStarted,
    HookFinished,
    RunMetadata,
    ScenarioFinished,
    ScenarioStarted,
    StepFinished,
    load_event_log,
)
from .replay import replay_events
from .reporting import ParentNotFoundError, ReportBuilder

app = typer.Typer(
    name="verdict",
    help="📋 Verdict - Cucumber JSON report builder for parallel test runs",
    add_completion=False,
)
console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"📋 Verdict v{__version__}")
        raise typer.Exit()


class LogLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def configure_logging(level: LogLevel | None) -> None:
    """Send library logs through rich when a level is requested."""
    if level is None:
        return
    logging.basicConfig(
        level=LogLevel(level).value.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True,
        help="Show version and exit"
    ),
    log_level: LogLevel = typer.Option(
        None, "--log-level", case_sensitive=False,
        help="Enable logging at this level"
    ),
):
    """
    📋 Verdict - Cucumber JSON report builder for parallel test runs

    Replay recorded lifecycle events into one report per worker context.
    """
    configure_logging(log_level)


def report_filename(cid: str) -> str:
    """File name for a context's report, safe for any context id."""
    return re.sub(r"[^A-Za-z0-9._-]", "_", cid) + ".json"


def report_filenames(cids: Iterable[str]) -> dict[str, str]:
    """
    Map each context id to a distinct report file name.

    Ids that sanitize to the same name (or differ only in case) get a
    numeric suffix in order of appearance: ``0_1.json``, ``0_1-2.json``.
    """
    names: dict[str, str] = {}
    taken: set[str] = set()
    for cid in cids:
        stem = report_filename(cid)[: -len(".json")]
        name = f"{stem}.json"
        counter = 2
        while name.casefold() in taken:
            name = f"{stem}-{counter}.json"
            counter += 1
        taken.add(name.casefold())
        names[cid] = name
    return names


def describe_event(event) -> tuple[str, str]:
    """Short (target, details) description of an event for tables."""
    if isinstance(event, FeatureStarted):
        return event.id, event.name
    elif isinstance(event, ScenarioStarted):
        return f"{event.parent_id} › {event.id}", event.name
    elif isinstance(event, ScenarioFinished):
        return f"{event.parent_id} › {event.id}", ""
    elif isinstance(event, StepFinished):
        return f"{event.parent_id} › {event.id}", f"{event.name} [{event.result.status.value}]"
    elif isinstance(event, HookFinished):
        return f"{event.parent_id} › {event.id}", f"{event.name} (hook)"
    elif isinstance(event, RunMetadata):
        return "*", f"browser: {event.browser}, device: {event.device}"
    return "", ""


def _load_or_exit(events_file: Path) -> EventLog:
    event_log, validation = load_event_log(str(events_file))

    if not validation.is_valid:
        console.print(f"\n[red]❌ Validation failed:[/red]")
        console.print(str(validation))
        raise typer.Exit(code=1)
    return event_log


@app.command()
def build(
    events_file: Path = typer.Argument(
        ...,
        help="Path to the recorded event log (YAML)",
        exists=True,
        readable=True,
    ),
    output_dir: Path = typer.Option(
        Path("reports"), "--output-dir", "-o",
        help="Directory to write one JSON report per context"
    ),
    strict: bool = typer.Option(
        True, "--strict/--lenient",
        help="Abort on events with unknown parents, or skip them"
    ),
    stdout: bool = typer.Option(
        False, "--stdout",
        help="Print reports as JSON instead of writing files"
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q",
        help="Only show errors"
    ),
):
    """
    Build reports from a recorded event log.

    Replay every event, flatten scenario titles, drop empty features
    and write one report per worker context.
    """
    if not quiet:
        console.print(f"\n📄 Loading event log: {events_file}")

    event_log = _load_or_exit(events_file)

    if not quiet:
        label = event_log.name or events_file.name
        console.print(f"   [green]✅ Valid event log:[/green] {label} ({len(event_log.events)} events)")

    builder = ReportBuilder()
    try:
        result = replay_events(builder, event_log.events, strict=strict)
    except ParentNotFoundError as e:
        console.print(f"\n[red]❌ Replay aborted:[/red] {e}")
        console.print("   💡 Use --lenient to skip events with unknown parents")
        raise typer.Exit(code=1)

    for skipped in result.skipped:
        console.print(f"  [yellow]⚠️  Skipped event #{skipped.index}:[/yellow] {skipped.error}")

    filenames = report_filenames(result.context_ids)
    for cid in result.context_ids:
        if stdout:
            console.print_json(data=builder.to_dict(cid))
            continue
        path = builder.save_json(cid, output_dir / filenames[cid])
        if not quiet:
            features = len(builder.snapshot(cid).features)
            console.print(f"📁 {escape(f'[{cid}]')} {features} feature(s) → {path}")

    raise typer.Exit(code=0)


@app.command()
def validate(
    events_file: Path = typer.Argument(
        ...,
        help="Path to the recorded event log (YAML)",
        exists=True,
        readable=True,
    ),
):
    """
    Validate an event log file.

    Check the schema and list the events without building reports.
    """
    console.print(f"\n📄 Validating: {events_file}")

    event_log = _load_or_exit(events_file)

    console.print(f"\n[green]✅ Valid event log:[/green] {event_log.name or events_file.name}")
    console.print(f"   Contexts: {', '.join(event_log.context_ids()) or '-'}")
    console.print(f"   Events: {len(event_log.events)}")

    table = Table(title="Events")
    table.add_column("#", style="dim")
    table.add_column("Context", style="cyan")
    table.add_column("Event", style="magenta")
    table.add_column("Target")
    table.add_column("Details")

    for index, event in enumerate(event_log.events):
        target, details = describe_event(event)
        table.add_row(str(index), escape(event.cid), type(event).__name__, escape(target), escape(details))

    console.print()
    console.print(table)
    raise typer.Exit(code=0)


@app.command()
def info():
    """
    Show information about Verdict.
    """
    console.print(f"""
📋 [bold]Verdict[/bold] v{__version__}

Cucumber JSON report builder for parallel test runs

[bold]Features:[/bold]
  • One report per worker context
  • Step upserts and hidden hook steps
  • Scenario arguments folded into titles
  • Browser, device and platform metadata
  • Empty features pruned

[bold]Quick Start:[/bold]
  verdict validate runs/nightly.yaml
  verdict build runs/nightly.yaml --output-dir reports
""")


if __name__ == "__main__":
    app()
