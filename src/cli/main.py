"""CLI principal (Typer).

Comandos:
- `domains`: lista los dominios del servidor.
- `summary`: resumen agregado de uno o varios dominios.
- `doctor`: diagnóstico de configuración y conectividad.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import TypeAdapter
from rich.console import Console

from adapters.json_exporter import export_report_json, report_to_json
from cli import doctor
from cli.ui_components import (
    build_domain_summary_table,
    build_domains_table,
    build_events_table,
    build_top_list_table,
    build_totals_panel,
    print_banner,
)
from core.config import AppSettings, setup_logging
from core.domain.errors import AckeeError
from core.domain.models import Domain
from core.domain.ranges import EventListType, RangeInput
from core.services.summary import SummaryHooks, SummaryRequest, collect_summary, list_all_domains

app = typer.Typer(no_args_is_help=True, help="Summaries of Ackee analytics domains.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
logger = logging.getLogger(__name__)

_TOP_LISTS = ("pages", "referrers", "languages", "browsers", "devices", "sizes", "systems")
_DOMAINS_ADAPTER = TypeAdapter(list[Domain])


def _fail(exc: Exception) -> typer.Exit:
    logger.debug("Command failed", exc_info=exc)
    _console.print(f"[red]Error:[/red] {exc}")
    return typer.Exit(code=1)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING...). Defaults to ACKEE_LOG_LEVEL.",
    ),
) -> None:
    setup_logging(log_level)


@app.command()
def domains(
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table."),
) -> None:
    """List every domain tracked by the server."""

    settings = AppSettings()
    try:
        result = asyncio.run(list_all_domains(settings=settings))
    except AckeeError as exc:
        raise _fail(exc) from exc

    if as_json:
        typer.echo(_DOMAINS_ADAPTER.dump_json(result).decode("utf-8"))
        return
    _console.print(build_domains_table(result))


@app.command()
def summary(
    domain_ids: Optional[List[str]] = typer.Argument(
        None,
        help="Domain ids to summarize. All domains when omitted.",
    ),
    range_input: Optional[RangeInput] = typer.Option(
        None,
        "--range",
        case_sensitive=False,
        help="Time window. Defaults to ACKEE_DEFAULT_RANGE.",
    ),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        min=1,
        help="Entries per top list. Defaults to ACKEE_DEFAULT_LIMIT.",
    ),
    events: bool = typer.Option(False, "--events/--no-events", help="Include event statistics."),
    event_type: Optional[EventListType] = typer.Option(
        None,
        "--event-type",
        case_sensitive=False,
        help="Event list aggregation. Defaults to ACKEE_DEFAULT_EVENT_TYPE.",
    ),
    top: bool = typer.Option(False, "--top", help="Show top lists for each domain."),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the report as JSON to this path."),
) -> None:
    """Aggregate views, durations and top lists for one or more domains."""

    settings = AppSettings()
    request = SummaryRequest(
        domain_ids=domain_ids or [],
        range_input=range_input or settings.default_range,
        limit=limit or settings.default_limit,
        include_events=events,
        event_type=event_type or settings.default_event_type,
    )

    hooks = SummaryHooks()
    if not as_json:
        print_banner(_console)
        hooks.domains_resolved = lambda ids: _console.print(f"[dim]Fetching {len(ids)} domain(s)...[/dim]")

    try:
        report = asyncio.run(collect_summary(settings=settings, request=request, hooks=hooks))
    except AckeeError as exc:
        raise _fail(exc) from exc

    if output:
        path = export_report_json(report=report, output_path=output)
        if not as_json:
            _console.print(f"[green]Saved report to:[/green] {path}")

    if as_json:
        typer.echo(report_to_json(report))
        return

    _console.print(build_totals_panel(report))
    _console.print(build_domain_summary_table(report))
    if top:
        for domain in report.domains:
            for name in _TOP_LISTS:
                entries = getattr(domain, name)
                if entries:
                    _console.print(build_top_list_table(f"{domain.title} · {name}", entries))
    if report.events is not None:
        _console.print(build_events_table(report.events))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
