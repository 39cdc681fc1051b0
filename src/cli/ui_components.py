"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

import math
from typing import Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import AggregateReport, Domain, EventSummary, Number, StatEntry


def format_number(value: Number) -> str:
    if isinstance(value, float) and math.isnan(value):
        return "n/a"
    if isinstance(value, float) and not value.is_integer():
        return f"{value:,.1f}"
    return f"{int(value):,}"


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Por qué aquí:
    - Evita dependencias circulares (main <-> doctor).
    - Permite desactivar banner en modos no interactivos (JSON/pipelines).
    """

    title = Text("ackee-summary", style="bold cyan")
    subtitle = Text("Ackee analytics • Totals • Top lists", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_domains_table(domains: Sequence[Domain]) -> Table:
    table = Table(title="Domains")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title", style="white")
    for domain in domains:
        table.add_row(domain.id, domain.title)
    return table


def build_totals_panel(report: AggregateReport) -> Panel:
    """Panel con los totales del reporte."""

    body = Text()
    rows = (
        ("Views in range", report.views_in_range),
        ("Views today", report.views_day),
        ("Views this month", report.views_month),
        ("Views this year", report.views_year),
        ("Average views", report.views_avg),
    )
    for label, value in rows:
        body.append(f"{label}: ", style="bold")
        body.append(format_number(value) + "\n")
    body.append("Average duration: ", style="bold")
    body.append(f"{format_number(report.duration_avg_seconds)} s")

    title = Text(report.names_short, style="bold yellow")
    subtitle = f"{report.range.input} ({report.range.days} days)"
    return Panel(body, title=title, subtitle=subtitle, border_style="yellow")


def build_domain_summary_table(report: AggregateReport) -> Table:
    table = Table(title="Per domain")
    table.add_column("Domain", style="cyan", no_wrap=True)
    table.add_column("In range", justify="right")
    table.add_column("Today", justify="right")
    table.add_column("Month", justify="right")
    table.add_column("Year", justify="right")
    table.add_column("Avg views", justify="right")
    table.add_column("Avg duration (s)", justify="right")
    for domain in report.domains:
        table.add_row(
            domain.title,
            format_number(domain.views_in_range),
            format_number(domain.views_day),
            format_number(domain.views_month),
            format_number(domain.views_year),
            format_number(domain.views_avg),
            format_number(domain.duration_avg),
        )
    return table


def build_top_list_table(title: str, entries: Sequence[StatEntry]) -> Table:
    """Tabla top-N para pages/referrers/browsers/etc."""

    table = Table(title=title)
    table.add_column("Value", style="white")
    table.add_column("Count", style="green", justify="right")
    for entry in entries:
        table.add_row(entry.label or "-", format_number(entry.count))
    return table


def build_events_table(events: Sequence[EventSummary]) -> Table:
    table = Table(title="Events")
    table.add_column("Event", style="magenta", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_column("Count", style="green", justify="right")
    for event in events:
        if not event.data:
            table.add_row(event.title, "-", "0")
            continue
        for entry in event.data:
            table.add_row(event.title, entry.label or "-", format_number(entry.count))
    return table
