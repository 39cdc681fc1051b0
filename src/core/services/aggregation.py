"""Reducción de payloads por dominio a un `AggregateReport`.

Funciones puras: sin I/O, sin logging. El cliente las invoca después de
reunir las respuestas del API, y los tests las ejercitan directamente.

Redondeo:
- Se usa redondeo "half up" (`_round_half_up`), no el bancario de `round()`,
  para que 2.5 s se muestren como 3 s.
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence

from core.domain.models import (
    AggregateReport,
    DomainPayload,
    DomainSummary,
    EventPayload,
    EventSummary,
    Number,
    RangeSpec,
    StatEntry,
)


def _round_half_up(value: float, digits: int = 0) -> Number:
    if math.isnan(value):
        return value
    factor = 10**digits
    rounded = math.floor(value * factor + 0.5)
    return rounded if digits == 0 else rounded / factor


def _mean(values: Sequence[Number]) -> float:
    if not values:
        return math.nan
    return sum(values) / len(values)


def sum_counts(entries: Iterable[StatEntry]) -> Number:
    return sum(entry.count for entry in entries)


def format_names(titles: Sequence[str]) -> str:
    return ", ".join(titles)


def format_names_short(titles: Sequence[str]) -> str:
    """Dos primeros títulos y el resto como contador.

    >>> format_names_short(["X", "Y", "Z"])
    'X, Y and 1 more'
    """

    if len(titles) > 2:
        return f"{format_names(titles[:2])} and {len(titles) - 2} more"
    return format_names(titles)


def duration_average_seconds(domains: Sequence[DomainPayload]) -> Number:
    """Duración media global en segundos.

    El numerador suma todos los dominios; el denominador cuenta solo los que
    tienen duración positiva. Sin ninguno positivo el resultado es NaN.
    """

    positive = [d for d in domains if d.facts.average_duration.count > 0]
    total = sum(d.facts.average_duration.count for d in domains)
    if not positive:
        return math.nan
    return _round_half_up(total / len(positive) / 1000)


def summarize_domain(domain: DomainPayload) -> DomainSummary:
    facts = domain.facts
    stats = domain.statistics
    return DomainSummary(
        id=domain.id,
        title=domain.title,
        views_in_range=sum_counts(stats.views),
        views_day=facts.views_today,
        views_month=facts.views_month,
        views_year=facts.views_year,
        views_avg=facts.average_views.count,
        duration_avg=_round_half_up(facts.average_duration.count / 1000),
        pages=stats.pages,
        referrers=stats.referrers,
        languages=stats.languages,
        browsers=stats.browsers,
        devices=stats.devices,
        sizes=stats.sizes,
        systems=stats.systems,
    )


def summarize_events(events: Iterable[EventPayload]) -> list[EventSummary]:
    return [
        EventSummary(id=event.id, title=event.title, data=event.statistics.entries)
        for event in events
    ]


def build_report(
    domains: Sequence[DomainPayload],
    *,
    range_spec: RangeSpec,
    events: Sequence[EventPayload] | None = None,
) -> AggregateReport:
    """Combina las respuestas por dominio en un único reporte.

    `domains` conserva el orden de los ids pedidos; `events` es `None` cuando
    el resumen no incluye eventos.
    """

    titles = [d.title for d in domains]
    summaries = [summarize_domain(d) for d in domains]

    return AggregateReport(
        names=format_names(titles),
        names_short=format_names_short(titles),
        views_in_range=sum(s.views_in_range for s in summaries),
        views_day=sum(s.views_day for s in summaries),
        views_month=sum(s.views_month for s in summaries),
        views_year=sum(s.views_year for s in summaries),
        views_avg=_round_half_up(_mean([s.views_avg for s in summaries]), 1),
        duration_avg_seconds=duration_average_seconds(domains),
        range=range_spec,
        events=summarize_events(events) if events is not None else None,
        domains=summaries,
    )
