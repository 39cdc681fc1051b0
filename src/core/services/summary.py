"""Summary orchestration utilities.

This module owns the flow that entry points (CLI, scripts, tests) run to
produce a report: build the client from settings, authenticate, resolve the
domain ids and aggregate. Side-effects other than logging (printing,
progress bars) stay in the caller through `SummaryHooks`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Sequence

import httpx

from adapters.ackee import AckeeClient
from core.config import AppSettings
from core.domain.models import (
    AggregateReport,
    ClientConfig,
    Domain,
    EventQueryOptions,
    QueryOptions,
    RangeSpec,
)
from core.domain.ranges import EventListType, RangeInput
from core.interfaces.analytics import AnalyticsSource

logger = logging.getLogger(__name__)


@dataclass
class SummaryRequest:
    """Parameters that control a summary invocation."""

    domain_ids: Sequence[str] = field(default_factory=list)
    range_input: RangeInput = RangeInput.LAST_7_DAYS
    limit: int = 10
    include_events: bool = False
    event_type: EventListType = EventListType.TOTAL

    def to_options(self) -> QueryOptions:
        range_spec = RangeSpec.from_input(self.range_input)
        if self.include_events:
            return EventQueryOptions(range=range_spec, limit=self.limit, event_type=self.event_type)
        return QueryOptions(range=range_spec, limit=self.limit)


@dataclass
class SummaryHooks:
    """Optional callbacks for UI layers (progress)."""

    domains_resolved: Callable[[list[str]], None] | None = None


def build_client(
    settings: AppSettings,
    options: QueryOptions | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> AnalyticsSource:
    config = ClientConfig.from_settings(settings)
    return AckeeClient(config, options, http_client=http_client, settings=settings)


async def list_all_domains(
    *,
    settings: AppSettings,
    http_client: httpx.AsyncClient | None = None,
) -> list[Domain]:
    async with build_client(settings, http_client=http_client) as client:
        await client.authenticate()
        domains = await client.list_domains()
    logger.info("Fetched %d domains from %s", len(domains), client.endpoint)
    return domains


async def collect_summary(
    *,
    settings: AppSettings,
    request: SummaryRequest,
    hooks: SummaryHooks | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> AggregateReport:
    """Authenticate and build the report for `request.domain_ids`.

    With no ids every domain returned by the API is summarized.
    """

    hooks = hooks or SummaryHooks()
    options = request.to_options()

    async with build_client(settings, options, http_client=http_client) as client:
        await client.authenticate()
        logger.debug("Authenticated against %s", client.endpoint)

        ids = [i.strip() for i in request.domain_ids if i.strip()]
        if not ids:
            ids = [domain.id for domain in await client.list_domains()]
            logger.info("No domain ids given, summarizing all %d domains", len(ids))
        if hooks.domains_resolved:
            hooks.domains_resolved(ids)

        logger.info(
            "Fetching summary for %d domains (range=%s, limit=%d, events=%s)",
            len(ids),
            options.range.input,
            options.limit,
            options.include_events,
        )
        report = await client.get_summary(ids)

    for domain in report.domains:
        logger.debug(
            "Domain %s (%s): %s views in range, %s avg duration",
            domain.id,
            domain.title,
            domain.views_in_range,
            domain.duration_avg,
        )
    return report
