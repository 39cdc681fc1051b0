"""Tests for the summary orchestration used by the CLI."""

from __future__ import annotations

import pytest

from core.config import AppSettings
from core.domain.errors import AckeeError, ApiError
from core.domain.models import EventQueryOptions, QueryOptions
from core.domain.ranges import EventListType, RangeInput
from core.interfaces.analytics import AnalyticsSource
from core.services.summary import (
    SummaryHooks,
    SummaryRequest,
    build_client,
    collect_summary,
    list_all_domains,
)

from conftest import make_domain


def test_request_without_events_builds_plain_options() -> None:
    options = SummaryRequest(range_input=RangeInput.LAST_30_DAYS, limit=4).to_options()

    assert type(options) is QueryOptions
    assert options.include_events is False
    assert options.range.days == 30
    assert options.range.input == "LAST_30_DAYS"
    assert options.limit == 4


def test_request_with_events_builds_event_options() -> None:
    options = SummaryRequest(include_events=True, event_type=EventListType.AVERAGE).to_options()

    assert isinstance(options, EventQueryOptions)
    assert options.include_events is True
    assert options.event_type is EventListType.AVERAGE


def test_build_client_requires_server() -> None:
    with pytest.raises(AckeeError, match="ACKEE_SERVER"):
        build_client(AppSettings(_env_file=None, server=None))


@pytest.mark.asyncio
async def test_build_client_returns_analytics_source(settings) -> None:
    async with build_client(settings) as client:
        assert isinstance(client, AnalyticsSource)


@pytest.mark.asyncio
async def test_collect_summary_uses_all_domains_when_none_given(fake_api, settings) -> None:
    fake_api.add_domain(make_domain("a", "Alpha", views=[1, 2]))
    fake_api.add_domain(make_domain("b", "Beta", views=[4]))
    resolved: list[list[str]] = []

    report = await collect_summary(
        settings=settings,
        request=SummaryRequest(),
        hooks=SummaryHooks(domains_resolved=resolved.append),
        http_client=fake_api.http_client(),
    )

    assert resolved == [["a", "b"]]
    assert report.names == "Alpha, Beta"
    assert report.views_in_range == 7


@pytest.mark.asyncio
async def test_collect_summary_respects_given_ids(fake_api, settings) -> None:
    fake_api.add_domain(make_domain("a", "Alpha"))
    fake_api.add_domain(make_domain("b", "Beta"))

    report = await collect_summary(
        settings=settings,
        request=SummaryRequest(domain_ids=[" b "]),
        http_client=fake_api.http_client(),
    )

    assert [d.id for d in report.domains] == ["b"]
    assert not any("getDomains" in body["query"] for body in fake_api.bodies)


@pytest.mark.asyncio
async def test_collect_summary_propagates_api_errors(fake_api, settings) -> None:
    fake_api.add_domain(make_domain("a", "Alpha"))
    fake_api.failing_domains.add("a")

    with pytest.raises(ApiError):
        await collect_summary(
            settings=settings,
            request=SummaryRequest(domain_ids=["a"]),
            http_client=fake_api.http_client(),
        )


@pytest.mark.asyncio
async def test_list_all_domains_logs_in_with_credentials(fake_api) -> None:
    fake_api.add_domain(make_domain("a", "Alpha"))
    settings = AppSettings(_env_file=None, server="https://ackee.test", username="u", password="p", token=None)

    domains = await list_all_domains(settings=settings, http_client=fake_api.http_client())

    assert [d.title for d in domains] == ["Alpha"]
    assert "createToken" in fake_api.bodies[0]["query"]
    assert fake_api.requests[1].headers["Authorization"] == "Bearer T"
