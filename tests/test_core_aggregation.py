"""Tests for the pure reduction of domain payloads into an aggregate report."""

from __future__ import annotations

import math

from core.domain.models import DomainPayload, EventPayload, RangeSpec
from core.services.aggregation import (
    build_report,
    duration_average_seconds,
    format_names_short,
    summarize_domain,
)

from conftest import make_domain

RANGE = RangeSpec(days=7, input="LAST_7_DAYS")


def _payloads(*raw: dict) -> list[DomainPayload]:
    return [DomainPayload.model_validate(item) for item in raw]


def test_names_short_counts_remaining_domains() -> None:
    domains = _payloads(make_domain("a", "X"), make_domain("b", "Y"), make_domain("c", "Z"))

    report = build_report(domains, range_spec=RANGE)

    assert report.names == "X, Y, Z"
    assert report.names_short == "X, Y and 1 more"


def test_names_short_equals_names_for_two_domains() -> None:
    report = build_report(_payloads(make_domain("a", "X"), make_domain("b", "Y")), range_spec=RANGE)

    assert report.names_short == report.names == "X, Y"


def test_names_short_with_many_domains() -> None:
    assert format_names_short(["A", "B", "C", "D", "E"]) == "A, B and 3 more"
    assert format_names_short(["A"]) == "A"


def test_duration_average_ignores_domains_without_duration() -> None:
    domains = _payloads(
        make_domain("a", "X", average_duration=2000),
        make_domain("b", "Y", average_duration=0),
    )

    report = build_report(domains, range_spec=RANGE)

    assert report.duration_avg_seconds == 2
    assert [d.duration_avg for d in report.domains] == [2, 0]


def test_duration_average_without_positive_counts_is_nan() -> None:
    domains = _payloads(make_domain("a", "X"), make_domain("b", "Y"))

    assert math.isnan(duration_average_seconds(domains))


def test_duration_rounds_half_up() -> None:
    summary = summarize_domain(DomainPayload.model_validate(make_domain("a", "X", average_duration=2500)))

    assert summary.duration_avg == 3


def test_views_in_range_sums_daily_series_per_domain_and_total() -> None:
    domains = _payloads(
        make_domain("a", "X", views=[3, 7]),
        make_domain("b", "Y", views=[5]),
    )

    report = build_report(domains, range_spec=RANGE)

    assert [d.views_in_range for d in report.domains] == [10, 5]
    assert report.views_in_range == 15


def test_fact_totals_and_average_views() -> None:
    domains = _payloads(
        make_domain("a", "X", average_views=3, views_today=1, views_month=10, views_year=100),
        make_domain("b", "Y", average_views=4, views_today=2, views_month=20, views_year=200),
        make_domain("c", "Z", average_views=4, views_today=3, views_month=30, views_year=300),
    )

    report = build_report(domains, range_spec=RANGE)

    assert report.views_day == 6
    assert report.views_month == 60
    assert report.views_year == 600
    assert report.views_avg == 3.7
    assert [d.views_avg for d in report.domains] == [3, 4, 4]


def test_statistics_lists_pass_through_unchanged() -> None:
    raw = make_domain("a", "X", pages=[("/", 9), ("/about", 2)])

    summary = summarize_domain(DomainPayload.model_validate(raw))

    assert [(e.label, e.count) for e in summary.pages] == [("/", 9), ("/about", 2)]
    assert summary.referrers == []


def test_events_are_reshaped_only_when_given() -> None:
    domains = _payloads(make_domain("a", "X"))
    events = [
        EventPayload.model_validate(
            {"id": "e", "title": "Click", "statistics": {"list": [{"id": "cta", "count": 2}]}}
        )
    ]

    assert build_report(domains, range_spec=RANGE).events is None

    report = build_report(domains, range_spec=RANGE, events=events)
    assert report.events is not None
    assert report.events[0].title == "Click"
    assert [(e.label, e.count) for e in report.events[0].data] == [("cta", 2)]
    assert report.range == RANGE
