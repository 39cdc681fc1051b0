"""Shared fixtures: fake Ackee API payloads and a recording mock transport."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

import core.config
from core.config import AppSettings
from core.domain.models import ClientConfig

SERVER = "https://ackee.test"


def make_domain(
    domain_id: str,
    title: str,
    *,
    views: list[int] | None = None,
    average_views: int = 0,
    average_duration: int = 0,
    views_today: int = 0,
    views_month: int = 0,
    views_year: int = 0,
    pages: list[tuple[str, int]] | None = None,
) -> dict[str, Any]:
    """Build a `domain` payload shaped like the GraphQL response."""

    return {
        "id": domain_id,
        "title": title,
        "facts": {
            "averageViews": {"count": average_views},
            "averageDuration": {"count": average_duration},
            "viewsMonth": views_month,
            "viewsYear": views_year,
            "viewsToday": views_today,
        },
        "statistics": {
            "views": [{"count": c, "id": f"2026-10-{i + 1:02d}"} for i, c in enumerate(views or [])],
            "pages": [{"count": c, "id": v} for v, c in (pages or [])],
            "referrers": [],
            "languages": [],
            "browsers": [],
            "devices": [],
            "sizes": [],
            "systems": [],
        },
    }


class FakeAckee:
    """In-memory stand-in for the Ackee `/api` endpoint.

    Records every request body so tests can assert on queries and headers.
    """

    def __init__(self) -> None:
        self.domains: dict[str, dict[str, Any]] = {}
        self.events: list[dict[str, Any]] = []
        self.token = "T"
        self.failing_domains: set[str] = set()
        self.requests: list[httpx.Request] = []
        self.bodies: list[dict[str, Any]] = []

    def add_domain(self, payload: dict[str, Any]) -> None:
        self.domains[payload["id"]] = payload

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        body = json.loads(request.content)
        self.bodies.append(body)
        query: str = body["query"]
        variables = body.get("variables") or {}

        if "createToken" in query:
            return httpx.Response(200, json={"data": {"createToken": {"payload": {"id": self.token}}}})
        if "getDomains" in query:
            items = [{"id": d["id"], "title": d["title"]} for d in self.domains.values()]
            return httpx.Response(200, json={"data": {"domains": items}})
        if "getDomain(" in query:
            domain_id = variables["id"]
            if domain_id in self.failing_domains:
                return httpx.Response(500, json={"message": "boom"})
            return httpx.Response(200, json={"data": {"domain": self.domains[domain_id]}})
        if "getEvents" in query:
            return httpx.Response(200, json={"data": {"events": self.events}})
        return httpx.Response(400, json={"errors": [{"message": "unknown query"}]})

    def http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def fake_api() -> FakeAckee:
    return FakeAckee()


@pytest.fixture
def token_config() -> ClientConfig:
    return ClientConfig(server_url=SERVER, token="permanent")


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, server=SERVER, token="permanent")


@pytest.fixture
def mock_client_factory() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    def _factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _factory


@pytest.fixture(autouse=True)
def user_env_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Point every settings source at a temporary user `.env`.

    Keeps the developer's `./.env`, user config and `ACKEE_*` variables out of the tests.
    """

    env_path = tmp_path / "config" / ".env"
    for key in list(os.environ):
        if key.upper().startswith("ACKEE_"):
            monkeypatch.delenv(key)
    monkeypatch.setattr(core.config, "get_user_env_file", lambda: env_path)
    monkeypatch.setitem(AppSettings.model_config, "env_file", (str(env_path),))
    return env_path
