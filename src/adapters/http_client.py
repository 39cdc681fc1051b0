"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts y headers para todas las llamadas al API.
- Facilita testeo: se puede sustituir por un cliente con `httpx.MockTransport`.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def normalize_endpoint(server: str) -> str:
    """Añade la barra final si falta (`https://a.b` -> `https://a.b/`)."""

    return server if server.endswith("/") else server + "/"


def build_async_client(settings: AppSettings | None = None) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults para un API GraphQL.

    Por qué un builder:
    - Centraliza timeouts/headers para que todas las consultas se comporten igual.
    - El cliente Ackee añade luego el header `Authorization` sobre esta instancia.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
        "Content-Type": "application/json",
    }
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
    )
