"""Cliente asíncrono del API GraphQL de Ackee.

Responsabilidad:
- Autenticar (token fijo o `createToken` con usuario/contraseña).
- Ejecutar las consultas fijas (dominios, estadísticas por dominio, eventos).
- Reducir las respuestas a un `AggregateReport` vía `core.services.aggregation`.

El cliente no escribe logs de payloads: el logging lo decide quien lo llama.
"""

from __future__ import annotations

import asyncio
from typing import Any, Sequence

import httpx
from pydantic import ValidationError

from adapters.ackee import queries
from adapters.ackee.responses import validate_response
from adapters.http_client import build_async_client, normalize_endpoint
from core.config import AppSettings
from core.domain.errors import ApiError, AuthError
from core.domain.models import (
    AggregateReport,
    ClientConfig,
    Domain,
    DomainPayload,
    EventPayload,
    EventQueryOptions,
    QueryOptions,
)
from core.domain.ranges import EventListType
from core.services.aggregation import build_report


class AckeeClient:
    """Envoltorio del API de Ackee.

    Uso típico::

        async with AckeeClient(config, options) as client:
            await client.authenticate()
            report = await client.get_summary(["id-1", "id-2"])

    `http_client` permite inyectar un `httpx.AsyncClient` ya configurado
    (p.ej. con `MockTransport` en tests); en ese caso no se cierra aquí.
    """

    _api_path = "api"

    def __init__(
        self,
        config: ClientConfig,
        options: QueryOptions | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        settings: AppSettings | None = None,
    ) -> None:
        self.config = config
        self.options = options or QueryOptions()
        self.endpoint = normalize_endpoint(config.server_url)
        self._owns_http = http_client is None
        self._http = http_client or build_async_client(settings)

    async def __aenter__(self) -> "AckeeClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    @property
    def url(self) -> str:
        return self.endpoint + self._api_path

    @property
    def authorization(self) -> str | None:
        """Valor actual del header `Authorization` (None antes de autenticar)."""

        return self._http.headers.get("Authorization")

    def _set_bearer(self, token: str) -> None:
        self._http.headers["Authorization"] = f"Bearer {token}"

    async def _request(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        payload: dict[str, Any] = {"query": query}
        if variables is not None:
            payload["variables"] = variables

        try:
            response = await self._http.post(self.url, json=payload)
        except httpx.HTTPError as exc:
            raise ApiError(str(exc) or type(exc).__name__) from exc

        return validate_response(response).unwrap()

    async def authenticate(self) -> None:
        if self.config.token:
            self._set_bearer(self.config.token)
            return

        if not self.config.username or not self.config.password:
            raise AuthError("either a token or both username and password are required")

        variables = {
            "input": {
                "username": self.config.username,
                "password": self.config.password,
            }
        }
        try:
            data = await self._request(queries.CREATE_TOKEN, variables)
        except ApiError as exc:
            raise AuthError(str(exc)) from exc

        try:
            token = data["createToken"]["payload"]["id"]
        except (KeyError, TypeError) as exc:
            raise AuthError("token issuance response lacks createToken.payload.id") from exc
        if not isinstance(token, str) or not token:
            raise AuthError("token issuance response lacks createToken.payload.id")

        self._set_bearer(token)

    async def list_domains(self) -> list[Domain]:
        data = await self._request(queries.GET_DOMAINS)
        try:
            return [Domain.model_validate(item) for item in data.get("domains") or []]
        except ValidationError as exc:
            raise ApiError(f"malformed domains payload: {exc}", body=data) from exc

    async def get_summary(self, domain_ids: Sequence[str]) -> AggregateReport:
        # gather no cancela las peticiones hermanas si una falla.
        domains = await asyncio.gather(*(self._fetch_domain(i) for i in domain_ids))

        events: list[EventPayload] | None = None
        if self.options.include_events:
            events = await self._fetch_events()

        return build_report(domains, range_spec=self.options.range, events=events)

    async def _fetch_domain(self, domain_id: str) -> DomainPayload:
        query = queries.domain_query(days=self.options.range.days, limit=self.options.limit)
        variables = {"id": domain_id, "range": self.options.range.input}

        data = await self._request(query, variables)
        raw = data.get("domain")
        if raw is None:
            raise ApiError(f"domain {domain_id!r} not found", body=data)
        try:
            return DomainPayload.model_validate(raw)
        except ValidationError as exc:
            raise ApiError(f"malformed domain payload for {domain_id!r}: {exc}", body=data) from exc

    async def _fetch_events(self) -> list[EventPayload]:
        options = self.options
        event_type = options.event_type if isinstance(options, EventQueryOptions) else EventListType.TOTAL
        query = queries.events_query(event_type=event_type.value, limit=options.limit)

        data = await self._request(query, {"range": options.range.input})
        try:
            return [EventPayload.model_validate(item) for item in data.get("events") or []]
        except ValidationError as exc:
            raise ApiError(f"malformed events payload: {exc}", body=data) from exc
