"""Validación explícita de respuestas GraphQL.

Cada helper del cliente pasa la `httpx.Response` por `validate_response`,
que devuelve un resultado etiquetado en lugar de lanzar directamente:

- `GraphQLSuccess(data)`: HTTP 2xx sin `errors`.
- `GraphQLFailure(error)`: `errors` presente, o HTTP no-2xx, o cuerpo ilegible.

Así todas las llamadas exponen una única forma de error (`ApiError`).
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Union

import httpx

from core.domain.errors import ApiError


@dataclass(frozen=True)
class GraphQLSuccess:
    data: dict[str, Any]

    def unwrap(self) -> dict[str, Any]:
        return self.data


@dataclass(frozen=True)
class GraphQLFailure:
    error: ApiError

    def unwrap(self) -> dict[str, Any]:
        raise self.error


GraphQLResult = Union[GraphQLSuccess, GraphQLFailure]


def _decode_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None


def _first_error_message(errors: Any) -> str:
    if isinstance(errors, list) and errors:
        first = errors[0]
        if isinstance(first, dict) and isinstance(first.get("message"), str):
            return first["message"]
        return str(first)
    return "GraphQL error"


def validate_response(response: httpx.Response) -> GraphQLResult:
    status = response.status_code
    body = _decode_body(response)

    if not response.is_success:
        if body:
            serialized = json.dumps(body) if not isinstance(body, str) else body
            message = f"{serialized} ({status} status code)"
        else:
            message = f"Request failed with status code {status}"
        return GraphQLFailure(ApiError(message, status_code=status, body=body))

    if not isinstance(body, dict):
        return GraphQLFailure(
            ApiError(f"Unexpected response body ({status} status code)", status_code=status, body=body)
        )

    if body.get("errors") is not None:
        return GraphQLFailure(
            ApiError(_first_error_message(body["errors"]), status_code=status, body=body)
        )

    data = body.get("data")
    return GraphQLSuccess(data if isinstance(data, dict) else {})
