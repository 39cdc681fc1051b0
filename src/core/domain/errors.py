"""Project-native typed exceptions for Ackee client failures."""

from __future__ import annotations

from typing import Any


class AckeeError(Exception):
    """Base exception for every failure surfaced by the client."""


class AuthError(AckeeError):
    """Credentials absent/invalid, or a malformed token issuance response."""


class ApiError(AckeeError):
    """The API returned a GraphQL error payload or the transport call failed.

    Attributes:
        status_code: HTTP status when a response was received.
        body: Decoded response body when one was available.
    """

    def __init__(self, message: str, status_code: int | None = None, body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
