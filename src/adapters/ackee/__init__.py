"""Adaptador del API GraphQL de Ackee.

Por qué un paquete:
- Separa las consultas fijas, la validación de respuestas y el cliente.
- El cliente implementa `core.interfaces.analytics.AnalyticsSource`.
"""

from adapters.ackee.client import AckeeClient
from adapters.ackee.responses import GraphQLFailure, GraphQLSuccess, validate_response

__all__ = [
    "AckeeClient",
    "GraphQLFailure",
    "GraphQLSuccess",
    "validate_response",
]
