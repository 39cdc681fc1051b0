"""Contrato de fuentes de analítica.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que el servicio de resumen use el cliente Ackee o un doble de test
  sin acoplar el Core a implementaciones concretas.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from core.domain.models import AggregateReport, Domain


@runtime_checkable
class AnalyticsSource(Protocol):
    """Contrato mínimo para un cliente de analítica.

    Reglas de diseño:
    - Todo es asíncrono porque típicamente hará I/O (HTTP).
    - Se usa como context manager asíncrono: al salir libera la conexión.
    - Los fallos se propagan como `AckeeError`; no hay valores por defecto.
    """

    endpoint: str

    async def __aenter__(self) -> "AnalyticsSource":
        ...

    async def __aexit__(self, *exc_info: object) -> None:
        ...

    async def authenticate(self) -> None:
        ...

    async def list_domains(self) -> list[Domain]:
        ...

    async def get_summary(self, domain_ids: Sequence[str]) -> AggregateReport:
        """Resume los dominios indicados, en el mismo orden recibido."""

        ...
