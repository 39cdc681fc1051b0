"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación en el borde (respuestas GraphQL) y documentación
  autocontenida (Field) sin acoplar el Core a librerías de I/O.
- Los payloads del API usan camelCase; los alias mantienen snake_case aquí.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.errors import AckeeError
from core.domain.ranges import EventListType, RangeInput

if TYPE_CHECKING:
    from core.config import AppSettings


Number = int | float


class ClientConfig(BaseModel):
    """Datos de conexión del cliente.

    La regla "token, o usuario + contraseña" se valida en `authenticate()`,
    no aquí: un cliente sin credenciales puede construirse igualmente.
    """

    server_url: str = Field(
        ...,
        min_length=1,
        description="URL del servidor Ackee (con o sin '/' final).",
    )
    username: str | None = None
    password: str | None = None
    token: str | None = Field(
        default=None,
        description="Token ya emitido; evita la llamada a `createToken`.",
    )

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "ClientConfig":
        if not settings.server:
            raise AckeeError("ACKEE_SERVER is not configured")
        return cls(
            server_url=settings.server,
            username=settings.username,
            password=settings.password,
            token=settings.token,
        )


class RangeSpec(BaseModel):
    """Ventana temporal: días de la serie diaria + valor opaco para el API."""

    model_config = ConfigDict(frozen=True)

    days: int = Field(
        ...,
        ge=1,
        description="Longitud de la serie diaria de vistas.",
    )
    input: str = Field(
        ...,
        min_length=1,
        description="Valor del enum `Range` reenviado tal cual al API.",
    )

    @classmethod
    def from_input(cls, value: RangeInput) -> "RangeSpec":
        return cls(days=value.days, input=value.value)


class QueryOptions(BaseModel):
    """Opciones de un resumen simple (sin eventos)."""

    range: RangeSpec = Field(
        default_factory=lambda: RangeSpec.from_input(RangeInput.default()),
    )
    limit: int = Field(
        default=10,
        ge=1,
        description="Entradas por categoría en las listas top-N.",
    )

    @property
    def include_events(self) -> bool:
        return False


class EventQueryOptions(QueryOptions):
    """Opciones de un resumen que además consulta estadísticas de eventos."""

    event_type: EventListType = Field(
        default=EventListType.TOTAL,
        description="Tipo de lista de eventos (TOTAL/AVERAGE).",
    )

    @property
    def include_events(self) -> bool:
        return True


class StatEntry(BaseModel):
    """Par {label, count}; el API lo entrega como `{id: value, count}`."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    label: str | None = Field(default=None, alias="id")
    count: Number = 0


class Domain(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    title: str


# --- Payloads crudos del API -------------------------------------------------


class CountValue(BaseModel):
    model_config = ConfigDict(extra="ignore")

    count: Number = 0


class DomainFacts(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    average_views: CountValue = Field(default_factory=CountValue, alias="averageViews")
    average_duration: CountValue = Field(default_factory=CountValue, alias="averageDuration")
    views_month: Number = Field(default=0, alias="viewsMonth")
    views_year: Number = Field(default=0, alias="viewsYear")
    views_today: Number = Field(default=0, alias="viewsToday")


class DomainStatistics(BaseModel):
    model_config = ConfigDict(extra="ignore")

    views: list[StatEntry] = Field(default_factory=list)
    pages: list[StatEntry] = Field(default_factory=list)
    referrers: list[StatEntry] = Field(default_factory=list)
    languages: list[StatEntry] = Field(default_factory=list)
    browsers: list[StatEntry] = Field(default_factory=list)
    devices: list[StatEntry] = Field(default_factory=list)
    sizes: list[StatEntry] = Field(default_factory=list)
    systems: list[StatEntry] = Field(default_factory=list)


class DomainPayload(BaseModel):
    """Respuesta de `domain(id)` tal como la devuelve el API."""

    model_config = ConfigDict(extra="ignore")

    id: str
    title: str
    facts: DomainFacts = Field(default_factory=DomainFacts)
    statistics: DomainStatistics = Field(default_factory=DomainStatistics)


class EventStatistics(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    entries: list[StatEntry] = Field(default_factory=list, alias="list")


class EventPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    title: str
    statistics: EventStatistics = Field(default_factory=EventStatistics)


# --- Resultado agregado ------------------------------------------------------


class DomainSummary(BaseModel):
    """Métricas de un dominio ya reducidas para presentación."""

    id: str
    title: str
    views_in_range: Number = Field(
        default=0,
        description="Suma de la serie diaria de vistas.",
    )
    views_day: Number = 0
    views_month: Number = 0
    views_year: Number = 0
    views_avg: Number = 0
    duration_avg: Number = Field(
        default=0,
        description="Duración media de visita en segundos (redondeada).",
    )
    pages: list[StatEntry] = Field(default_factory=list)
    referrers: list[StatEntry] = Field(default_factory=list)
    languages: list[StatEntry] = Field(default_factory=list)
    browsers: list[StatEntry] = Field(default_factory=list)
    devices: list[StatEntry] = Field(default_factory=list)
    sizes: list[StatEntry] = Field(default_factory=list)
    systems: list[StatEntry] = Field(default_factory=list)


class EventSummary(BaseModel):
    id: str
    title: str
    data: list[StatEntry] = Field(default_factory=list)


class AggregateReport(BaseModel):
    """Agregado principal: el resumen de uno o varios dominios.

    Por qué un agregado:
    - Centraliza totales y desglose por dominio para facilitar exportación
      y presentación (tabla Rich / JSON).
    """

    names: str = Field(..., description="Títulos unidos por ', '.")
    names_short: str = Field(
        ...,
        description="Dos primeros títulos y ' and N more' si hay más de dos.",
    )
    views_in_range: Number = 0
    views_day: Number = 0
    views_month: Number = 0
    views_year: Number = 0
    views_avg: Number = Field(
        default=0,
        description="Media de `views_avg` por dominio, un decimal.",
    )
    duration_avg_seconds: Number = Field(
        default=0,
        description="NaN cuando ningún dominio tiene duración media positiva.",
    )
    range: RangeSpec
    events: list[EventSummary] | None = None
    domains: list[DomainSummary] = Field(default_factory=list)
