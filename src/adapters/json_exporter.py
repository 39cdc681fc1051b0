"""Exportación JSON del reporte agregado.

Por qué JSON:
- Interoperabilidad con dashboards, scripts y pipelines.
- Permite guardar un snapshot del resumen sin depender de la salida Rich.
"""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any

from core.domain.models import AggregateReport


def _replace_nan(value: Any) -> Any:
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, dict):
        return {k: _replace_nan(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_replace_nan(v) for v in value]
    return value


def report_to_json(report: AggregateReport) -> str:
    """Serializa el reporte con formato estable (NaN -> null)."""

    payload = _replace_nan(report.model_dump(mode="python"))
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True, allow_nan=False)


def export_report_json(*, report: AggregateReport, output_path: Path) -> Path:
    """Exporta `AggregateReport` a JSON UTF-8."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(report_to_json(report) + "\n", encoding="utf-8")
    return output_path
