# syrflow/outputs/export.py
"""Экспорт результата расчёта добегания.

Порядок полей фиксирован и совпадает для печатного документа и
CSV‑файла: пункты маршрута, расход, расстояние, мин./ср./макс. время,
признак reset point, дата расчёта, источник данных, точность ±10-15%.
"""

from __future__ import annotations

import csv
import html
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from ..constants import (
    ACCURACY_NOTE,
    DATA_SOURCE_NOTE,
    PILOT_NOTE,
    REPORT_TITLE,
    RIVER_NAME,
)
from ..domain.flow_result import FlowCalculationResult


def _format_distance(distance_km: float) -> str:
    return f"{round(distance_km, 1):g} км"


def _reset_label(result: FlowCalculationResult) -> str:
    return f"Да ({result.reset_point_name})" if result.has_reset_point else "Нет"


def route_report_rows(
    from_name: str,
    to_name: str,
    flow_rate: float,
    result: FlowCalculationResult,
    calculated_at: Optional[datetime] = None,
) -> List[List[str]]:
    """Строки отчёта (первая ячейка – параметр, вторая – значение)."""
    calculated_at = calculated_at or datetime.now()
    return [
        [f"{REPORT_TITLE} - {RIVER_NAME}"],
        [""],
        ["Параметр", "Значение"],
        ["От", from_name],
        ["До", to_name],
        ["Расход воды (попуск)", f"{flow_rate:g} м³/с"],
        ["Расстояние", _format_distance(result.distance_km)],
        [""],
        ["Время добегания"],
        ["Минимальное", result.min_time_formatted],
        ["Среднее", result.avg_time_formatted],
        ["Максимальное", result.max_time_formatted],
        [""],
        ["Reset Point", _reset_label(result)],
        [""],
        ["Дата расчёта", calculated_at.strftime("%d.%m.%Y, %H:%M:%S")],
        ["Источник данных", DATA_SOURCE_NOTE],
        ["Точность", ACCURACY_NOTE],
        ["Примечание", PILOT_NOTE],
    ]


def export_route_csv(
    path: str | Path,
    from_name: str,
    to_name: str,
    flow_rate: float,
    result: FlowCalculationResult,
    calculated_at: Optional[datetime] = None,
) -> Path:
    """Записать отчёт в CSV (все ячейки в кавычках, UTF‑8 с BOM для Excel)."""
    path = Path(path)
    rows = route_report_rows(from_name, to_name, flow_rate, result, calculated_at)
    with open(path, "w", newline="", encoding="utf-8-sig") as handle:
        writer = csv.writer(handle, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerows(rows)
    return path


def render_route_html(
    from_name: str,
    to_name: str,
    flow_rate: float,
    result: FlowCalculationResult,
    calculated_at: Optional[datetime] = None,
) -> str:
    """Печатный HTML‑документ с теми же полями, что и CSV."""
    calculated_at = calculated_at or datetime.now()
    esc = html.escape

    def row(label: str, value: str) -> str:
        return (
            f'<div class="info-row"><span class="label">{esc(label)}:</span>'
            f'<span class="value">{esc(value)}</span></div>'
        )

    warning = ""
    if result.has_reset_point:
        warning = (
            '<div class="warning"><strong>Внимание: Reset Point</strong><br>'
            f"На маршруте расположен гидроузел {esc(result.reset_point_name or '')}. "
            "Время рассчитано для участка после данного узла.</div>"
        )

    return "\n".join(
        [
            "<html>",
            '<head><meta charset="utf-8"><title>Расчёт добегания воды</title></head>',
            "<body>",
            f"<h1>{esc(REPORT_TITLE)}</h1>",
            f"<p>{esc(RIVER_NAME)}</p>",
            row("От", from_name),
            row("До", to_name),
            row("Расход воды (попуск)", f"{flow_rate:g} м³/с"),
            row("Расстояние", _format_distance(result.distance_km)),
            row("Минимальное время", result.min_time_formatted),
            row("Среднее время", result.avg_time_formatted),
            row("Максимальное время", result.max_time_formatted),
            row("Reset Point", _reset_label(result)),
            warning,
            '<div class="footer">',
            f"<p>Дата расчёта: {calculated_at.strftime('%d.%m.%Y, %H:%M:%S')}</p>",
            f"<p>Данные: {esc(DATA_SOURCE_NOTE)}</p>",
            f"<p>Точность расчёта: {esc(ACCURACY_NOTE)}</p>",
            f"<p>{esc(PILOT_NOTE)}</p>",
            "</div>",
            "</body>",
            "</html>",
        ]
    )
