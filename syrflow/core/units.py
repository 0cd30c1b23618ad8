# syrflow/core/units.py
"""Перевод расхода (м³/с) в объём стока (млн м³) за шаг агрегации.

Точка ряда – средний расход за шаг, поэтому объём считается как расход,
умноженный на длительность шага в сутках (неделя – 7, декада – 10,
месяц – условные 30 суток).
"""

from __future__ import annotations

from typing import Iterable, List

from ..constants import SECONDS_PER_DAY
from ..domain.filters import Aggregation, UnitType
from ..domain.measurement import ChartDataPoint

# Сколько суток «весит» одна точка ряда при пересчёте в объём
BUCKET_DAYS = {
    Aggregation.DAY: 1,
    Aggregation.WEEK: 7,
    Aggregation.DECADE: 10,
    Aggregation.MONTH: 30,
}


def to_volume(rate: float, days: float = 1) -> float:
    """Объём (млн м³), прошедший за *days* суток при расходе *rate* (м³/с).

    Formula: *W* = Q × 86400 × days / 10⁶.
    """
    return rate * SECONDS_PER_DAY * days / 1_000_000


def bucket_days(aggregation: Aggregation | str) -> int:
    return BUCKET_DAYS[Aggregation(aggregation)]


def convert_points(
    points: Iterable[ChartDataPoint],
    unit_type: UnitType | str,
    aggregation: Aggregation | str,
) -> List[ChartDataPoint]:
    """Перевести ряд расходов в выбранные единицы (м³/с или млн м³ за шаг)."""
    points = list(points)
    if UnitType(unit_type) is UnitType.M3S:
        return points
    days = bucket_days(aggregation)
    return [
        ChartDataPoint(p.date, to_volume(p.value, days), p.is_previous, p.label)
        for p in points
    ]
