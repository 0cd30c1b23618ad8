# syrflow/core/statistics.py
"""Сводные показатели и производные ряды для панелей дашборда.

* :func:`kpi` – среднее / максимум / минимум / число точек ряда;
* :func:`describe` – описательная статистика (медиана, квартили, СКО);
* :func:`seasonality` – средний внутригодовой профиль по месяцам;
* :func:`cumulative`, :func:`differences`, :func:`balance_series` –
  накопленный объём, разница с прошлым годом, баланс приток − попуск;
* :func:`water_balance` – итоговый статус водного баланса;
* :func:`histogram` – распределение значений по равным интервалам;
* :func:`half_trend`, :func:`relative_change` – тенденция внутри ряда
  и изменение к другому году.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from ..constants import MONTH_LABELS
from ..domain.filters import UnitType
from ..domain.measurement import ChartDataPoint, Measurement
from .units import to_volume
from .values import value_or_none


@dataclass(frozen=True, slots=True)
class KPISummary:
    mean: float
    maximum: float
    minimum: float
    count: int


@dataclass(frozen=True, slots=True)
class DescriptiveStats:
    mean: float
    median: float
    minimum: float
    maximum: float
    std: float
    q1: float
    q3: float
    count: int


@dataclass(frozen=True, slots=True)
class Difference:
    date: date
    diff: float
    percent_diff: float

    @property
    def is_positive(self) -> bool:
        return self.diff >= 0


@dataclass(frozen=True, slots=True)
class WaterBalance:
    balance: float
    percent: float
    status: str


@dataclass(frozen=True, slots=True)
class HistogramBin:
    lower: float
    upper: float
    count: int


def kpi(points: Sequence[ChartDataPoint]) -> KPISummary:
    """KPI ряда; для пустого ряда все показатели равны нулю."""
    if not points:
        return KPISummary(0.0, 0.0, 0.0, 0)
    values = np.array([p.value for p in points], dtype=float)
    return KPISummary(
        mean=float(values.mean()),
        maximum=float(values.max()),
        minimum=float(values.min()),
        count=int(values.size),
    )


def describe(values: Sequence[float]) -> Optional[DescriptiveStats]:
    """Описательная статистика; медиана и квартили – по индексу отсортированного ряда."""
    if not values:
        return None
    data = np.sort(np.asarray(values, dtype=float))
    n = data.size
    return DescriptiveStats(
        mean=float(data.mean()),
        median=float(data[n // 2]),
        minimum=float(data[0]),
        maximum=float(data[-1]),
        std=float(data.std()),  # генеральная (ddof=0)
        q1=float(data[int(n * 0.25)]),
        q3=float(data[int(n * 0.75)]),
        count=n,
    )


def seasonality(
    measurements: Iterable[Measurement],
    unit_type: UnitType | str = UnitType.M3S,
) -> List[Tuple[str, float]]:
    """Среднее по календарным месяцам (янв…дек); месяцы без данных опускаются."""
    as_volume = UnitType(unit_type) is UnitType.MILLION_M3
    by_month: Dict[int, List[float]] = defaultdict(list)
    for m in measurements:
        value = value_or_none(m.value)
        if value is not None:
            by_month[m.date.month].append(value)

    profile = []
    for month in sorted(by_month):
        avg = float(np.mean(by_month[month]))
        profile.append((MONTH_LABELS[month - 1], to_volume(avg, 30) if as_volume else avg))
    return profile


def cumulative(points: Iterable[ChartDataPoint]) -> List[ChartDataPoint]:
    total = 0.0
    out = []
    for p in points:
        total += p.value
        out.append(ChartDataPoint(p.date, total, p.is_previous, p.label))
    return out


def differences(
    current: Sequence[ChartDataPoint],
    previous: Sequence[ChartDataPoint],
) -> List[Difference]:
    """Поточечная разница текущего и прошлого ряда (по общей длине)."""
    out = []
    for cur, prev in zip(current, previous):
        diff = cur.value - prev.value
        percent = diff / prev.value * 100 if prev.value != 0 else 0.0
        out.append(Difference(cur.date, diff, percent))
    return out


def balance_series(
    inflow: Sequence[ChartDataPoint],
    outflow: Sequence[ChartDataPoint],
) -> List[ChartDataPoint]:
    """Приток минус попуск; недостающие точки попуска считаются нулём."""
    return [
        ChartDataPoint(p.date, p.value - (outflow[i].value if i < len(outflow) else 0.0))
        for i, p in enumerate(inflow)
    ]


def water_balance(
    inflow: float,
    outflow: float,
    tolerance_percent: float = 5.0,
) -> WaterBalance:
    balance = inflow - outflow
    percent = balance / inflow * 100 if inflow > 0 else 0.0
    if abs(percent) < tolerance_percent:
        status = "Сбалансировано"
    elif balance >= 0:
        status = "Накопление"
    else:
        status = "Сработка"
    return WaterBalance(balance, percent, status)


def histogram(values: Sequence[float], bins: int = 10) -> List[HistogramBin]:
    """Равные интервалы от минимума до максимума; последний интервал замкнут."""
    if not values:
        return []
    data = np.asarray(values, dtype=float)
    low, high = float(data.min()), float(data.max())
    if high == low:
        return [HistogramBin(low, high, int(data.size))]
    counts, edges = np.histogram(data, bins=bins, range=(low, high))
    return [
        HistogramBin(float(edges[i]), float(edges[i + 1]), int(counts[i]))
        for i in range(bins)
    ]


# ---------------------------------------------------------------------------
# Тенденции
# ---------------------------------------------------------------------------

class TrendDirection(str, Enum):
    STABLE = "stable"
    UP = "up"
    DOWN = "down"


@dataclass(frozen=True, slots=True)
class Trend:
    change_percent: float
    direction: TrendDirection


def relative_change(
    value: float,
    base: float,
    stable_percent: float = 5.0,
) -> Optional[Trend]:
    """Изменение *value* относительно *base* в процентах.

    Изменение меньше *stable_percent* по модулю считается стабильным.
    При нулевой базе процент не определён – возвращается ``None``.
    """
    if base == 0:
        return None
    change = (value - base) / base * 100
    if abs(change) < stable_percent:
        direction = TrendDirection.STABLE
    elif change > 0:
        direction = TrendDirection.UP
    else:
        direction = TrendDirection.DOWN
    return Trend(change, direction)


def half_trend(values: Sequence[float], stable_percent: float = 5.0) -> Optional[Trend]:
    """Среднее второй половины ряда против среднего первой.

    При нечётной длине средняя точка относится ко второй половине.
    """
    if len(values) < 2:
        return None
    half = len(values) // 2
    first = float(np.mean(values[:half]))
    second = float(np.mean(values[half:]))
    return relative_change(second, first, stable_percent)
