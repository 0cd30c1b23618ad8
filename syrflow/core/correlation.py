# syrflow/core/correlation.py
"""Поиск запаздывания между двумя рядами по взаимной корреляции.

Для каждого сдвига ``L = 0 … max_lag`` сравниваются ``series1[L:]`` и
начало ``series2`` одинаковой длины ``n = min(len1 − L, len2)``.
Центрирование выполняется по *глобальным* средним каждого ряда (а не по
средним окна) – так считает дашборд, и результаты должны совпадать.

Лучшим считается сдвиг с наибольшим коэффициентом; при равенстве
остаётся первый найденный (сравнение строгое).  Сдвиги, на которых
знаменатель равен нулю (ряд без дисперсии), пропускаются: коэффициент
там не определён.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np

from ..constants import DEFAULT_MAX_LAG
from ..domain.measurement import ChartDataPoint

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LagResult:
    lag: int
    correlation: Optional[float]  # None – ни на одном сдвиге не определён

    @property
    def is_defined(self) -> bool:
        return self.correlation is not None


@dataclass(slots=True)
class LagAnalysisResult:
    """Результат анализа запаздывания для отображения на графике."""

    lag: int
    correlation: Optional[float]
    source_data: List[ChartDataPoint] = field(default_factory=list)
    target_data: List[ChartDataPoint] = field(default_factory=list)
    shifted_data: List[ChartDataPoint] = field(default_factory=list)


def cross_correlation(
    series1: Sequence[float],
    series2: Sequence[float],
    max_lag: int = DEFAULT_MAX_LAG,
) -> LagResult:
    """Сдвиг *series1* вперёд, лучше всего совмещающий его с *series2*."""
    x_all = np.asarray(series1, dtype=float)
    y_all = np.asarray(series2, dtype=float)
    if x_all.size == 0 or y_all.size == 0:
        return LagResult(lag=0, correlation=None)

    mean1, mean2 = x_all.mean(), y_all.mean()
    best_lag, best_corr = 0, None

    for lag in range(max_lag + 1):
        if lag >= x_all.size or lag >= y_all.size:
            break
        n = min(x_all.size - lag, y_all.size)
        x = x_all[lag:lag + n] - mean1
        y = y_all[:n] - mean2

        den = float(np.dot(x, x) * np.dot(y, y))
        if den == 0.0:
            logger.debug("lag=%d skipped: zero variance window", lag)
            continue

        corr = float(np.dot(x, y) / np.sqrt(den))
        if best_corr is None or corr > best_corr:
            best_lag, best_corr = lag, corr

    if best_corr is None:
        logger.warning("Cross-correlation is undefined for every lag (constant series?).")
    return LagResult(lag=best_lag, correlation=best_corr)


def shift_series(
    source: Sequence[ChartDataPoint],
    target: Sequence[ChartDataPoint],
    lag: int,
) -> List[ChartDataPoint]:
    """Передатировать точки *source* датами *target*, сдвинутыми на *lag* шагов."""
    if not target:
        return list(source)
    last = len(target) - 1
    return [
        ChartDataPoint(target[min(i + lag, last)].date, p.value, p.is_previous, p.label)
        for i, p in enumerate(source)
    ]


def lag_analysis(
    source: Sequence[ChartDataPoint],
    target: Sequence[ChartDataPoint],
    max_lag: int = DEFAULT_MAX_LAG,
) -> LagAnalysisResult:
    """На сколько шагов *target* (ниже по течению) отстаёт от *source*.

    Отставший ряд подаётся первым аргументом: ``target[i + lag]``
    сопоставляется с ``source[i]``.
    """
    result = cross_correlation(
        [p.value for p in target], [p.value for p in source], max_lag
    )
    return LagAnalysisResult(
        lag=result.lag,
        correlation=result.correlation,
        source_data=list(source),
        target_data=list(target),
        shifted_data=shift_series(source, target, result.lag),
    )
