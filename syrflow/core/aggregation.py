# syrflow/core/aggregation.py
"""Временная агрегация рядов измерений.

Каждое измерение относится к «корзине» по дате:

* **day** – сама дата;
* **week** – воскресенье, с которого начинается календарная неделя;
* **decade** – 1, 11 или 21 число месяца (декады 1–10, 11–20, 21–конец
  месяца; декады не переходят через границу месяца);
* **month** – первое число месяца.

Значение корзины – среднее арифметическое только *корректных* значений
(см. :mod:`syrflow.core.values`); некорректные отбрасываются до
группировки и нулями не считаются.  Результат всегда упорядочен по
возрастанию даты, независимо от порядка входа.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, List

import pandas as pd

from ..domain.filters import Aggregation
from ..domain.measurement import ChartDataPoint, Measurement
from .values import value_or_none


def bucket_start(day: date, aggregation: Aggregation | str) -> date:
    """Дата, представляющая корзину, в которую попадает *day*."""
    aggregation = Aggregation(aggregation)
    if aggregation is Aggregation.DAY:
        return day
    if aggregation is Aggregation.WEEK:
        # weekday(): пн=0 … вс=6  →  сдвиг до ближайшего прошедшего воскресенья
        return day - timedelta(days=(day.weekday() + 1) % 7)
    if aggregation is Aggregation.DECADE:
        marker = 1 if day.day <= 10 else 11 if day.day <= 20 else 21
        return day.replace(day=marker)
    return day.replace(day=1)


def aggregate_series(
    measurements: Iterable[Measurement],
    aggregation: Aggregation | str,
) -> pd.Series:
    """Средние по корзинам в виде ``pd.Series`` с индексом‑датой."""
    aggregation = Aggregation(aggregation)
    rows = []
    for m in measurements:
        value = value_or_none(m.value)
        if value is None:
            continue
        rows.append({"bucket": bucket_start(m.date, aggregation), "value": value})

    if not rows:
        return pd.Series([], dtype=float, name="value")

    frame = pd.DataFrame.from_records(rows)
    return frame.groupby("bucket", sort=True)["value"].mean()


def aggregate(
    measurements: Iterable[Measurement],
    aggregation: Aggregation | str,
) -> List[ChartDataPoint]:
    """Агрегировать измерения в упорядоченный список точек графика."""
    series = aggregate_series(measurements, aggregation)
    return [ChartDataPoint(date=d, value=float(v)) for d, v in series.items()]
