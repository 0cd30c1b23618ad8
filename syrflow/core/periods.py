# syrflow/core/periods.py
"""Выбор измерений по календарному периоду.

Гидрологический год длится с 1 октября по 30 сентября и подписывается
как ``"2023/2024"``.  Внутри года выделяются:

* **вегетация** – апрель…сентябрь;
* **межвегетация** – октябрь…март;
* **произвольный период** – явные даты начала и конца (включительно).
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, List, Optional, Tuple

from ..domain.filters import Period
from ..domain.measurement import Measurement

logger = logging.getLogger(__name__)

VEGETATION_MONTHS = frozenset(range(4, 10))                  # апр–сен
INTER_VEGETATION_MONTHS = frozenset((10, 11, 12, 1, 2, 3))   # окт–мар


def water_year_bounds(label: str) -> Tuple[date, date]:
    """Границы гидрологического года ``"YYYY/YYYY+1"`` → (1 окт, 30 сен)."""
    try:
        start_text, end_text = label.split("/")
        start_year, end_year = int(start_text), int(end_text)
    except ValueError as exc:
        raise ValueError(f"Malformed water year label: {label!r}") from exc
    return date(start_year, 10, 1), date(end_year, 9, 30)


def filter_water_year(
    measurements: Iterable[Measurement],
    label: str,
    year_offset: int = 0,
) -> List[Measurement]:
    """Оставить измерения гидрологического года *label*, сдвинутого на *year_offset* лет."""
    start, end = water_year_bounds(label)
    start = start.replace(year=start.year + year_offset)
    end = end.replace(year=end.year + year_offset)
    return [m for m in measurements if start <= m.date <= end]


def filter_by_period(
    measurements: Iterable[Measurement],
    period: Period | str,
    custom_start: Optional[date] = None,
    custom_end: Optional[date] = None,
) -> List[Measurement]:
    """Отфильтровать измерения по периоду.

    Для ``custom`` фильтрация применяется только при заданных обеих
    границах; если какой‑то нет, набор возвращается без изменений.
    """
    period = Period(period)
    items = list(measurements)

    if period is Period.FULL_YEAR:
        return items

    if period is Period.CUSTOM:
        if custom_start is None or custom_end is None:
            logger.warning(
                "Custom period needs both bounds (start=%s, end=%s); not filtering.",
                custom_start,
                custom_end,
            )
            return items
        return [m for m in items if custom_start <= m.date <= custom_end]

    months = VEGETATION_MONTHS if period is Period.VEGETATION else INTER_VEGETATION_MONTHS
    return [m for m in items if m.date.month in months]


def select_measurements(
    measurements: Iterable[Measurement],
    object_name: Optional[str] = None,
    measure: Optional[str] = None,
) -> List[Measurement]:
    """Отбор по объекту (точное совпадение) и виду измерения (подстрока, без учёта регистра)."""
    needle = measure.lower() if measure else None
    return [
        m
        for m in measurements
        if (not object_name or m.reservoir == object_name)
        and (needle is None or needle in m.measure.lower())
    ]
