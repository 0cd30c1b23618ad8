# syrflow/domain/filters.py
"""Перечисления и состояние фильтров дашборда.

Строковые значения перечислений совпадают с теми, что приходят из
интерфейса (``"full-year"``, ``"decade"``, ``"million-m3"`` …), поэтому
``Period("vegetation")`` работает напрямую, а неизвестная строка даёт
``ValueError``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


class Period(str, Enum):
    """Календарный поддиапазон внутри гидрологического года."""

    FULL_YEAR = "full-year"
    VEGETATION = "vegetation"              # апрель–сентябрь
    INTER_VEGETATION = "inter-vegetation"  # октябрь–март
    CUSTOM = "custom"


class Aggregation(str, Enum):
    """Шаг временной агрегации."""

    DAY = "day"
    WEEK = "week"
    DECADE = "decade"
    MONTH = "month"


class UnitType(str, Enum):
    """Единицы вывода: расход или объём за шаг агрегации."""

    M3S = "m3/s"
    MILLION_M3 = "million-m3"


class ObjectType(str, Enum):
    RESERVOIR = "reservoir"
    CANAL = "canal"
    HES = "hes"
    HYDROPOST = "hydropost"


@dataclass(slots=True)
class FilterState:
    """Текущий выбор пользователя, определяющий входные измерения."""

    object_name: str = ""
    measure_type: str = ""
    water_year: str = ""
    object_type: ObjectType = ObjectType.RESERVOIR
    period: Period = Period.FULL_YEAR
    aggregation: Aggregation = Aggregation.DAY
    unit_type: UnitType = UnitType.M3S
    compare_with_previous: bool = False
    custom_start: Optional[date] = None
    custom_end: Optional[date] = None

    def __post_init__(self) -> None:
        # Допускаем строковые значения из конфигов/запросов
        self.object_type = ObjectType(self.object_type)
        self.period = Period(self.period)
        self.aggregation = Aggregation(self.aggregation)
        self.unit_type = UnitType(self.unit_type)
