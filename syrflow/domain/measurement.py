# syrflow/domain/measurement.py
"""Единичное наблюдение из табличного хранилища и точка графика.

**Measurement** повторяет строку таблицы измерений:
* **reservoir** – объект (водохранилище, канал, ГЭС, гидропост);
* **station** – необязательный подпункт наблюдения;
* **date** – календарная дата (строки ISO приводятся к ``datetime.date``);
* **measure** – вид измерения («приток», «попуск», «объем», «расход» …);
* **value** – «сырое» значение: число или строка, в т.ч. «нет данных».
  Разбор выполняет :mod:`syrflow.core.values`, сам контейнер значение
  не трогает.

**ChartDataPoint** – пара *(дата, значение)*, результат агрегации.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional, Union

RawValue = Union[float, int, str, None]


def coerce_date(value: Union[date, datetime, str]) -> date:
    """Привести дату из хранилища (``date``, ``datetime`` или ISO‑строку) к ``date``."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value.strip()[:10])
    raise TypeError(f"Unsupported date value: {value!r}")


@dataclass(frozen=True, slots=True)
class Measurement:
    """Неизменяемая запись измерения."""

    reservoir: str
    date: date
    measure: str
    value: RawValue
    unit: str = ""
    season: str = ""
    station: Optional[str] = None
    time_of_day: Optional[str] = None
    id: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "date", coerce_date(self.date))

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Measurement":
        """Собрать измерение из строки хранилища (ключи как в таблице)."""
        return cls(
            reservoir=record["Reservoir"],
            date=record["Date"],
            measure=record.get("Measure", ""),
            value=record.get("Value"),
            unit=record.get("Unit") or "",
            season=record.get("Season") or "",
            station=record.get("Station"),
            time_of_day=record.get("TimeOfDay"),
            id=record.get("id"),
        )


@dataclass(frozen=True, slots=True)
class ChartDataPoint:
    """Точка ряда для графиков и KPI."""

    date: date
    value: float
    is_previous: bool = False  # точка ряда «прошлого года»
    label: Optional[str] = None
