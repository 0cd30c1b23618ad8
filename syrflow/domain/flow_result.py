# syrflow/domain/flow_result.py
"""Результаты расчёта добегания.

* **FlowCalculationResult** – расстояние и интервал времени добегания.
  Времена равны ``None`` только в одном случае: маршрут заканчивается на
  гидроузле‑reset point, и время «зависит от выпуска».
* **InvalidRoute** – отдельный исход «маршрут невозможен» (например,
  конечный пост выше начального по течению). Объект ложен в булевом
  контексте, чтобы вызывающий код мог писать ``if result: ...``.
* **ArrivalWindow** / **ReleaseWindow** – тройки моментов времени для
  прямого и обратного пересчёта.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union


@dataclass(frozen=True, slots=True)
class FlowCalculationResult:
    distance_km: float
    min_time_hours: Optional[float]
    max_time_hours: Optional[float]
    avg_time_hours: Optional[float]
    min_time_formatted: str
    max_time_formatted: str
    avg_time_formatted: str
    has_reset_point: bool = False
    reset_point_name: Optional[str] = None
    flow_rate: float = 300.0
    coefficient: float = 1.0

    @property
    def has_numeric_time(self) -> bool:
        return (
            self.min_time_hours is not None
            and self.max_time_hours is not None
            and self.avg_time_hours is not None
        )


@dataclass(frozen=True, slots=True)
class InvalidRoute:
    reason: str

    def __bool__(self) -> bool:
        return False


RouteOutcome = Union[FlowCalculationResult, InvalidRoute]


@dataclass(frozen=True, slots=True)
class ArrivalWindow:
    """Моменты прихода воды при мин./ср./макс. времени добегания."""

    earliest: datetime
    expected: datetime
    latest: datetime


@dataclass(frozen=True, slots=True)
class ReleaseWindow:
    """Моменты выпуска, обеспечивающие приход воды к целевому сроку."""

    earliest: datetime     # цель − макс. время
    recommended: datetime  # цель − ср. время
    latest: datetime       # цель − мин. время
