# syrflow/__init__.py
"""Пакет **SYRFLOW** (аналитика стока бассейна Нарын–Сырдарья).

Два направления:

* ряды измерений по водохранилищам и ГЭС – фильтры гидрологического
  года и периода, агрегация, перевод в объём, поиск запаздывания;
* время добегания воды по цепочке постов с учётом точек сброса.

Типичный вход – фасады::

    from syrflow import RouteAnalyzer, BasinAnalyzer

Список ``__all__`` фиксирует то, что считается внешним API.
"""

from __future__ import annotations

from .config import Config
from .facade.analyzer import BasinAnalyzer, ObjectComparison, RouteAnalyzer
from .domain.filters import Aggregation, FilterState, Period, UnitType
from .domain.measurement import ChartDataPoint, Measurement
from .domain.river_post import PostType, RiverPost
from .domain.flow_result import FlowCalculationResult, InvalidRoute
from .core.routing import (
    FlowRouteCalculator,
    calculate_flow_rate_coefficient,
    calculate_flow_time,
    format_time,
)
from .core.arrival import project_arrival, project_release
from .core.correlation import cross_correlation

__all__ = [
    "Config",
    "BasinAnalyzer",       # фасад для рядов измерений
    "RouteAnalyzer",       # фасад калькулятора добегания
    "ObjectComparison",
    "FilterState",
    "Period",
    "Aggregation",
    "UnitType",
    "Measurement",         # строка таблицы измерений
    "ChartDataPoint",
    "RiverPost",           # пост речной цепочки
    "PostType",
    "FlowCalculationResult",
    "InvalidRoute",
    "FlowRouteCalculator",
    "calculate_flow_time",
    "calculate_flow_rate_coefficient",
    "format_time",
    "project_arrival",
    "project_release",
    "cross_correlation",
]

__version__ = "0.1.0"
