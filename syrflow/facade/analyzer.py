# syrflow/facade/analyzer.py
"""Высокоуровневые *facade*‑классы для внешнего кода (дашборда, скриптов).

**BasinAnalyzer** инкапсулирует цепочку обработки измерений:
1. Отбор по объекту и виду измерения.
2. Гидрологический год (с опц. сдвигом для сравнения с прошлым годом).
3. Период (вегетация / межвегетация / произвольный).
4. Агрегация по шагу и перевод единиц.

Сверху – сводки: KPI, сезонность, баланс, запаздывание и сравнение
нескольких объектов (тенденция внутри ряда и изменение к другому году).

**RouteAnalyzer** объединяет цепочку постов, расчёт добегания,
пересчёт моментов выпуска/прихода и историю расчётов.

Оба класса ничего не загружают сами: измерения и посты передаются уже
полученными из хранилища.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from ..config import Config
from ..core import aggregation, correlation, statistics
from ..core.arrival import project_arrival, project_release
from ..core.classification import detect_object_type, measures_for_type
from ..core.periods import filter_by_period, filter_water_year, select_measurements
from ..core.routing import FlowRouteCalculator
from ..core.topology import RiverTopology
from ..core.units import convert_points
from ..domain.filters import FilterState, ObjectType, UnitType
from ..domain.flow_result import (
    ArrivalWindow,
    FlowCalculationResult,
    ReleaseWindow,
    RouteOutcome,
)
from ..domain.measurement import ChartDataPoint, Measurement
from ..domain.river_post import RiverPost
from ..history import CalculationHistory, CalculationRecord
from ..history import get as get_history
from ..outputs.export import export_route_csv

logger = logging.getLogger(__name__)

ObjectMeasure = Tuple[str, str]  # (объект, вид измерения)

_DIRECTION_TEXT = {
    statistics.TrendDirection.STABLE: "оставался стабильным",
    statistics.TrendDirection.UP: "увеличился на {:.1f}%",
    statistics.TrendDirection.DOWN: "снизился на {:.1f}%",
}
_YEAR_TEXT = {
    statistics.TrendDirection.STABLE: "изменения незначительные",
    statistics.TrendDirection.UP: "рост на {:.1f}%",
    statistics.TrendDirection.DOWN: "снижение на {:.1f}%",
}


@dataclass(slots=True)
class ObjectComparison:
    """Ряд одного объекта в сравнении и его сводка."""

    object_name: str
    measure: str
    points: List[ChartDataPoint] = field(default_factory=list)
    previous_points: List[ChartDataPoint] = field(default_factory=list)
    summary: statistics.KPISummary = field(
        default_factory=lambda: statistics.KPISummary(0.0, 0.0, 0.0, 0)
    )
    trend: Optional[statistics.Trend] = None        # вторая половина к первой
    year_change: Optional[statistics.Trend] = None  # среднее к году сравнения
    compare_year: Optional[str] = None

    def describe(self) -> List[str]:
        """Текстовый вывод для панели сравнения (пусто, если данных нет)."""
        if not self.points:
            return []
        lines = []
        head = f"{self.object_name} ({self.measure}): среднее значение {self.summary.mean:.2f}"
        if self.trend is not None:
            text = _DIRECTION_TEXT[self.trend.direction].format(abs(self.trend.change_percent))
            head += f", {text} во второй половине периода"
        lines.append(head + ".")
        if self.compare_year and self.year_change is not None:
            text = _YEAR_TEXT[self.year_change.direction].format(
                abs(self.year_change.change_percent)
            )
            lines.append(f"  По сравнению с {self.compare_year}: {text}.")
        return lines


class BasinAnalyzer:
    """Единая точка входа для аналитики рядов измерений."""

    # ------------------------------------------------------------------
    # Конструктор
    # ------------------------------------------------------------------

    def __init__(
        self,
        measurements: Iterable[Measurement],
        config: Optional[Config] = None,
    ) -> None:
        self.measurements: List[Measurement] = list(measurements)
        self.config = config or Config()

    # ------------------------------------------------------------------
    # Справочник объектов
    # ------------------------------------------------------------------

    def objects(self, object_type: Optional[ObjectType | str] = None) -> List[str]:
        """Имена объектов в порядке первого появления, опц. только типа *object_type*."""
        wanted = ObjectType(object_type) if object_type is not None else None
        names = dict.fromkeys(m.reservoir for m in self.measurements if m.reservoir)
        return [
            name for name in names
            if wanted is None or detect_object_type(name) is wanted
        ]

    def measures(self, object_name: str) -> List[str]:
        """Виды измерений, доступные для типа объекта *object_name*."""
        return measures_for_type(detect_object_type(object_name))

    def select_object(self, state: FilterState, object_name: str) -> FilterState:
        """Новое состояние фильтров для объекта: тип определяется по имени.

        Если текущий вид измерения для нового типа недоступен, берётся
        первый из доступных.
        """
        object_type = detect_object_type(object_name)
        measures = measures_for_type(object_type)
        measure = state.measure_type if state.measure_type in measures else (
            measures[0] if measures else ""
        )
        return replace(
            state, object_name=object_name, object_type=object_type, measure_type=measure
        )

    # ------------------------------------------------------------------
    # Отбор и агрегация
    # ------------------------------------------------------------------

    def filtered(self, state: FilterState, year_offset: int = 0) -> List[Measurement]:
        """Измерения, прошедшие все фильтры *state*."""
        items = select_measurements(self.measurements, state.object_name, state.measure_type)
        if state.water_year:
            items = filter_water_year(items, state.water_year, year_offset)
        return filter_by_period(items, state.period, state.custom_start, state.custom_end)

    def current_series(self, state: FilterState, year_offset: int = 0) -> List[ChartDataPoint]:
        points = aggregation.aggregate(self.filtered(state, year_offset), state.aggregation)
        return convert_points(points, state.unit_type, state.aggregation)

    def previous_series(self, state: FilterState) -> List[ChartDataPoint]:
        """Ряд прошлого гидрологического года (пустой, если сравнение выключено)."""
        if not state.compare_with_previous:
            return []
        if not state.water_year:
            logger.warning("Comparison with the previous year needs a water year; skipped.")
            return []
        return [
            ChartDataPoint(p.date, p.value, True, p.label)
            for p in self.current_series(state, year_offset=-1)
        ]

    # ------------------------------------------------------------------
    # Производные показатели
    # ------------------------------------------------------------------

    def seasonality(self, state: FilterState) -> List[Tuple[str, float]]:
        return statistics.seasonality(self.filtered(state), state.unit_type)

    def kpi(self, state: FilterState) -> statistics.KPISummary:
        return statistics.kpi(self.current_series(state))

    def distribution(self, state: FilterState) -> List[statistics.HistogramBin]:
        values = [p.value for p in self.current_series(state)]
        return statistics.histogram(values, self.config.histogram_bins)

    def water_balance(
        self,
        state: FilterState,
        inflow_measure: str = "приток",
        outflow_measure: str = "попуск",
    ) -> statistics.WaterBalance:
        """Баланс средних притока и попуска объекта *state.object_name*."""
        means = []
        for measure in (inflow_measure, outflow_measure):
            sub_state = replace(state, measure_type=measure)
            means.append(statistics.kpi(self.current_series(sub_state)).mean)
        return statistics.water_balance(
            means[0], means[1], self.config.balance_tolerance_percent
        )

    def lag_analysis(
        self,
        state: FilterState,
        source: ObjectMeasure,
        target: ObjectMeasure,
    ) -> Optional[correlation.LagAnalysisResult]:
        """Запаздывание *target* относительно *source* при фильтрах *state*.

        Возвращает ``None``, если у одного из рядов нет данных.
        """
        series = []
        for object_name, measure in (source, target):
            sub_state = FilterState(
                object_name=object_name,
                measure_type=measure,
                water_year=state.water_year,
                period=state.period,
                aggregation=state.aggregation,
                custom_start=state.custom_start,
                custom_end=state.custom_end,
            )
            series.append(self.current_series(sub_state))

        if not series[0] or not series[1]:
            logger.info("Lag analysis skipped: source or target series is empty.")
            return None
        return correlation.lag_analysis(series[0], series[1], self.config.max_lag)

    # ------------------------------------------------------------------
    # Сравнение объектов
    # ------------------------------------------------------------------

    def compare_objects(
        self,
        state: FilterState,
        objects: Sequence[ObjectMeasure],
        compare_year: Optional[str] = None,
    ) -> List[ObjectComparison]:
        """Ряды нескольких объектов при общих фильтрах *state*.

        Для каждой пары ``(объект, вид измерения)`` строится ряд, сводка,
        тенденция (вторая половина ряда к первой) и, если задан
        *compare_year*, изменение среднего к этому гидрологическому году.
        Объёмные виды измерений всегда выводятся в млн м³.
        """
        if len(objects) > self.config.max_compare_objects:
            raise ValueError(
                f"At most {self.config.max_compare_objects} objects can be compared, "
                f"got {len(objects)}."
            )

        tolerance = self.config.trend_tolerance_percent
        comparisons = []
        for object_name, measure in objects:
            sub_state = replace(state, object_name=object_name, measure_type=measure)
            if _is_volume_measure(measure):
                sub_state.unit_type = UnitType.MILLION_M3

            points = self.current_series(sub_state)
            summary = statistics.kpi(points)
            item = ObjectComparison(
                object_name=object_name,
                measure=measure,
                points=points,
                summary=summary,
                trend=statistics.half_trend([p.value for p in points], tolerance),
                compare_year=compare_year,
            )

            if compare_year:
                year_state = replace(sub_state, water_year=compare_year)
                item.previous_points = [
                    ChartDataPoint(p.date, p.value, True, p.label)
                    for p in self.current_series(year_state)
                ]
                if points and item.previous_points:
                    item.year_change = statistics.relative_change(
                        summary.mean, statistics.kpi(item.previous_points).mean, tolerance
                    )

            if not points:
                logger.info("No data to compare for %s (%s).", object_name, measure)
            comparisons.append(item)
        return comparisons


def _is_volume_measure(measure: str) -> bool:
    return "объем" in measure.lower().replace("ё", "е")


class RouteAnalyzer:
    """Калькулятор добегания по цепочке постов."""

    def __init__(
        self,
        posts: Iterable[RiverPost],
        history: Optional[CalculationHistory] = None,
        config: Optional[Config] = None,
    ) -> None:
        self.config = config or Config()
        self.topology = RiverTopology(posts)
        self.calculator = FlowRouteCalculator(self.topology, self.config.reference_flow_rate)
        self.history = (
            history if history is not None
            else get_history("memory", limit=self.config.history_limit)
        )

    def calculate(
        self,
        from_id: str,
        to_id: str,
        flow_rate: Optional[float] = None,
    ) -> Optional[RouteOutcome]:
        """Рассчитать маршрут; успешный результат заносится в историю."""
        flow_rate = self.config.reference_flow_rate if flow_rate is None else flow_rate
        outcome = self.calculator.compute_route(from_id, to_id, flow_rate)

        if isinstance(outcome, FlowCalculationResult):
            logger.info(
                "Route %s -> %s at %.0f m3/s: %.1f km, %s",
                from_id,
                to_id,
                flow_rate,
                outcome.distance_km,
                outcome.avg_time_formatted,
            )
            self.history.save(
                CalculationRecord(
                    from_name=self.topology.get(from_id).post_name,
                    to_name=self.topology.get(to_id).post_name,
                    flow_rate=flow_rate,
                    distance=outcome.distance_km,
                    avg_time_formatted=outcome.avg_time_formatted,
                )
            )
        return outcome

    def arrival(
        self,
        from_id: str,
        to_id: str,
        release: Optional[datetime],
        flow_rate: Optional[float] = None,
    ) -> Optional[ArrivalWindow]:
        if release is None:
            return None
        return project_arrival(release, self.calculate(from_id, to_id, flow_rate))

    def release(
        self,
        from_id: str,
        to_id: str,
        target: Optional[datetime],
        flow_rate: Optional[float] = None,
    ) -> Optional[ReleaseWindow]:
        if target is None:
            return None
        return project_release(target, self.calculate(from_id, to_id, flow_rate))

    def export_csv(
        self,
        path: str | Path,
        from_id: str,
        to_id: str,
        flow_rate: Optional[float] = None,
    ) -> Optional[Path]:
        """Сохранить отчёт по маршруту; ``None``, если маршрут невозможен."""
        flow_rate = self.config.reference_flow_rate if flow_rate is None else flow_rate
        outcome = self.calculator.compute_route(from_id, to_id, flow_rate)
        if not isinstance(outcome, FlowCalculationResult):
            return None
        return export_route_csv(
            path,
            self.topology.get(from_id).post_name,
            self.topology.get(to_id).post_name,
            flow_rate,
            outcome,
        )
