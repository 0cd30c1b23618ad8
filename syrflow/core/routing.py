# syrflow/core/routing.py
"""Расчёт расстояния и времени добегания воды между постами.

Алгоритм:
1. Маршрут допустим только **вниз по течению**: ``from.order_index <
   to.order_index``.  Иначе возвращается :class:`InvalidRoute` – отдельный
   исход, который нельзя спутать с нулевым временем.
2. Берутся посты с индексами в полуинтервале ``(from, to]``: каждый пост
   вносит свой *входящий* участок.
3. Времена участков откалиброваны при опорном расходе 300 м³/с и
   масштабируются коэффициентом ``K = √(300 / Q)`` (при большем расходе
   вода идёт быстрее).
4. **Reset point** – гидроузел с управляемым выпуском:
   * если маршрут заканчивается на нём, возвращается только расстояние, а
     время «зависит от выпуска»;
   * если маршрут проходит через него, всё, что выше узла, отбрасывается:
     расстояние и время считаются от самого узла вниз по течению.
5. Участок без заданных границ времени добавляет расстояние, но не время.
6. Среднее время – середина интервала [min, max].
"""

from __future__ import annotations

import logging
import math
from typing import Dict, Iterable, List, Optional, Tuple

from ..constants import (
    DEPENDS_ON_RELEASE,
    INVALID_ROUTE_MESSAGE,
    REFERENCE_FLOW_RATE,
)
from ..domain.flow_result import FlowCalculationResult, InvalidRoute, RouteOutcome
from ..domain.river_post import RiverPost
from .topology import RiverTopology, find_reset_point, posts_between

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60


def calculate_flow_rate_coefficient(
    flow_rate: float,
    reference_flow_rate: float = REFERENCE_FLOW_RATE,
) -> float:
    """Коэффициент пересчёта времени добегания ``K = √(Q_опорн / Q)``."""
    return math.sqrt(reference_flow_rate / flow_rate)


def format_time(hours: float) -> str:
    """Длительность в виде ``"1д 1ч 30м"``; нулевые части опускаются.

    Минуты округляются «половина вверх», и 60 округлённых минут
    переносятся в часы.
    """
    total_minutes = math.floor(hours * 60 + 0.5)
    days, rest = divmod(total_minutes, MINUTES_PER_DAY)
    whole_hours, minutes = divmod(rest, 60)

    parts = []
    if days > 0:
        parts.append(f"{days}д")
    if whole_hours > 0:
        parts.append(f"{whole_hours}ч")
    if minutes > 0:
        parts.append(f"{minutes}м")
    return " ".join(parts) if parts else "0м"


def _accumulate(segments: Iterable[RiverPost], coefficient: float) -> Tuple[float, float, float]:
    distance = min_time = max_time = 0.0
    for post in segments:
        distance += post.segment_distance_km
        if post.has_segment_time:
            min_time += post.segment_min_time_hours * coefficient
            max_time += post.segment_max_time_hours * coefficient
        logger.debug(
            "segment -> %s: +%.1f km, total %.1f km, %.2f–%.2f h",
            post.post_name,
            post.segment_distance_km,
            distance,
            min_time,
            max_time,
        )
    return distance, min_time, max_time


def calculate_flow_time(
    from_post: RiverPost,
    to_post: RiverPost,
    all_posts: Iterable[RiverPost],
    flow_rate: float = REFERENCE_FLOW_RATE,
    reference_flow_rate: float = REFERENCE_FLOW_RATE,
) -> RouteOutcome:
    """Расстояние и интервал времени добегания от *from_post* до *to_post*."""
    if from_post.order_index >= to_post.order_index:
        return InvalidRoute(INVALID_ROUTE_MESSAGE)
    if flow_rate <= 0:
        return InvalidRoute(f"Расход воды должен быть положительным: {flow_rate}")

    segments = posts_between(all_posts, from_post.order_index, to_post.order_index)
    reset_point = find_reset_point(segments)
    coefficient = calculate_flow_rate_coefficient(flow_rate, reference_flow_rate)

    if reset_point is not None and reset_point.order_index == to_post.order_index:
        # Маршрут упирается в гидроузел: время определяется графиком выпуска
        return FlowCalculationResult(
            distance_km=reset_point.accumulated_distance_km - from_post.accumulated_distance_km,
            min_time_hours=None,
            max_time_hours=None,
            avg_time_hours=None,
            min_time_formatted=DEPENDS_ON_RELEASE,
            max_time_formatted=DEPENDS_ON_RELEASE,
            avg_time_formatted=DEPENDS_ON_RELEASE,
            has_reset_point=True,
            reset_point_name=reset_point.post_name,
            flow_rate=flow_rate,
            coefficient=coefficient,
        )

    if reset_point is not None:
        # Отсчёт начинается заново от гидроузла
        segments = [p for p in segments if p.order_index > reset_point.order_index]

    distance, min_time, max_time = _accumulate(segments, coefficient)
    avg_time = (min_time + max_time) / 2

    return FlowCalculationResult(
        distance_km=distance,
        min_time_hours=min_time,
        max_time_hours=max_time,
        avg_time_hours=avg_time,
        min_time_formatted=format_time(min_time),
        max_time_formatted=format_time(max_time),
        avg_time_formatted=format_time(avg_time),
        has_reset_point=reset_point is not None,
        reset_point_name=reset_point.post_name if reset_point is not None else None,
        flow_rate=flow_rate,
        coefficient=coefficient,
    )


class FlowRouteCalculator:
    """Расчёт маршрутов по цепочке постов с явным кэшем результатов.

    Кэш ключуется тройкой ``(from_id, to_id, flow_rate)``: при частых
    повторных запросах (ползунок расхода в интерфейсе) расчёт не
    повторяется.  Вызывающий код сам решает, когда сбросить кэш.
    """

    def __init__(
        self,
        topology: RiverTopology,
        reference_flow_rate: float = REFERENCE_FLOW_RATE,
    ) -> None:
        self.topology = topology
        self.reference_flow_rate = reference_flow_rate
        self._cache: Dict[Tuple[str, str, float], RouteOutcome] = {}

    def compute_route(
        self,
        from_id: str,
        to_id: str,
        flow_rate: float = REFERENCE_FLOW_RATE,
    ) -> Optional[RouteOutcome]:
        """Вернуть результат маршрута или ``None``, если пост не найден."""
        from_post = self.topology.get(from_id)
        to_post = self.topology.get(to_id)
        if from_post is None or to_post is None:
            logger.warning("Unknown river post in route %s -> %s", from_id, to_id)
            return None

        key = (from_id, to_id, float(flow_rate))
        if key in self._cache:
            logger.debug("route cache hit %s", key)
            return self._cache[key]

        outcome = calculate_flow_time(
            from_post,
            to_post,
            self.topology.posts,
            flow_rate,
            self.reference_flow_rate,
        )
        self._cache[key] = outcome
        return outcome

    def destinations(self, from_id: str) -> List[RiverPost]:
        post = self.topology.get(from_id)
        return [] if post is None else self.topology.downstream_of(post)

    def clear_cache(self) -> None:
        self._cache.clear()
