# syrflow/core/topology.py
"""Упорядоченная цепочка речных постов.

Класс **RiverTopology** хранит посты, отсортированные по
``order_index`` (сверху вниз по течению), и отвечает на вопросы,
нужные алгоритму добегания:

* какие посты лежат между двумя индексами (начало исключается, конец
  включается – каждый пост «несёт» свой входящий участок);
* есть ли среди них гидроузел‑reset point (берётся первый по течению);
* какие посты могут быть конечной точкой маршрута от данного.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from ..domain.river_post import RiverPost

logger = logging.getLogger(__name__)


def find_reset_point(posts: Iterable[RiverPost]) -> Optional[RiverPost]:
    """Первый по ``order_index`` пост с флагом ``is_reset_point`` или ``None``."""
    return next(
        (p for p in sorted(posts, key=lambda p: p.order_index) if p.is_reset_point),
        None,
    )


def posts_between(
    posts: Iterable[RiverPost],
    start_index: int,
    end_index: int,
) -> List[RiverPost]:
    """Посты с ``start_index < order_index <= end_index`` по возрастанию индекса."""
    return sorted(
        (p for p in posts if start_index < p.order_index <= end_index),
        key=lambda p: p.order_index,
    )


class RiverTopology:
    """Неизменяемая цепочка постов с поиском по id и по участкам."""

    def __init__(self, posts: Iterable[RiverPost]) -> None:
        ordered = sorted(posts, key=lambda p: p.order_index)

        # Проверка уникальности индексов и идентификаторов
        indices = [p.order_index for p in ordered]
        if len(set(indices)) != len(indices):
            raise ValueError("River posts must have unique order_index values.")
        by_id: Dict[str, RiverPost] = {}
        for p in ordered:
            if p.id in by_id:
                raise ValueError(f"Duplicate river post id '{p.id}'.")
            by_id[p.id] = p

        # Монотонность накопленного расстояния – не ошибка, но повод насторожиться
        for prev, cur in zip(ordered, ordered[1:]):
            if cur.accumulated_distance_km < prev.accumulated_distance_km:
                logger.warning(
                    "Accumulated distance decreases from '%s' to '%s'.",
                    prev.post_name,
                    cur.post_name,
                )

        self._posts: tuple[RiverPost, ...] = tuple(ordered)
        self._by_id = by_id

    # ------------------------------------------------------------------
    # Контейнерный протокол
    # ------------------------------------------------------------------

    def __iter__(self) -> Iterator[RiverPost]:
        return iter(self._posts)

    def __len__(self) -> int:
        return len(self._posts)

    def __contains__(self, post_id: object) -> bool:
        return post_id in self._by_id

    @property
    def posts(self) -> Sequence[RiverPost]:
        return self._posts

    # ------------------------------------------------------------------
    # Поиск
    # ------------------------------------------------------------------

    def get(self, post_id: str) -> Optional[RiverPost]:
        return self._by_id.get(post_id)

    def by_name(self, name: str) -> Optional[RiverPost]:
        return next((p for p in self._posts if p.post_name == name), None)

    def between(self, start_index: int, end_index: int) -> List[RiverPost]:
        return posts_between(self._posts, start_index, end_index)

    def find_reset_point(self, posts: Optional[Iterable[RiverPost]] = None) -> Optional[RiverPost]:
        return find_reset_point(self._posts if posts is None else posts)

    def downstream_of(self, post: RiverPost) -> List[RiverPost]:
        """Допустимые конечные посты маршрута, начинающегося в *post*."""
        return [p for p in self._posts if p.order_index > post.order_index]
