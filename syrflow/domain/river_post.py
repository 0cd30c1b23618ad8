# syrflow/domain/river_post.py
"""Пост речной цепочки Нарын–Сырдарья.

Посты образуют упорядоченную цепочку «сверху вниз по течению»:
* **order_index** – строго возрастающий порядковый номер;
* **accumulated_distance_km** – расстояние от начала цепочки до поста;
* **segment_distance_km** – длина участка от *предыдущего* поста до этого;
* **segment_min/max_time_hours** – границы времени добегания по участку
  при опорном расходе 300 м³/с (могут отсутствовать);
* **is_reset_point** – гидроузел с управляемым выпуском, на котором
  время добегания «начинается заново».
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional


class PostType(str, Enum):
    """Тип поста; неизвестные строки хранилища сводятся к OTHER."""

    RESERVOIR = "reservoir"
    HES = "hes"
    GAUGE = "gauge"
    OTHER = "other"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "PostType":
        try:
            return cls((raw or "").strip().lower())
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True, slots=True)
class RiverPost:
    """Неизменяемый узел речной цепочки."""

    id: str
    post_name: str
    order_index: int
    accumulated_distance_km: float
    segment_distance_km: float
    segment_min_time_hours: Optional[float] = None  # ч, при 300 м³/с
    segment_max_time_hours: Optional[float] = None  # ч, при 300 м³/с
    is_reset_point: bool = False
    post_type: PostType = PostType.OTHER
    max_flow_rate: Optional[float] = None           # пропускная способность, м³/с
    notes: Optional[str] = None

    # Санитарная проверка входных данных
    def __post_init__(self) -> None:
        if self.segment_distance_km < 0 or self.accumulated_distance_km < 0:
            raise ValueError(f"Post '{self.post_name}' has a negative distance.")
        if (
            self.segment_min_time_hours is not None
            and self.segment_max_time_hours is not None
            and self.segment_min_time_hours > self.segment_max_time_hours
        ):
            raise ValueError(
                f"Post '{self.post_name}': segment min time exceeds max time."
            )

    @property
    def has_segment_time(self) -> bool:
        """Заданы ли обе границы времени добегания по входящему участку."""
        return (
            self.segment_min_time_hours is not None
            and self.segment_max_time_hours is not None
        )

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "RiverPost":
        """Собрать пост из строки таблицы ``river_posts``."""
        return cls(
            id=str(record["id"]),
            post_name=record["post_name"],
            order_index=int(record["order_index"]),
            accumulated_distance_km=float(record.get("accumulated_distance_km") or 0.0),
            segment_distance_km=float(record.get("segment_distance_km") or 0.0),
            segment_min_time_hours=_optional_float(record.get("segment_min_time_hours")),
            segment_max_time_hours=_optional_float(record.get("segment_max_time_hours")),
            is_reset_point=_parse_bool(record.get("is_reset_point")),
            post_type=PostType.parse(record.get("post_type")),
            max_flow_rate=_optional_float(record.get("max_flow_rate")),
            notes=record.get("notes"),
        )


def _optional_float(value: Any) -> Optional[float]:
    return None if value is None else float(value)


_TRUE_STRINGS = frozenset(("true", "t", "1", "yes", "y", "да"))
_FALSE_STRINGS = frozenset(("false", "f", "0", "no", "n", "нет", ""))


def _parse_bool(value: Any) -> bool:
    """Флаг из строки хранилища: ``"false"`` и ``"0"`` – ложь."""
    if value is None:
        return False
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
        raise ValueError(f"Cannot interpret {value!r} as a boolean flag.")
    return bool(value)
