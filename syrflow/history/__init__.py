# syrflow/history/__init__.py
"""Базовые абстракции и фабрика хранилищ истории расчётов.

*Модуль объединяет:*
1. **CalculationRecord** — запись об одном расчёте добегания.
2. **CalculationHistory** — абстрактный базовый класс (ABC) с единым
   интерфейсом ``save`` / ``list`` / ``clear``.  Расчётное ядро историю не
   читает и не пишет: хранилище передаётся вызывающему коду (фасаду).
3. Функцию‑фабрику **get(name)**, возвращающую хранилище по строковому
   алиасу ("memory", "json").
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List

from ..constants import HISTORY_LIMIT

# ---------------------------------------------------------------------------
# Запись истории
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class CalculationRecord:
    from_name: str
    to_name: str
    flow_rate: float          # м³/с
    distance: float           # км
    avg_time_formatted: str
    timestamp: datetime = field(default_factory=datetime.now)
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "from_name": self.from_name,
            "to_name": self.to_name,
            "flow_rate": self.flow_rate,
            "distance": self.distance,
            "avg_time_formatted": self.avg_time_formatted,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CalculationRecord":
        return cls(
            from_name=data["from_name"],
            to_name=data["to_name"],
            flow_rate=float(data["flow_rate"]),
            distance=float(data["distance"]),
            avg_time_formatted=data["avg_time_formatted"],
            timestamp=datetime.fromisoformat(data["timestamp"]),
            id=data["id"],
        )


# ---------------------------------------------------------------------------
# Абстрактный базовый класс хранилищ
# ---------------------------------------------------------------------------


class CalculationHistory(ABC):
    """Интерфейс хранилища последних расчётов (новые – первыми)."""

    def __init__(self, limit: int = HISTORY_LIMIT) -> None:
        self.limit = limit

    @abstractmethod
    def save(self, record: CalculationRecord) -> None:
        """Добавить запись в начало, оставив не более ``limit`` записей."""
        ...

    @abstractmethod
    def list(self) -> List[CalculationRecord]:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...


# ---------------------------------------------------------------------------
# Фабрика хранилищ по строковому имени
# ---------------------------------------------------------------------------


def get(name: str = "memory", **kwargs: Any) -> CalculationHistory:
    """Вернуть хранилище истории по алиасу *name*.

    Parameters
    ----------
    name : str
        * ``"memory"`` – InMemoryHistory,
        * ``"json"``   – JsonFileHistory (нужен аргумент ``path``).

    Raises
    ------
    ValueError
        Если передано неизвестное имя хранилища.
    """
    if name == "memory":
        from .memory import InMemoryHistory

        return InMemoryHistory(**kwargs)
    if name == "json":
        from .json_file import JsonFileHistory

        return JsonFileHistory(**kwargs)

    raise ValueError(f"Unknown history backend '{name}'")
