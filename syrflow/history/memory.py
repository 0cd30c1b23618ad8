# syrflow/history/memory.py

from __future__ import annotations

from typing import List

from . import CalculationHistory, CalculationRecord


class InMemoryHistory(CalculationHistory):
    """История в памяти процесса (на время сессии)."""

    def __init__(self, limit: int = 10) -> None:
        super().__init__(limit)
        self._records: List[CalculationRecord] = []

    def save(self, record: CalculationRecord) -> None:
        self._records = [record, *self._records][: self.limit]

    def list(self) -> List[CalculationRecord]:
        return list(self._records)

    def clear(self) -> None:
        self._records.clear()
