# syrflow/history/json_file.py
"""История расчётов в JSON‑файле.

Файл содержит список записей (новые – первыми).  Отсутствующий или
повреждённый файл читается как пустая история: потеря истории не должна
мешать расчётам.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List

from . import CalculationHistory, CalculationRecord

logger = logging.getLogger(__name__)


class JsonFileHistory(CalculationHistory):
    def __init__(self, path: str | Path, limit: int = 10) -> None:
        super().__init__(limit)
        self.path = Path(path)

    def save(self, record: CalculationRecord) -> None:
        records = [record, *self.list()][: self.limit]
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as handle:
            json.dump([r.to_dict() for r in records], handle, ensure_ascii=False, indent=2)

    def list(self) -> List[CalculationRecord]:
        if not self.path.exists():
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as handle:
                return [CalculationRecord.from_dict(item) for item in json.load(handle)]
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as exc:
            logger.warning("Ignoring unreadable history file %s: %s", self.path, exc)
            return []

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
