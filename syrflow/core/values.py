# syrflow/core/values.py
"""Разбор «сырых» значений измерений.

Хранилище возвращает значения либо числом, либо строкой, причём
отсутствующие данные кодируются строками‑заглушками («нет данных»,
«null», «NaN» …).  Модуль сводит всё к явному типу‑сумме:

* :class:`Present` – корректное конечное число;
* :class:`Absent` – значение отсутствует.

Список заглушек собран в одном месте –
:data:`syrflow.constants.INVALID_VALUE_SENTINELS`.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from numbers import Real
from typing import Optional, Union

from ..constants import INVALID_VALUE_SENTINELS
from ..domain.measurement import RawValue

# Только обычная десятичная запись: без "_", "inf", "nan" и т. п.
_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


@dataclass(frozen=True, slots=True)
class Present:
    value: float


@dataclass(frozen=True, slots=True)
class Absent:
    pass


ABSENT = Absent()
ParsedValue = Union[Present, Absent]


def _to_number(raw: RawValue) -> Optional[float]:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        text = raw.strip()
        if text.lower() in INVALID_VALUE_SENTINELS:
            return None
        if not _NUMBER_RE.fullmatch(text):
            return None
        number = float(text)
    elif isinstance(raw, Real):
        number = float(raw)
    else:
        return None
    return number if math.isfinite(number) else None


def is_valid_value(raw: RawValue) -> bool:
    """True, если *raw* – конечное число или строка с конечным числом."""
    return _to_number(raw) is not None


def parse_value(raw: RawValue) -> ParsedValue:
    """Вернуть ``Present(x)`` или ``ABSENT``; исключений не бросает."""
    number = _to_number(raw)
    return ABSENT if number is None else Present(number)


def value_or_none(raw: RawValue) -> Optional[float]:
    parsed = parse_value(raw)
    return parsed.value if isinstance(parsed, Present) else None
