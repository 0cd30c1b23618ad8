# syrflow/core/classification.py
"""Определение типа объекта по его названию.

Правила проверяются по порядку, первое совпадение подстроки (без учёта
регистра) определяет категорию; если ничего не подошло – гидропост.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..domain.filters import ObjectType


@dataclass(frozen=True, slots=True)
class ObjectTypeConfig:
    type: ObjectType
    label: str
    measures: Tuple[str, ...]


OBJECT_TYPES: Tuple[ObjectTypeConfig, ...] = (
    ObjectTypeConfig(ObjectType.RESERVOIR, "Водохранилище", ("приток", "попуск", "объем")),
    ObjectTypeConfig(ObjectType.CANAL, "Канал", ("расход",)),
    ObjectTypeConfig(ObjectType.HES, "ГЭС", ("сброс",)),
    ObjectTypeConfig(ObjectType.HYDROPOST, "Гидропост", ("расход", "рейка")),
)

CLASSIFICATION_RULES: Tuple[Tuple[str, ObjectType], ...] = (
    ("вдхр", ObjectType.RESERVOIR),
    ("водохранилище", ObjectType.RESERVOIR),
    ("гэс", ObjectType.HES),
    ("канал", ObjectType.CANAL),
)


def detect_object_type(
    object_name: str,
    rules: Sequence[Tuple[str, ObjectType]] = CLASSIFICATION_RULES,
    default: ObjectType = ObjectType.HYDROPOST,
) -> ObjectType:
    name = object_name.lower()
    for pattern, category in rules:
        if pattern in name:
            return category
    return default


def object_type_config(object_type: ObjectType | str) -> Optional[ObjectTypeConfig]:
    try:
        wanted = ObjectType(object_type)
    except ValueError:
        return None
    return next((c for c in OBJECT_TYPES if c.type is wanted), None)


def measures_for_type(object_type: ObjectType | str) -> List[str]:
    config = object_type_config(object_type)
    return list(config.measures) if config else []
