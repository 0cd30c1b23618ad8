# syrflow/config.py
"""Настройки аналитики по умолчанию."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import DEFAULT_MAX_LAG, HISTORY_LIMIT, REFERENCE_FLOW_RATE


@dataclass(slots=True)
class Config:
    """Параметры, которые фасады передают в расчётные функции."""

    reference_flow_rate: float = REFERENCE_FLOW_RATE  # м³/с
    max_lag: int = DEFAULT_MAX_LAG                    # шагов агрегации
    history_limit: int = HISTORY_LIMIT
    balance_tolerance_percent: float = 5.0
    histogram_bins: int = 10
    trend_tolerance_percent: float = 5.0  # |изменение| меньше – «стабильно»
    max_compare_objects: int = 5

    def __post_init__(self) -> None:
        if self.reference_flow_rate <= 0:
            raise ValueError("Reference flow rate must be positive.")
        if self.max_lag < 0:
            raise ValueError("Maximum lag must be non-negative.")
        if self.max_compare_objects < 1:
            raise ValueError("At least one object must be allowed for comparison.")
