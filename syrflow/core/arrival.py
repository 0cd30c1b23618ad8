# syrflow/core/arrival.py
"""Прямой и обратный пересчёт моментов выпуска и прихода воды.

* **project_arrival** – выпуск + время добегания → окно прихода воды
  (мин. время – самый ранний приход, макс. – самый поздний).
* **project_release** – желаемый срок прихода − время добегания → когда
  выпускать воду: не раньше ``цель − макс.``, не позже ``цель − мин.``,
  рекомендуемый момент ``цель − ср.``.

Обе функции возвращают ``None``, если нет момента времени, результат
маршрута недопустим или время «зависит от выпуска».
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from ..domain.flow_result import (
    ArrivalWindow,
    FlowCalculationResult,
    ReleaseWindow,
    RouteOutcome,
)


def _numeric(result: Optional[RouteOutcome]) -> Optional[FlowCalculationResult]:
    if isinstance(result, FlowCalculationResult) and result.has_numeric_time:
        return result
    return None


def project_arrival(
    release: Optional[datetime],
    result: Optional[RouteOutcome],
) -> Optional[ArrivalWindow]:
    res = _numeric(result)
    if release is None or res is None:
        return None
    return ArrivalWindow(
        earliest=release + timedelta(hours=res.min_time_hours),
        expected=release + timedelta(hours=res.avg_time_hours),
        latest=release + timedelta(hours=res.max_time_hours),
    )


def project_release(
    target: Optional[datetime],
    result: Optional[RouteOutcome],
) -> Optional[ReleaseWindow]:
    res = _numeric(result)
    if target is None or res is None:
        return None
    return ReleaseWindow(
        earliest=target - timedelta(hours=res.max_time_hours),
        recommended=target - timedelta(hours=res.avg_time_hours),
        latest=target - timedelta(hours=res.min_time_hours),
    )
