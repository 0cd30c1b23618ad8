# syrflow/visualization/plots.py
"""Графики дашборда стока: ряды по годам, запаздывание, сезонность.

Если ось ``ax`` не передана, функция создаёт фигуру и вызывает
``plt.show()`` (интерактивный режим).  Если ось передана, график
рисуется на ней и возвращается для встраивания в отчёты.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import matplotlib.pyplot as plt

from ..core.correlation import LagAnalysisResult
from ..domain.measurement import ChartDataPoint


def _finish(ax, own_figure: bool):
    ax.grid(True)
    if ax.get_legend_handles_labels()[0]:
        ax.legend()
    if own_figure:
        plt.show()
    return ax

# ---------------------------------------------------------------------------
# 1) Ряд текущего года и (опц.) прошлого года
# ---------------------------------------------------------------------------

def plot_series(
    current: Sequence[ChartDataPoint],
    previous: Sequence[ChartDataPoint] = (),
    title: str = "Динамика показателя",
    ylabel: str = "Q, м³/с",
    ax=None,
):
    """Линия текущего ряда; прошлый год – пунктиром по порядковому номеру точки."""
    own_figure = ax is None
    if own_figure:
        _, ax = plt.subplots()

    ax.plot([p.date for p in current], [p.value for p in current], marker="o", label="Текущий год")
    if previous:
        # Прошлогодний ряд совмещаем по номеру шага, а не по календарной дате
        dates = [p.date for p in current]
        n = min(len(dates), len(previous))
        ax.plot(dates[:n], [p.value for p in previous[:n]], ls="--", label="Прошлый год")

    ax.set_title(title)
    ax.set_xlabel("Дата")
    ax.set_ylabel(ylabel)
    return _finish(ax, own_figure)

# ---------------------------------------------------------------------------
# 2) Анализ запаздывания
# ---------------------------------------------------------------------------

def plot_lag_analysis(
    result: LagAnalysisResult,
    source_label: str = "Источник",
    target_label: str = "Приёмник",
    ax=None,
):
    """Исходный, целевой и сдвинутый на лаг ряды."""
    own_figure = ax is None
    if own_figure:
        _, ax = plt.subplots()

    for points, label, style in (
        (result.source_data, source_label, "-"),
        (result.target_data, target_label, "-"),
        (result.shifted_data, f"{source_label} (сдвиг {result.lag})", ":"),
    ):
        ax.plot([p.date for p in points], [p.value for p in points], ls=style, label=label)

    corr = "н/д" if result.correlation is None else f"{result.correlation:.3f}"
    ax.set_title(f"Запаздывание: {result.lag} шаг(ов), r = {corr}")
    ax.set_xlabel("Дата")
    return _finish(ax, own_figure)

# ---------------------------------------------------------------------------
# 3) Внутригодовой профиль
# ---------------------------------------------------------------------------

def plot_seasonality(
    profile: Sequence[Tuple[str, float]],
    ylabel: str = "Q, м³/с",
    ax=None,
):
    """Гистограмма средних значений по месяцам."""
    own_figure = ax is None
    if own_figure:
        _, ax = plt.subplots()

    ax.bar([label for label, _ in profile], [value for _, value in profile])
    ax.set_title("Сезонность по месяцам")
    ax.set_xlabel("Месяц")
    ax.set_ylabel(ylabel)
    return _finish(ax, own_figure)
