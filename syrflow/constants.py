# syrflow/constants.py
"""Общие константы расчётов добегания и обработки рядов."""

SECONDS_PER_DAY = 86_400

# Опорный расход, при котором откалиброваны времена добегания участков, м³/с
REFERENCE_FLOW_RATE = 300.0

# Строковые «заглушки», которыми хранилище помечает отсутствующие значения
INVALID_VALUE_SENTINELS = frozenset({"", "нет данных", "no data", "null", "nan"})

DEFAULT_MAX_LAG = 30
HISTORY_LIMIT = 10

DEPENDS_ON_RELEASE = "Зависит от выпуска"
INVALID_ROUTE_MESSAGE = "Начальный объект должен находиться выше по течению, чем конечный"

ACCURACY_NOTE = "±10-15%"
DATA_SOURCE_NOTE = 'БВО "Сырдарья" при стабильном попуске 300 м³/с'
PILOT_NOTE = "Пилотная версия. Возможны неточности."
REPORT_TITLE = "Калькулятор добегания воды"
RIVER_NAME = "Река Нарын–Сырдарья"

MONTH_LABELS = (
    "Янв", "Фев", "Мар", "Апр", "Май", "Июн",
    "Июл", "Авг", "Сен", "Окт", "Ноя", "Дек",
)
