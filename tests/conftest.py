import importlib
import os
import sys
from datetime import date, timedelta

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

RiverPost = importlib.import_module('syrflow.domain.river_post').RiverPost
Measurement = importlib.import_module('syrflow.domain.measurement').Measurement


@pytest.fixture
def posts():
    """A(0) → B → C (без времени) → D (reset) → E → F."""
    return [
        RiverPost('a', 'A', 0, 0, 0),
        RiverPost('b', 'B', 1, 100, 100, 10, 14),
        RiverPost('c', 'C', 2, 150, 50),
        RiverPost('d', 'D', 3, 350, 200, 20, 30, is_reset_point=True),
        RiverPost('e', 'E', 4, 430, 80, 8, 12),
        RiverPost('f', 'F', 5, 470, 40, 4, 6),
    ]


@pytest.fixture
def by_id(posts):
    return {p.id: p for p in posts}


@pytest.fixture
def measurements():
    """Суточный приток за 2023/2024 и прошлый год + несколько «пустых» значений."""
    items = []
    start = date(2022, 10, 1)
    for i in range((date(2024, 9, 30) - start).days + 1):
        day = start + timedelta(days=i)
        value = 100 + day.month  # постоянное значение внутри месяца
        if day.year == 2024 or (day.year == 2023 and day.month >= 10):
            value += 1000  # текущий гидрологический год
        items.append(Measurement('Токтогульское вдхр', day, 'приток', value, 'м3/с'))
    items.append(Measurement('Токтогульское вдхр', date(2024, 1, 15), 'приток', 'нет данных'))
    items.append(Measurement('Токтогульское вдхр', date(2024, 1, 16), 'приток', None))
    items.append(Measurement('Токтогульское вдхр', date(2024, 1, 10), 'попуск', 500))
    return items
