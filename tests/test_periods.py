import importlib
from datetime import date

import pytest

periods = importlib.import_module('syrflow.core.periods')
Measurement = importlib.import_module('syrflow.domain.measurement').Measurement


def _year(year=2024):
    return [Measurement('X', date(year, month, 15), 'приток', month) for month in range(1, 13)]


def test_full_year_is_identity():
    items = _year()
    assert periods.filter_by_period(items, 'full-year') == items


def test_vegetation_and_inter_vegetation_partition_the_year():
    items = _year()
    veg = periods.filter_by_period(items, 'vegetation')
    inter = periods.filter_by_period(items, 'inter-vegetation')
    assert [m.date.month for m in veg] == [4, 5, 6, 7, 8, 9]
    assert [m.date.month for m in inter] == [1, 2, 3, 10, 11, 12]


def test_custom_period_is_inclusive():
    items = _year()
    kept = periods.filter_by_period(items, 'custom', date(2024, 3, 15), date(2024, 5, 15))
    assert [m.date.month for m in kept] == [3, 4, 5]


@pytest.mark.parametrize('start, end', [(None, date(2024, 5, 1)), (date(2024, 3, 1), None), (None, None)])
def test_custom_period_without_both_bounds_does_not_filter(start, end):
    items = _year()
    assert periods.filter_by_period(items, 'custom', start, end) == items


def test_unknown_period_raises():
    with pytest.raises(ValueError):
        periods.filter_by_period([], 'winter')


def test_water_year_bounds():
    assert periods.water_year_bounds('2023/2024') == (date(2023, 10, 1), date(2024, 9, 30))
    with pytest.raises(ValueError):
        periods.water_year_bounds('2023-2024')


def test_filter_water_year_with_offset():
    items = _year(2023) + _year(2024)
    current = periods.filter_water_year(items, '2023/2024')
    assert min(m.date for m in current) == date(2023, 10, 15)
    assert max(m.date for m in current) == date(2024, 9, 15)
    previous = periods.filter_water_year(items, '2023/2024', year_offset=-1)
    assert [m.date for m in previous] == [date(2023, month, 15) for month in range(1, 10)]


def test_select_measurements_matches_measure_substring():
    items = [
        Measurement('Шардара', date(2024, 1, 1), 'Приток воды', 1),
        Measurement('Шардара', date(2024, 1, 1), 'попуск', 2),
        Measurement('Кайраккум', date(2024, 1, 1), 'приток', 3),
    ]
    picked = periods.select_measurements(items, 'Шардара', 'приток')
    assert [m.value for m in picked] == [1]
