import importlib
from datetime import date, datetime, timedelta

import numpy as np
import pytest

analyzer = importlib.import_module('syrflow.facade.analyzer')
filters = importlib.import_module('syrflow.domain.filters')
history = importlib.import_module('syrflow.history')
Measurement = importlib.import_module('syrflow.domain.measurement').Measurement
Config = importlib.import_module('syrflow.config').Config
statistics = importlib.import_module('syrflow.core.statistics')


@pytest.fixture
def state():
    return filters.FilterState(
        object_name='Токтогульское вдхр',
        measure_type='приток',
        water_year='2023/2024',
        aggregation='month',
    )


def test_monthly_series_of_water_year(measurements, state):
    basin = analyzer.BasinAnalyzer(measurements)
    points = basin.current_series(state)
    assert len(points) == 12
    assert points[0].date == date(2023, 10, 1) and points[0].value == 1110
    assert points[-1].date == date(2024, 9, 1) and points[-1].value == 1109
    assert [p.value for p in points if p.date == date(2024, 1, 1)] == [1101]


def test_previous_year_series(measurements, state):
    basin = analyzer.BasinAnalyzer(measurements)
    assert basin.previous_series(state) == []
    state.compare_with_previous = True
    previous = basin.previous_series(state)
    assert len(previous) == 12
    assert previous[0].date == date(2022, 10, 1) and previous[0].value == 110
    assert all(p.is_previous for p in previous)


def test_period_and_units(measurements, state):
    basin = analyzer.BasinAnalyzer(measurements)
    state.period = filters.Period('vegetation')
    state.unit_type = filters.UnitType('million-m3')
    points = basin.current_series(state)
    assert [p.date.month for p in points] == [4, 5, 6, 7, 8, 9]
    assert points[0].value == pytest.approx(1104 * 86400 * 30 / 1e6)


def test_kpi_and_seasonality(measurements, state):
    basin = analyzer.BasinAnalyzer(measurements)
    summary = basin.kpi(state)
    assert summary.count == 12
    assert summary.mean == pytest.approx(1106.5)
    assert (summary.maximum, summary.minimum) == (1112, 1101)
    profile = basin.seasonality(state)
    assert profile[0] == ('Янв', 1101.0)
    assert [label for label, _ in profile][-1] == 'Дек'


def test_lag_analysis_between_objects():
    rng = np.random.default_rng(3)
    base = rng.normal(500, 50, size=70)
    start = date(2023, 10, 1)
    items = []
    for i in range(60):
        day = start + timedelta(days=i)
        items.append(Measurement('Бахри Точик', day, 'попуск', float(base[i + 3])))
        items.append(Measurement('Шардара', day, 'приток', float(base[i])))
    basin = analyzer.BasinAnalyzer(items, Config(max_lag=10))
    state = filters.FilterState(water_year='2023/2024')

    result = basin.lag_analysis(state, ('Бахри Точик', 'попуск'), ('Шардара', 'приток'))
    assert result.lag == 3
    assert result.correlation > 0.9
    assert basin.lag_analysis(state, ('Нет такого', 'попуск'), ('Шардара', 'приток')) is None


def test_route_analyzer_records_history(posts):
    store = history.get('memory')
    routes = analyzer.RouteAnalyzer(posts, history=store)
    result = routes.calculate('a', 'c', 300)
    assert result.distance_km == 150
    assert not routes.calculate('c', 'a')
    assert routes.calculate('a', 'zzz') is None
    records = store.list()
    assert len(records) == 1
    assert (records[0].from_name, records[0].to_name, records[0].avg_time_formatted) == ('A', 'C', '12ч')


def test_route_analyzer_projections_and_export(posts, tmp_path):
    routes = analyzer.RouteAnalyzer(posts)
    window = routes.arrival('a', 'c', datetime(2024, 4, 1, 8, 0))
    assert window.expected == datetime(2024, 4, 1, 20, 0)
    assert routes.release('a', 'c', None) is None
    assert routes.release('a', 'd', datetime(2024, 4, 1)) is None  # время зависит от выпуска
    assert routes.export_csv(tmp_path / 'x.csv', 'c', 'a') is None
    assert routes.export_csv(tmp_path / 'x.csv', 'a', 'f').exists()


def test_filter_state_rejects_unknown_values():
    with pytest.raises(ValueError):
        filters.FilterState(aggregation='year')


def test_water_balance_and_distribution(measurements, state):
    basin = analyzer.BasinAnalyzer(measurements)
    balance = basin.water_balance(state)
    assert balance.balance == pytest.approx(1106.5 - 500)
    assert balance.status == 'Накопление'
    bins = basin.distribution(state)
    assert len(bins) == 10
    assert sum(b.count for b in bins) == 12


def test_route_analyzer_default_history_respects_limit(posts):
    routes = analyzer.RouteAnalyzer(posts, config=Config(history_limit=2))
    for flow in (300, 400, 500):
        routes.calculate('a', 'b', flow)
    assert [r.flow_rate for r in routes.history.list()] == [500, 400]


def test_previous_series_needs_water_year(measurements, caplog):
    basin = analyzer.BasinAnalyzer(measurements)
    state = filters.FilterState(
        object_name='Токтогульское вдхр', measure_type='приток', compare_with_previous=True
    )
    with caplog.at_level('WARNING'):
        assert basin.previous_series(state) == []
    assert 'water year' in caplog.text
    assert basin.current_series(state)


def test_objects_and_measures_by_type():
    items = [
        Measurement('Токтогульское вдхр', date(2024, 1, 1), 'приток', 1),
        Measurement('Шамалдысайская ГЭС', date(2024, 1, 1), 'сброс', 2),
        Measurement('г/п Учкурган', date(2024, 1, 1), 'расход', 3),
        Measurement('Токтогульское вдхр', date(2024, 1, 2), 'попуск', 4),
    ]
    basin = analyzer.BasinAnalyzer(items)
    assert basin.objects() == ['Токтогульское вдхр', 'Шамалдысайская ГЭС', 'г/п Учкурган']
    assert basin.objects('hes') == ['Шамалдысайская ГЭС']
    assert basin.measures('Токтогульское вдхр') == ['приток', 'попуск', 'объем']
    assert basin.measures('г/п Учкурган') == ['расход', 'рейка']


def test_select_object_derives_type_and_measure(state):
    basin = analyzer.BasinAnalyzer([])
    hes = basin.select_object(state, 'Шамалдысайская ГЭС')
    assert hes.object_type is filters.ObjectType.HES
    assert hes.measure_type == 'сброс'
    assert hes.water_year == state.water_year
    state.measure_type = 'попуск'
    reservoir = basin.select_object(state, 'Андижанское водохранилище')
    assert (reservoir.object_type, reservoir.measure_type) == (filters.ObjectType.RESERVOIR, 'попуск')


def test_compare_objects_with_trend_and_year_change(measurements, state):
    basin = analyzer.BasinAnalyzer(measurements)
    inflow, release = basin.compare_objects(
        state,
        [('Токтогульское вдхр', 'приток'), ('Токтогульское вдхр', 'попуск')],
        compare_year='2022/2023',
    )

    assert len(inflow.points) == 12
    assert inflow.summary.mean == pytest.approx(1106.5)
    assert inflow.trend.direction is statistics.TrendDirection.STABLE
    assert len(inflow.previous_points) == 12 and all(p.is_previous for p in inflow.previous_points)
    assert inflow.year_change.direction is statistics.TrendDirection.UP
    assert inflow.year_change.change_percent == pytest.approx(1000 / 106.5 * 100)
    assert inflow.describe() == [
        'Токтогульское вдхр (приток): среднее значение 1106.50, '
        'оставался стабильным во второй половине периода.',
        '  По сравнению с 2022/2023: рост на 939.0%.',
    ]

    assert [p.value for p in release.points] == [500]
    assert release.trend is None and release.year_change is None
    assert release.describe() == ['Токтогульское вдхр (попуск): среднее значение 500.00.']


def test_compare_objects_converts_volume_measures():
    items = [
        Measurement('Кайраккумское вдхр', date(2024, 1, 1) + timedelta(days=i), measure, 10.0)
        for i in range(4)
        for measure in ('объем', 'Объём воды', 'приток')
    ]
    basin = analyzer.BasinAnalyzer(items)
    state = filters.FilterState(water_year='2023/2024')
    volume, volume_yo, inflow = basin.compare_objects(
        state,
        [('Кайраккумское вдхр', 'объем'), ('Кайраккумское вдхр', 'Объём воды'), ('Кайраккумское вдхр', 'приток')],
    )
    assert volume.points[0].value == pytest.approx(0.864)
    assert volume_yo.points[0].value == pytest.approx(0.864)
    assert inflow.points[0].value == 10.0
    assert volume.previous_points == [] and volume.year_change is None


def test_compare_objects_limit_and_missing_data(measurements, state):
    basin = analyzer.BasinAnalyzer(measurements, Config(max_compare_objects=2))
    with pytest.raises(ValueError):
        basin.compare_objects(state, [('a', 'приток'), ('b', 'приток'), ('c', 'приток')])
    (missing,) = basin.compare_objects(state, [('Нет такого', 'приток')])
    assert missing.points == [] and missing.summary.count == 0
    assert missing.describe() == []
