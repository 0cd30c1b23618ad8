import importlib
from datetime import date, timedelta

import numpy as np
import pytest

correlation = importlib.import_module('syrflow.core.correlation')
ChartDataPoint = importlib.import_module('syrflow.domain.measurement').ChartDataPoint


def test_recovers_known_lag():
    rng = np.random.default_rng(42)
    base = rng.normal(size=120)
    lag = 5
    series1 = np.concatenate([rng.normal(size=lag), base])  # series1[i + lag] == series2[i]
    result = correlation.cross_correlation(series1, base, max_lag=30)
    assert result.lag == lag
    assert result.correlation == pytest.approx(1.0, abs=0.01)


def test_identical_series_have_zero_lag():
    data = [1.0, 3.0, 2.0, 5.0, 4.0, 6.0]
    result = correlation.cross_correlation(data, data)
    assert result.lag == 0
    assert result.correlation == pytest.approx(1.0)


def test_first_best_lag_wins_ties():
    result = correlation.cross_correlation([1, 2, 1, 2, 1, 2], [1, 2, 1, 2], max_lag=4)
    assert result.lag == 0


def test_lag_never_exceeds_series_length():
    result = correlation.cross_correlation([1.0, 2.0, 4.0], [2.0, 1.0, 5.0, 3.0], max_lag=30)
    assert 0 <= result.lag < 3


def test_zero_variance_is_undefined_not_nan():
    result = correlation.cross_correlation([1.0, 2.0, 3.0, 4.0], [5.0, 5.0, 5.0, 5.0])
    assert result.lag == 0
    assert result.correlation is None
    assert not result.is_defined


def test_empty_series():
    result = correlation.cross_correlation([], [1.0, 2.0])
    assert result == correlation.LagResult(lag=0, correlation=None)


def test_lag_analysis_measures_how_far_target_trails_source():
    rng = np.random.default_rng(7)
    base = rng.normal(size=80)
    start = date(2024, 4, 1)
    source = [ChartDataPoint(start + timedelta(days=i), float(base[i + 3])) for i in range(70)]
    target = [ChartDataPoint(start + timedelta(days=i), float(base[i])) for i in range(70)]

    result = correlation.lag_analysis(source, target, max_lag=10)

    assert result.lag == 3
    assert result.correlation > 0.95
    assert len(result.shifted_data) == len(source)
    assert result.shifted_data[0].date == target[3].date
    assert result.shifted_data[-1].date == target[-1].date
