import math
import pytest
from gridsight.core.anomaly import ANOMALY_LOOKBACK, detect, zscores


def test_length_preserved():
    for n in [0, 1, 11, 12, 13, 40]:
        assert len(detect([1.0] * n)) == n


def test_flat_history_then_outlier():
    series = [100.0] * 12 + [1000.0]
    flags = detect(series)
    assert flags[12] is True
    assert not any(flags[:12])


def test_flat_history_without_change():
    assert detect([42.0] * 20) == [False] * 20


def test_first_twelve_never_flagged():
    series = [0.0, 1000.0] * 6 + [1.0]
    flags = detect(series)
    assert flags[:ANOMALY_LOOKBACK] == [False] * ANOMALY_LOOKBACK


def test_outlier_in_noisy_history():
    history = [100.0, 102.0, 98.0, 101.0, 99.0, 100.0, 103.0, 97.0, 100.0, 101.0, 99.0, 100.0]
    flags = detect(history + [130.0])
    assert flags[12] is True


def test_normal_point_not_flagged():
    history = [100.0, 102.0, 98.0, 101.0, 99.0, 100.0, 103.0, 97.0, 100.0, 101.0, 99.0, 100.0]
    assert detect(history + [101.5])[12] is False


def test_threshold_is_strict():
    # Window mean 0, population stddev 1 -> z of 2.0 is exactly 2.0
    history = [1.0, -1.0] * 6
    assert detect(history + [2.0], threshold=2.0)[12] is False
    assert detect(history + [2.0], threshold=1.99)[12] is True


def test_window_excludes_current_point():
    history = [1.0, -1.0] * 6
    scores = zscores(history + [3.0])
    assert scores[12] == pytest.approx(3.0)


def test_zscores_shape():
    scores = zscores([5.0] * 12 + [5.0, 6.0])
    assert scores[:12] == [None] * 12
    assert scores[12] == 0.0
    assert math.isinf(scores[13])


def test_short_series_never_flagged():
    assert detect([1.0, 500.0, -500.0]) == [False, False, False]


def test_zero_threshold_flags_any_deviation():
    flags = detect([1.0, 2.0] * 10, threshold=0)
    assert len(flags) == 20
    assert flags[:12] == [False] * 12
    assert all(flags[12:])


def test_zero_threshold_flat_series():
    assert detect([1.0] * 20, threshold=0) == [False] * 20


def test_negative_threshold_short_series():
    assert detect([1.0, 2.0], threshold=-1.0) == [False, False]


def test_nan_point_and_window_not_flagged():
    series = [100.0] * 12 + [math.nan] + [100.0] * 13
    flags = detect(series)
    scores = zscores(series)

    assert len(flags) == 26
    assert not any(flags)
    assert scores[12] is None
    assert scores[24] is None
    assert scores[25] == 0.0


def test_infinite_point_flagged():
    history = [100.0, 102.0, 98.0, 101.0, 99.0, 100.0, 103.0, 97.0, 100.0, 101.0, 99.0, 100.0]
    assert detect(history + [math.inf])[12] is True
    assert detect(history + [math.inf, 100.0])[13] is False
