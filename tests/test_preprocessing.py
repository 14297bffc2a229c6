from gridsight.core.preprocessing import anomalies, condition_series
from gridsight.core.smoothing import smooth


def test_points_get_smoothed_and_flags(hourly_load):
    conditioned = condition_series(hourly_load)

    assert len(conditioned) == len(hourly_load)
    assert [p.smoothed for p in conditioned] == smooth([p.value for p in hourly_load])
    assert all(p.is_anomaly is not None for p in conditioned)


def test_spike_flagged(hourly_load):
    flagged = anomalies(condition_series(hourly_load))
    assert [p.timestamp for p in flagged] == ["2024-01-01 14:00"]


def test_input_points_untouched(hourly_load):
    condition_series(hourly_load)
    assert all(p.smoothed is None and p.is_anomaly is None for p in hourly_load)


def test_timestamps_and_values_preserved(hourly_load):
    conditioned = condition_series(hourly_load)
    assert [(p.timestamp, p.value) for p in conditioned] == [(p.timestamp, p.value) for p in hourly_load]


def test_empty():
    assert condition_series([]) == []
