"""
Reconciliation of measured load against an external forecast.
Merges both series on normalized timestamps and scores the overlap window.
"""

from typing import Dict, List, Optional, Sequence
import logging
import statistics
from gridsight.schemas import AccuracyReport, LoadPoint, MergedPoint, ReconciliationResult
from .time_alignment import display_time, is_canonical, normalize_timestamp

_LOGGER = logging.getLogger(__name__)

# Overlap points with a percent error strictly above this are high discrepancy
HIGH_DISCREPANCY_PERCENT = 5.0


def _predicted_value(point: LoadPoint) -> float:
    return point.predicted if point.predicted is not None else point.value


def _key(raw: str, source: str) -> str:
    key = normalize_timestamp(raw)
    if not is_canonical(key):
        _LOGGER.warning(f"Malformed {source} timestamp {raw!r}, keeping it as its own bucket")
    return key


def _score(entry: Dict[str, Optional[float]]) -> Dict[str, Optional[float]]:
    """Add absolute and percent error to a merged entry inside the overlap window"""
    actual = entry["actual"]
    predicted = entry["predicted"]
    if actual is None or predicted is None:
        return entry

    absolute_error = abs(actual - predicted)
    # Zero actual load has no meaningful relative error
    percent_error = absolute_error / actual * 100 if actual != 0 else None

    return {**entry, "absolute_error": absolute_error, "percent_error": percent_error}


def merge_series(
    actual: Sequence[LoadPoint],
    predicted: Sequence[LoadPoint],
) -> List[MergedPoint]:
    """
    Merge actual and predicted series into one timeline ordered by timestamp.

    - actual points seed the timeline (actual, smoothed, anomaly flag)
    - a predicted point on an existing timestamp is attached to it
    - a predicted point on a new timestamp becomes a forecast-only entry
    - errors are only computed where both values are present

    Inputs are not modified; the result is built from fresh MergedPoints.
    """

    merged: Dict[str, Dict[str, Optional[float]]] = {}

    for point in actual:
        key = _key(point.timestamp, "actual")
        if key in merged:
            _LOGGER.warning(f"Duplicate actual timestamp {key}, later point wins")
        merged[key] = {
            "actual": point.value,
            "smoothed": point.smoothed,
            "is_anomaly": point.is_anomaly,
            "predicted": None,
        }

    for point in predicted:
        key = _key(point.timestamp, "predicted")
        existing = merged.get(key)
        if existing is not None:
            merged[key] = {**existing, "predicted": _predicted_value(point)}
        else:
            merged[key] = {
                "actual": None,
                "smoothed": None,
                "is_anomaly": None,
                "predicted": _predicted_value(point),
            }

    return [
        MergedPoint(timestamp=key, display_time=display_time(key), **_score(merged[key]))
        for key in sorted(merged)
    ]


def summarize_accuracy(points: Sequence[MergedPoint]) -> AccuracyReport:
    """
    Aggregate accuracy over the overlap window of a merged timeline.

    Points with zero actual load count towards overlap_count but carry no
    percent error, so they are left out of the mean and of the
    high discrepancy list.
    """

    overlap = [p for p in points if p.in_overlap]
    scored = [p for p in overlap if p.percent_error is not None]

    if scored:
        mean_percent_error = statistics.mean(p.percent_error for p in scored)
        accuracy_score = 100 - mean_percent_error
    else:
        mean_percent_error = None
        accuracy_score = None

    return AccuracyReport(
        overlap_count=len(overlap),
        mean_percent_error=mean_percent_error,
        accuracy_score=accuracy_score,
        high_discrepancy_points=[p for p in scored if p.percent_error > HIGH_DISCREPANCY_PERCENT],
        undefined_percent_count=len(overlap) - len(scored),
    )


def reconcile(
    actual: Sequence[LoadPoint],
    predicted: Sequence[LoadPoint],
    history_window: Optional[int] = None,
) -> ReconciliationResult:
    """
    Reconcile measured load against predictions.

    Args:
        actual: Measured series, optionally carrying smoothed values and anomaly flags
        predicted: Forecast series from the external predictor (may be empty)
        history_window: Only merge the last N actual points (None = all)

    Returns:
        Merged timeline and accuracy report
    """

    if history_window is not None:
        actual = actual[-history_window:] if history_window > 0 else []

    points = merge_series(actual, predicted)
    report = summarize_accuracy(points)

    _LOGGER.debug(
        f"Reconciled {len(actual)} actual and {len(predicted)} predicted points: "
        f"{len(points)} merged, {report.overlap_count} overlapping, "
        f"{len(report.high_discrepancy_points)} high discrepancy"
    )

    return ReconciliationResult(points=points, report=report)
