"""
Signal conditioning for measured load series.
Attaches the smoothed trend and anomaly flags to every point.
"""

from typing import List, Sequence
import logging
from gridsight.schemas import LoadPoint
from .anomaly import DEFAULT_THRESHOLD, detect
from .smoothing import smooth

_LOGGER = logging.getLogger(__name__)


def condition_series(
    points: Sequence[LoadPoint],
    threshold: float = DEFAULT_THRESHOLD,
) -> List[LoadPoint]:
    """
    Smooth and flag a measured series.

    Steps:
    1. Run the Savitzky-Golay smoother over the point values
    2. Run the causal z-score detector over the same (raw) values
    3. Return copies of the points carrying `smoothed` and `is_anomaly`

    The detector sees raw values, not the smoothed trend, so a spike is
    judged against the measurements around it.

    Args:
        points: Measured series ordered by timestamp
        threshold: z-score anomaly threshold

    Returns:
        New list of points, input points are left untouched
    """

    values = [p.value for p in points]
    smoothed = smooth(values)
    flags = detect(values, threshold)

    conditioned = [
        point.model_copy(update={"smoothed": s, "is_anomaly": flag})
        for point, s, flag in zip(points, smoothed, flags)
    ]

    flagged = sum(flags)
    if flagged:
        _LOGGER.info(f"Conditioned {len(conditioned)} points, {flagged} anomalies")
    else:
        _LOGGER.debug(f"Conditioned {len(conditioned)} points, no anomalies")

    return conditioned


def anomalies(points: Sequence[LoadPoint]) -> List[LoadPoint]:
    return [p for p in points if p.is_anomaly]
