"""
Causal z-score outlier detection over a fixed look-back window.
"""

from typing import List, Optional, Sequence
import logging
import math
import statistics

_LOGGER = logging.getLogger(__name__)

# 12 samples = half a day of hourly data
ANOMALY_LOOKBACK = 12
DEFAULT_THRESHOLD = 2.5


def zscores(series: Sequence[float]) -> List[Optional[float]]:
    """
    Score each point against the ANOMALY_LOOKBACK points before it.

    - mean and population standard deviation of series[i-12:i]
    - the point itself is never part of its own window
    - None for the first ANOMALY_LOOKBACK points (not enough history)
    - None for a NaN point or a window holding NaN/inf values
    - flat window: 0.0 if the point matches it, inf otherwise
    """

    scores: List[Optional[float]] = [None] * min(len(series), ANOMALY_LOOKBACK)

    for i in range(ANOMALY_LOOKBACK, len(series)):
        window = series[i - ANOMALY_LOOKBACK:i]
        value = series[i]

        if math.isnan(value) or not all(math.isfinite(v) for v in window):
            scores.append(None)
            continue

        # statistics works on exact fractions, no float accumulation error
        mean = statistics.mean(window)
        std_dev = statistics.pstdev(window)
        deviation = abs(value - mean)

        if std_dev > 0:
            scores.append(deviation / std_dev)
        else:
            scores.append(math.inf if deviation > 0 else 0.0)

    return scores


def detect(series: Sequence[float], threshold: float = DEFAULT_THRESHOLD) -> List[bool]:
    """
    Flag points whose z-score against the preceding window exceeds threshold.

    A threshold of zero or below flags every scored point that deviates
    from its window mean at all.

    Args:
        series: Load values ordered by time
        threshold: z-score limit

    Returns:
        List of flags, same length as the input
    """

    flags = [score is not None and score > threshold for score in zscores(series)]

    _LOGGER.debug(f"Flagged {sum(flags)} of {len(flags)} points (threshold={threshold})")

    return flags
