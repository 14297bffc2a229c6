"""
Savitzky-Golay trend extraction for load series.
"""

from typing import List, Sequence

# Savitzky-Golay coefficients for window_length = 11, polynomial_order = 2,
# evaluated at the central point of the window.
SG_COEFFS_W11_P2 = (
    -0.0839, 0.0210, 0.1026, 0.1608, 0.1958, 0.2075, 0.1958, 0.1608, 0.1026, 0.0210, -0.0839
)
SG_WINDOW_LENGTH = 11
SG_HALF_WINDOW = 5


def smooth(series: Sequence[float]) -> List[float]:
    """
    Apply the fixed 11-point Savitzky-Golay kernel to a series.

    The first and last SG_HALF_WINDOW points are copied unchanged (no edge
    correction), and a series shorter than the window is returned as is.
    Smoothed values are rounded to 4 decimals.

    Args:
        series: Load values ordered by time

    Returns:
        New list, same length as the input
    """

    n = len(series)
    smoothed = list(series)

    if n < SG_WINDOW_LENGTH:
        return smoothed

    for i in range(SG_HALF_WINDOW, n - SG_HALF_WINDOW):
        total = 0.0
        for j in range(-SG_HALF_WINDOW, SG_HALF_WINDOW + 1):
            total += series[i + j] * SG_COEFFS_W11_P2[j + SG_HALF_WINDOW]
        smoothed[i] = round(total, 4)

    return smoothed
