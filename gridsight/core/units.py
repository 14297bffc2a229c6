"""
Display unit selection and value scaling.
"""

from typing import Iterable, Sequence
from gridsight.schemas import NormalizedSeries, UnitScale

# Above this magnitude values are reported in thousands of the base unit
AGGREGATE_UNIT_THRESHOLD = 5000.0
AGGREGATE_UNIT_FACTOR = 1000.0


def choose_unit(
    max_magnitude: float,
    base_symbol: str = "MW",
    aggregate_symbol: str = "GW",
) -> UnitScale:
    """
    Pick the reporting unit for a series whose largest value is max_magnitude.

    Strictly greater than 5000 switches to the aggregate unit (x1000);
    zero or negative magnitudes keep the base unit.
    """
    if max_magnitude > AGGREGATE_UNIT_THRESHOLD:
        return UnitScale(factor=AGGREGATE_UNIT_FACTOR, label="aggregate-unit", symbol=aggregate_symbol)
    return UnitScale(factor=1.0, label="base-unit", symbol=base_symbol)


def scale(value: float, factor: float) -> float:
    """
    Express a base-unit value in the unit given by factor.

    A factor of zero or below has no unit meaning and leaves the value in
    the base unit.
    """
    if not factor > 0:
        return value
    return value / factor


def max_magnitude(values: Iterable[float]) -> float:
    """Largest absolute value, 0.0 for an empty input"""
    return max((abs(v) for v in values), default=0.0)


def normalize(values: Sequence[float]) -> NormalizedSeries:
    """
    Min-max normalize values to [0, 1].

    A constant series maps every point to 0.5, an empty one to an empty
    series with min = max = 0.
    """
    if not values:
        return NormalizedSeries(normalized=[], min=0.0, max=0.0)

    lo = min(values)
    hi = max(values)
    value_range = hi - lo

    if value_range == 0:
        return NormalizedSeries(normalized=[0.5] * len(values), min=lo, max=hi)

    return NormalizedSeries(
        normalized=[(v - lo) / value_range for v in values],
        min=lo,
        max=hi,
    )


def denormalize(value: float, min_value: float, max_value: float) -> float:
    return value * (max_value - min_value) + min_value
