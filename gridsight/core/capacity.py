from typing import Iterable, Optional, Sequence
from gridsight.schemas import CapacitySummary, GeneratorUnit, LoadPoint


def total_capacity(units: Iterable[GeneratorUnit], only_online: bool = False) -> float:
    """
    Sum of rated capacity over the fleet.

    Args:
        units: Generating units
        only_online: Only count units with status "ON"
    """
    return sum((u.capacity for u in units if not only_online or u.status == "ON"), 0.0)


def peak_load(values: Iterable[float]) -> Optional[float]:
    return max(values, default=None)


def summarize_capacity(
    predicted: Sequence[LoadPoint],
    units: Sequence[GeneratorUnit],
    actual: Optional[Sequence[LoadPoint]] = None,
) -> CapacitySummary:
    """
    Compare peak predicted demand with the capacity of the whole fleet.

    reserve_margin = total_capacity - peak_predicted_load
    A negative margin is a capacity shortfall.
    """

    peak_predicted = peak_load(
        p.predicted if p.predicted is not None else p.value for p in predicted
    )
    peak_actual = peak_load(p.value for p in actual) if actual else None
    capacity = total_capacity(units)

    reserve_margin = capacity - peak_predicted if peak_predicted is not None else None

    return CapacitySummary(
        peak_predicted_load=peak_predicted,
        peak_actual_load=peak_actual,
        total_capacity=capacity,
        reserve_margin=reserve_margin,
        capacity_shortfall=reserve_margin is not None and reserve_margin < 0,
    )
