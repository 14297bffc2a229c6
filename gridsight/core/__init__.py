"""
Core signal conditioning and reconciliation modules for load analysis.
"""

from .anomaly import detect, zscores
from .capacity import summarize_capacity, total_capacity
from .preprocessing import condition_series
from .reconciliation import reconcile, merge_series, summarize_accuracy
from .smoothing import smooth
from .time_alignment import normalize_timestamp, TimeAlignmentError
from .units import choose_unit, scale, normalize, denormalize

__all__ = [
    "detect",
    "zscores",
    "summarize_capacity",
    "total_capacity",
    "condition_series",
    "reconcile",
    "merge_series",
    "summarize_accuracy",
    "smooth",
    "normalize_timestamp",
    "TimeAlignmentError",
    "choose_unit",
    "scale",
    "normalize",
    "denormalize",
]
