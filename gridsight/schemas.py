from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Dict, List, Literal, Optional, TypeAlias

# Canonical timestamps are "YYYY-MM-DD HH:mm" strings, lexicographically sortable
Timestamp: TypeAlias = str


class LoadPoint(BaseModel):
    """Single timestamped load measurement (MW)"""
    model_config = ConfigDict(frozen=True)

    timestamp: Timestamp = Field(description="Measurement time, canonical form 'YYYY-MM-DD HH:mm'")
    value: float = Field(description="Measured (or predicted) load")
    smoothed: Optional[float] = Field(None, description="Savitzky-Golay trend value at this point")
    is_anomaly: Optional[bool] = Field(None, description="True if the point is a statistical outlier")
    predicted: Optional[float] = Field(None, description="Predicted load from the external forecaster")
    lower_bound: Optional[float] = Field(None, description="Lower uncertainty bound of the prediction")
    upper_bound: Optional[float] = Field(None, description="Upper uncertainty bound of the prediction")

    @model_validator(mode='before')
    @classmethod
    def default_value_from_prediction(cls, data):
        """Forecaster output only carries 'predicted'; use it as the point value"""
        if isinstance(data, dict) and data.get("value") is None and data.get("predicted") is not None:
            data = {**data, "value": data["predicted"]}
        return data


Series: TypeAlias = List[LoadPoint]


class MergedPoint(BaseModel):
    """Actual and predicted values reconciled at one timestamp"""
    model_config = ConfigDict(frozen=True)

    timestamp: Timestamp
    display_time: str = Field(description="Time-of-day part of the timestamp for chart axes")
    actual: Optional[float] = None
    smoothed: Optional[float] = None
    is_anomaly: Optional[bool] = None
    predicted: Optional[float] = None
    absolute_error: Optional[float] = Field(None, description="|actual - predicted|, only inside the overlap window")
    percent_error: Optional[float] = Field(
        None,
        description="absolute_error / actual * 100, omitted when actual is zero"
    )

    @property
    def in_overlap(self) -> bool:
        return self.actual is not None and self.predicted is not None


class AccuracyReport(BaseModel):
    """Aggregate accuracy over the overlap window"""
    model_config = ConfigDict(frozen=True)

    overlap_count: int = Field(ge=0, description="Points with both actual and predicted values")
    mean_percent_error: Optional[float] = Field(None, description="Mean percent error over the overlap window")
    accuracy_score: Optional[float] = Field(None, description="100 - mean_percent_error")
    high_discrepancy_points: List[MergedPoint] = Field(default_factory=list)
    undefined_percent_count: int = Field(
        default=0,
        ge=0,
        description="Overlap points with zero actual load, excluded from the mean"
    )


class ReconciliationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    points: List[MergedPoint] = Field(default_factory=list)
    report: AccuracyReport


class UnitScale(BaseModel):
    """Display unit chosen from series magnitude"""
    model_config = ConfigDict(frozen=True)

    factor: float = Field(gt=0, description="Divisor applied to base-unit values")
    label: Literal["base-unit", "aggregate-unit"]
    symbol: str = Field(description="Human readable unit, e.g. MW or GW")


class NormalizedSeries(BaseModel):
    model_config = ConfigDict(frozen=True)

    normalized: List[float]
    min: float
    max: float


class GeneratorUnit(BaseModel):
    """Generating unit of the fleet"""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    capacity: float = Field(ge=0, description="Rated capacity in MW")
    status: Literal["ON", "OFF"] = "OFF"


class CapacitySummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    peak_predicted_load: Optional[float] = None
    peak_actual_load: Optional[float] = None
    total_capacity: float
    reserve_margin: Optional[float] = Field(None, description="total_capacity - peak_predicted_load")
    capacity_shortfall: bool = Field(default=False, description="True if peak demand exceeds fleet capacity")


# ---------------- CONFIG ----------------

class AnalysisConfig(BaseModel):
    """Tunable analysis parameters"""
    anomaly_threshold: float = Field(default=2.5, gt=0, description="z-score above which a point is anomalous")
    history_window: Optional[int] = Field(
        None,
        gt=0,
        description="Only reconcile the last N actual points (None = all)"
    )
    base_unit: str = Field(default="MW", min_length=1)
    aggregate_unit: str = Field(default="GW", min_length=1)


# ---------------- REQUEST ----------------

class ConditionRequest(BaseModel):
    """Smooth and flag a measured series"""
    points: Series
    config: AnalysisConfig = Field(default_factory=AnalysisConfig)


class ReconcileRequest(BaseModel):
    """Reconcile measured load against an external forecast"""
    meta: Dict[str, str] = Field(default_factory=dict, description="Metadata (request_id, version, etc.)")
    actual: Series
    predicted: Series = Field(default_factory=list)
    units: List[GeneratorUnit] = Field(default_factory=list, description="Generation fleet, used for the capacity summary")
    config: AnalysisConfig = Field(default_factory=AnalysisConfig)


# ---------------- RESPONSE ----------------

class ConditionResponse(BaseModel):
    status: str = Field(description="Response status: 'ok' or 'error'")
    points: Series = Field(default_factory=list)
    anomaly_count: int = 0
    error: Optional[str] = None


class ReconcileResult(BaseModel):
    points: List[MergedPoint]
    report: AccuracyReport
    unit: UnitScale
    capacity: Optional[CapacitySummary] = Field(None, description="Capacity summary (None if no units given)")


class ReconcileResponse(BaseModel):
    status: str = Field(description="Response status: 'ok' or 'error'")
    result: Optional[ReconcileResult] = None
    warnings: List[str] = Field(default_factory=list)
    error: Optional[str] = Field(None, description="Error message if status is 'error'")
