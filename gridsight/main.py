from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from gridsight.schemas import (
    ConditionRequest,
    ConditionResponse,
    ReconcileRequest,
    ReconcileResponse,
    ReconcileResult,
)
from gridsight.core.capacity import summarize_capacity
from gridsight.core.preprocessing import anomalies, condition_series
from gridsight.core.reconciliation import reconcile
from gridsight.core.units import choose_unit, max_magnitude
import traceback
import logging
import json

# Configure logging - level will be controlled by uvicorn's --log-level parameter
logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

_LOGGER = logging.getLogger(__name__)

app = FastAPI(
    title="GridSight",
    description="Load signal conditioning and forecast reconciliation service",
    version="0.1.0"
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Return 422 with one entry per rejected field."""
    errors = exc.errors()

    # ctx may hold exception objects
    _LOGGER.warning(
        f"Rejected request to {request.url.path}: "
        f"{json.dumps(errors, default=str)}"
    )

    detailed_errors = []
    for error in errors:
        field_path = " -> ".join(str(loc) for loc in error["loc"])
        detailed_errors.append({
            "field": field_path,
            "message": error["msg"],
            "type": error["type"],
        })

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": "Validation Error",
            "errors": detailed_errors,
            "error_count": len(detailed_errors),
            "help": "Each entry of 'errors' names a field path and why it was rejected."
        }
    )


@app.get("/")
def root():
    """Health check endpoint"""
    return {"status": "ok", "service": "GridSight"}


@app.post("/condition", response_model=ConditionResponse)
def condition(req: ConditionRequest):
    """Smooth a measured series and flag its anomalies."""

    _LOGGER.info(f"Received conditioning request: {len(req.points)} points")

    try:
        points = condition_series(req.points, req.config.anomaly_threshold)
        return ConditionResponse(
            status="ok",
            points=points,
            anomaly_count=len(anomalies(points))
        )
    except Exception as e:
        _LOGGER.error(f"Unexpected error: {traceback.format_exc()}")
        return ConditionResponse(status="error", error=f"Internal error: {str(e)}")


@app.post("/reconcile", response_model=ReconcileResponse)
def reconcile_endpoint(req: ReconcileRequest):
    """
    Main reconciliation endpoint.

    Steps:
    1. Condition the actual series (smoothed trend + anomaly flags)
    2. Merge it with the predicted series and score the overlap window
    3. Pick a display unit from the largest merged value
    4. Summarize fleet capacity against peak demand (if units are given)
    """

    warnings = []

    _LOGGER.info(
        f"Received reconciliation request: {len(req.actual)} actual, "
        f"{len(req.predicted)} predicted, meta={req.meta}"
    )

    try:
        config = req.config

        # Step 1: Smooth and flag measured load
        conditioned = condition_series(req.actual, config.anomaly_threshold)
        anomaly_count = len(anomalies(conditioned))
        if anomaly_count:
            warnings.append(f"{anomaly_count} anomalous measurements flagged")

        # Step 2: Merge with the forecast
        reconciliation = reconcile(conditioned, req.predicted, history_window=config.history_window)
        report = reconciliation.report

        if not req.predicted:
            warnings.append("No predicted series given - accuracy cannot be scored")
        elif report.overlap_count == 0:
            warnings.append("Actual and predicted series do not overlap - accuracy cannot be scored")
        if report.undefined_percent_count:
            warnings.append(
                f"{report.undefined_percent_count} overlap points with zero actual load "
                f"excluded from percent error"
            )
        if report.high_discrepancy_points:
            warnings.append(f"{len(report.high_discrepancy_points)} points deviate more than 5% from prediction")

        # Step 3: Display unit
        magnitude = max_magnitude(
            v
            for p in reconciliation.points
            for v in (p.actual, p.smoothed, p.predicted)
            if v is not None
        )
        unit = choose_unit(magnitude, config.base_unit, config.aggregate_unit)

        # Step 4: Capacity context
        capacity = None
        if req.units:
            capacity = summarize_capacity(req.predicted, req.units, actual=req.actual)
            if capacity.capacity_shortfall:
                _LOGGER.warning(
                    f"Peak predicted load {capacity.peak_predicted_load:.1f} exceeds "
                    f"fleet capacity {capacity.total_capacity:.1f}"
                )
                warnings.append("Peak predicted load exceeds total fleet capacity")

        _LOGGER.info(
            f"Reconciliation completed: {len(reconciliation.points)} points, "
            f"accuracy={report.accuracy_score}"
        )

        return ReconcileResponse(
            status="ok",
            result=ReconcileResult(
                points=reconciliation.points,
                report=report,
                unit=unit,
                capacity=capacity
            ),
            warnings=warnings
        )

    except Exception as e:
        # Log full traceback for debugging
        _LOGGER.error(f"Unexpected error: {traceback.format_exc()}")
        return ReconcileResponse(
            status="error",
            result=None,
            warnings=warnings,
            error=f"Internal error: {str(e)}"
        )
