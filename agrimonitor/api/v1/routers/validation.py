"""
API router for NDVI validation endpoints.
"""
from typing import Annotated, Optional
import logging

from fastapi import APIRouter, HTTPException, Query, Request

from agrimonitor.api.dependencies import ValidationServiceDep
from agrimonitor.api.rate_limit import DEFAULT_RATE_LIMIT, limiter
from agrimonitor.api.v1.models.responses import (
    AlertSummaryResponse,
    ChartPointResponse,
    GrowthInsightsResponse,
    GrowthPointResponse,
    NDVICategoryResponse,
    ObservationRowResponse,
    QualitySummaryResponse,
    ValidationDashboardResponse,
    ValidationReportResponse,
)
from agrimonitor.domain.exceptions import MissingDataError
from agrimonitor.domain.models import MONTH_PATTERN, NDVIPayload
from agrimonitor.infrastructure.satellite_api_client import SatelliteAPIError
from agrimonitor.services.application.validation_service import ValidationDashboard
from agrimonitor.services.domain.ndvi_categorizer import categorize_ndvi

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/validation",
    tags=["validation"],
)

COMMON_RESPONSES = {
    400: {"description": "Invalid request parameters"},
    429: {"description": "Rate limit exceeded"},
    500: {"description": "Internal server error"},
}


def to_dashboard_response(dashboard: ValidationDashboard) -> ValidationDashboardResponse:
    """Transform a domain dashboard into its response model."""
    report = dashboard.report
    scores = report.scores
    insights = dashboard.insights
    quality = dashboard.quality
    alerts = dashboard.alerts

    return ValidationDashboardResponse(
        available=True,
        report=ValidationReportResponse(
            quality_score=scores.quality_score,
            consistency_score=scores.consistency_score,
            coverage_score=scores.coverage_score,
            overall_score=scores.overall_score,
            growth_pattern=[
                GrowthPointResponse(
                    month=point.month,
                    ndvi=point.ndvi,
                    growth=point.growth,
                    trend=point.trend,
                )
                for point in report.growth_pattern
            ],
            is_realistic=report.is_realistic,
        ),
        chart_points=[
            ChartPointResponse(
                month=point.month,
                ndvi=point.ndvi,
                std_dev=point.std_dev,
                full_month=point.full_month,
                quality=point.quality,
            )
            for point in dashboard.chart_points
        ],
        rows=[
            ObservationRowResponse(
                month=row.month,
                ndvi=row.ndvi,
                std_dev=row.std_dev,
                total_images=row.total_images,
                data_source=row.data_source,
                index_type=row.index_type,
                data_quality=row.data_quality,
                category=row.category,
            )
            for row in dashboard.rows
        ],
        insights=GrowthInsightsResponse(
            peak_month=insights.peak_month,
            lowest_month=insights.lowest_month,
            average_ndvi=insights.average_ndvi,
            growth_range=insights.growth_range,
            average_std_dev=insights.average_std_dev,
            most_consistent_month=insights.most_consistent_month,
            most_variable_month=insights.most_variable_month,
        ),
        quality=QualitySummaryResponse(
            total_months=quality.total_months,
            high_quality_months=quality.high_quality_months,
            average_images_per_month=quality.average_images_per_month,
            breakdown=quality.breakdown,
        ),
        alerts=AlertSummaryResponse(
            total=alerts.total,
            high_severity=alerts.high_severity,
            other_severity=alerts.other_severity,
            alerts=alerts.alerts,
        ),
        thresholds=dashboard.thresholds,
        metadata=dashboard.metadata,
        fallback_warning=dashboard.fallback_warning,
    )


def empty_state(error: MissingDataError) -> ValidationDashboardResponse:
    """Response rendered when a payload has no usable observations."""
    logger.info(f"No validation data available ({error.reason})")
    return ValidationDashboardResponse(available=False, message=error.message)


@router.post(
    "/report",
    response_model=ValidationDashboardResponse,
    summary="Validate a supplied NDVI payload",
    description="""
    Build the validation dashboard for an NDVI payload.

    The payload's observations are deduplicated by month (first occurrence
    after sorting wins), scored for quality, consistency and coverage,
    and analysed for month-over-month growth. A payload that is missing,
    unsuccessful or has no results yields `available: false` with an
    explanatory message.
    """,
    responses=COMMON_RESPONSES,
)
@limiter.limit(DEFAULT_RATE_LIMIT)
async def validate_payload(
    request: Request,
    validation_service: ValidationServiceDep,
    payload: Optional[NDVIPayload] = None,
) -> ValidationDashboardResponse:
    """
    Validate a supplied NDVI payload.

    Args:
        request: Incoming request (used for rate limiting)
        validation_service: Validation service (injected dependency)
        payload: NDVI payload, may be omitted

    Returns:
        ValidationDashboardResponse
    """
    try:
        dashboard = validation_service.build_dashboard(payload)
    except MissingDataError as e:
        return empty_state(e)
    return to_dashboard_response(dashboard)


@router.get(
    "/ndvi",
    response_model=ValidationDashboardResponse,
    summary="Fetch and validate an NDVI time series",
    description="""
    Fetch the monthly NDVI time series for a window and build its
    validation dashboard.

    Live data is requested from the NDVI backend when credentials are
    configured; otherwise, or when the backend fails and mock fallback is
    enabled, simulated data is returned with a `fallbackWarning`.
    """,
    responses={
        **COMMON_RESPONSES,
        502: {"description": "NDVI backend failure with mock fallback disabled"},
    },
)
@limiter.limit(DEFAULT_RATE_LIMIT)
async def get_ndvi_validation(
    request: Request,
    validation_service: ValidationServiceDep,
    start_month: Annotated[str, Query(pattern=MONTH_PATTERN, description="First month (YYYY-MM)")],
    end_month: Annotated[str, Query(pattern=MONTH_PATTERN, description="Last month (YYYY-MM)")],
    use_radar: Annotated[bool, Query(description="Use Sentinel-1 radar backup")] = True,
    cloud_filter: Annotated[float, Query(ge=0, le=100, description="Maximum cloud cover in percent")] = 20.0,
    enable_fusion: Annotated[bool, Query(description="Enable multi-sensor fusion")] = True,
) -> ValidationDashboardResponse:
    """
    Fetch and validate an NDVI time series.

    Raises:
        HTTPException: If the backend fails or the month range is invalid
    """
    try:
        dashboard = await validation_service.get_dashboard(
            start_month=start_month,
            end_month=end_month,
            use_radar=use_radar,
            cloud_filter=cloud_filter,
            enable_fusion=enable_fusion,
        )
    except MissingDataError as e:
        return empty_state(e)
    except SatelliteAPIError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail=f"Failed to fetch NDVI data: {e.message}"
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return to_dashboard_response(dashboard)


@router.get(
    "/ndvi-category",
    response_model=NDVICategoryResponse,
    summary="Vegetation category for an NDVI value",
    responses=COMMON_RESPONSES,
)
@limiter.limit(DEFAULT_RATE_LIMIT)
async def get_ndvi_category(
    request: Request,
    value: Annotated[float, Query(description="NDVI value")],
) -> NDVICategoryResponse:
    """
    Map an NDVI value to its vegetation category.

    Raises:
        HTTPException: If the value is not a number
    """
    try:
        category = categorize_ndvi(value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return NDVICategoryResponse(value=value, category=category)
