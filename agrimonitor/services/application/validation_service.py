"""
Application service: Orchestration layer for NDVI data validation.
"""
from dataclasses import dataclass
from typing import Optional
import logging

from agrimonitor.config import settings
from agrimonitor.domain.models import NDVIPayload, PayloadMetadata, Thresholds
from agrimonitor.infrastructure.mock_ndvi_generator import generate_mock_payload
from agrimonitor.infrastructure.satellite_api_client import (
    SatelliteAPIClient,
    SatelliteAPIError,
)
from agrimonitor.services.domain.growth_analyzer import GrowthPoint, analyze_growth_pattern
from agrimonitor.services.domain.insights import (
    AlertSummary,
    GrowthInsights,
    ObservationRow,
    QualitySummary,
    build_observation_rows,
    compute_growth_insights,
    summarize_quality,
    triage_alerts,
)
from agrimonitor.services.domain.metrics_engine import MetricsEngine, ValidationScores
from agrimonitor.services.domain.observation_normalizer import (
    ChartPoint,
    build_chart_points,
    normalize_observations,
)
from agrimonitor.services.domain.payload_guard import require_results

logger = logging.getLogger(__name__)


@dataclass
class ValidationReport:
    """Scores and growth pattern derived from one payload."""
    scores: ValidationScores
    growth_pattern: list[GrowthPoint]
    is_realistic: bool


@dataclass
class ValidationDashboard:
    """Everything the validation dashboard renders for one payload."""
    report: ValidationReport
    chart_points: list[ChartPoint]
    rows: list[ObservationRow]
    insights: GrowthInsights
    quality: QualitySummary
    alerts: AlertSummary
    thresholds: Optional[Thresholds]
    metadata: Optional[PayloadMetadata]
    fallback_warning: Optional[str]


class ValidationService:
    """
    Application service for NDVI validation.

    Obtains payloads (live or mock) and runs the domain services over them.
    Holds no state between calls; every payload is processed from scratch.
    """

    def __init__(
        self,
        api_client: SatelliteAPIClient,
        metrics_engine: MetricsEngine,
    ):
        """
        Initialize the service with dependencies.

        Args:
            api_client: NDVI backend client for data fetching
            metrics_engine: Engine computing validation scores
        """
        self.api_client = api_client
        self.metrics_engine = metrics_engine

    def build_dashboard(self, payload: Optional[NDVIPayload]) -> ValidationDashboard:
        """
        Build the validation dashboard for a payload.

        Args:
            payload: Payload from the satellite data layer

        Returns:
            ValidationDashboard for the payload

        Raises:
            MissingDataError: If the payload has no usable observations
        """
        raw = require_results(payload)

        series = normalize_observations(raw)
        chart_points = build_chart_points(raw)
        scores = self.metrics_engine.compute_scores(series)
        growth = analyze_growth_pattern(series)

        logger.info(
            f"Validated {len(series)} months ({len(raw)} raw): "
            f"overall={scores.overall_score}, realistic={growth.is_realistic}"
        )

        return ValidationDashboard(
            report=ValidationReport(
                scores=scores,
                growth_pattern=growth.growth_pattern,
                is_realistic=growth.is_realistic,
            ),
            chart_points=chart_points,
            rows=build_observation_rows(series),
            insights=compute_growth_insights(series),
            quality=summarize_quality(series),
            alerts=triage_alerts(payload.alerts),
            thresholds=payload.thresholds,
            metadata=payload.metadata,
            fallback_warning=payload.fallback_warning,
        )

    async def fetch_payload(
        self,
        start_month: str,
        end_month: str,
        use_radar: bool = True,
        cloud_filter: float = 20.0,
        enable_fusion: bool = True,
    ) -> NDVIPayload:
        """
        Fetch the NDVI payload for a window, falling back to mock data.

        Mock data is served when no credentials are configured, and when the
        backend fails while mock fallback is enabled.

        Raises:
            SatelliteAPIError: If the backend fails and fallback is disabled
            ValueError: If the month range is invalid
        """
        request = dict(
            start_month=start_month,
            end_month=end_month,
            use_radar=use_radar,
            cloud_filter=cloud_filter,
            enable_fusion=enable_fusion,
        )

        if not self.api_client.has_credentials:
            logger.info("No NDVI backend credentials configured, using mock data")
            return generate_mock_payload(**request, seed=settings.mock_seed)

        try:
            return await self.api_client.get_ndvi_time_series(**request)
        except SatelliteAPIError as e:
            if not settings.mock_fallback_on_error:
                raise
            logger.warning(f"NDVI backend failed ({e.message}), using mock data")
            return generate_mock_payload(
                **request,
                seed=settings.mock_seed,
                fallback_warning=f"Live satellite data unavailable: {e.message}. Showing simulated data.",
            )

    async def get_dashboard(
        self,
        start_month: str,
        end_month: str,
        use_radar: bool = True,
        cloud_filter: float = 20.0,
        enable_fusion: bool = True,
    ) -> ValidationDashboard:
        """
        Fetch a payload and build its validation dashboard.

        Raises:
            MissingDataError: If the payload has no usable observations
            SatelliteAPIError: If the backend fails and fallback is disabled
        """
        payload = await self.fetch_payload(
            start_month, end_month, use_radar, cloud_filter, enable_fusion
        )
        return self.build_dashboard(payload)
