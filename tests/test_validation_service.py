"""
Unit tests for the validation application service.

Tests cover:
- Dashboard assembly from a payload
- Missing data guard
- Live, mock and fallback payload sourcing
"""
import pytest

from agrimonitor.config import settings
from agrimonitor.domain.exceptions import MissingDataError
from agrimonitor.domain.models import NDVIPayload
from agrimonitor.infrastructure.satellite_api_client import SatelliteAPIError
from agrimonitor.services.application.validation_service import ValidationService


@pytest.fixture
def validation_service(mock_api_client, metrics_engine) -> ValidationService:
    return ValidationService(api_client=mock_api_client, metrics_engine=metrics_engine)


# ============================================================
# Dashboard Assembly Tests
# ============================================================

class TestBuildDashboard:
    """Tests for building the dashboard from a payload."""

    def test_report_scores(self, validation_service, sample_payload):
        """The report carries the scores of the canonical series."""
        dashboard = validation_service.build_dashboard(sample_payload)
        scores = dashboard.report.scores

        assert (scores.quality_score, scores.consistency_score,
                scores.coverage_score, scores.overall_score) == (60, 68, 80, 69)

    def test_growth_pattern(self, validation_service, sample_payload):
        """One growth point per canonical month."""
        dashboard = validation_service.build_dashboard(sample_payload)

        assert [p.trend for p in dashboard.report.growth_pattern] == [
            "stable", "up", "up", "up", "down",
        ]
        assert dashboard.report.is_realistic is True

    def test_chart_points_and_rows(self, validation_service, sample_payload):
        """Chart points and rows cover each month once."""
        dashboard = validation_service.build_dashboard(sample_payload)

        assert len(dashboard.chart_points) == 5
        assert [row.month for row in dashboard.rows] == [
            "2024-01", "2024-02", "2024-03", "2024-04", "2024-05",
        ]

    def test_alerts_triaged(self, validation_service, sample_payload):
        """Alerts are ordered high severity first."""
        dashboard = validation_service.build_dashboard(sample_payload)

        assert dashboard.alerts.high_severity == 2
        assert dashboard.alerts.alerts[0].month == "2024-01"

    def test_passthrough_fields(self, validation_service, sample_payload):
        """Thresholds and warnings are echoed for display."""
        sample_payload.fallback_warning = "simulated"

        dashboard = validation_service.build_dashboard(sample_payload)

        assert dashboard.thresholds.low == 0.3
        assert dashboard.fallback_warning == "simulated"

    def test_repeated_calls_independent(self, validation_service, sample_payload):
        """No state is retained between payloads."""
        first = validation_service.build_dashboard(sample_payload)
        second = validation_service.build_dashboard(sample_payload)

        assert first == second

    @pytest.mark.parametrize("payload", [
        None,
        NDVIPayload(success=False),
        NDVIPayload(success=True, results=[]),
    ])
    def test_missing_data_short_circuits(self, validation_service, payload):
        """Unusable payloads raise MissingDataError before scoring."""
        with pytest.raises(MissingDataError):
            validation_service.build_dashboard(payload)


# ============================================================
# Payload Sourcing Tests
# ============================================================

class TestFetchPayload:
    """Tests for live, mock and fallback payloads."""

    @pytest.mark.asyncio
    async def test_live_payload(self, validation_service, mock_api_client, sample_payload):
        """With credentials the backend payload is returned."""
        payload = await validation_service.fetch_payload("2024-01", "2024-05")

        assert payload is sample_payload
        mock_api_client.get_ndvi_time_series.assert_awaited_once_with(
            start_month="2024-01",
            end_month="2024-05",
            use_radar=True,
            cloud_filter=20.0,
            enable_fusion=True,
        )

    @pytest.mark.asyncio
    async def test_mock_without_credentials(self, validation_service, mock_api_client):
        """Without credentials mock data is generated and the backend is not called."""
        mock_api_client.has_credentials = False

        payload = await validation_service.fetch_payload("2024-01", "2024-12")

        assert payload.success is True
        assert len(payload.results) == 12
        assert payload.fallback_warning is None
        mock_api_client.get_ndvi_time_series.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_fallback_on_backend_error(self, validation_service, mock_api_client, monkeypatch):
        """A failed backend call falls back to mock data with a warning."""
        monkeypatch.setattr(settings, "mock_fallback_on_error", True)
        mock_api_client.get_ndvi_time_series.side_effect = SatelliteAPIError("boom", status_code=502)

        payload = await validation_service.fetch_payload("2024-01", "2024-03")

        assert len(payload.results) == 3
        assert "boom" in payload.fallback_warning

    @pytest.mark.asyncio
    async def test_error_raised_when_fallback_disabled(
        self, validation_service, mock_api_client, monkeypatch
    ):
        """With fallback disabled the backend error propagates."""
        monkeypatch.setattr(settings, "mock_fallback_on_error", False)
        mock_api_client.get_ndvi_time_series.side_effect = SatelliteAPIError("boom", status_code=503)

        with pytest.raises(SatelliteAPIError):
            await validation_service.fetch_payload("2024-01", "2024-03")

    @pytest.mark.asyncio
    async def test_get_dashboard(self, validation_service):
        """get_dashboard fetches and validates in one step."""
        dashboard = await validation_service.get_dashboard("2024-01", "2024-05")

        assert dashboard.quality.total_months == 5
        assert dashboard.report.scores.overall_score == 69


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
