"""
Shared pytest fixtures for all tests.

This module provides common fixtures including:
- Sample observations and alerts
- Sample NDVI payloads (model and raw JSON)
- Mock API client
- FastAPI test client
"""
import pytest
from typing import AsyncGenerator
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from agrimonitor.main import app
from agrimonitor.domain.models import (
    Alert,
    ImageCount,
    NDVIPayload,
    Observation,
    Thresholds,
)
from agrimonitor.infrastructure.satellite_api_client import SatelliteAPIClient
from agrimonitor.services.domain.metrics_engine import MetricsEngine, MetricsConfig


def make_observation(
    month: str,
    ndvi: float | None = 0.5,
    std_dev: float | None = 0.02,
    total_images: int | None = 10,
    quality: str | None = "high",
) -> Observation:
    """Build an observation with sensible defaults."""
    image_count = None
    if total_images is not None:
        image_count = ImageCount(sentinel2=total_images, total=total_images)
    return Observation(
        month=month,
        ndvi_value=ndvi,
        std_dev=std_dev,
        data_source="Sentinel-2",
        index_type="NDVI",
        image_count=image_count,
        data_quality=quality,
    )


# ============================================================
# Sample Data Fixtures
# ============================================================

@pytest.fixture
def observation_factory():
    """Factory for observations with sensible defaults."""
    return make_observation


@pytest.fixture
def sample_observations() -> list[Observation]:
    """A season of observations, unordered, with one duplicated month."""
    return [
        make_observation("2024-03", ndvi=0.45, std_dev=0.03, total_images=8, quality="high"),
        make_observation("2024-01", ndvi=0.25, std_dev=0.05, total_images=4, quality="medium"),
        make_observation("2024-02", ndvi=0.30, std_dev=0.04, total_images=6, quality="medium"),
        make_observation("2024-04", ndvi=0.62, std_dev=0.02, total_images=12, quality="high"),
        make_observation("2024-05", ndvi=0.55, std_dev=0.02, total_images=10, quality="high"),
        # Duplicate of March fetched later; must be dropped
        make_observation("2024-03", ndvi=0.90, std_dev=0.01, total_images=20, quality="low"),
    ]


@pytest.fixture
def sample_alerts() -> list[Alert]:
    """Alerts with mixed severities."""
    return [
        Alert(month="2024-05", type="NDVI Drop", severity="medium",
              message="NDVI dropped", value=0.55, threshold=0.1),
        Alert(month="2024-01", type="Low NDVI", severity="high",
              message="NDVI below threshold", value=0.25, threshold=0.3),
        Alert(month="2024-02", type="Low NDVI", severity="HIGH",
              message="NDVI below threshold", value=0.28, threshold=0.3),
    ]


@pytest.fixture
def sample_payload(sample_observations, sample_alerts) -> NDVIPayload:
    """A successful payload built from the sample data."""
    return NDVIPayload(
        success=True,
        results=sample_observations,
        alerts=sample_alerts,
        thresholds=Thresholds(low=0.3, drop=0.1, high=0.8),
    )


@pytest.fixture
def sample_payload_json() -> dict:
    """A raw payload as delivered by the satellite data layer."""
    return {
        "success": True,
        "results": [
            {
                "month": "2024-02",
                "ndvi": 0.5,
                "stdDev": 0.02,
                "dataSource": "Sentinel-2",
                "indexType": "NDVI",
                "imageCount": {"sentinel2": 6, "sentinel1": 4, "modis": 0, "total": 10},
                "dataQuality": "high",
            },
            {
                "month": "2024-01",
                "ndvi": 0.3,
                "stdDev": 0.02,
                "dataSource": "Sentinel-2",
                "indexType": "NDVI",
                "imageCount": {"sentinel2": 3, "sentinel1": 2, "modis": 0, "total": 5},
                "dataQuality": "medium",
            },
            {
                "month": "2024-03",
                "ndvi": 0.4,
                "stdDev": None,
                "dataSource": "Sentinel-1 (Radar)",
                "indexType": "RVI",
                "imageCount": {"sentinel2": 0, "sentinel1": 15, "modis": 0, "total": 15},
                "dataQuality": "high",
            },
        ],
        "alerts": [
            {
                "month": "2024-01",
                "type": "Low NDVI",
                "severity": "high",
                "message": "NDVI 0.300 is at the low threshold",
                "dataSource": "Sentinel-2",
                "indexType": "NDVI",
                "value": 0.3,
                "threshold": 0.3,
            }
        ],
        "thresholds": {"low": 0.3, "drop": 0.1, "high": 0.8, "radar": {"low": -20, "high": -5}},
        "metadata": {
            "request": {
                "startMonth": "2024-01",
                "endMonth": "2024-03",
                "useRadar": True,
                "cloudFilter": 20,
                "enableFusion": False,
            },
            "advantages": ["Cloud-independent monitoring"],
        },
    }


@pytest.fixture
def metrics_engine() -> MetricsEngine:
    """Metrics engine with the standard scoring constants."""
    return MetricsEngine(config=MetricsConfig())


# ============================================================
# Mock API Client Fixtures
# ============================================================

@pytest.fixture
def mock_api_client(sample_payload):
    """Create a mock NDVI backend client with credentials."""
    mock_client = AsyncMock(spec=SatelliteAPIClient)
    mock_client.has_credentials = True
    mock_client.get_ndvi_time_series.return_value = sample_payload
    return mock_client


# ============================================================
# FastAPI Test Client Fixtures
# ============================================================

@pytest.fixture
def test_client() -> TestClient:
    """Create a synchronous test client for FastAPI."""
    return TestClient(app)


@pytest.fixture
async def async_test_client() -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client for FastAPI."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
