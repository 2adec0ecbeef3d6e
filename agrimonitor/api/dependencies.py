"""
Dependency injection for FastAPI.
"""
from typing import Annotated
from fastapi import Depends

from agrimonitor.infrastructure.satellite_api_client import (
    SatelliteAPIClient,
    get_api_client,
)
from agrimonitor.services.domain.metrics_engine import MetricsEngine
from agrimonitor.services.application.validation_service import ValidationService


def get_metrics_engine() -> MetricsEngine:
    """
    Dependency factory for MetricsEngine.

    Returns:
        MetricsEngine instance
    """
    return MetricsEngine()


def get_validation_service(
    api_client: Annotated[SatelliteAPIClient, Depends(get_api_client)],
    metrics_engine: Annotated[MetricsEngine, Depends(get_metrics_engine)],
) -> ValidationService:
    """
    Dependency factory for ValidationService.

    Args:
        api_client: NDVI backend client (injected)
        metrics_engine: Validation metrics engine (injected)

    Returns:
        ValidationService instance
    """
    return ValidationService(api_client=api_client, metrics_engine=metrics_engine)


# Type aliases for cleaner route signatures
ValidationServiceDep = Annotated[ValidationService, Depends(get_validation_service)]
