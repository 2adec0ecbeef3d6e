"""
Infrastructure layer: NDVI time-series backend client with retry logic.
"""
from typing import Any, Dict, Optional
import logging

import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from agrimonitor.config import settings
from agrimonitor.domain.models import NDVIPayload
from agrimonitor.infrastructure.api_constants import APIConstants, NDVIAPIEndpoints

logger = logging.getLogger(__name__)


class SatelliteAPIError(Exception):
    """Custom exception for NDVI backend errors."""

    def __init__(self, message: str, status_code: int = 502):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SatelliteAPIClient:
    """
    Client for the NDVI time-series backend.
    Implements retry logic with exponential backoff.
    """

    def __init__(self):
        """Initialize the API client with configuration."""
        self.base_url = settings.ndvi_api_base_url
        self.api_key = settings.ndvi_api_key
        headers = {
            "accept": APIConstants.ACCEPT_JSON,
            "User-Agent": APIConstants.USER_AGENT,
        }
        auth = None
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        elif settings.copernicus_username and settings.copernicus_password:
            auth = httpx.BasicAuth(settings.copernicus_username, settings.copernicus_password)
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            auth=auth,
            timeout=settings.ndvi_api_timeout,
        )

    @property
    def has_credentials(self) -> bool:
        """Whether live data can be requested."""
        return settings.has_live_credentials

    async def __aenter__(self) -> "SatelliteAPIClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    @retry(
        stop=stop_after_attempt(settings.max_retry_attempts),
        wait=wait_exponential(
            multiplier=settings.retry_backoff_multiplier,
            min=settings.retry_min_wait,
            max=settings.retry_max_wait,
        ),
        retry=retry_if_exception_type((httpx.HTTPStatusError, httpx.RequestError)),
        reraise=True,
    )
    async def _make_request(
        self,
        method: str,
        endpoint: str,
        **kwargs
    ) -> Dict[str, Any]:
        """
        Make an HTTP request with retry logic.

        Server errors (5xx) and transport errors are retried; client
        errors (4xx) are raised immediately.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint path
            **kwargs: Additional arguments for the request

        Returns:
            Response data as dictionary

        Raises:
            SatelliteAPIError: On a 4xx response
            httpx.HTTPStatusError: On a 5xx response once retries are exhausted
            httpx.RequestError: On a transport error once retries are exhausted
        """
        try:
            response = await self.client.request(method, endpoint, **kwargs)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            # Retry on server errors (5xx)
            if e.response.status_code >= 500:
                logger.warning(f"NDVI backend returned {e.response.status_code}, retrying")
                raise
            # Don't retry on client errors (4xx)
            raise SatelliteAPIError(
                f"API request failed: {e.response.status_code} - {e.response.text}",
                status_code=e.response.status_code,
            )

    async def get_ndvi_time_series(
        self,
        start_month: str,
        end_month: str,
        use_radar: bool = True,
        cloud_filter: float = 20.0,
        enable_fusion: bool = True,
    ) -> NDVIPayload:
        """
        Fetch the monthly NDVI time series for a window.

        Args:
            start_month: First month (YYYY-MM)
            end_month: Last month (YYYY-MM)
            use_radar: Request Sentinel-1 radar backup
            cloud_filter: Maximum cloud cover in percent
            enable_fusion: Request multi-sensor fusion

        Returns:
            NDVIPayload as delivered by the backend

        Raises:
            SatelliteAPIError: If the request fails
        """
        params = NDVIAPIEndpoints.time_series_params(
            start_month, end_month, use_radar, cloud_filter, enable_fusion
        )
        try:
            data = await self._make_request(
                "GET",
                NDVIAPIEndpoints.NDVI_TIME_SERIES,
                params=params,
            )
        except httpx.HTTPStatusError as e:
            raise SatelliteAPIError(
                f"NDVI backend unavailable: {e.response.status_code}",
                status_code=502,
            ) from e
        except httpx.RequestError as e:
            raise SatelliteAPIError(f"API request error: {str(e)}", status_code=502) from e

        return NDVIPayload.model_validate(data)


# Singleton instance
_api_client: Optional[SatelliteAPIClient] = None


def get_api_client() -> SatelliteAPIClient:
    """
    Get or create the singleton API client instance.

    Returns:
        SatelliteAPIClient instance
    """
    global _api_client
    if _api_client is None:
        _api_client = SatelliteAPIClient()
    return _api_client
