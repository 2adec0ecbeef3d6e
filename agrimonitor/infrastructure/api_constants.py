"""
API endpoint constants and configuration.

This module contains the NDVI backend endpoint paths and related constants.
Centralizing these values makes it easy to swap out endpoints or update API versions.
"""


# NDVI Backend Endpoints
class NDVIAPIEndpoints:
    """NDVI time-series backend endpoint paths."""

    # Base paths
    GEE_BASE = "/gee"

    # Time-series endpoints
    NDVI_TIME_SERIES = f"{GEE_BASE}/ndvi"

    @classmethod
    def time_series_params(
        cls,
        start_month: str,
        end_month: str,
        use_radar: bool,
        cloud_filter: float,
        enable_fusion: bool,
    ) -> dict:
        """
        Build query parameters for the NDVI time-series endpoint.

        The backend expects camelCase keys and lowercase booleans.

        Returns:
            Query parameter dictionary
        """
        return {
            "startMonth": start_month,
            "endMonth": end_month,
            "useRadar": str(use_radar).lower(),
            "cloudFilter": cloud_filter,
            "enableFusion": str(enable_fusion).lower(),
        }


# API Configuration Constants
class APIConstants:
    """General API configuration constants."""

    # HTTP Headers
    ACCEPT_JSON = "application/json"
    USER_AGENT = "AgriMonitor/1.0"
