"""
Application configuration using Pydantic settings.
"""
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # NDVI Backend Configuration
    ndvi_api_base_url: str = Field(
        default="http://localhost:5000/api",
        description="Base URL for the NDVI time-series backend"
    )
    ndvi_api_key: str = Field(
        default="",
        description="Bearer token for the NDVI backend (empty = use mock data)"
    )
    ndvi_api_timeout: float = Field(
        default=180.0,
        description="Timeout in seconds for satellite time-series requests"
    )

    # Copernicus Credentials
    copernicus_username: str = Field(
        default="",
        description="Copernicus Open Access Hub username"
    )
    copernicus_password: str = Field(
        default="",
        description="Copernicus Open Access Hub password"
    )

    # Retry Configuration
    max_retry_attempts: int = Field(
        default=3,
        description="Maximum number of retry attempts for API calls"
    )
    retry_backoff_multiplier: int = Field(
        default=1,
        description="Multiplier for exponential backoff"
    )
    retry_min_wait: int = Field(
        default=4,
        description="Minimum wait time in seconds between retries"
    )
    retry_max_wait: int = Field(
        default=10,
        description="Maximum wait time in seconds between retries"
    )

    # Mock Data
    mock_fallback_on_error: bool = Field(
        default=True,
        description="Serve mock data when the NDVI backend call fails"
    )
    mock_seed: int | None = Field(
        default=None,
        description="Seed for the mock generator (None = random)"
    )

    # Validation Scoring
    consistency_penalty: float = Field(
        default=1000.0,
        description="Score points lost per unit of average standard deviation"
    )
    coverage_saturation_images: float = Field(
        default=10.0,
        description="Average images per month at which coverage reaches 100%"
    )

    # Alert Thresholds
    ndvi_low_threshold: float = Field(
        default=0.3,
        description="NDVI below this value raises a low-vegetation alert"
    )
    ndvi_drop_threshold: float = Field(
        default=0.1,
        description="Month-over-month NDVI drop that raises an alert"
    )
    ndvi_high_threshold: float = Field(
        default=0.8,
        description="NDVI above this value raises a high-vegetation alert"
    )
    radar_low_threshold: float = Field(
        default=-20.0,
        description="Lower VV backscatter bound in dB"
    )
    radar_high_threshold: float = Field(
        default=-5.0,
        description="Upper VV backscatter bound in dB"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    # CORS Configuration
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins (use specific origins in production)"
    )

    # Rate Limiting
    rate_limit_requests: int = Field(
        default=100,
        description="Maximum requests per minute per client"
    )

    # Application Settings
    app_name: str = Field(
        default="AgriMonitor Satellite Validation API",
        description="Application name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    debug: bool = Field(
        default=False,
        description="Debug mode"
    )

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def has_live_credentials(self) -> bool:
        """Whether a live NDVI backend can be queried."""
        return bool(self.ndvi_api_key) or bool(
            self.copernicus_username and self.copernicus_password
        )


# Global settings instance
settings = Settings()
