"""
Domain models for satellite NDVI observations and alerts.

These models represent the payload supplied by the satellite data layer and
should be independent of any infrastructure concerns (API clients, databases,
etc.). Field aliases follow the camelCase keys of the upstream JSON.
"""
from typing import Any, List, Optional
from pydantic import AliasChoices, BaseModel, Field, field_validator


MONTH_PATTERN = r"^\d{4}-\d{2}$"

DATA_QUALITY_LEVELS = ("high", "medium", "low", "none")


class ImageCount(BaseModel):
    """Number of contributing images per sub-source."""
    sentinel2: int = Field(default=0, ge=0)
    sentinel1: int = Field(default=0, ge=0)
    modis: int = Field(default=0, ge=0)
    total: int = Field(default=0, ge=0)


class Observation(BaseModel):
    """One monthly vegetation index measurement."""
    month: str = Field(
        pattern=MONTH_PATTERN,
        description="Month key in YYYY-MM format"
    )
    ndvi_value: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("ndviValue", "ndvi", "ndvi_value"),
        serialization_alias="ndviValue",
        allow_inf_nan=False,
        description="Mean NDVI for the month"
    )
    std_dev: Optional[float] = Field(
        default=None,
        ge=0,
        alias="stdDev",
        allow_inf_nan=False,
        description="Standard deviation of the pixel sample"
    )
    data_source: Optional[str] = Field(default=None, alias="dataSource")
    index_type: Optional[str] = Field(default=None, alias="indexType")
    image_count: Optional[ImageCount] = Field(default=None, alias="imageCount")
    data_quality: Optional[str] = Field(
        default=None,
        alias="dataQuality",
        description="One of high, medium, low, none"
    )

    class Config:
        populate_by_name = True

    @property
    def total_images(self) -> int:
        return self.image_count.total if self.image_count else 0


class Alert(BaseModel):
    """A flagged vegetation anomaly."""
    month: str
    type: str
    severity: str
    message: str
    data_source: Optional[str] = Field(default=None, alias="dataSource")
    index_type: Optional[str] = Field(default=None, alias="indexType")
    value: Optional[float] = None
    threshold: Optional[float] = None

    class Config:
        populate_by_name = True


class RadarThresholds(BaseModel):
    """VV backscatter bounds in dB."""
    low: float
    high: float


class Thresholds(BaseModel):
    """Alert thresholds applied by the data layer."""
    low: float
    drop: float
    high: float
    radar: Optional[RadarThresholds] = None


class RequestEcho(BaseModel):
    """Echo of the parameters the payload was produced for."""
    start_month: Optional[str] = Field(default=None, alias="startMonth")
    end_month: Optional[str] = Field(default=None, alias="endMonth")
    use_radar: bool = Field(default=False, alias="useRadar")
    cloud_filter: Optional[float] = Field(default=None, alias="cloudFilter")
    enable_fusion: bool = Field(default=False, alias="enableFusion")

    class Config:
        populate_by_name = True


class QualityBreakdown(BaseModel):
    """Number of months per data quality label."""
    high: int = 0
    medium: int = 0
    low: int = 0
    none: int = 0


class Coverage(BaseModel):
    """Coverage counters over the requested window."""
    total_months: int = Field(default=0, alias="totalMonths")
    months_with_data: int = Field(default=0, alias="monthsWithData")
    coverage_percentage: str = Field(default="0.0", alias="coveragePercentage")
    source_breakdown: dict[str, int] = Field(default_factory=dict, alias="sourceBreakdown")
    quality_breakdown: QualityBreakdown = Field(
        default_factory=QualityBreakdown, alias="qualityBreakdown"
    )

    class Config:
        populate_by_name = True


class DataSources(BaseModel):
    """Labels of the satellite sources behind the payload."""
    primary: Optional[str] = None
    backup: Optional[str] = None
    fallback: Optional[str] = None
    fusion: Optional[str] = None


class PayloadMetadata(BaseModel):
    """Display-only metadata accompanying the observations."""
    request: Optional[RequestEcho] = None
    coverage: Optional[Coverage] = None
    data_sources: Optional[DataSources] = Field(default=None, alias="dataSources")
    advantages: List[str] = Field(default_factory=list)

    class Config:
        populate_by_name = True


class NDVIPayload(BaseModel):
    """Top-level payload delivered by the satellite data layer."""
    success: bool = False
    results: Optional[List[Observation]] = None
    alerts: List[Alert] = Field(default_factory=list)
    thresholds: Optional[Thresholds] = None
    metadata: Optional[PayloadMetadata] = None
    fallback_warning: Optional[str] = Field(default=None, alias="fallbackWarning")

    class Config:
        populate_by_name = True

    @field_validator("results", mode="before")
    @classmethod
    def _results_must_be_array(cls, value: Any) -> Any:
        # A non-array results field is treated as missing.
        if value is not None and not isinstance(value, list):
            return None
        return value

    @field_validator("alerts", mode="before")
    @classmethod
    def _alerts_default_to_empty(cls, value: Any) -> Any:
        if value is None:
            return []
        return value
