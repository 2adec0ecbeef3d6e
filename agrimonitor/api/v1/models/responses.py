"""
API response models using Pydantic.

Field names are serialized in camelCase to match the payload contract.
"""
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from agrimonitor.domain.models import Alert, PayloadMetadata, Thresholds


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class GrowthPointResponse(CamelModel):
    """NDVI change for one month."""
    month: str
    ndvi: float
    growth: float = Field(description="Change from the previous month")
    trend: Literal["up", "down", "stable"]


class ValidationReportResponse(CamelModel):
    """Validation scores and growth pattern."""
    quality_score: int = Field(description="Percent of months with high data quality")
    consistency_score: int = Field(description="100 minus the average std dev penalty")
    coverage_score: int = Field(description="Average images per month against saturation")
    overall_score: int = Field(description="Mean of the three scores")
    growth_pattern: List[GrowthPointResponse]
    is_realistic: bool = Field(
        description="True when the series has both rising and falling months"
    )


class ChartPointResponse(CamelModel):
    """Chart-ready NDVI point."""
    month: str = Field(description="Two-digit month token", examples=["03"])
    ndvi: float
    std_dev: float
    full_month: str = Field(examples=["2024-03"])
    quality: Optional[str] = None


class ObservationRowResponse(CamelModel):
    """One month formatted for display."""
    month: str
    ndvi: str = Field(description="Formatted NDVI or N/A")
    std_dev: str = Field(description="Formatted std dev or N/A")
    total_images: int
    data_source: Optional[str] = None
    index_type: Optional[str] = None
    data_quality: Optional[str] = None
    category: Optional[str] = None


class GrowthInsightsResponse(CamelModel):
    """Headline growth figures."""
    peak_month: str
    lowest_month: str
    average_ndvi: float
    growth_range: float
    average_std_dev: float
    most_consistent_month: str
    most_variable_month: str


class QualitySummaryResponse(CamelModel):
    """Data quality counters."""
    total_months: int
    high_quality_months: int
    average_images_per_month: int
    breakdown: Dict[str, int]


class AlertSummaryResponse(CamelModel):
    """Alerts ordered for triage."""
    total: int
    high_severity: int
    other_severity: int
    alerts: List[Alert]


class ValidationDashboardResponse(CamelModel):
    """Response model for the validation dashboard endpoints."""
    available: bool = Field(
        description="False when the payload had no usable observations"
    )
    message: Optional[str] = Field(
        default=None,
        description="Explanation shown instead of the dashboard when unavailable"
    )
    report: Optional[ValidationReportResponse] = None
    chart_points: List[ChartPointResponse] = Field(default_factory=list)
    rows: List[ObservationRowResponse] = Field(default_factory=list)
    insights: Optional[GrowthInsightsResponse] = None
    quality: Optional[QualitySummaryResponse] = None
    alerts: Optional[AlertSummaryResponse] = None
    thresholds: Optional[Thresholds] = None
    metadata: Optional[PayloadMetadata] = None
    fallback_warning: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "available": False,
                "message": "No results data found. Please check your data source.",
                "chartPoints": [],
                "rows": [],
            }
        }


class NDVICategoryResponse(CamelModel):
    """Vegetation category for an NDVI value."""
    value: float
    category: str
