"""
Domain service: Month-over-month NDVI growth pattern analysis.
"""
from dataclasses import dataclass
from typing import Literal

from agrimonitor.domain.models import Observation
from agrimonitor.utils.series_helpers import value_or_zero

Trend = Literal["up", "down", "stable"]


@dataclass
class GrowthPoint:
    """NDVI value and change from the previous month."""
    month: str
    ndvi: float
    growth: float
    trend: Trend


@dataclass
class GrowthAnalysis:
    """Growth pattern and whether it looks like a real season."""
    growth_pattern: list[GrowthPoint]
    is_realistic: bool


def analyze_growth_pattern(series: list[Observation]) -> GrowthAnalysis:
    """
    Classify each month as up, down or stable relative to the previous one.

    The series is sorted by month again so the result does not depend on
    the caller's ordering. The first month is always "stable". A month is
    "up" only when its NDVI is strictly greater than the previous month's,
    so equal consecutive values are "down".

    A pattern is realistic when it has at least one "up" and one "down".

    Args:
        series: Canonical observations

    Returns:
        GrowthAnalysis with one GrowthPoint per observation
    """
    ordered = sorted(series, key=lambda obs: obs.month)

    pattern: list[GrowthPoint] = []
    previous = None
    for obs in ordered:
        ndvi = value_or_zero(obs.ndvi_value)
        if previous is None:
            pattern.append(GrowthPoint(month=obs.month, ndvi=ndvi, growth=0.0, trend="stable"))
        else:
            pattern.append(GrowthPoint(
                month=obs.month,
                ndvi=ndvi,
                growth=ndvi - previous,
                trend="up" if ndvi > previous else "down",
            ))
        previous = ndvi

    trends = {point.trend for point in pattern}
    return GrowthAnalysis(
        growth_pattern=pattern,
        is_realistic="up" in trends and "down" in trends,
    )
