"""
Domain service: Summaries shown alongside the validation scores.

Provides:
- Growth insights (peak and lowest months, NDVI range, dispersion extremes)
- Data quality summary with a per-label breakdown
- Per-month display rows with "N/A" placeholders
- Alert triage (high severity first)
"""
from dataclasses import dataclass
from typing import Optional

from agrimonitor.domain.exceptions import EmptySeriesError
from agrimonitor.domain.models import Alert, DATA_QUALITY_LEVELS, Observation
from agrimonitor.services.domain.metrics_engine import average_images_per_month
from agrimonitor.services.domain.ndvi_categorizer import categorize_ndvi
from agrimonitor.utils.series_helpers import (
    format_value,
    mean,
    round_half_up,
    value_or_zero,
)

HIGH_SEVERITY = "high"


@dataclass
class GrowthInsights:
    """Headline figures for the seasonal growth view."""
    peak_month: str
    lowest_month: str
    average_ndvi: float
    growth_range: float
    average_std_dev: float
    most_consistent_month: str
    most_variable_month: str


@dataclass
class QualitySummary:
    """Data quality counters over the canonical series."""
    total_months: int
    high_quality_months: int
    average_images_per_month: int
    breakdown: dict[str, int]


@dataclass
class ObservationRow:
    """One month formatted for display."""
    month: str
    ndvi: str
    std_dev: str
    total_images: int
    data_source: Optional[str]
    index_type: Optional[str]
    data_quality: Optional[str]
    category: Optional[str]


@dataclass
class AlertSummary:
    """Alerts ordered for triage."""
    total: int
    high_severity: int
    other_severity: int
    alerts: list[Alert]


def _first_month_with(series: list[Observation], values: list[float], target: float) -> str:
    for obs, value in zip(series, values):
        if value == target:
            return obs.month
    return series[0].month


def compute_growth_insights(series: list[Observation]) -> GrowthInsights:
    """
    Compute growth insights for a canonical series.

    Missing NDVI and std dev values count as 0. When several months share
    an extreme value the earliest month is reported.

    Raises:
        EmptySeriesError: If the series is empty
    """
    if not series:
        raise EmptySeriesError("Cannot compute growth insights for an empty series")

    ndvi_values = [value_or_zero(obs.ndvi_value) for obs in series]
    std_devs = [value_or_zero(obs.std_dev) for obs in series]

    return GrowthInsights(
        peak_month=_first_month_with(series, ndvi_values, max(ndvi_values)),
        lowest_month=_first_month_with(series, ndvi_values, min(ndvi_values)),
        average_ndvi=mean(ndvi_values),
        growth_range=max(ndvi_values) - min(ndvi_values),
        average_std_dev=mean(std_devs),
        most_consistent_month=_first_month_with(series, std_devs, min(std_devs)),
        most_variable_month=_first_month_with(series, std_devs, max(std_devs)),
    )


def summarize_quality(series: list[Observation]) -> QualitySummary:
    """
    Count months per data quality label.

    Labels other than high, medium and low are counted as "none".

    Raises:
        EmptySeriesError: If the series is empty
    """
    breakdown = {level: 0 for level in DATA_QUALITY_LEVELS}
    for obs in series:
        label = obs.data_quality if obs.data_quality in breakdown else "none"
        breakdown[label] += 1

    return QualitySummary(
        total_months=len(series),
        high_quality_months=breakdown["high"],
        average_images_per_month=round_half_up(average_images_per_month(series)),
        breakdown=breakdown,
    )


def build_observation_rows(series: list[Observation]) -> list[ObservationRow]:
    """Format each month for display, using "N/A" for missing values."""
    return [
        ObservationRow(
            month=obs.month,
            ndvi=format_value(obs.ndvi_value),
            std_dev=format_value(obs.std_dev),
            total_images=obs.total_images,
            data_source=obs.data_source,
            index_type=obs.index_type,
            data_quality=obs.data_quality,
            category=categorize_ndvi(obs.ndvi_value) if obs.ndvi_value is not None else None,
        )
        for obs in series
    ]


def is_high_severity(alert: Alert) -> bool:
    return alert.severity.lower() == HIGH_SEVERITY


def triage_alerts(alerts: list[Alert]) -> AlertSummary:
    """
    Order alerts for review.

    High severity alerts come first, then everything else; within each
    group alerts are ordered by month, keeping input order for ties.
    """
    ordered = sorted(alerts, key=lambda alert: (not is_high_severity(alert), alert.month))
    high = sum(1 for alert in alerts if is_high_severity(alert))
    return AlertSummary(
        total=len(alerts),
        high_severity=high,
        other_severity=len(alerts) - high,
        alerts=ordered,
    )
