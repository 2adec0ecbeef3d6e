"""
Domain service: Normalization of raw monthly observations.

Two derivations are built from the raw observation array:
- the canonical series, one observation per month in chronological order
- chart points, built by a separate pass over the same raw array

Both use the same stable-sort, first-occurrence-wins dedup keyed on the
full YYYY-MM month string.
"""
from dataclasses import dataclass
from typing import Iterable, Optional
import logging

from agrimonitor.domain.models import Observation
from agrimonitor.utils.series_helpers import (
    dedupe_first_occurrence,
    month_number,
    value_or_zero,
)

logger = logging.getLogger(__name__)


def _month_key(observation: Observation) -> str:
    return observation.month


@dataclass
class ChartPoint:
    """A chart-ready NDVI point."""
    month: str
    ndvi: float
    std_dev: float
    full_month: str
    quality: Optional[str]


def normalize_observations(observations: Iterable[Observation]) -> list[Observation]:
    """
    Build the canonical series from raw observations.

    Observations are stable-sorted ascending by month and only the first
    observation per month is kept.

    Args:
        observations: Raw observations, possibly duplicated and unordered

    Returns:
        Observations with unique months in ascending order
    """
    raw = list(observations)
    canonical = dedupe_first_occurrence(raw, key=_month_key)
    if len(canonical) < len(raw):
        logger.debug(f"Dropped {len(raw) - len(canonical)} duplicate observations")
    return canonical


def build_chart_points(observations: Iterable[Observation]) -> list[ChartPoint]:
    """
    Build chart points from the raw observations.

    This is an independent dedup pass over the raw array, not a projection
    of the canonical series. Missing NDVI and std dev values become 0.

    Args:
        observations: Raw observations, possibly duplicated and unordered

    Returns:
        One ChartPoint per distinct month, ascending
    """
    return [
        ChartPoint(
            month=month_number(obs.month),
            ndvi=value_or_zero(obs.ndvi_value),
            std_dev=value_or_zero(obs.std_dev),
            full_month=obs.month,
            quality=obs.data_quality,
        )
        for obs in dedupe_first_occurrence(observations, key=_month_key)
    ]
