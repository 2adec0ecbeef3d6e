"""
Domain service: Validation metrics over a canonical NDVI series.

Scores:
- quality: share of months whose data quality is "high"
- consistency: linear penalty on the average standard deviation
- coverage: average images per month against a saturation count
- overall: unweighted mean of the three
"""
from dataclasses import dataclass
from typing import Optional
import logging

from agrimonitor.domain.exceptions import EmptySeriesError
from agrimonitor.domain.models import Observation
from agrimonitor.utils.series_helpers import mean, round_half_up, value_or_zero
from agrimonitor.config import settings

logger = logging.getLogger(__name__)


@dataclass
class MetricsConfig:
    """Configuration for validation scoring."""

    consistency_penalty: float = 1000.0
    """Score points lost per unit of average standard deviation"""

    coverage_saturation_images: float = 10.0
    """Average images per month at which coverage reaches 100%"""


@dataclass
class ValidationScores:
    """Integer percentage scores for a series."""
    quality_score: int
    consistency_score: int
    coverage_score: int
    overall_score: int


class MetricsEngine:
    """
    Domain service computing quality, consistency and coverage scores.

    All scores are rounded with round_half_up. Missing std dev and image
    counts are treated as 0. The overall score averages the unrounded
    component scores before rounding.
    """

    def __init__(self, config: Optional[MetricsConfig] = None):
        """
        Initialize the engine.

        Args:
            config: Scoring configuration, defaults to application settings
        """
        self.config = config or MetricsConfig(
            consistency_penalty=settings.consistency_penalty,
            coverage_saturation_images=settings.coverage_saturation_images,
        )

    def compute_scores(self, series: list[Observation]) -> ValidationScores:
        """
        Compute validation scores for a canonical series.

        Args:
            series: Deduplicated, non-empty observations

        Returns:
            ValidationScores with integer percentages

        Raises:
            EmptySeriesError: If the series is empty
        """
        if not series:
            raise EmptySeriesError("Cannot compute validation scores for an empty series")

        quality = self._quality_score(series)
        consistency = self._consistency_score(series)
        coverage = self._coverage_score(series)
        overall = (quality + consistency + coverage) / 3

        logger.debug(
            f"Scores for {len(series)} months: quality={quality:.2f}, "
            f"consistency={consistency:.2f}, coverage={coverage:.2f}"
        )

        return ValidationScores(
            quality_score=round_half_up(quality),
            consistency_score=round_half_up(consistency),
            coverage_score=round_half_up(coverage),
            overall_score=round_half_up(overall),
        )

    def _quality_score(self, series: list[Observation]) -> float:
        high_quality = sum(1 for obs in series if obs.data_quality == "high")
        return high_quality / len(series) * 100

    def _consistency_score(self, series: list[Observation]) -> float:
        avg_std_dev = mean([value_or_zero(obs.std_dev) for obs in series])
        return max(0.0, 100 - avg_std_dev * self.config.consistency_penalty)

    def _coverage_score(self, series: list[Observation]) -> float:
        avg_images = average_images_per_month(series)
        return min(100.0, avg_images / self.config.coverage_saturation_images * 100)


def average_images_per_month(series: list[Observation]) -> float:
    """Mean of imageCount.total across the series (missing counts as 0)."""
    if not series:
        raise EmptySeriesError("Cannot average image counts for an empty series")
    return mean([float(obs.total_images) for obs in series])
