"""
Infrastructure layer: Synthetic NDVI payloads.

Used in place of the NDVI backend when no credentials are configured, or
when the backend call fails and mock fallback is enabled.
"""
from typing import Optional
import logging

import numpy as np

from agrimonitor.config import settings
from agrimonitor.domain.models import (
    Alert,
    Coverage,
    DATA_QUALITY_LEVELS,
    DataSources,
    ImageCount,
    NDVIPayload,
    Observation,
    PayloadMetadata,
    QualityBreakdown,
    RadarThresholds,
    RequestEcho,
    Thresholds,
)
from agrimonitor.utils.series_helpers import month_range, parse_month

logger = logging.getLogger(__name__)

SENTINEL2_SOURCE = "Sentinel-2"
SENTINEL1_SOURCE = "Sentinel-1 (Radar)"
MODIS_SOURCE = "MODIS"
FUSION_SOURCE = "Multi-sensor Fusion"
NO_SOURCE = "none"

DATA_SOURCES = DataSources(
    primary="Sentinel-2 MSI (10m optical)",
    backup="Sentinel-1 SAR (cloud-independent radar)",
    fallback="MODIS Terra/Aqua (250m)",
    fusion="Optical and radar fusion",
)

ADVANTAGES = [
    "Cloud-independent monitoring with Sentinel-1 radar backup",
    "Monthly composites reduce single-scene noise",
    "MODIS fallback keeps coverage when optical data is missing",
    "Per-month data quality labels from image counts",
]


def default_thresholds() -> Thresholds:
    """Alert thresholds from application settings."""
    return Thresholds(
        low=settings.ndvi_low_threshold,
        drop=settings.ndvi_drop_threshold,
        high=settings.ndvi_high_threshold,
        radar=RadarThresholds(
            low=settings.radar_low_threshold,
            high=settings.radar_high_threshold,
        ),
    )


def quality_for_image_count(total: int) -> str:
    """Data quality label implied by the number of images in a month."""
    if total >= 8:
        return "high"
    if total >= 4:
        return "medium"
    if total >= 1:
        return "low"
    return "none"


def _seasonal_ndvi(month: str) -> float:
    _, month_num = parse_month(month)
    # Peaks in June, lowest in December
    return 0.45 + 0.25 * np.sin(2 * np.pi * (month_num - 3) / 12.0)


def _source_for(counts: ImageCount, enable_fusion: bool) -> tuple[str, str]:
    sources = [
        name for name, count in (
            (SENTINEL2_SOURCE, counts.sentinel2),
            (SENTINEL1_SOURCE, counts.sentinel1),
            (MODIS_SOURCE, counts.modis),
        )
        if count > 0
    ]
    if not sources:
        return NO_SOURCE, "none"
    if enable_fusion and len(sources) > 1:
        return FUSION_SOURCE, "NDVI"
    if sources[0] == SENTINEL1_SOURCE:
        return SENTINEL1_SOURCE, "RVI"
    return sources[0], "NDVI"


def build_alerts(results: list[Observation], thresholds: Thresholds) -> list[Alert]:
    """
    Derive alerts by comparing each month against the thresholds.

    - low: NDVI below thresholds.low (severity high)
    - drop: NDVI fell by more than thresholds.drop since the previous
      month with data (severity medium)
    - high: NDVI above thresholds.high (severity low)
    """
    alerts: list[Alert] = []
    previous: Optional[float] = None
    for obs in results:
        ndvi = obs.ndvi_value
        if ndvi is None:
            continue

        if ndvi < thresholds.low:
            alerts.append(Alert(
                month=obs.month,
                type="Low NDVI",
                severity="high",
                message=f"NDVI {ndvi:.3f} is below the low threshold {thresholds.low}",
                data_source=obs.data_source,
                index_type=obs.index_type,
                value=ndvi,
                threshold=thresholds.low,
            ))
        if previous is not None and previous - ndvi > thresholds.drop:
            alerts.append(Alert(
                month=obs.month,
                type="NDVI Drop",
                severity="medium",
                message=f"NDVI dropped by {previous - ndvi:.3f} from the previous month",
                data_source=obs.data_source,
                index_type=obs.index_type,
                value=ndvi,
                threshold=thresholds.drop,
            ))
        if ndvi > thresholds.high:
            alerts.append(Alert(
                month=obs.month,
                type="High NDVI",
                severity="low",
                message=f"NDVI {ndvi:.3f} is above the high threshold {thresholds.high}",
                data_source=obs.data_source,
                index_type=obs.index_type,
                value=ndvi,
                threshold=thresholds.high,
            ))
        previous = ndvi
    return alerts


def build_coverage(results: list[Observation]) -> Coverage:
    """Coverage counters for a generated series."""
    with_data = [obs for obs in results if obs.total_images > 0]
    source_breakdown: dict[str, int] = {}
    for obs in with_data:
        source = obs.data_source or NO_SOURCE
        source_breakdown[source] = source_breakdown.get(source, 0) + 1

    quality = QualityBreakdown()
    for obs in results:
        label = obs.data_quality if obs.data_quality in DATA_QUALITY_LEVELS else "none"
        setattr(quality, label, getattr(quality, label) + 1)

    percentage = len(with_data) / len(results) * 100 if results else 0.0
    return Coverage(
        total_months=len(results),
        months_with_data=len(with_data),
        coverage_percentage=f"{percentage:.1f}",
        source_breakdown=source_breakdown,
        quality_breakdown=quality,
    )


def generate_mock_payload(
    start_month: str,
    end_month: str,
    use_radar: bool = True,
    cloud_filter: float = 20.0,
    enable_fusion: bool = True,
    seed: Optional[int] = None,
    fallback_warning: Optional[str] = None,
) -> NDVIPayload:
    """
    Generate a monthly NDVI payload with a seasonal curve and random noise.

    Args:
        start_month: First month (YYYY-MM)
        end_month: Last month (YYYY-MM), inclusive
        use_radar: Include Sentinel-1 image counts
        cloud_filter: Maximum accepted cloud cover in percent
        enable_fusion: Include MODIS counts and label multi-source months as fused
        seed: Seed for reproducible output
        fallback_warning: Message explaining why mock data is served

    Returns:
        NDVIPayload with results, alerts, thresholds and metadata

    Raises:
        ValueError: If the month range is invalid
    """
    months = month_range(start_month, end_month)
    rng = np.random.default_rng(seed)
    optical_probability = float(np.clip(0.3 + cloud_filter / 100.0, 0.0, 1.0))

    results: list[Observation] = []
    for month in months:
        sentinel2 = int(rng.binomial(6, optical_probability))
        sentinel1 = int(rng.integers(2, 6)) if use_radar else 0
        modis = int(rng.integers(1, 5)) if enable_fusion else 0
        counts = ImageCount(
            sentinel2=sentinel2,
            sentinel1=sentinel1,
            modis=modis,
            total=sentinel2 + sentinel1 + modis,
        )
        data_source, index_type = _source_for(counts, enable_fusion)

        if counts.total > 0:
            ndvi = float(np.clip(_seasonal_ndvi(month) + rng.normal(0.0, 0.03), 0.0, 1.0))
            std_dev = float(rng.uniform(0.02, 0.08))
            results.append(Observation(
                month=month,
                ndvi_value=round(ndvi, 3),
                std_dev=round(std_dev, 3),
                data_source=data_source,
                index_type=index_type,
                image_count=counts,
                data_quality=quality_for_image_count(counts.total),
            ))
        else:
            results.append(Observation(
                month=month,
                data_source=data_source,
                index_type=index_type,
                image_count=counts,
                data_quality="none",
            ))

    thresholds = default_thresholds()
    logger.info(f"Generated mock NDVI payload for {start_month}..{end_month} ({len(months)} months)")

    return NDVIPayload(
        success=True,
        results=results,
        alerts=build_alerts(results, thresholds),
        thresholds=thresholds,
        metadata=PayloadMetadata(
            request=RequestEcho(
                start_month=start_month,
                end_month=end_month,
                use_radar=use_radar,
                cloud_filter=cloud_filter,
                enable_fusion=enable_fusion,
            ),
            coverage=build_coverage(results),
            data_sources=DATA_SOURCES,
            advantages=list(ADVANTAGES),
        ),
        fallback_warning=fallback_warning,
    )
