"""
Domain service: NDVI vegetation categories for display.
"""
import math

BARE_SOIL = "Bare Soil"
LOW_VEGETATION = "Low Vegetation"
MODERATE_VEGETATION = "Moderate Vegetation"
GOOD_VEGETATION = "Good Vegetation"
EXCELLENT_VEGETATION = "Excellent Vegetation"

# (exclusive upper bound, category), ascending
NDVI_CATEGORY_BOUNDS = (
    (0.2, BARE_SOIL),
    (0.3, LOW_VEGETATION),
    (0.5, MODERATE_VEGETATION),
    (0.7, GOOD_VEGETATION),
)


def categorize_ndvi(ndvi: float) -> str:
    """
    Map an NDVI value to a vegetation category.

    Bins are left-closed: 0.2 is "Low Vegetation", 0.7 is
    "Excellent Vegetation". Values below 0.2 (including negatives) are
    "Bare Soil".

    Raises:
        ValueError: If ndvi is NaN
    """
    if math.isnan(ndvi):
        raise ValueError("NDVI value is NaN; filter or default it before categorizing")
    for upper_bound, category in NDVI_CATEGORY_BOUNDS:
        if ndvi < upper_bound:
            return category
    return EXCELLENT_VEGETATION
