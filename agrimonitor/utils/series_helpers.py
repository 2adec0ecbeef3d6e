"""
Time-series helper functions.

Provides utilities for:
- Stable sorting with first-occurrence deduplication
- Null-safe numeric defaults and means
- Dashboard-compatible rounding
- Month key arithmetic
"""
import math
from typing import Callable, Iterable, Optional, TypeVar


T = TypeVar("T")

NOT_AVAILABLE = "N/A"


def dedupe_first_occurrence(
    items: Iterable[T],
    key: Callable[[T], str],
) -> list[T]:
    """
    Stable-sort items ascending by key and keep the first item per key.

    Ties between equal keys keep their input order, so the retained item is
    the earliest one in the input among those sharing a key.

    Args:
        items: Items to deduplicate
        key: Function extracting the sort and dedup key

    Returns:
        New list with unique keys in ascending order
    """
    unique: list[T] = []
    seen: set[str] = set()
    for item in sorted(items, key=key):
        item_key = key(item)
        if item_key in seen:
            continue
        seen.add(item_key)
        unique.append(item)
    return unique


def value_or_zero(value: Optional[float]) -> float:
    """Default a missing numeric field to 0 for aggregation."""
    return 0.0 if value is None else float(value)


def mean(values: list[float]) -> float:
    """
    Arithmetic mean of a non-empty list.

    Raises:
        ValueError: If the list is empty
    """
    if not values:
        raise ValueError("Cannot average an empty series")
    return sum(values) / len(values)


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer with halves going toward +infinity.

    Matches the rounding of the browser dashboard: 2.5 -> 3, -2.5 -> -2.
    """
    return int(math.floor(value + 0.5))


def format_value(value: Optional[float], digits: int = 3) -> str:
    """
    Format a numeric field for display.

    Missing values render as "N/A" rather than a zero.
    """
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return NOT_AVAILABLE
    return f"{value:.{digits}f}"


def month_number(month: str) -> str:
    """Extract the month token from a YYYY-MM key ("2024-03" -> "03")."""
    parts = month.split("-")
    return parts[1] if len(parts) > 1 else ""


def parse_month(month: str) -> tuple[int, int]:
    """
    Parse a YYYY-MM key into (year, month).

    Raises:
        ValueError: If the key is malformed or the month is out of range
    """
    try:
        year_str, month_str = month.split("-")
        year, month_num = int(year_str), int(month_str)
    except ValueError as e:
        raise ValueError(f"Invalid month '{month}', expected YYYY-MM") from e
    if not 1 <= month_num <= 12:
        raise ValueError(f"Invalid month '{month}', month must be 01-12")
    return year, month_num


def month_range(start_month: str, end_month: str) -> list[str]:
    """
    List every YYYY-MM key from start to end inclusive.

    Raises:
        ValueError: If either key is malformed or start is after end
    """
    year, month = parse_month(start_month)
    end_year, end_month_num = parse_month(end_month)
    if (year, month) > (end_year, end_month_num):
        raise ValueError(
            f"start_month {start_month} is after end_month {end_month}"
        )

    months = []
    while (year, month) <= (end_year, end_month_num):
        months.append(f"{year:04d}-{month:02d}")
        month += 1
        if month > 12:
            year += 1
            month = 1
    return months
