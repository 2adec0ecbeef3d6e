"""
Domain service: Precondition check run before any validation metric.
"""
from typing import Optional

from agrimonitor.domain.exceptions import MissingDataError
from agrimonitor.domain.models import NDVIPayload, Observation

NO_PAYLOAD_MESSAGE = "Please fetch NDVI data to view validation insights."
NO_RESULTS_MESSAGE = "No results data found. Please check your data source."


def require_results(payload: Optional[NDVIPayload]) -> list[Observation]:
    """
    Return the raw observations of a usable payload.

    Raises:
        MissingDataError: If the payload is absent, unsuccessful, or has no
            results
    """
    if payload is None:
        raise MissingDataError(NO_PAYLOAD_MESSAGE, reason="no_payload")
    if not payload.success:
        raise MissingDataError(NO_PAYLOAD_MESSAGE, reason="unsuccessful")
    if not payload.results:
        raise MissingDataError(NO_RESULTS_MESSAGE, reason="no_results")
    return list(payload.results)
