"""
Domain exceptions raised by the validation pipeline.
"""


class MissingDataError(Exception):
    """Raised when a payload carries no usable observations.

    Callers render an explanatory empty state instead of a report.
    """

    def __init__(self, message: str, reason: str = "no_results"):
        super().__init__(message)
        self.message = message
        self.reason = reason


class EmptySeriesError(ValueError):
    """Raised when an aggregate is requested over zero observations."""
    pass
