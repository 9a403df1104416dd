"""
Error types shared across the application.

Validation errors carry a translation key so the caller can show the
message in the user's language; the exception text itself stays English
for the logs.
"""

from typing import Optional


class SizeAdvisorError(Exception):
    """Base class for all application errors."""
    pass


class ConfigurationError(SizeAdvisorError):
    """Raised when a required setting (the API key) is missing. Not retryable."""
    pass


# =============================================================================
# Chart editing
# =============================================================================

class ChartValidationError(SizeAdvisorError, ValueError):
    """A chart edit was rejected. The editor stays open and editable."""

    message_key = "error_unique"

    def __init__(self, message: str, message_key: Optional[str] = None) -> None:
        super().__init__(message)
        if message_key is not None:
            self.message_key = message_key


class DuplicateHeaderError(ChartValidationError):
    message_key = "error_unique"


class EmptyHeaderError(ChartValidationError):
    message_key = "error_empty"


class LastCategoryError(ChartValidationError):
    message_key = "error_delete_last"


class HeterogeneousChartError(ChartValidationError):
    message_key = "error_heterogeneous"


class DuplicateChartIdError(ChartValidationError):
    message_key = "error_duplicate_id"


class ChartNotFoundError(SizeAdvisorError, LookupError):
    """Raised when a chart id is not present."""

    def __init__(self, chart_id: str) -> None:
        super().__init__(f"Chart not found: {chart_id}")
        self.chart_id = chart_id


class EditorStateError(SizeAdvisorError, RuntimeError):
    """Raised when an editor operation is called outside the editing state."""
    pass


# =============================================================================
# Analysis
# =============================================================================

class InvalidMeasurementError(SizeAdvisorError, ValueError):
    """Height or weight outside the accepted form range."""
    pass


class AnalysisError(SizeAdvisorError):
    """
    Raised when the size analysis cannot produce a result.

    Covers network/API failures, an empty response, a non-JSON body and a
    response missing one of the required fields.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause
