"""
Core module for cross-cutting concerns.

This module provides:
- Structured logging configuration
- Request tracing middleware
- Application error types
"""

from core.logging import configure_logging, get_logger
from core.errors import (
    AnalysisError,
    ChartNotFoundError,
    ChartValidationError,
    DuplicateChartIdError,
    ConfigurationError,
    SizeAdvisorError,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "AnalysisError",
    "ChartNotFoundError",
    "ChartValidationError",
    "DuplicateChartIdError",
    "ConfigurationError",
    "SizeAdvisorError",
]
