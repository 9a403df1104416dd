"""
Size analysis: photo intake, request assembly and the vision-model call.
"""

from analysis.models import AnalysisResult, MeasurementInput
from analysis.intake import ImagePayload, accept_image
from analysis.analyzer import SizeAnalyzer, get_size_analyzer

__all__ = [
    "AnalysisResult",
    "MeasurementInput",
    "ImagePayload",
    "accept_image",
    "SizeAnalyzer",
    "get_size_analyzer",
]
