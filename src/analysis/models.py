"""
Pydantic models for the size analysis.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from config.constants import DEFAULT_MEASUREMENT_LIMITS
from config.locales import normalize_language


_LIMITS = DEFAULT_MEASUREMENT_LIMITS


def _parse_number(value: str, field_name: str) -> float:
    try:
        return float(value.replace(",", "."))
    except ValueError:
        raise ValueError(f"{field_name} must be a number, got '{value}'")


# ============================================================================
# Request Models
# ============================================================================

class MeasurementInput(BaseModel):
    """Self-reported measurements from the form. Strings, as typed by the user."""

    height: str = Field(..., description="Height in cm, 140-220")
    weight: Optional[str] = Field(None, description="Weight in kg, 40-150. Optional.")
    language: str = Field("uk", description="Language for the reasoning (uk, en, ru)")

    @field_validator("height", mode="before")
    @classmethod
    def validate_height(cls, v):
        v = str(v).strip() if v is not None else ""
        if not v:
            raise ValueError("height is required")
        number = _parse_number(v, "height")
        if not _LIMITS.HEIGHT_MIN_CM <= number <= _LIMITS.HEIGHT_MAX_CM:
            raise ValueError(
                f"height must be between {_LIMITS.HEIGHT_MIN_CM:g} and {_LIMITS.HEIGHT_MAX_CM:g} cm"
            )
        return v

    @field_validator("weight", mode="before")
    @classmethod
    def validate_weight(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        if not v:
            return None
        number = _parse_number(v, "weight")
        if not _LIMITS.WEIGHT_MIN_KG <= number <= _LIMITS.WEIGHT_MAX_KG:
            raise ValueError(
                f"weight must be between {_LIMITS.WEIGHT_MIN_KG:g} and {_LIMITS.WEIGHT_MAX_KG:g} kg"
            )
        return v

    @field_validator("language", mode="before")
    @classmethod
    def validate_language(cls, v):
        return normalize_language(v)


# ============================================================================
# Response Models
# ============================================================================

class AnalysisResult(BaseModel):
    """
    Structured answer from the vision model.

    Field names match the JSON the model is asked to produce. Only presence
    and type are checked; values are not range-validated.
    """

    model_config = ConfigDict(extra="ignore")

    estimatedChest: float = Field(..., description="Estimated chest circumference in cm")
    estimatedWaist: float = Field(..., description="Estimated waist circumference in cm")
    estimatedHips: float = Field(..., description="Estimated hips circumference in cm")
    recommendedSize: str = Field(..., description="Recommended size label from the chart")
    reasoning: str = Field(..., description="Short explanation in the requested language")
    confidence: float = Field(..., description="Confidence score from 0 to 100")
