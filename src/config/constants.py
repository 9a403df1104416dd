"""
Application constants.

These are values that don't change based on environment but may need
to be tuned or referenced across the codebase: the built-in size charts,
the measurement form limits and the application steps.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple


# =============================================================================
# Application Steps
# =============================================================================

STEP_INPUT = "input"
STEP_ANALYZING = "analyzing"
STEP_RESULT = "result"

APP_STEPS: Tuple[str, ...] = (STEP_INPUT, STEP_ANALYZING, STEP_RESULT)


# =============================================================================
# Measurement Form Limits
# =============================================================================

@dataclass(frozen=True)
class MeasurementLimits:
    """Accepted ranges for the self-reported measurements (cm / kg)."""

    HEIGHT_MIN_CM: float = 140
    HEIGHT_MAX_CM: float = 220
    WEIGHT_MIN_KG: float = 40
    WEIGHT_MAX_KG: float = 150


DEFAULT_MEASUREMENT_LIMITS = MeasurementLimits()


# =============================================================================
# Languages
# =============================================================================

SUPPORTED_LANGUAGES: Tuple[str, ...] = ("uk", "en", "ru")

# Language the model is asked to write its reasoning in
LANGUAGE_NAMES: Dict[str, str] = {
    "uk": "Ukrainian",
    "en": "English",
    "ru": "Russian",
}


# =============================================================================
# Chart Editor
# =============================================================================

# Prefix for ids of categories created in the editor
CUSTOM_CHART_ID_PREFIX = "custom_"


# =============================================================================
# Built-in Size Charts
# =============================================================================

# Ids of the built-in charts; their display names come from the translations
UNIVERSAL_CHART_ID = "universal"
MENS_JACKETS_CHART_ID = "mens_jackets"
SPORTSWEAR_CHART_ID = "sportswear"

DEFAULT_CHARTS: List[Dict] = [
    {
        "id": UNIVERSAL_CHART_ID,
        "name": "Універсальна таблиця",
        "data": [
            {"int": "XS", "ua_eu": "44", "height": "166-170", "chest": "86-90", "waist": "74-78", "hips": "88-92"},
            {"int": "S", "ua_eu": "46", "height": "170-176", "chest": "90-94", "waist": "78-82", "hips": "92-96"},
            {"int": "M", "ua_eu": "48", "height": "176-182", "chest": "94-98", "waist": "82-86", "hips": "96-100"},
            {"int": "L", "ua_eu": "50", "height": "182-186", "chest": "98-102", "waist": "86-90", "hips": "100-104"},
            {"int": "XL", "ua_eu": "52", "height": "184-188", "chest": "102-106", "waist": "90-96", "hips": "104-108"},
            {"int": "XXL", "ua_eu": "54", "height": "186-190", "chest": "106-110", "waist": "96-102", "hips": "108-112"},
        ],
    },
    {
        "id": MENS_JACKETS_CHART_ID,
        "name": "Чоловічі куртки",
        "data": [
            {"size": "46", "height": "170", "chest": "92", "sleeve": "62"},
            {"size": "48", "height": "176", "chest": "96", "sleeve": "64"},
            {"size": "50", "height": "182", "chest": "100", "sleeve": "66"},
            {"size": "52", "height": "188", "chest": "104", "sleeve": "68"},
            {"size": "54", "height": "188", "chest": "108", "sleeve": "69"},
            {"size": "56", "height": "194", "chest": "112", "sleeve": "70"},
        ],
    },
    {
        "id": SPORTSWEAR_CHART_ID,
        "name": "Спортивні костюми",
        "data": [
            {"size": "S", "height": "168-175", "weight": "60-70", "chest": "88-92"},
            {"size": "M", "height": "175-180", "weight": "70-80", "chest": "96-100"},
            {"size": "L", "height": "180-185", "weight": "80-90", "chest": "104-108"},
            {"size": "XL", "height": "185-190", "weight": "90-100", "chest": "112-116"},
            {"size": "XXL", "height": "190+", "weight": "100+", "chest": "120+"},
        ],
    },
]
