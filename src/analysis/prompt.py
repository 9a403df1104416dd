"""
Request assembly for the size analysis.

Builds the instruction text and the JSON schema the vision model must
answer with. The active chart is embedded verbatim as a JSON array of
flat records so the model can pick a size label that exists in it.
"""

import json
from typing import Any, Dict, List, Sequence

from analysis.intake import ImagePayload
from analysis.models import MeasurementInput
from charts.models import SizeRow
from config.constants import LANGUAGE_NAMES


# =============================================================================
# Response Schema
# =============================================================================

RESULT_FIELDS = (
    "estimatedChest",
    "estimatedWaist",
    "estimatedHips",
    "recommendedSize",
    "reasoning",
    "confidence",
)


def response_schema(language: str) -> Dict[str, Any]:
    """JSON schema of the answer. The reasoning field names the target language."""
    language_name = LANGUAGE_NAMES[language]
    return {
        "type": "object",
        "properties": {
            "estimatedChest": {"type": "number", "description": "Estimated chest circumference in cm"},
            "estimatedWaist": {"type": "number", "description": "Estimated waist circumference in cm"},
            "estimatedHips": {"type": "number", "description": "Estimated hips circumference in cm"},
            "recommendedSize": {
                "type": "string",
                "description": "The recommended size label from the chart (e.g. XS, 44, or combined)",
            },
            "reasoning": {
                "type": "string",
                "description": f"A brief explanation in {language_name} language of why this size was chosen.",
            },
            "confidence": {"type": "number", "description": "Confidence score from 0 to 100"},
        },
        "required": list(RESULT_FIELDS),
        "additionalProperties": False,
    }


# =============================================================================
# Prompt
# =============================================================================

_SYSTEM_PROMPT = """You are an expert professional tailor and stylist.
You recommend clothing sizes from a photo of a person and their self-reported measurements.
Always answer with a single JSON object that follows the given schema. No markdown, no code blocks."""


def serialize_chart(rows: Sequence[SizeRow]) -> str:
    """Chart rows as a JSON array of flat string-keyed records."""
    return json.dumps([{str(k): str(v) for k, v in row.items()} for row in rows], ensure_ascii=False)


def build_prompt(measurements: MeasurementInput, chart_rows: Sequence[SizeRow]) -> str:
    weight_text = f"{measurements.weight} kg" if measurements.weight else "Unknown"
    language_name = LANGUAGE_NAMES[measurements.language]

    return f"""Analyze the provided image of the person alongside their self-reported height ({measurements.height} cm) and weight ({weight_text}).

Your task is to:
1. Estimate their Chest, Waist, and Hips measurements (in cm) based on their visual body type (ectomorph, mesomorph, endomorph) and known parameters.
2. Compare these estimated measurements against the provided Size Chart below.
3. Recommend the best fitting size from the chart.

Write the "reasoning" field in {language_name}.

Size Chart Data (JSON):
{serialize_chart(chart_rows)}

Provide the output in strict JSON format."""


def build_messages(
    measurements: MeasurementInput,
    image: ImagePayload,
    chart_rows: Sequence[SizeRow],
) -> List[Dict[str, Any]]:
    """Chat messages for a vision request: system text, then image + instructions."""
    return [
        {"role": "system", "content": _SYSTEM_PROMPT},
        {
            "role": "user",
            "content": [
                {"type": "image_url", "image_url": {"url": image.data_url}},
                {"type": "text", "text": build_prompt(measurements, chart_rows)},
            ],
        },
    ]


def response_format(language: str) -> Dict[str, Any]:
    """OpenAI structured-output response_format for the answer schema."""
    return {
        "type": "json_schema",
        "json_schema": {
            "name": "size_recommendation",
            "strict": True,
            "schema": response_schema(language),
        },
    }
