"""
Size analysis with a vision model.

Sends the photo, the measurements and the active size chart to an OpenAI
vision-capable chat model and parses its structured answer into an
AnalysisResult.

Failure handling:
- Missing API key -> ConfigurationError, raised before any request
- Network / API error, empty answer, invalid JSON, missing or ill-typed
  field -> AnalysisError (one terminal failure, the user may resubmit)

The call is made once: the client is built with retries disabled.
"""

import json
import threading
import time
from typing import Optional, Sequence

from pydantic import ValidationError

from analysis.intake import ImagePayload
from analysis.models import AnalysisResult, MeasurementInput
from analysis.prompt import build_messages, response_format
from charts.models import SizeRow
from config.settings import Settings, get_settings
from core.errors import AnalysisError, ConfigurationError
from core.logging import get_logger

logger = get_logger(__name__)


class SizeAnalyzer:
    """Vision-model size analyzer."""

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self._client = None
        self._client_lock = threading.Lock()
        self._api_key = settings.openai_api_key.strip()
        self._model = settings.analysis_model
        self._temperature = settings.analysis_temperature
        self._max_tokens = settings.analysis_max_tokens
        self._timeout = settings.analysis_timeout_seconds

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    @property
    def model(self) -> str:
        return self._model

    def ensure_configured(self) -> None:
        if not self._api_key:
            raise ConfigurationError(
                "API key is missing. Set OPENAI_API_KEY (or API_KEY) in the environment."
            )

    @property
    def client(self):
        """Lazy-load OpenAI client."""
        self.ensure_configured()
        if self._client is None:
            with self._client_lock:
                if self._client is None:
                    from openai import OpenAI
                    self._client = OpenAI(
                        api_key=self._api_key,
                        timeout=self._timeout,
                        max_retries=0,
                    )
        return self._client

    def analyze(
        self,
        measurements: MeasurementInput,
        image: ImagePayload,
        chart_rows: Sequence[SizeRow],
    ) -> AnalysisResult:
        """
        Recommend a size for the person in the photo.

        Raises:
            ConfigurationError: no API key configured
            AnalysisError: the request failed or the answer could not be used
        """
        self.ensure_configured()

        t_start = time.time()
        try:
            response = self.client.chat.completions.create(
                model=self._model,
                messages=build_messages(measurements, image, chart_rows),
                temperature=self._temperature,
                max_tokens=self._max_tokens,
                response_format=response_format(measurements.language),
            )
        except Exception as e:
            latency_ms = int((time.time() - t_start) * 1000)
            logger.warning(
                "Size analysis request failed",
                error=str(e),
                error_type=type(e).__name__,
                latency_ms=latency_ms,
            )
            raise AnalysisError("Failed to analyze image", cause=e) from e

        result = self._parse(response)

        latency_ms = int((time.time() - t_start) * 1000)
        logger.info(
            "Size analysis completed",
            model=self._model,
            recommended_size=result.recommendedSize,
            confidence=result.confidence,
            chart_rows=len(chart_rows),
            language=measurements.language,
            latency_ms=latency_ms,
        )
        return result

    def _parse(self, response) -> AnalysisResult:
        try:
            raw = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as e:
            logger.warning("Size analysis returned no choices", error=str(e))
            raise AnalysisError("No response from the model", cause=e) from e

        if not raw:
            logger.warning("Size analysis returned empty response")
            raise AnalysisError("No response from the model")

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Size analysis returned invalid JSON", error=str(e), raw=raw[:200])
            raise AnalysisError("Model answer is not valid JSON", cause=e) from e

        if not isinstance(data, dict):
            logger.warning("Size analysis returned non-object JSON", raw=raw[:200])
            raise AnalysisError("Model answer is not a JSON object")

        try:
            return AnalysisResult(**data)
        except ValidationError as e:
            logger.warning(
                "Size analysis answer is missing fields",
                errors=[err["loc"] for err in e.errors()],
            )
            raise AnalysisError("Model answer is incomplete", cause=e) from e


# =============================================================================
# Singleton
# =============================================================================

_analyzer: Optional[SizeAnalyzer] = None
_analyzer_lock = threading.Lock()


def get_size_analyzer() -> SizeAnalyzer:
    """Get or create the SizeAnalyzer singleton (thread-safe)."""
    global _analyzer
    if _analyzer is None:
        with _analyzer_lock:
            if _analyzer is None:
                _analyzer = SizeAnalyzer()
    return _analyzer
