"""
Application controller.

Owns everything the size advisor UI shows: the current step, language,
chart store, active chart, last result and error banner, plus the chart
editor. Every user action is a method here, so the whole flow can be driven
(and tested) without a rendering layer.

    app = SizingApp()
    app.select_active_chart("sportswear")
    result = app.submit(height="175", weight=None, image=payload)
    rows = app.highlighted_rows()
"""

import threading
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from analysis.analyzer import SizeAnalyzer, get_size_analyzer
from analysis.intake import ImagePayload
from analysis.models import AnalysisResult, MeasurementInput
from charts.editor import ChartEditorSession
from charts.highlight import highlighted_rows
from charts.models import ChartCategory
from charts.store import ChartStore
from config.constants import STEP_ANALYZING, STEP_INPUT, STEP_RESULT
from config.locales import chart_display_name, get_translations, normalize_language, translate
from core.errors import AnalysisError, ConfigurationError, InvalidMeasurementError
from core.logging import LoggerMixin


class SizingApp(LoggerMixin):
    """Single owner of the size advisor's state and transitions."""

    def __init__(
        self,
        store: Optional[ChartStore] = None,
        analyzer: Optional[SizeAnalyzer] = None,
        language: str = "uk",
    ):
        self.store = store or ChartStore.with_defaults()
        self._analyzer = analyzer
        self.language = normalize_language(language)

        self.step: str = STEP_INPUT
        self.result: Optional[AnalysisResult] = None
        self.error: Optional[str] = None
        self.active_chart_id: str = self.store.first().id
        self.editor = ChartEditorSession(self.store, language=self.language)

        self._in_flight = threading.Lock()

    @property
    def analyzer(self) -> SizeAnalyzer:
        if self._analyzer is None:
            self._analyzer = get_size_analyzer()
        return self._analyzer

    # =========================================================================
    # Language and charts
    # =========================================================================

    @property
    def translations(self) -> Dict[str, str]:
        return get_translations(self.language)

    def set_language(self, language: str) -> None:
        self.language = normalize_language(language)
        self.editor.language = self.language
        # The banner is shown in the newly selected language
        if self.error is not None:
            self.error = translate(self.language, "error_analysis")

    @property
    def active_chart(self) -> ChartCategory:
        chart = self.store.find(self.active_chart_id)
        return chart if chart is not None else self.store.first()

    def select_active_chart(self, chart_id: str) -> None:
        """Make another chart the one used for analysis. Raises ChartNotFoundError."""
        self.store.get(chart_id)
        self.active_chart_id = chart_id

    def chart_display_name(self, chart: ChartCategory) -> str:
        return chart_display_name(chart.id, chart.name, self.language)

    def list_charts(self) -> List[Dict[str, Any]]:
        return [
            {
                "id": chart.id,
                "name": self.chart_display_name(chart),
                "rows": len(chart.data),
                "active": chart.id == self.active_chart_id,
            }
            for chart in self.store.charts
        ]

    # =========================================================================
    # Analysis
    # =========================================================================

    @property
    def is_analyzing(self) -> bool:
        return self._in_flight.locked()

    def can_submit(self, height: Optional[str], image: Optional[ImagePayload]) -> bool:
        """Mirror of the submit button: needs a photo and a height, one request at a time."""
        return bool(image) and bool((height or "").strip()) and not self.is_analyzing

    def submit(
        self,
        height: Optional[str],
        weight: Optional[str],
        image: Optional[ImagePayload],
    ) -> Optional[AnalysisResult]:
        """
        Run the size analysis for the active chart.

        Returns None without doing anything when the form is incomplete or a
        request is already running.

        Raises:
            InvalidMeasurementError: height/weight outside the form ranges
            AnalysisError: the analysis failed; the app is back on the input
                step with a translated error banner
            ConfigurationError: no API key; the app is back on the input step
        """
        if not self.can_submit(height, image):
            self.logger.info(
                "Submit ignored",
                has_image=bool(image),
                has_height=bool((height or "").strip()),
                analyzing=self.is_analyzing,
            )
            return None

        try:
            measurements = MeasurementInput(height=height, weight=weight, language=self.language)
        except ValidationError as e:
            raise InvalidMeasurementError(
                "; ".join(err["msg"] for err in e.errors())
            ) from e

        if not self._in_flight.acquire(blocking=False):
            return None

        chart = self.active_chart
        self.step = STEP_ANALYZING
        self.error = None
        try:
            result = self.analyzer.analyze(measurements, image, chart.data)
        except AnalysisError:
            self.result = None
            self.error = translate(self.language, "error_analysis")
            self.step = STEP_INPUT
            raise
        except ConfigurationError:
            self.step = STEP_INPUT
            raise
        finally:
            self._in_flight.release()

        self.result = result
        self.step = STEP_RESULT
        self.logger.info(
            "Size recommended",
            chart_id=chart.id,
            recommended_size=result.recommendedSize,
        )
        return result

    def reset(self) -> None:
        """Back to the input form."""
        self.result = None
        self.error = None
        self.step = STEP_INPUT

    def highlighted_rows(self) -> List[int]:
        """Rows of the active chart matching the current recommendation."""
        if self.result is None:
            return []
        return highlighted_rows(self.active_chart.data, self.result.recommendedSize)

    # =========================================================================
    # Editor
    # =========================================================================

    def open_editor(self) -> ChartEditorSession:
        with self.editor.lock:
            self.editor.language = self.language
            self.editor.open()
        return self.editor

    def save_editor(self) -> List[ChartCategory]:
        """Save the editor; fall back to the first chart if the active one was deleted."""
        with self.editor.lock:
            saved = self.editor.save()
            if self.active_chart_id not in self.store:
                self.active_chart_id = self.store.first().id
        return saved

    def cancel_editor(self) -> None:
        with self.editor.lock:
            self.editor.cancel()

    # =========================================================================
    # Views
    # =========================================================================

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step": self.step,
            "language": self.language,
            "active_chart_id": self.active_chart_id,
            "charts": self.list_charts(),
            "result": self.result.model_dump() if self.result else None,
            "error": self.error,
            "editor_state": self.editor.state.value,
        }
