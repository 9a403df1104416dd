"""
Pydantic models for the HTTP API.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from analysis.models import AnalysisResult
from charts.editor import ChartEditorSession
from services.sizing_app import SizingApp


# ============================================================================
# Request Models
# ============================================================================

class SessionCreateRequest(BaseModel):
    language: Optional[str] = Field(None, description="uk, en or ru. Defaults to DEFAULT_LANGUAGE.")


class LanguageRequest(BaseModel):
    language: str = Field(..., description="uk, en or ru")


class ChartSelectRequest(BaseModel):
    chart_id: str = Field(..., min_length=1)


class GridUpdateRequest(BaseModel):
    """Whole active grid as edited in the UI."""
    name: Optional[str] = Field(None, description="Category name")
    headers: List[str] = Field(..., min_length=1, description="Column names")
    rows: List[List[str]] = Field(default_factory=list, description="Cells, aligned with headers")


class ColumnAddRequest(BaseModel):
    name: Optional[str] = Field(None, description="Column name. Defaults to the translated placeholder.")


# ============================================================================
# Response Models
# ============================================================================

class ChartSummary(BaseModel):
    id: str
    name: str
    rows: int
    active: bool = False


class SessionState(BaseModel):
    session_id: str
    step: str
    language: str
    active_chart_id: str
    charts: List[ChartSummary]
    result: Optional[AnalysisResult] = None
    error: Optional[str] = None
    editor_state: str

    @classmethod
    def from_app(cls, session_id: str, app: SizingApp) -> "SessionState":
        return cls(session_id=session_id, **app.to_dict())


class ChartTable(BaseModel):
    """Reference table of one chart, with rows matching the recommendation."""
    chart_id: str
    name: str
    headers: List[str]
    rows: List[Dict[str, str]]
    highlighted: List[int] = Field(default_factory=list, description="Indices of matching rows")
    recommended_size: Optional[str] = None


class EditorView(BaseModel):
    state: str
    charts: List[ChartSummary]
    active_id: Optional[str] = None
    name: str = ""
    headers: List[str] = Field(default_factory=list)
    rows: List[List[str]] = Field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def from_editor(cls, editor: ChartEditorSession) -> "EditorView":
        return cls(
            state=editor.state.value,
            charts=[
                ChartSummary(
                    id=chart.id,
                    name=editor.display_name(chart),
                    rows=len(chart.data),
                    active=chart.id == editor.active_id,
                )
                for chart in editor.charts
            ],
            active_id=editor.active_id,
            name=editor.name,
            headers=list(editor.grid.headers),
            rows=[list(r) for r in editor.grid.rows],
            error=editor.last_error,
        )


class AnalysisResponse(BaseModel):
    result: AnalysisResult
    chart_id: str
    highlighted: List[int]
