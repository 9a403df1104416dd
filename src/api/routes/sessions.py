"""
Session API Routes.

A session holds one client's state: language, charts, active chart and the
last recommendation. Create one first, then use its id in every other call.

NOTE: Routes use `def` (not `async def`); the controller is synchronous
and FastAPI runs sync handlers in its thread pool.
"""

from typing import Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from api.dependencies import get_sizing_app
from api.models import (
    ChartSelectRequest,
    ChartTable,
    LanguageRequest,
    SessionCreateRequest,
    SessionState,
)
from charts.highlight import highlighted_rows
from core.errors import ChartNotFoundError
from core.logging import get_logger
from services.session_manager import get_session_manager
from services.sizing_app import SizingApp

logger = get_logger(__name__)

router = APIRouter(prefix="/api/sessions", tags=["Sessions"])


@router.post("", response_model=SessionState, status_code=201, summary="Start a session")
def create_session(request: Optional[SessionCreateRequest] = None) -> SessionState:
    language = request.language if request else None
    try:
        session_id, app = get_session_manager().create(language=language)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return SessionState.from_app(session_id, app)


@router.get("/{session_id}", response_model=SessionState, summary="Session state")
def get_session(
    session_id: str = Path(...),
    app: SizingApp = Depends(get_sizing_app),
) -> SessionState:
    return SessionState.from_app(session_id, app)


@router.delete("/{session_id}", status_code=204, summary="End a session")
def delete_session(session_id: str = Path(...)) -> None:
    if not get_session_manager().delete(session_id):
        raise HTTPException(status_code=404, detail=f"Session not found: {session_id}")
    logger.info("Session deleted", session_id=session_id)


@router.put("/{session_id}/language", response_model=SessionState, summary="Change language")
def set_language(
    request: LanguageRequest,
    session_id: str = Path(...),
    app: SizingApp = Depends(get_sizing_app),
) -> SessionState:
    try:
        app.set_language(request.language)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return SessionState.from_app(session_id, app)


@router.get("/{session_id}/translations", summary="UI strings for the session language")
def get_translations(app: SizingApp = Depends(get_sizing_app)) -> Dict[str, str]:
    return app.translations


@router.put("/{session_id}/active-chart", response_model=SessionState, summary="Choose the chart used for analysis")
def select_active_chart(
    request: ChartSelectRequest,
    session_id: str = Path(...),
    app: SizingApp = Depends(get_sizing_app),
) -> SessionState:
    try:
        app.select_active_chart(request.chart_id)
    except ChartNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return SessionState.from_app(session_id, app)


@router.get("/{session_id}/charts/active/table", response_model=ChartTable, summary="Reference table of the active chart")
def get_active_table(
    highlight: Optional[str] = Query(None, description="Size to highlight. Defaults to the last recommendation."),
    app: SizingApp = Depends(get_sizing_app),
) -> ChartTable:
    """
    Reference table with highlighted rows.

    A row is highlighted when any cell equals, or is contained in, the
    recommended size (case-insensitive). Several rows may be highlighted.
    """
    chart = app.active_chart
    recommended = highlight if highlight is not None else (
        app.result.recommendedSize if app.result else None
    )
    return ChartTable(
        chart_id=chart.id,
        name=app.chart_display_name(chart),
        headers=chart.headers,
        rows=chart.data,
        highlighted=highlighted_rows(chart.data, recommended),
        recommended_size=recommended,
    )


@router.post("/{session_id}/reset", response_model=SessionState, summary="Back to the input step")
def reset(
    session_id: str = Path(...),
    app: SizingApp = Depends(get_sizing_app),
) -> SessionState:
    app.reset()
    return SessionState.from_app(session_id, app)
