"""
Chart Editor API Routes.

Drives the session's ChartEditorSession. Every call returns the editor
view (working charts, active chart, name, grid, last error), so a client
can re-render after each action.

Errors:
- 409: editor is not open (or already open)
- 404: unknown chart id
- 422: validation failure (duplicate/empty header, deleting the last
       category) with the translated message, or an out-of-range index
"""

from typing import Callable, Optional

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_sizing_app
from api.models import (
    ChartSelectRequest,
    ColumnAddRequest,
    EditorView,
    GridUpdateRequest,
    SessionState,
)
from core.errors import ChartNotFoundError, ChartValidationError, EditorStateError
from core.logging import get_logger
from services.sizing_app import SizingApp

logger = get_logger(__name__)

router = APIRouter(prefix="/api/sessions/{session_id}/editor", tags=["Chart Editor"])


def _run(app: SizingApp, action: Callable[[], object]) -> EditorView:
    """Run an editor action and map its errors to HTTP responses."""
    try:
        action()
    except EditorStateError as e:
        logger.info("Editor action out of state", error=str(e), state=app.editor.state.value)
        raise HTTPException(status_code=409, detail=str(e))
    except ChartNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ChartValidationError as e:
        raise HTTPException(
            status_code=422,
            detail={
                "message": app.editor.last_error or str(e),
                "error": type(e).__name__,
            },
        )
    except IndexError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return EditorView.from_editor(app.editor)


@router.post("/open", response_model=EditorView, summary="Open the editor on a copy of the charts")
def open_editor(app: SizingApp = Depends(get_sizing_app)) -> EditorView:
    return _run(app, app.open_editor)


@router.get("", response_model=EditorView, summary="Editor state")
def get_editor(app: SizingApp = Depends(get_sizing_app)) -> EditorView:
    return EditorView.from_editor(app.editor)


@router.post("/select", response_model=EditorView, summary="Switch the chart being edited")
def select_chart(
    request: ChartSelectRequest,
    app: SizingApp = Depends(get_sizing_app),
) -> EditorView:
    """Commits the current grid into the working copy before switching."""
    return _run(app, lambda: app.editor.select_chart(request.chart_id))


@router.put("/grid", response_model=EditorView, summary="Replace the active grid")
def update_grid(
    request: GridUpdateRequest,
    app: SizingApp = Depends(get_sizing_app),
) -> EditorView:
    return _run(app, lambda: app.editor.replace_grid(request.headers, request.rows, name=request.name))


@router.post("/columns", response_model=EditorView, summary="Append a column")
def add_column(
    request: Optional[ColumnAddRequest] = None,
    app: SizingApp = Depends(get_sizing_app),
) -> EditorView:
    name = request.name if request else None
    return _run(app, lambda: app.editor.add_column(name))


@router.delete("/columns/{index}", response_model=EditorView, summary="Remove a column")
def remove_column(index: int, app: SizingApp = Depends(get_sizing_app)) -> EditorView:
    """The last remaining column is never removed."""
    return _run(app, lambda: app.editor.remove_column(index))


@router.post("/rows", response_model=EditorView, summary="Append a blank row")
def add_row(app: SizingApp = Depends(get_sizing_app)) -> EditorView:
    return _run(app, app.editor.add_row)


@router.delete("/rows/{index}", response_model=EditorView, summary="Remove a row")
def remove_row(index: int, app: SizingApp = Depends(get_sizing_app)) -> EditorView:
    return _run(app, lambda: app.editor.remove_row(index))


@router.post("/categories", response_model=EditorView, summary="Add a category")
def add_category(app: SizingApp = Depends(get_sizing_app)) -> EditorView:
    return _run(app, app.editor.add_category)


@router.delete("/categories/{chart_id}", response_model=EditorView, summary="Delete a category")
def delete_category(chart_id: str, app: SizingApp = Depends(get_sizing_app)) -> EditorView:
    return _run(app, lambda: app.editor.delete_category(chart_id))


@router.post("/save", response_model=SessionState, summary="Validate and save all charts")
def save(session_id: str, app: SizingApp = Depends(get_sizing_app)) -> SessionState:
    _run(app, app.save_editor)
    return SessionState.from_app(session_id, app)


@router.post("/cancel", response_model=SessionState, summary="Discard all edits")
def cancel(session_id: str, app: SizingApp = Depends(get_sizing_app)) -> SessionState:
    _run(app, app.cancel_editor)
    return SessionState.from_app(session_id, app)
