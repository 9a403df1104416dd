"""
FastAPI dependencies shared by the session-scoped routers.

Usage:
    @router.get("/{session_id}/...")
    def handler(app: SizingApp = Depends(get_sizing_app)):
        ...
"""

from fastapi import HTTPException, Path

from services.session_manager import get_session_manager
from services.sizing_app import SizingApp


def get_sizing_app(session_id: str = Path(..., description="Session id from POST /api/sessions")) -> SizingApp:
    """Resolve the controller for a session, 404 if unknown or expired."""
    app = get_session_manager().get(session_id)
    if app is None:
        raise HTTPException(status_code=404, detail=f"Session not found: {session_id}")
    return app
