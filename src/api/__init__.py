"""
API module for FastAPI routes.

Sessions, the chart editor and the size analysis are separate routers
mounted on the application from api.app.
"""

from api.routes import analysis, editor, health, sessions

__all__ = ["analysis", "editor", "health", "sessions"]
