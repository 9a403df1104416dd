"""
Route modules for the API.

Each module exports a FastAPI APIRouter with endpoints
for a specific domain/feature.
"""

from api.routes import analysis
from api.routes import editor
from api.routes import health
from api.routes import sessions

__all__ = ["analysis", "editor", "health", "sessions"]
