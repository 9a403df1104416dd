"""
Services module for application state.

Provides the SizingApp controller and the per-client session manager.
"""

from services.sizing_app import SizingApp
from services.session_manager import SessionManager, get_session_manager

__all__ = [
    "SizingApp",
    "SessionManager",
    "get_session_manager",
]
