"""
Session manager for in-memory application state.

Each API client gets its own SizingApp controller (charts, language,
editor, last result) addressed by a session id. Sessions live in process
memory and expire after a period of inactivity; nothing is persisted.
"""

import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Generic, Optional, Tuple, TypeVar

from config.settings import get_settings
from core.logging import LoggerMixin
from services.sizing_app import SizingApp


T = TypeVar("T")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class SessionData(Generic[T]):
    """Container for session data with metadata."""

    data: T
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)
    ttl_seconds: int = 86400  # 24 hours default

    def is_expired(self) -> bool:
        """Expired when idle for longer than the TTL."""
        expiry = self.updated_at + timedelta(seconds=self.ttl_seconds)
        return _utcnow() > expiry

    def touch(self) -> None:
        """Update the last accessed time."""
        self.updated_at = _utcnow()


class SessionManager(LoggerMixin):
    """
    Thread-safe in-memory store of SizingApp controllers.

    Usage:
        manager = SessionManager()
        session_id, app = manager.create()
        app = manager.get(session_id)        # None if unknown or expired
        manager.delete(session_id)
    """

    def __init__(
        self,
        ttl_seconds: int = 86400,
        factory: Optional[Callable[..., SizingApp]] = None,
    ):
        """
        Initialize session manager.

        Args:
            ttl_seconds: Idle time after which a session is dropped
            factory: Builds a new controller; receives ``language``
        """
        self._ttl_seconds = ttl_seconds
        self._factory = factory or SizingApp
        self._lock = threading.RLock()
        self._sessions: Dict[str, SessionData[SizingApp]] = {}

    def create(self, language: Optional[str] = None) -> Tuple[str, SizingApp]:
        """Start a new session with a fresh controller, dropping expired ones first."""
        self.clear_expired()
        language = language or get_settings().default_language
        app = self._factory(language=language)
        session_id = uuid.uuid4().hex
        with self._lock:
            self._sessions[session_id] = SessionData(data=app, ttl_seconds=self._ttl_seconds)
        self.logger.info("Session created", session_id=session_id, language=app.language)
        return session_id, app

    def get(self, session_id: str) -> Optional[SizingApp]:
        """Controller for a session, or None if not found/expired."""
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            if session.is_expired():
                del self._sessions[session_id]
                return None
            session.touch()
            return session.data

    def delete(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def clear_expired(self) -> int:
        """
        Clear all expired sessions.

        Returns:
            Number of sessions cleared
        """
        with self._lock:
            expired_keys = [k for k, v in self._sessions.items() if v.is_expired()]
            for key in expired_keys:
                del self._sessions[key]

        if expired_keys:
            self.logger.info("Cleared expired sessions", count=len(expired_keys))
        return len(expired_keys)

    def get_stats(self) -> Dict[str, int]:
        with self._lock:
            return {"sessions": len(self._sessions)}


_sessions: Optional[SessionManager] = None
_sessions_lock = threading.Lock()


def get_session_manager() -> SessionManager:
    """Get the process-wide session manager singleton."""
    global _sessions
    if _sessions is None:
        with _sessions_lock:
            if _sessions is None:
                _sessions = SessionManager(ttl_seconds=get_settings().session_ttl_seconds)
    return _sessions


def reset_session_manager() -> None:
    """Drop the singleton (tests)."""
    global _sessions
    with _sessions_lock:
        _sessions = None
