"""
Session service for access-code authentication.

A session starts when the correct access code is entered and ends on explicit
logout, token expiry or process shutdown. The registry is owned by the application
and created at startup; there is no module-level session state.
"""

import hmac
import logging
import secrets
import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from core.config import ACCESS_CODE, DEFAULT_THEME, JWT_ACCESS_TOKEN_EXPIRE_MINUTES
from core.constants import THEMES
from services.jwt_service import TokenPayload, jwt_service

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    """Raised when the access code is wrong or a session is unknown."""
    pass


@dataclass
class SalonSession:
    """An authenticated session with its display preferences."""
    session_id: str
    theme: str = DEFAULT_THEME
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class SessionRegistry:
    """
    In-memory store of active sessions, scoped to one application instance.

    Sessions older than the access token lifetime are dropped on register/get.
    """

    def __init__(self, max_age: timedelta = timedelta(minutes=JWT_ACCESS_TOKEN_EXPIRE_MINUTES)) -> None:
        self._sessions: Dict[str, SalonSession] = {}
        self._lock = threading.Lock()
        self.max_age = max_age

    def register(self, session: SalonSession) -> None:
        with self._lock:
            self._prune_expired()
            self._sessions[session.session_id] = session

    def get(self, session_id: str) -> Optional[SalonSession]:
        with self._lock:
            self._prune_expired()
            return self._sessions.get(session_id)

    def unregister(self, session_id: str) -> bool:
        """Remove a session. Returns False if it was not registered."""
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def _prune_expired(self) -> None:
        # Caller holds the lock
        cutoff = datetime.now(timezone.utc) - self.max_age
        expired = [sid for sid, session in self._sessions.items() if session.created_at <= cutoff]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info(f"Dropped {len(expired)} expired session(s)")

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


def validate_theme(theme: str) -> str:
    """
    Validate a theme preference.

    Raises:
        ValueError: If the theme is not one of THEMES
    """
    if theme not in THEMES:
        raise ValueError(f"Unknown theme: {theme} (expected one of {', '.join(THEMES)})")
    return theme


class SessionService:
    """Service for session login, logout and preferences."""

    @staticmethod
    def login(
        registry: SessionRegistry,
        access_code: str,
        theme: Optional[str] = None,
        expected_code: Optional[str] = None
    ) -> tuple[SalonSession, str]:
        """
        Start a session.

        Args:
            registry: Application session registry
            access_code: Code typed by the user
            theme: Initial theme preference (defaults to DEFAULT_THEME)
            expected_code: Code to check against (defaults to ACCESS_CODE)

        Returns:
            tuple: (session, access_token)

        Raises:
            AuthenticationError: If the access code is wrong
            ValueError: If the theme is unknown
        """
        expected = ACCESS_CODE if expected_code is None else expected_code
        if not hmac.compare_digest((access_code or "").encode("utf-8"), expected.encode("utf-8")):
            logger.warning("Login attempt with invalid access code")
            raise AuthenticationError("Invalid access code")

        session = SalonSession(
            session_id=secrets.token_urlsafe(32),
            theme=validate_theme(theme) if theme is not None else DEFAULT_THEME
        )
        registry.register(session)

        token = jwt_service.create_access_token(TokenPayload(sid=session.session_id))
        logger.info(f"Session started ({len(registry)} active)")
        return session, token

    @staticmethod
    def logout(registry: SessionRegistry, session_id: str) -> None:
        """End a session; its token is rejected from now on."""
        if registry.unregister(session_id):
            logger.info(f"Session ended ({len(registry)} active)")

    @staticmethod
    def resolve(registry: SessionRegistry, token: str) -> SalonSession:
        """
        Resolve a bearer token to its live session.

        Raises:
            AuthenticationError: If the token is invalid, expired or logged out
        """
        payload = jwt_service.verify_token(token)
        if payload is None:
            raise AuthenticationError("Invalid or expired token")

        session = registry.get(payload.sid)
        if session is None:
            raise AuthenticationError("Session not found")
        return session

    @staticmethod
    def update_theme(session: SalonSession, theme: str) -> SalonSession:
        session.theme = validate_theme(theme)
        return session
