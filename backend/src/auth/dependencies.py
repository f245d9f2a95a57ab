# pyright: reportMissingTypeStubs=false
"""
Authentication dependencies for FastAPI.

Provides dependency injection functions for the access-code session and for
the application-scoped salon API client.
"""

import logging
from typing import Optional
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from services.salon_api_client import SalonApiClient
from services.session_service import AuthenticationError, SalonSession, SessionRegistry, SessionService

logger = logging.getLogger(__name__)


# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)


def get_session_registry(request: Request) -> SessionRegistry:
    """Get the session registry created at application startup."""
    return request.app.state.session_registry


def get_salon_client(request: Request) -> SalonApiClient:
    """Get the salon API client created at application startup."""
    return request.app.state.salon_client


def get_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[str]:
    """Extract the bearer token, if any."""
    if not credentials:
        return None
    return credentials.credentials


def get_current_session(
    token: Optional[str] = Depends(get_token),
    registry: SessionRegistry = Depends(get_session_registry)
) -> SalonSession:
    """Get the authenticated session from the bearer token."""
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication credentials not provided"
        )

    try:
        return SessionService.resolve(registry, token)
    except AuthenticationError as e:
        logger.info(f"Rejected token: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e)
        )
