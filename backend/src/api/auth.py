# pyright: reportMissingTypeStubs=false
"""
Authentication API endpoints.

Handles access-code login, logout and the session theme preference.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from auth.dependencies import get_current_session, get_session_registry
from api.responses import LoginResponse, ThemeResponse
from services.jwt_service import jwt_service
from services.session_service import AuthenticationError, SalonSession, SessionRegistry, SessionService

logger = logging.getLogger(__name__)

router = APIRouter()


class LoginRequest(BaseModel):
    """Request model for access-code login."""
    access_code: str
    theme: Optional[str] = None


class ThemeUpdateRequest(BaseModel):
    """Request model for changing the theme preference."""
    theme: str


@router.post("/login", summary="Log in with the access code", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    registry: SessionRegistry = Depends(get_session_registry)
) -> LoginResponse:
    """
    Start a session.

    Returns a bearer token to send with every other request.
    """
    try:
        session, token = SessionService.login(registry, request.access_code, request.theme)
    except AuthenticationError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid access code"
        )

    return LoginResponse(
        access_token=token,
        expires_in=jwt_service.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        theme=session.theme
    )


@router.post("/logout", summary="End the current session")
async def logout(
    session: SalonSession = Depends(get_current_session),
    registry: SessionRegistry = Depends(get_session_registry)
) -> dict[str, str]:
    """Log out; the token is rejected afterwards."""
    SessionService.logout(registry, session.session_id)
    return {"message": "Logged out"}


@router.get("/theme", summary="Get the theme preference", response_model=ThemeResponse)
async def get_theme(session: SalonSession = Depends(get_current_session)) -> ThemeResponse:
    return ThemeResponse(theme=session.theme)


@router.put("/theme", summary="Update the theme preference", response_model=ThemeResponse)
async def update_theme(
    request: ThemeUpdateRequest,
    session: SalonSession = Depends(get_current_session)
) -> ThemeResponse:
    """Set the theme to "light" or "dark"."""
    SessionService.update_theme(session, request.theme)
    return ThemeResponse(theme=session.theme)
