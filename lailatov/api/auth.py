"""
Auth endpoints - the username-only login of the coaching app.

Routes (/auth):
  POST /login   - Start a session; "coach" logs in as the coach, any other name as a parent
  POST /logout  - Clear the session
  GET  /me      - Current session user and role

The session is a pair of plain cookies. See services/auth_manager.py: this
is a convenience flag, not authentication.
"""

import logging
from fastapi import APIRouter, HTTPException, status

from lailatov.api.deps import SessionDep, redirect_for
from lailatov.api.models import LoginRequest, SessionResponse
from lailatov.core.constants import MSG_EMPTY_USERNAME
from lailatov.services.auth_manager import resolve_login

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


# Used by: Login page
@router.post("/login", response_model=SessionResponse)
async def login(request: LoginRequest, session: SessionDep):
    try:
        user = resolve_login(request.username)
    except ValueError:
        logger.warning("Login attempt with empty username")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=MSG_EMPTY_USERNAME)

    session.login(user.username, user.role)

    return SessionResponse(
        username=user.username,
        role=user.role,
        redirect_to=redirect_for(user.role, user.username),
    )


# Used by: Coach sidebar / parent page - logout button
@router.post("/logout", response_model=SessionResponse)
async def logout(session: SessionDep):
    session.logout()
    return SessionResponse()


# Used by: page-level route guards on the client
@router.get("/me", response_model=SessionResponse)
async def me(session: SessionDep):
    user = session.current_user()
    return SessionResponse(
        username=user.username,
        role=user.role,
        redirect_to=redirect_for(user.role, user.username),
    )
