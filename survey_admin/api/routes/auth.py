"""
Auth API Routes - Admin login and logout

A successful login opens a viewer session: the viewer's own console is
registered and its token is returned in the session cookie.
"""

from fastapi import APIRouter, HTTPException, Request, Response, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, Field
from typing import Any, Dict
import logging

from survey_admin.api import state
from survey_admin.config.settings import settings
from survey_admin.models.browser import SessionStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["auth"])


class LoginRequest(BaseModel):
    """Request model for admin login."""
    email: str = Field(..., min_length=1, description="Admin email")
    password: str = Field(..., min_length=1, description="Admin password")


@router.get("/login")
async def login_page(request: Request):
    """
    Login page state.

    Redirects to the dashboard when the viewer's session is already
    authenticated; otherwise reports pending notifications such as an
    expired session.
    """
    console = state.get_console(request)
    if console is None:
        return {
            "status": SessionStatus.UNAUTHENTICATED.value,
            "message": "Enter your credentials to access the admin dashboard",
            "notifications": [],
        }

    session_status = await console.gate.check_session()
    if session_status is SessionStatus.AUTHENTICATED:
        return RedirectResponse(settings.DASHBOARD_ROUTE, status_code=status.HTTP_303_SEE_OTHER)
    return {
        "status": session_status.value,
        "message": "Enter your credentials to access the admin dashboard",
        "notifications": console.notifications.active(),
    }


@router.post("/login", status_code=status.HTTP_200_OK)
async def login(credentials: LoginRequest, request: Request, response: Response) -> Dict[str, Any]:
    """
    Log in as administrator.

    Raises:
        401: Credentials rejected or backend unreachable
    """
    console = state.get_console(request)
    token = None
    if console is None:
        token, console = await state.open_console()

    error = await console.gate.login(credentials.email, credentials.password)
    if error is not None:
        if token is not None:
            # Never hand out a session for a failed login
            await state.discard_console(token)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"field": "password", "message": error},
        )

    if token is not None:
        state.set_session_cookie(response, token)
    return {"success": True, "redirect": settings.DASHBOARD_ROUTE}


@router.post("/logout")
async def logout(request: Request):
    """Invalidate the admin session and redirect to the login page."""
    console = state.get_console(request)
    if console is not None:
        await console.gate.logout()
        await state.close_console(request)

    response = RedirectResponse(settings.LOGIN_ROUTE, status_code=status.HTTP_303_SEE_OTHER)
    state.clear_session_cookie(response)
    return response
