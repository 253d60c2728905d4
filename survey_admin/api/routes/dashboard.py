"""
Dashboard API Routes - Session-gated survey browser

Every endpoint resolves the viewer's session gate first. Unauthenticated
viewers are redirected (GET) or refused (POST); authenticated actions
mutate the committed query state and return the settled DashboardView.
"""

from fastapi import APIRouter, Form, HTTPException, Request, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, Field
from typing import Tuple
import logging

from survey_admin.api import state
from survey_admin.config.settings import settings
from survey_admin.models.dashboard import DashboardView
from survey_admin.services.browser.console import AdminConsole, DataBrowser
from survey_admin.services.browser.session_gate import GateViewKind
from survey_admin.services.errors import NetworkFailure, ValidationFailure

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/dashboard", tags=["dashboard"])


class PageRequest(BaseModel):
    """Request model for page navigation."""
    page: int = Field(..., description="Target page number")


class PageSizeRequest(BaseModel):
    """Request model for page size changes."""
    page_size: int = Field(..., description="Records per page (5, 10, 25, 50 or 100)")


def _not_authenticated() -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")


async def _require_browser(request: Request) -> Tuple[AdminConsole, DataBrowser]:
    console = state.get_console(request)
    if console is None:
        raise _not_authenticated()
    view = await console.open_dashboard()
    if view.kind is not GateViewKind.CONTENT:
        raise _not_authenticated()
    return console, view.content


async def _settled_view(console: AdminConsole, browser: DataBrowser) -> DashboardView:
    await browser.controller.settle()
    if console.browser is None:
        # Backend rejected the session while fetching
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Session expired")
    return console.dashboard_view()


@router.get("", response_model=DashboardView)
async def get_dashboard(request: Request):
    """
    Render the dashboard.

    Returns the DashboardView when authenticated, otherwise a redirect to
    the login route.
    """
    console = state.get_console(request)
    if console is None:
        return RedirectResponse(settings.LOGIN_ROUTE, status_code=status.HTTP_307_TEMPORARY_REDIRECT)

    view = await console.open_dashboard()
    if view.kind is GateViewKind.REDIRECT:
        return RedirectResponse(view.redirect.destination, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
    if view.kind is GateViewKind.WAITING:
        # Gate was torn down mid-check
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Verifying authentication...")
    return console.dashboard_view()


@router.post("/page", response_model=DashboardView)
async def set_page(page_request: PageRequest, request: Request) -> DashboardView:
    """Navigate to a page; out-of-range pages are ignored."""
    console, browser = await _require_browser(request)
    browser.controller.set_page(page_request.page)
    return await _settled_view(console, browser)


@router.post("/page-size", response_model=DashboardView)
async def set_page_size(size_request: PageSizeRequest, request: Request) -> DashboardView:
    """
    Change records per page.

    Raises:
        400: Page size not in the allowed set
    """
    console, browser = await _require_browser(request)
    try:
        browser.controller.set_page_size(size_request.page_size)
    except ValidationFailure as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return await _settled_view(console, browser)


@router.post("/search", response_model=DashboardView)
async def search(request: Request, search: str = Form("")) -> DashboardView:
    """Commit a search term (name or email) and return to page 1."""
    console, browser = await _require_browser(request)
    browser.controller.set_search_term(search)
    return await _settled_view(console, browser)


@router.post("/refresh", response_model=DashboardView)
async def refresh(request: Request) -> DashboardView:
    """Re-fetch the current page without changing the query."""
    console, browser = await _require_browser(request)
    browser.controller.refresh()
    return await _settled_view(console, browser)


@router.post("/jump", response_model=DashboardView)
async def jump_to_page(request: Request, page: str = Form(...)) -> DashboardView:
    """
    Jump to a typed page number.

    Raises:
        400: Input is not a page number within range
    """
    console, browser = await _require_browser(request)
    try:
        browser.page_jump.submit(page)
    except ValidationFailure as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return await _settled_view(console, browser)


@router.post("/jump/toggle", response_model=DashboardView)
async def toggle_jump(request: Request) -> DashboardView:
    """Show or hide the direct page-jump input."""
    console, browser = await _require_browser(request)
    browser.page_jump.toggle()
    return console.dashboard_view()


@router.post("/records/{record_id}/select", response_model=DashboardView)
async def select_record(record_id: str, request: Request) -> DashboardView:
    """
    Open a record for inspection.

    Raises:
        401: Backend rejected the session
        404: Backend has no such record
        502: Record could not be fetched
    """
    console, browser = await _require_browser(request)
    try:
        await browser.select_record(record_id)
    except NetworkFailure as e:
        logger.warning(f"Could not load survey {record_id}: {e}")
        if e.status_code == status.HTTP_404_NOT_FOUND:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Survey {record_id} not found")
        if console.browser is None:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Session expired")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Survey {record_id} could not be loaded. Please try again.",
        )
    return console.dashboard_view()


@router.post("/selection/clear", response_model=DashboardView)
async def clear_selection(request: Request) -> DashboardView:
    """Close the record detail panel."""
    console, browser = await _require_browser(request)
    browser.selector.clear()
    return console.dashboard_view()


@router.post("/notifications/{notification_id}/dismiss", response_model=DashboardView)
async def dismiss_notification(notification_id: str, request: Request) -> DashboardView:
    """Dismiss a transient notification."""
    console, _ = await _require_browser(request)
    console.notifications.dismiss(notification_id)
    return console.dashboard_view()
