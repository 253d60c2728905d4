"""
Dashboard Models - Renderable view of the admin data browser
"""

from typing import List, Optional
from pydantic import BaseModel, Field

from .browser import PAGE_SIZE_OPTIONS, Notification, PageMarker, RangeSummary, SessionStatus
from .survey import SurveyRecord


class PageJumpState(BaseModel):
    """Visibility and current text of the direct page-jump input."""

    visible: bool = False
    value: str = ""


class DashboardView(BaseModel):
    """
    Everything the UI layer needs to draw the dashboard.

    Built from the query controller, detail selector, page window and
    notification queue after pending fetches have settled.
    """

    status: SessionStatus = Field(..., description="Session status of the viewer")
    records: List[SurveyRecord] = Field(default_factory=list)
    total: int = Field(default=0, ge=0, description="Total matching submissions")
    page: int = Field(default=1, ge=1)
    total_pages: int = Field(default=0, ge=0)
    page_size: int = Field(default=10)
    page_size_options: List[int] = Field(default_factory=lambda: list(PAGE_SIZE_OPTIONS))
    search_term: str = Field(default="")
    is_loading: bool = False
    window: List[PageMarker] = Field(default_factory=list, description="Pagination markers")
    range: RangeSummary
    selection: Optional[SurveyRecord] = None
    page_jump: PageJumpState = Field(default_factory=PageJumpState)
    notifications: List[Notification] = Field(default_factory=list)
