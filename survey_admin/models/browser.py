"""
Browser Models - Session, query and navigation state for the admin data browser
"""

from enum import Enum
from typing import Optional, Tuple
from pydantic import BaseModel, Field, validator
import math
import uuid

from .survey import SurveyRecord


PAGE_SIZE_OPTIONS: Tuple[int, ...] = (5, 10, 25, 50, 100)


class SessionStatus(str, Enum):
    """Authentication state of the viewer"""
    UNKNOWN = "unknown"
    VERIFYING = "verifying"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


class QueryState(BaseModel):
    """
    Committed query driving which page of records is fetched.

    Owned exclusively by the QueryController; every new value is a
    fresh immutable instance.
    """

    page: int = Field(default=1, ge=1, description="1-based page number")
    page_size: int = Field(default=10, description="Records per page")
    search_term: str = Field(default="", description="Committed search term")

    @validator("page_size")
    def validate_page_size(cls, v):
        if v not in PAGE_SIZE_OPTIONS:
            raise ValueError(f"page_size must be one of {PAGE_SIZE_OPTIONS}")
        return v

    class Config:
        frozen = True


class ResultPage(BaseModel):
    """Records and total count returned by the latest applied fetch."""

    records: Tuple[SurveyRecord, ...] = Field(default_factory=tuple)
    total: int = Field(default=0, ge=0, description="Total matching records")

    def total_pages(self, page_size: int) -> int:
        """ceil(total / page_size); 0 means no data."""
        return math.ceil(self.total / page_size)

    class Config:
        frozen = True


class MarkerKind(str, Enum):
    """Kind of entry in a page window"""
    PAGE = "page"
    ELLIPSIS = "ellipsis"


class PageMarker(BaseModel):
    """One renderable navigation marker."""

    kind: MarkerKind
    page: Optional[int] = None
    is_current: bool = False

    class Config:
        frozen = True


class RedirectCommand(BaseModel):
    """Navigation request emitted by the session gate."""

    destination: str

    class Config:
        frozen = True


class NotificationLevel(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


class Notification(BaseModel):
    """Transient, dismissible message for the viewer."""

    notification_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    level: NotificationLevel
    message: str

    class Config:
        frozen = True


class RangeSummary(BaseModel):
    """'Showing first to last of total' for the current page."""

    first: int
    last: int
    total: int

    @classmethod
    def for_page(cls, page: int, page_size: int, total: int) -> "RangeSummary":
        return cls(
            first=min((page - 1) * page_size + 1, total),
            last=min(page * page_size, total),
            total=total,
        )
