"""
Survey Admin Models
Data models for survey records, query state and session tracking
"""

# Survey records
from .survey import SurveyRecord, SurveySubmission

# Browser state
from .browser import (
    PAGE_SIZE_OPTIONS,
    MarkerKind,
    Notification,
    NotificationLevel,
    PageMarker,
    QueryState,
    RangeSummary,
    RedirectCommand,
    ResultPage,
    SessionStatus,
)

__all__ = [
    # Survey
    "SurveyRecord",
    "SurveySubmission",
    # Browser
    "PAGE_SIZE_OPTIONS",
    "MarkerKind",
    "Notification",
    "NotificationLevel",
    "PageMarker",
    "QueryState",
    "RangeSummary",
    "RedirectCommand",
    "ResultPage",
    "SessionStatus",
]
