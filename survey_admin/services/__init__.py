"""Backend access, notifications and error taxonomy."""

from .errors import (  # noqa: F401
    AuthCheckFailure,
    AuthFailure,
    NetworkFailure,
    SurveyAdminError,
    ValidationFailure,
)
from .notifications import NotificationCenter  # noqa: F401
from .remote_data_source import RemoteDataSource  # noqa: F401

__all__ = [
    "AuthCheckFailure",
    "AuthFailure",
    "NetworkFailure",
    "SurveyAdminError",
    "ValidationFailure",
    "NotificationCenter",
    "RemoteDataSource",
]
