"""Error taxonomy for the survey admin console."""


class SurveyAdminError(Exception):
    """Base class for console errors."""


class AuthCheckFailure(SurveyAdminError):
    """Raised when the session check cannot be completed."""


class AuthFailure(SurveyAdminError):
    """Raised when the backend rejects login credentials."""


class NetworkFailure(SurveyAdminError):
    """Raised on transport-level or unexpected response errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_unauthorized(self) -> bool:
        """True when the backend refused the ambient session."""
        return self.status_code in (401, 403)


class ValidationFailure(SurveyAdminError, ValueError):
    """Raised when local input is rejected before any network call."""


__all__ = [
    "SurveyAdminError",
    "AuthCheckFailure",
    "AuthFailure",
    "NetworkFailure",
    "ValidationFailure",
]
