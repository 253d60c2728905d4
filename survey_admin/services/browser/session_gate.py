"""
Session Gate - Authentication state machine guarding the data browser

Status moves UNKNOWN -> VERIFYING -> AUTHENTICATED | UNAUTHENTICATED.
The protected subsystem is only constructed and mounted once the session
is known to be authenticated; an unauthenticated outcome emits exactly one
RedirectCommand towards the login destination.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Protocol, runtime_checkable

from survey_admin.config.settings import settings
from survey_admin.models.browser import RedirectCommand, SessionStatus
from survey_admin.services.errors import AuthFailure
from survey_admin.services.notifications import NotificationCenter

logger = logging.getLogger(__name__)

LOGIN_FAILED_MESSAGE = "Invalid email or password. Please try again."
LOGIN_UNAVAILABLE_MESSAGE = "Unable to reach the server. Please try again."
SESSION_EXPIRED_MESSAGE = "Session expired. Please login again."


@runtime_checkable
class AuthSource(Protocol):
    """Session operations offered by the backend."""

    async def check_auth(self) -> bool:  # pragma: no cover - interface
        ...

    async def login(self, email: str, password: str) -> Dict[str, Any]:  # pragma: no cover - interface
        ...

    async def logout(self) -> Dict[str, Any]:  # pragma: no cover - interface
        ...


class Mountable(Protocol):
    """Protected subsystem lifecycle."""

    def mount(self) -> Any:  # pragma: no cover - interface
        ...

    def unmount(self) -> None:  # pragma: no cover - interface
        ...


class GateViewKind(str, Enum):
    WAITING = "waiting"
    REDIRECT = "redirect"
    CONTENT = "content"


@dataclass
class GateView:
    """What the gate renders for its current status."""

    kind: GateViewKind
    redirect: Optional[RedirectCommand] = None
    content: Any = None


RedirectListener = Callable[[RedirectCommand], None]


class SessionGate:
    """Decides whether the viewer may see the protected subsystem."""

    def __init__(
        self,
        auth_source: AuthSource,
        protected_factory: Callable[[], Mountable],
        notifications: Optional[NotificationCenter] = None,
        login_route: Optional[str] = None,
    ):
        self.auth_source = auth_source
        self.protected_factory = protected_factory
        self.notifications = notifications or NotificationCenter()
        self.login_route = login_route or settings.LOGIN_ROUTE

        self._status = SessionStatus.UNKNOWN
        self._mounted = True
        self._check_task: Optional[asyncio.Task] = None
        self._content: Optional[Mountable] = None
        self._redirect: Optional[RedirectCommand] = None
        self._listeners: List[RedirectListener] = []

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def content(self) -> Optional[Mountable]:
        return self._content

    def subscribe(self, listener: RedirectListener) -> Callable[[], None]:
        """Register a redirect listener; returns an unsubscribe callable."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def render(self) -> GateView:
        if self._status is SessionStatus.AUTHENTICATED:
            return GateView(kind=GateViewKind.CONTENT, content=self._content)
        if self._status is SessionStatus.UNAUTHENTICATED:
            return GateView(kind=GateViewKind.REDIRECT, redirect=self._redirect)
        return GateView(kind=GateViewKind.WAITING)

    # ------------------------------------------------------------------
    # Session check
    # ------------------------------------------------------------------

    async def check_session(self) -> SessionStatus:
        """
        Verify the ambient session once per gate.

        Concurrent and repeated calls share the same in-flight check. Never
        raises; failures resolve to UNAUTHENTICATED.
        """
        if self._check_task is None:
            if self._status is not SessionStatus.UNKNOWN:
                return self._status
            self._status = SessionStatus.VERIFYING
            self._check_task = asyncio.create_task(self._run_check())
        if not self._check_task.done():
            # wait() does not propagate the task's cancellation on unmount
            await asyncio.wait({self._check_task})
        return self._status

    async def _run_check(self) -> None:
        try:
            authenticated = bool(await self.auth_source.check_auth())
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"Auth check failed: {e}")
            authenticated = False

        if not self._mounted:
            logger.debug("Discarding auth check result for unmounted gate")
            return
        if self._status is not SessionStatus.VERIFYING:
            logger.debug(f"Discarding auth check result; status already {self._status.value}")
            return

        if authenticated:
            self._authenticate()
        else:
            self._deauthenticate()

    def expire(self) -> None:
        """
        Drop an authenticated session the backend has stopped honouring.

        Called by the protected subsystem when a request is refused with
        401/403; unmounts it and emits the login redirect.
        """
        if not self._mounted or self._status is not SessionStatus.AUTHENTICATED:
            return
        logger.warning("Backend rejected the session; treating it as expired")
        self.notifications.error(SESSION_EXPIRED_MESSAGE)
        self._deauthenticate()

    def unmount(self) -> None:
        """Tear down the gate; an in-flight check result is discarded."""
        self._mounted = False
        if self._check_task is not None and not self._check_task.done():
            self._check_task.cancel()
        self._unmount_content()

    # ------------------------------------------------------------------
    # Login / logout
    # ------------------------------------------------------------------

    async def login(self, email: str, password: str) -> Optional[str]:
        """
        Log in with admin credentials.

        Returns:
            None on success, otherwise a field-level error message
        """
        try:
            await self.auth_source.login(email, password)
        except AuthFailure as e:
            logger.warning(f"Login rejected: {e}")
            return LOGIN_FAILED_MESSAGE
        except Exception as e:
            logger.error(f"Login error: {e}")
            return LOGIN_UNAVAILABLE_MESSAGE

        if not self._mounted:
            return None
        if self._status is not SessionStatus.AUTHENTICATED:
            self._authenticate()
        self.notifications.success("Login successful!")
        return None

    async def logout(self) -> None:
        """Force UNAUTHENTICATED now, then invalidate the remote session."""
        if self._status is not SessionStatus.UNAUTHENTICATED:
            self._deauthenticate()

        try:
            await self.auth_source.logout()
            self.notifications.success("Logged out successfully")
        except Exception as e:
            logger.error(f"Logout error: {e}")
            self.notifications.error("Error logging out")

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _authenticate(self) -> None:
        self._status = SessionStatus.AUTHENTICATED
        self._redirect = None
        if self._content is None:
            self._content = self.protected_factory()
            self._content.mount()
        logger.info("Session authenticated")

    def _deauthenticate(self) -> None:
        self._status = SessionStatus.UNAUTHENTICATED
        self._unmount_content()
        self._redirect = RedirectCommand(destination=self.login_route)
        logger.info(f"Session unauthenticated; redirecting to {self.login_route}")
        for listener in list(self._listeners):
            try:
                listener(self._redirect)
            except Exception:
                logger.exception("Redirect listener failed")

    def _unmount_content(self) -> None:
        if self._content is not None:
            self._content.unmount()
            self._content = None


__all__ = [
    "AuthSource",
    "GateView",
    "GateViewKind",
    "LOGIN_FAILED_MESSAGE",
    "LOGIN_UNAVAILABLE_MESSAGE",
    "SESSION_EXPIRED_MESSAGE",
    "SessionGate",
]
