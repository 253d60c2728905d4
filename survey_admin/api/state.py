"""
Per-viewer admin consoles used by the route modules.

Each viewer that logs in gets its own AdminConsole (and with it its own
backend client and cookie jar), keyed by an opaque token carried in the
console session cookie. Viewers without a known token have no console and
are treated as unauthenticated.
"""

from collections import OrderedDict
from typing import Callable, Optional, Tuple
import logging
import secrets

from fastapi import Request, Response

from survey_admin.config.settings import settings
from survey_admin.services.browser.console import AdminConsole
from survey_admin.services.remote_data_source import RemoteDataSource

logger = logging.getLogger(__name__)

# Swapped out in tests
_console_factory: Callable[[], AdminConsole] = AdminConsole

_consoles: "OrderedDict[str, AdminConsole]" = OrderedDict()

# Lazy initialization so importing the app does not open an HTTP client
_public_source: Optional[RemoteDataSource] = None


def get_console(request: Request) -> Optional[AdminConsole]:
    """Return the console bound to the viewer's session cookie, if any."""
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        return None
    console = _consoles.get(token)
    if console is not None:
        _consoles.move_to_end(token)
    return console


async def open_console() -> Tuple[str, AdminConsole]:
    """Create and register a console for a new viewer session."""
    while len(_consoles) >= settings.MAX_SESSIONS:
        _, evicted = _consoles.popitem(last=False)
        logger.info("Evicting least recently used viewer session")
        await evicted.aclose()

    token = secrets.token_urlsafe(32)
    console = _console_factory()
    _consoles[token] = console
    logger.info(f"Opened viewer session ({len(_consoles)} active)")
    return token, console


async def discard_console(token: str) -> None:
    """Unregister and close the console behind a session token."""
    console = _consoles.pop(token, None)
    if console is not None:
        await console.aclose()
        logger.info(f"Closed viewer session ({len(_consoles)} active)")


async def close_console(request: Request) -> None:
    """Drop the console bound to the viewer's session cookie."""
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if token:
        await discard_console(token)


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        token,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(settings.SESSION_COOKIE_NAME)


def get_public_source() -> RemoteDataSource:
    """Get or create the backend client used for anonymous survey submissions."""
    global _public_source
    if _public_source is None:
        _public_source = RemoteDataSource()
    return _public_source


async def close_all() -> None:
    """Tear down every viewer console and the public backend client."""
    global _public_source
    while _consoles:
        _, console = _consoles.popitem()
        await console.aclose()
    if _public_source is not None:
        await _public_source.aclose()
        _public_source = None
    logger.info("Admin consoles closed")
