import sys
from collections import OrderedDict
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT))

from survey_admin.api import state  # noqa: E402
from survey_admin.config.settings import settings  # noqa: E402
from survey_admin.services.browser.console import AdminConsole  # noqa: E402


class ClosingBackend:
    def __init__(self):
        self.closed = 0

    async def check_auth(self) -> bool:
        return False

    async def aclose(self):
        self.closed += 1


@pytest.fixture
def backend(monkeypatch):
    backend = ClosingBackend()
    monkeypatch.setattr(state, "_consoles", OrderedDict())
    monkeypatch.setattr(state, "_console_factory", lambda: AdminConsole(data_source=backend))
    monkeypatch.setattr(settings, "MAX_SESSIONS", 2)
    return backend


@pytest.mark.asyncio
async def test_sessions_get_distinct_consoles(backend):
    first_token, first = await state.open_console()
    second_token, second = await state.open_console()

    assert first_token != second_token
    assert first is not second
    assert list(state._consoles) == [first_token, second_token]


@pytest.mark.asyncio
async def test_least_recently_used_session_is_evicted(backend):
    oldest, _ = await state.open_console()
    kept, _ = await state.open_console()

    newest, _ = await state.open_console()

    assert oldest not in state._consoles
    assert list(state._consoles) == [kept, newest]
    assert backend.closed == 1


@pytest.mark.asyncio
async def test_discard_closes_console(backend):
    token, _ = await state.open_console()

    await state.discard_console(token)
    await state.discard_console(token)

    assert token not in state._consoles
    assert backend.closed == 1
