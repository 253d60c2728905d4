import asyncio
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT))

from survey_admin.models.browser import NotificationLevel, ResultPage  # noqa: E402
from survey_admin.models.survey import SurveyRecord  # noqa: E402
from survey_admin.services.browser.query_controller import (  # noqa: E402
    LOAD_FAILED_MESSAGE,
    QueryController,
)
from survey_admin.services.errors import NetworkFailure, ValidationFailure  # noqa: E402


def make_record(record_id: str, name: str) -> SurveyRecord:
    return SurveyRecord(
        id=record_id,
        name=name,
        email=f"{record_id}@example.com",
        created_at=datetime(2025, 5, 1, 9, 30, tzinfo=timezone.utc),
    )


class ScriptedSource:
    """Record source whose responses can be held back per search term."""

    def __init__(self, total: int = 42):
        self.total = total
        self.label = "data"
        self.calls = []
        self.holds = {}
        self.fail = False
        self.fail_status = None

    async def list_records(self, page: int, page_size: int, search: str = "") -> ResultPage:
        self.calls.append((page, page_size, search))
        hold = self.holds.get(search)
        if hold is not None:
            await hold.wait()
        if self.fail:
            raise NetworkFailure("connection reset", self.fail_status)
        prefix = search or self.label
        records = tuple(make_record(f"{prefix}-{page}-{i}", f"{prefix} {i}") for i in range(3))
        return ResultPage(records=records, total=self.total)


async def mounted_controller(source: ScriptedSource) -> QueryController:
    controller = QueryController(source, page_size=10)
    assert await controller.mount() is True
    return controller


@pytest.mark.asyncio
async def test_mount_issues_initial_fetch():
    source = ScriptedSource(total=42)
    controller = await mounted_controller(source)

    assert source.calls == [(1, 10, "")]
    assert controller.total == 42
    assert controller.total_pages == 5
    assert len(controller.records) == 3
    assert controller.applied_sequence == 1


@pytest.mark.asyncio
async def test_out_of_range_pages_are_noops():
    source = ScriptedSource(total=42)
    controller = await mounted_controller(source)

    assert controller.set_page(0) is None
    assert controller.set_page(controller.total_pages + 1) is None
    assert controller.set_page(1) is None

    assert source.calls == [(1, 10, "")]
    assert controller.page == 1


@pytest.mark.asyncio
async def test_set_page_fetches_once():
    source = ScriptedSource(total=42)
    controller = await mounted_controller(source)

    assert await controller.set_page(3) is True
    assert source.calls[-1] == (3, 10, "")
    assert len(source.calls) == 2
    assert controller.page == 3


@pytest.mark.asyncio
async def test_set_page_size_resets_page_and_fetches_once():
    source = ScriptedSource(total=120)
    controller = await mounted_controller(source)
    await controller.set_page(4)
    calls_before = len(source.calls)

    await controller.set_page_size(25)

    assert controller.page == 1
    assert controller.page_size == 25
    assert len(source.calls) == calls_before + 1
    assert source.calls[-1] == (1, 25, "")
    assert controller.total_pages == 5


@pytest.mark.asyncio
async def test_disallowed_page_size_rejected_without_fetch():
    source = ScriptedSource()
    controller = await mounted_controller(source)
    await controller.set_page(2)
    state_before = controller.state

    with pytest.raises(ValidationFailure):
        controller.set_page_size(7)

    assert controller.state == state_before
    assert len(source.calls) == 2


@pytest.mark.asyncio
async def test_search_commits_term_and_resets_page():
    source = ScriptedSource()
    controller = await mounted_controller(source)
    await controller.set_page(3)

    await controller.set_search_term("  asha ")

    assert controller.search_term == "asha"
    assert controller.page == 1
    assert source.calls[-1] == (1, 10, "asha")


@pytest.mark.asyncio
async def test_stale_response_is_discarded():
    source = ScriptedSource()
    controller = await mounted_controller(source)
    source.holds["alpha"] = asyncio.Event()

    first = controller.set_search_term("alpha")
    second = controller.set_search_term("beta")

    assert await second is True
    source.holds["alpha"].set()
    assert await first is False

    assert controller.search_term == "beta"
    assert all(record.name.startswith("beta") for record in controller.records)
    assert controller.applied_sequence == 3


@pytest.mark.asyncio
async def test_superseded_response_is_not_applied_even_if_first():
    source = ScriptedSource()
    controller = await mounted_controller(source)
    source.holds["beta"] = asyncio.Event()

    first = controller.set_search_term("alpha")
    second = controller.set_search_term("beta")

    assert await first is False
    assert all(record.name.startswith("data") for record in controller.records)
    assert controller.is_loading

    source.holds["beta"].set()
    assert await second is True
    assert all(record.name.startswith("beta") for record in controller.records)
    assert not controller.is_loading


@pytest.mark.asyncio
async def test_fetch_failure_keeps_previous_page_and_notifies():
    source = ScriptedSource()
    controller = await mounted_controller(source)
    previous = controller.records
    controller.notifications.clear()

    source.fail = True
    assert await controller.set_page(2) is False

    assert controller.records == previous
    errors = [n for n in controller.notifications.active() if n.level is NotificationLevel.ERROR]
    assert [n.message for n in errors] == [LOAD_FAILED_MESSAGE]
    # no automatic retry
    assert len(source.calls) == 2


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [401, 403])
async def test_unauthorized_fetch_hands_off_instead_of_notifying(status_code):
    source = ScriptedSource()
    expired = []

    def on_unauthorized():
        # the session gate unmounts the browser in response
        expired.append(status_code)
        controller.unmount()

    controller = QueryController(source, page_size=10, on_unauthorized=on_unauthorized)
    assert await controller.mount() is True
    controller.notifications.clear()

    source.fail = True
    source.fail_status = status_code
    task = controller.refresh()

    assert await task is False
    assert expired == [status_code]
    messages = [n.message for n in controller.notifications.active()]
    assert LOAD_FAILED_MESSAGE not in messages
    assert controller.refresh() is None


@pytest.mark.asyncio
async def test_refresh_refetches_same_state():
    source = ScriptedSource()
    controller = await mounted_controller(source)
    await controller.set_page(2)
    state_before = controller.state

    await controller.refresh()

    assert controller.state == state_before
    assert source.calls[-2:] == [(2, 10, ""), (2, 10, "")]
    assert controller.notifications.active()[-1].message == "Data refreshed"


@pytest.mark.asyncio
async def test_page_clamped_when_total_shrinks():
    source = ScriptedSource(total=42)
    controller = await mounted_controller(source)
    await controller.set_page(5)

    source.total = 15
    await controller.refresh()
    await controller.settle()

    assert controller.page == 2
    assert source.calls[-1] == (2, 10, "")


@pytest.mark.asyncio
async def test_unmounted_controller_ignores_mutations():
    source = ScriptedSource()
    controller = QueryController(source)

    assert controller.set_search_term("asha") is None
    assert controller.refresh() is None
    assert source.calls == []
    assert controller.search_term == ""


@pytest.mark.asyncio
async def test_unmount_cancels_outstanding_fetch():
    source = ScriptedSource()
    controller = await mounted_controller(source)
    previous = controller.records
    source.holds["slow"] = asyncio.Event()

    task = controller.set_search_term("slow")
    await asyncio.sleep(0)
    controller.unmount()

    with pytest.raises(asyncio.CancelledError):
        await task
    assert controller.records == previous


@pytest.mark.asyncio
async def test_range_summary():
    source = ScriptedSource(total=42)
    controller = await mounted_controller(source)
    await controller.set_page(5)

    summary = controller.range_summary
    assert (summary.first, summary.last, summary.total) == (41, 42, 42)

    source.total = 0
    await controller.refresh()
    summary = controller.range_summary
    assert (summary.first, summary.last, summary.total) == (0, 0, 0)
    assert controller.total_pages == 0
