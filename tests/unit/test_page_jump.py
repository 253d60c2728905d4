import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT))

from survey_admin.models.browser import NotificationLevel, ResultPage  # noqa: E402
from survey_admin.models.survey import SurveyRecord  # noqa: E402
from survey_admin.services.browser.page_jump import PageJump  # noqa: E402
from survey_admin.services.browser.query_controller import QueryController  # noqa: E402
from survey_admin.services.errors import ValidationFailure  # noqa: E402


class CountingSource:
    def __init__(self, total: int):
        self.total = total
        self.calls = []

    async def list_records(self, page: int, page_size: int, search: str = "") -> ResultPage:
        self.calls.append(page)
        record = SurveyRecord(
            id=f"r{page}",
            name="Respondent",
            email="r@example.com",
            created_at=datetime(2025, 5, 1, tzinfo=timezone.utc),
        )
        return ResultPage(records=(record,), total=self.total)


async def make_jump(total: int = 95):
    source = CountingSource(total)
    controller = QueryController(source, page_size=10)
    await controller.mount()
    return source, controller, PageJump(controller)


@pytest.mark.parametrize("raw", ["abc", "", "0", "-3", "11", "2.5"])
@pytest.mark.asyncio
async def test_invalid_input_rejected_without_fetch(raw):
    source, controller, jump = await make_jump()
    jump.toggle()

    with pytest.raises(ValidationFailure) as excinfo:
        jump.submit(raw)

    assert "between 1 and 10" in str(excinfo.value)
    assert source.calls == [1]
    assert controller.page == 1
    assert jump.visible
    last = controller.notifications.active()[-1]
    assert last.level is NotificationLevel.ERROR


@pytest.mark.asyncio
async def test_valid_input_sets_page_and_hides_input():
    source, controller, jump = await make_jump()
    assert jump.toggle() is True

    task = jump.submit(" 7 ")
    assert await task is True

    assert controller.page == 7
    assert source.calls == [1, 7]
    assert jump.visible is False
    assert jump.value == ""


@pytest.mark.asyncio
async def test_toggle_flips_visibility():
    _, _, jump = await make_jump()
    assert jump.toggle() is True
    assert jump.toggle() is False
