"""
Admin Console - Composes the session gate and the data browser

The gate owns the session; once authenticated it builds a DataBrowser
(query controller, detail selector, page jump) which the HTTP layer
renders into a DashboardView.
"""

import logging
from typing import Callable, Optional, Tuple

from survey_admin.config.settings import settings
from survey_admin.models.browser import PageMarker
from survey_admin.models.dashboard import DashboardView, PageJumpState
from survey_admin.models.survey import SurveyRecord
from survey_admin.services.browser.detail_selector import DetailSelector
from survey_admin.services.browser.page_jump import PageJump
from survey_admin.services.browser.page_window import compute_window
from survey_admin.services.browser.query_controller import QueryController
from survey_admin.services.browser.session_gate import GateView, SessionGate
from survey_admin.services.errors import NetworkFailure
from survey_admin.services.notifications import NotificationCenter
from survey_admin.services.remote_data_source import RemoteDataSource

logger = logging.getLogger(__name__)


class DataBrowser:
    """Protected subsystem mounted by the session gate."""

    def __init__(
        self,
        data_source: RemoteDataSource,
        notifications: NotificationCenter,
        window_size: Optional[int] = None,
        page_size: Optional[int] = None,
        on_session_expired: Optional[Callable[[], None]] = None,
    ):
        self.data_source = data_source
        self.notifications = notifications
        self.window_size = window_size or settings.PAGE_WINDOW_SIZE
        self.on_session_expired = on_session_expired
        self.controller = QueryController(
            data_source, notifications, page_size=page_size, on_unauthorized=on_session_expired
        )
        self.selector = DetailSelector()
        self.page_jump = PageJump(self.controller, notifications)

    def mount(self):
        return self.controller.mount()

    def unmount(self) -> None:
        self.controller.unmount()

    @property
    def window(self) -> Tuple[PageMarker, ...]:
        return compute_window(self.controller.page, self.controller.total_pages, self.window_size)

    async def select_record(self, record_id: str) -> SurveyRecord:
        """Select a record from the current page, fetching it by id if absent."""
        for record in self.controller.records:
            if record.id == record_id:
                return self.selector.select(record)
        try:
            record = await self.data_source.get_record_by_id(record_id)
        except NetworkFailure as e:
            if e.is_unauthorized and self.on_session_expired is not None:
                self.on_session_expired()
            raise
        return self.selector.select(record)


class AdminConsole:
    """Admin console for one viewer session over the survey backend."""

    def __init__(
        self,
        data_source: Optional[RemoteDataSource] = None,
        notifications: Optional[NotificationCenter] = None,
        window_size: Optional[int] = None,
        login_route: Optional[str] = None,
    ):
        self.data_source = data_source or RemoteDataSource()
        self.notifications = notifications or NotificationCenter()
        self.window_size = window_size
        self.gate = SessionGate(
            self.data_source,
            self._create_browser,
            notifications=self.notifications,
            login_route=login_route,
        )

    def _create_browser(self) -> DataBrowser:
        logger.info("Mounting data browser")
        return DataBrowser(
            self.data_source,
            self.notifications,
            window_size=self.window_size,
            on_session_expired=self.gate.expire,
        )

    @property
    def browser(self) -> Optional[DataBrowser]:
        return self.gate.content

    async def open_dashboard(self) -> GateView:
        """Resolve the session and let pending fetches settle."""
        await self.gate.check_session()
        if self.browser is not None:
            await self.browser.controller.settle()
        return self.gate.render()

    def dashboard_view(self) -> DashboardView:
        browser = self.browser
        if browser is None:
            raise RuntimeError("Dashboard is not mounted")

        controller = browser.controller
        return DashboardView(
            status=self.gate.status,
            records=list(controller.records),
            total=controller.total,
            page=controller.page,
            total_pages=controller.total_pages,
            page_size=controller.page_size,
            search_term=controller.search_term,
            is_loading=controller.is_loading,
            window=list(browser.window),
            range=controller.range_summary,
            selection=browser.selector.selection,
            page_jump=PageJumpState(visible=browser.page_jump.visible, value=browser.page_jump.value),
            notifications=self.notifications.active(),
        )

    async def aclose(self) -> None:
        self.gate.unmount()
        await self.data_source.aclose()


__all__ = ["AdminConsole", "DataBrowser"]
