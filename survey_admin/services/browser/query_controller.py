"""
Query Controller - Committed query state and sequenced record fetching

Owns page number, page size and committed search term for the admin data
browser. Every committed change issues exactly one listing fetch tagged
with a monotonically increasing sequence number; a completed response is
applied only if no later fetch has been issued since, so the displayed
page always matches the most recently committed query.
"""

import asyncio
import logging
from typing import Callable, Optional, Protocol, Set, Tuple, runtime_checkable

from survey_admin.config.settings import settings
from survey_admin.models.browser import PAGE_SIZE_OPTIONS, QueryState, RangeSummary, ResultPage
from survey_admin.models.survey import SurveyRecord
from survey_admin.services.errors import NetworkFailure, ValidationFailure
from survey_admin.services.notifications import NotificationCenter

logger = logging.getLogger(__name__)

LOAD_FAILED_MESSAGE = "Failed to load survey data"


@runtime_checkable
class RecordSource(Protocol):
    """Anything that can list survey records page by page."""

    async def list_records(self, page: int, page_size: int, search: str = "") -> ResultPage:  # pragma: no cover - interface
        """Return one page of records and the total match count."""


class QueryController:
    """
    Drives which page of survey records is displayed.

    Mutators update state synchronously and return the asyncio.Task of
    the fetch they issued, or None when the call was a no-op.
    """

    def __init__(
        self,
        data_source: RecordSource,
        notifications: Optional[NotificationCenter] = None,
        page_size: Optional[int] = None,
        on_unauthorized: Optional[Callable[[], None]] = None,
    ):
        """
        Initialize controller.

        Args:
            data_source: Record listing backend
            notifications: Sink for transient failure/info messages
            page_size: Initial page size (default: settings.DEFAULT_PAGE_SIZE)
            on_unauthorized: Called when the backend refuses the session (401/403)
        """
        self.data_source = data_source
        self.notifications = notifications or NotificationCenter()
        self.on_unauthorized = on_unauthorized
        self._state = QueryState(page_size=page_size or settings.DEFAULT_PAGE_SIZE)
        self._result = ResultPage()
        self._issued_seq = 0
        self._applied_seq = 0
        self._tasks: Set[asyncio.Task] = set()
        self._mounted = False

    # ------------------------------------------------------------------
    # Exposed state
    # ------------------------------------------------------------------

    @property
    def state(self) -> QueryState:
        return self._state

    @property
    def page(self) -> int:
        return self._state.page

    @property
    def page_size(self) -> int:
        return self._state.page_size

    @property
    def search_term(self) -> str:
        return self._state.search_term

    @property
    def records(self) -> Tuple[SurveyRecord, ...]:
        return self._result.records

    @property
    def total(self) -> int:
        return self._result.total

    @property
    def total_pages(self) -> int:
        return self._result.total_pages(self._state.page_size)

    @property
    def is_loading(self) -> bool:
        return any(not task.done() for task in self._tasks)

    @property
    def applied_sequence(self) -> int:
        """Sequence number of the response currently displayed."""
        return self._applied_seq

    @property
    def range_summary(self) -> RangeSummary:
        return RangeSummary.for_page(self.page, self.page_size, self.total)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def mount(self) -> Optional[asyncio.Task]:
        """Start the controller and issue the initial fetch."""
        if self._mounted:
            return None
        self._mounted = True
        return self._commit(self._state)

    def unmount(self) -> None:
        """Stop the controller; pending fetches are cancelled and discarded."""
        self._mounted = False
        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None
        for task in list(self._tasks):
            # A fetch can unmount its own controller through on_unauthorized
            if task is not current:
                task.cancel()

    async def settle(self) -> None:
        """Wait until no fetch is outstanding."""
        while True:
            pending = [task for task in self._tasks if not task.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def set_page(self, page: int) -> Optional[asyncio.Task]:
        if page < 1 or page > self.total_pages or page == self._state.page:
            logger.debug(f"Ignoring page change to {page} (total pages: {self.total_pages})")
            return None
        return self._commit(self._state.model_copy(update={"page": page}))

    def set_page_size(self, page_size: int) -> Optional[asyncio.Task]:
        if page_size not in PAGE_SIZE_OPTIONS:
            raise ValidationFailure(
                f"Page size must be one of {', '.join(str(n) for n in PAGE_SIZE_OPTIONS)}"
            )
        return self._commit(self._state.model_copy(update={"page": 1, "page_size": page_size}))

    def set_search_term(self, search_term: str) -> Optional[asyncio.Task]:
        return self._commit(
            self._state.model_copy(update={"page": 1, "search_term": search_term.strip()})
        )

    def refresh(self) -> Optional[asyncio.Task]:
        task = self._commit(self._state)
        if task is not None:
            self.notifications.info("Data refreshed")
        return task

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------

    def _commit(self, state: QueryState) -> Optional[asyncio.Task]:
        if not self._mounted:
            logger.warning("Query change ignored: controller is not mounted")
            return None

        self._state = state
        self._issued_seq += 1
        task = asyncio.create_task(self._fetch(self._issued_seq, state))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _fetch(self, seq: int, state: QueryState) -> bool:
        """Run one listing fetch; returns True if its response was applied."""
        logger.info(
            f"Fetching surveys #{seq}: page={state.page} limit={state.page_size} "
            f"search={state.search_term!r}"
        )
        try:
            result = await self.data_source.list_records(state.page, state.page_size, state.search_term)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            if not self._mounted or seq != self._issued_seq:
                logger.debug(f"Ignoring failure of superseded fetch #{seq}: {e}")
                return False
            if isinstance(e, NetworkFailure) and e.is_unauthorized and self.on_unauthorized is not None:
                logger.warning(f"Fetch #{seq} refused with status {e.status_code}")
                self.on_unauthorized()
                return False
            logger.error(f"Error fetching surveys #{seq}: {e}")
            self.notifications.error(LOAD_FAILED_MESSAGE)
            return False

        if not self._mounted or seq != self._issued_seq:
            logger.debug(f"Discarding stale response #{seq} (latest issued #{self._issued_seq})")
            return False

        self._result = result
        self._applied_seq = seq

        total_pages = result.total_pages(state.page_size)
        if total_pages > 0 and self._state.page > total_pages:
            logger.info(f"Page {self._state.page} beyond last page {total_pages}; clamping")
            self._commit(self._state.model_copy(update={"page": total_pages}))
        return True


__all__ = ["LOAD_FAILED_MESSAGE", "QueryController", "RecordSource"]
