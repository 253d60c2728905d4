"""Direct page-jump input for the data browser."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from survey_admin.services.browser.query_controller import QueryController
from survey_admin.services.errors import ValidationFailure
from survey_admin.services.notifications import NotificationCenter

logger = logging.getLogger(__name__)


class PageJump:
    """Validates a typed page number before handing it to the controller."""

    def __init__(self, controller: QueryController, notifications: Optional[NotificationCenter] = None) -> None:
        self.controller = controller
        self.notifications = notifications or controller.notifications
        self.visible = False
        self.value = ""

    def toggle(self) -> bool:
        """Show or hide the input; returns the new visibility."""
        self.visible = not self.visible
        return self.visible

    def submit(self, raw: str) -> Optional[asyncio.Task]:
        """
        Jump to the page typed by the viewer.

        Raises:
            ValidationFailure: input is not an integer in [1, total_pages];
                no fetch is issued
        """
        self.value = raw
        total_pages = self.controller.total_pages
        try:
            page = int(raw.strip())
        except (AttributeError, ValueError):
            page = None

        if page is None or page < 1 or page > total_pages:
            message = f"Please enter a valid page number between 1 and {total_pages}"
            logger.info(f"Rejected page jump input {raw!r}")
            self.notifications.error(message)
            raise ValidationFailure(message)

        task = self.controller.set_page(page)
        self.visible = False
        self.value = ""
        return task


__all__ = ["PageJump"]
