"""Transient notifications shown to the console viewer."""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque, List

from survey_admin.models.browser import Notification, NotificationLevel

logger = logging.getLogger(__name__)


class NotificationCenter:
    """Bounded, in-memory queue of dismissible notifications."""

    def __init__(self, max_items: int = 20) -> None:
        self._items: Deque[Notification] = deque(maxlen=max_items)

    def push(self, level: NotificationLevel, message: str) -> Notification:
        notification = Notification(level=level, message=message)
        self._items.append(notification)
        logger.debug("Notification [%s]: %s", level.value, message)
        return notification

    def info(self, message: str) -> Notification:
        return self.push(NotificationLevel.INFO, message)

    def success(self, message: str) -> Notification:
        return self.push(NotificationLevel.SUCCESS, message)

    def error(self, message: str) -> Notification:
        return self.push(NotificationLevel.ERROR, message)

    def dismiss(self, notification_id: str) -> bool:
        for item in self._items:
            if item.notification_id == notification_id:
                self._items.remove(item)
                return True
        return False

    def active(self) -> List[Notification]:
        return list(self._items)

    def clear(self) -> None:
        self._items.clear()


__all__ = ["NotificationCenter"]
