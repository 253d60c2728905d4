"""Holds the single survey record currently opened for inspection."""

from __future__ import annotations

from typing import Optional

from survey_admin.models.survey import SurveyRecord


class DetailSelector:
    """At most one inspected record, decoupled from the live result set."""

    def __init__(self) -> None:
        self._selection: Optional[SurveyRecord] = None

    @property
    def selection(self) -> Optional[SurveyRecord]:
        return self._selection

    def select(self, record: SurveyRecord) -> SurveyRecord:
        """Store a snapshot of ``record``, replacing any current selection."""
        self._selection = record.model_copy(deep=True)
        return self._selection

    def clear(self) -> None:
        self._selection = None


__all__ = ["DetailSelector"]
