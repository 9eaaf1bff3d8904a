from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..filters.model import DateRange, Predicate
from .model import WeeklyFeedback


class FeedbackRepository(Protocol):
    def list_filtered(self, predicate: Predicate) -> Sequence[WeeklyFeedback]:
        raise NotImplementedError

    def get_feedback(self, *, feedback_id: int) -> Optional[WeeklyFeedback]:
        raise NotImplementedError

    def averages(self) -> dict:
        """avgOverall, avgCleanliness, avgPunctuality, avgCommunication over all feedback."""

        raise NotImplementedError

    def list_stores(self) -> Sequence[dict]:
        raise NotImplementedError

    def list_weeks(self) -> Sequence[dict]:
        raise NotImplementedError

    def count_summary(self, *, today: DateRange, week: DateRange, month: DateRange) -> dict:
        raise NotImplementedError
