from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_WEEK_START
from ..core.enums import Period
from ..core.exceptions import NotFoundError
from ..filters.periods import resolve_period
from .model import FeedbackCriteria, WeeklyFeedback
from .repository import FeedbackRepository


class FeedbackDashboardService:
    def __init__(self, feedback: FeedbackRepository, *, week_start: int = DEFAULT_WEEK_START):
        self._feedback = feedback
        self._week_start = int(week_start)

    def build_dashboard(self, criteria: FeedbackCriteria) -> dict:
        rows = self._feedback.list_filtered(criteria.to_predicate())
        return {
            "feedback": [r.to_dict() for r in rows],
            "averages": self._feedback.averages(),
            "stores": list(self._feedback.list_stores()),
            "weeks": list(self._feedback.list_weeks()),
            "filters": {
                "store": criteria.store_id,
                "week": criteria.week_start,
                "rating": criteria.rating,
            },
        }

    def landing_stats(self, *, now: Optional[datetime] = None) -> dict:
        now = now or now_local()
        return self._feedback.count_summary(
            today=resolve_period(Period.TODAY, now=now),
            week=resolve_period(Period.THIS_WEEK, now=now, week_start=self._week_start),
            month=resolve_period(Period.THIS_MONTH, now=now),
        )

    def get_feedback(self, feedback_id: int) -> WeeklyFeedback:
        feedback = self._feedback.get_feedback(feedback_id=int(feedback_id))
        if not feedback:
            raise NotFoundError("Feedback not found")
        return feedback
