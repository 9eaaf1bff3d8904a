from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..filters.model import DateRange
from .model import ApprovalRequest


class ApprovalRepository(Protocol):
    def list_requests(self) -> Sequence[ApprovalRequest]:
        """All requests, newest first."""

        raise NotImplementedError

    def get_request(self, *, request_id: int) -> Optional[ApprovalRequest]:
        raise NotImplementedError

    def count_summary(self, *, today: DateRange, month: DateRange, pending_statuses: Sequence[str]) -> dict:
        """Landing-card counters: total, pending, today, thisMonth."""

        raise NotImplementedError

    def write_status(
        self,
        *,
        request_id: int,
        status: str,
        approver_slots: Sequence[str],
        actor_id: Optional[int],
        at: datetime,
        review_notes: Optional[str] = None,
    ) -> None:
        raise NotImplementedError

    def export_rows(self) -> Sequence[dict]:
        raise NotImplementedError
