from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..filters.model import DateRange, Predicate
from .model import IncidentPhoto, TheftIncident


class IncidentRepository(Protocol):
    def list_filtered(self, predicate: Predicate) -> Sequence[TheftIncident]:
        """Open first, then Pending, then the rest; newest incident date first."""

        raise NotImplementedError

    def get_incident(self, *, incident_id: int) -> Optional[TheftIncident]:
        raise NotImplementedError

    def list_photos(self, *, incident_id: int) -> Sequence[IncidentPhoto]:
        raise NotImplementedError

    def totals(self) -> dict:
        """Counts per status plus stolen/collected sums over every incident."""

        raise NotImplementedError

    def list_stores(self) -> Sequence[str]:
        raise NotImplementedError

    def count_summary(self, *, today: DateRange, month: DateRange, pending_statuses: Sequence[str]) -> dict:
        """Landing-card counters: pending, today, month."""

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
