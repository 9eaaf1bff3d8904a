from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional

from ..approvals.gate import StatusTransitionGate
from ..approvals.taxonomy import TAXONOMIES
from ..common.actor import UserRef
from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_INCIDENT_STATUS_FILTER, DEFAULT_WEEK_START
from ..core.enums import Period, RequestKind
from ..core.exceptions import NotFoundError, ValidationError
from ..filters.builder import FieldMap, build_predicate
from ..filters.model import FilterCriteria
from ..filters.periods import resolve_period, rolling_month
from .model import TheftIncident
from .repository import IncidentRepository

INCIDENT_FIELDS = FieldMap(
    fields={
        "store": "store",
        "status": "status",
        "date": "incident_date",
    },
    default_period=Period.CUSTOM,
)


class TheftReviewService:
    def __init__(
        self,
        incidents: IncidentRepository,
        *,
        gate: Optional[StatusTransitionGate] = None,
        week_start: int = DEFAULT_WEEK_START,
    ):
        self._incidents = incidents
        self._gate = gate or StatusTransitionGate(incidents)
        self._week_start = int(week_start)

    def build_dashboard(self, criteria: FilterCriteria, *, now: Optional[datetime] = None) -> dict:
        """Listing plus headline totals; an absent status filter means Open only."""
        if criteria.status is None:
            criteria = replace(criteria, status=DEFAULT_INCIDENT_STATUS_FILTER)

        predicate = build_predicate(
            criteria,
            INCIDENT_FIELDS,
            now=now or now_local(),
            week_start=self._week_start,
        )
        incidents = self._incidents.list_filtered(predicate)
        return {
            "incidents": [i.to_dict() for i in incidents],
            "stats": self._incidents.totals(),
            "stores": list(self._incidents.list_stores()),
            "filters": {
                "status": criteria.status,
                "store": criteria.store,
                "dateFrom": criteria.from_date,
                "dateTo": criteria.to_date,
            },
        }

    def landing_stats(self, *, now: Optional[datetime] = None) -> dict:
        now = now or now_local()
        return self._incidents.count_summary(
            today=resolve_period(Period.TODAY, now=now),
            month=rolling_month(now),
            pending_statuses=sorted(TAXONOMIES[RequestKind.THEFT_INCIDENT].pending_statuses),
        )

    def get_incident(self, incident_id: int) -> TheftIncident:
        incident = self._incidents.get_incident(incident_id=int(incident_id))
        if not incident:
            raise NotFoundError("Incident not found")
        return incident

    def incident_detail(self, incident_id: int) -> dict:
        incident = self.get_incident(incident_id)
        photos = self._incidents.list_photos(incident_id=incident.incident_id)
        return {"incident": incident.to_dict(), "photos": [p.to_dict() for p in photos]}

    def update_status(
        self,
        *,
        incident_id: int,
        status: str,
        actor: UserRef,
        review_notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ):
        incident = self.get_incident(incident_id)
        if review_notes is not None and not isinstance(review_notes, str):
            raise ValidationError("reviewNotes must be text")
        notes = review_notes or None
        return self._gate.apply_status(
            incident.to_request(),
            status,
            actor,
            now or now_local(),
            review_notes=notes,
        )
