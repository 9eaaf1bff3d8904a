from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal

import pytest

from src.ops_dashboards.ops_dashboards.common.actor import UserRef
from src.ops_dashboards.ops_dashboards.core.exceptions import NotFoundError, ValidationError
from src.ops_dashboards.ops_dashboards.filters.builder import matches
from src.ops_dashboards.ops_dashboards.filters.model import FilterCriteria
from src.ops_dashboards.ops_dashboards.incidents.model import IncidentPhoto, TheftIncident
from src.ops_dashboards.ops_dashboards.incidents.service import TheftReviewService

NOW = datetime(2026, 2, 17, 15, 0)

STATUS_RANK = {"Open": 0, "Pending": 1}


class FakeIncidentRepo:
    def __init__(self, incidents, photos=()):
        self._incidents = {i.incident_id: i for i in incidents}
        self._photos = list(photos)
        self.last_predicate = None
        self.summary_args = None
        self.writes = []

    def list_filtered(self, predicate):
        self.last_predicate = predicate
        rows = [i for i in self._incidents.values() if matches(i, predicate)]
        rows.sort(key=lambda i: (i.incident_date, i.incident_id), reverse=True)
        return sorted(rows, key=lambda i: STATUS_RANK.get(i.status, 2))

    def get_incident(self, *, incident_id):
        return self._incidents.get(int(incident_id))

    def list_photos(self, *, incident_id):
        return [p for p in self._photos if p.incident_id == incident_id]

    def totals(self):
        return {"total": len(self._incidents), "totalStolenValue": Decimal("0")}

    def list_stores(self):
        return sorted({i.store for i in self._incidents.values()})

    def count_summary(self, *, today, month, pending_statuses):
        self.summary_args = (today, month, list(pending_statuses))
        return {"pending": 0, "today": 0, "month": 0}

    def write_status(self, *, request_id, status, approver_slots, actor_id, at, review_notes=None):
        self.writes.append((request_id, status, actor_id, review_notes))
        self._incidents[request_id] = replace(
            self._incidents[request_id],
            status=status,
            review_notes=review_notes,
            reviewed_by=actor_id,
            reviewed_at=at,
        )


def incident(iid, status, day, store="Main"):
    return TheftIncident(
        incident_id=iid,
        store=store,
        incident_date=day,
        status=status,
        stolen_value=Decimal("10.50"),
    )


def sample_repo():
    return FakeIncidentRepo(
        [
            incident(1, "Open", date(2026, 2, 1)),
            incident(2, "Closed", date(2026, 2, 10)),
            incident(3, "Pending", date(2026, 2, 12), store="Annex"),
            incident(4, "Open", date(2026, 2, 14)),
        ],
        photos=[IncidentPhoto(photo_id=9, incident_id=1, file_name="a.jpg")],
    )


def test_dashboard_defaults_to_open_incidents():
    svc = TheftReviewService(sample_repo())
    data = svc.build_dashboard(FilterCriteria(), now=NOW)

    assert [i["id"] for i in data["incidents"]] == [4, 1]
    assert data["filters"]["status"] == "Open"
    assert data["stores"] == ["Annex", "Main"]


def test_status_all_lists_everything_by_priority():
    svc = TheftReviewService(sample_repo())
    data = svc.build_dashboard(FilterCriteria(status="all"), now=NOW)

    assert [i["id"] for i in data["incidents"]] == [4, 1, 3, 2]
    assert data["incidents"][0]["reference"] == "TI-4"


def test_date_filters_are_inclusive_without_a_period():
    repo = sample_repo()
    svc = TheftReviewService(repo)
    data = svc.build_dashboard(
        FilterCriteria(status="all", from_date=date(2026, 2, 10), to_date=date(2026, 2, 12)),
        now=NOW,
    )
    assert [i["id"] for i in data["incidents"]] == [3, 2]


def test_landing_stats_use_rolling_month():
    repo = sample_repo()
    TheftReviewService(repo).landing_stats(now=NOW)

    today, month, pending = repo.summary_args
    assert today.start == date(2026, 2, 17)
    assert (month.start, month.end) == (date(2026, 1, 17), date(2026, 2, 18))
    assert pending == ["Open", "Pending"]


def test_incident_detail_includes_photos():
    detail = TheftReviewService(sample_repo()).incident_detail(1)
    assert detail["incident"]["id"] == 1
    assert [p["file_name"] for p in detail["photos"]] == ["a.jpg"]


def test_missing_incident_is_not_found():
    with pytest.raises(NotFoundError):
        TheftReviewService(sample_repo()).incident_detail(404)


def test_review_records_notes_and_reviewer():
    repo = sample_repo()
    svc = TheftReviewService(repo)

    updated = svc.update_status(
        incident_id=1,
        status="Reviewed",
        review_notes="  Police report filed\n",
        actor=UserRef(5),
        now=NOW,
    )

    assert updated.status == "Reviewed"
    assert repo.writes == [(1, "Reviewed", 5, "  Police report filed\n")]
    assert repo.get_incident(incident_id=1).reviewed_at == NOW


def test_theft_incidents_cannot_be_reopened_via_the_gate():
    with pytest.raises(ValidationError):
        TheftReviewService(sample_repo()).update_status(incident_id=1, status="Open", actor=UserRef(5), now=NOW)


def test_blank_notes_are_stored_as_null():
    repo = sample_repo()
    TheftReviewService(repo).update_status(incident_id=1, status="Closed", review_notes="", actor=UserRef(5), now=NOW)
    assert repo.writes == [(1, "Closed", 5, None)]


def test_non_text_notes_are_rejected():
    repo = sample_repo()
    with pytest.raises(ValidationError):
        TheftReviewService(repo).update_status(
            incident_id=1, status="Reviewed", review_notes={"text": "x"}, actor=UserRef(5), now=NOW
        )
    assert repo.writes == []
