from datetime import datetime

import pytest

from src.ops_dashboards.ops_dashboards.approvals.gate import StatusTransitionGate
from src.ops_dashboards.ops_dashboards.approvals.model import ApprovalRequest
from src.ops_dashboards.ops_dashboards.common.actor import UserRef
from src.ops_dashboards.ops_dashboards.core.enums import RequestKind
from src.ops_dashboards.ops_dashboards.core.exceptions import GateError, ValidationError

NOW = datetime(2026, 2, 17, 15, 0)
ACTOR = UserRef(user_id=7, display_name="Reviewer")


class RecordingWriter:
    def __init__(self, fail_with=None):
        self.calls = []
        self._fail_with = fail_with

    def write_status(self, **kwargs):
        if self._fail_with:
            raise self._fail_with
        self.calls.append(kwargs)


def cleaning_request(status="Pending"):
    return ApprovalRequest(
        request_id=11,
        kind=RequestKind.EXTRA_CLEANING,
        status=status,
        approver_statuses={"area_manager": "Pending", "head_office": "Pending", "hr": "Pending"},
    )


def test_approve_sets_every_slot_and_overall_status():
    writer = RecordingWriter()
    updated = StatusTransitionGate(writer).apply_status(cleaning_request(), "Approved", ACTOR, NOW)

    assert updated.status == "Approved"
    assert updated.approver_statuses == {"area_manager": "Approved", "head_office": "Approved", "hr": "Approved"}
    assert updated.updated_at == NOW
    assert updated.updated_by == 7

    assert len(writer.calls) == 1
    call = writer.calls[0]
    assert call["status"] == "Approved"
    assert call["approver_slots"] == ("area_manager", "head_office", "hr")
    assert call["actor_id"] == 7
    assert call["at"] == NOW


def test_decided_request_can_be_decided_again():
    gate = StatusTransitionGate(RecordingWriter())
    approved = gate.apply_status(cleaning_request(), "Approved", ACTOR, NOW)
    rejected = gate.apply_status(approved, "Rejected", ACTOR, NOW)

    assert rejected.status == "Rejected"
    assert set(rejected.approver_statuses.values()) == {"Rejected"}


@pytest.mark.parametrize("status", ["Closed", "Pending", "", None, "approved"])
def test_rejects_statuses_outside_the_taxonomy(status):
    writer = RecordingWriter()
    with pytest.raises(ValidationError):
        StatusTransitionGate(writer).apply_status(cleaning_request(), status, ACTOR, NOW)
    assert writer.calls == []


def test_production_requests_do_not_record_actor_or_time():
    req = ApprovalRequest(
        request_id=3,
        kind=RequestKind.PRODUCTION_EXTRAS,
        status="Pending",
        approver_statuses={"approver1": "Pending", "approver2": "Approved"},
    )
    updated = StatusTransitionGate(RecordingWriter()).apply_status(req, "Rejected", ACTOR, NOW)

    assert updated.approver_statuses == {"approver1": "Rejected", "approver2": "Rejected"}
    assert updated.updated_at is None
    assert updated.updated_by is None


def test_theft_incident_keeps_review_notes():
    writer = RecordingWriter()
    req = ApprovalRequest(request_id=5, kind=RequestKind.THEFT_INCIDENT, status="Open")

    updated = StatusTransitionGate(writer).apply_status(req, "Reviewed", ACTOR, NOW, review_notes="CCTV checked")

    assert updated.status == "Reviewed"
    assert updated.review_notes == "CCTV checked"
    assert updated.reviewed_by == 7
    assert updated.reviewed_at == NOW
    assert writer.calls[0]["approver_slots"] == ()
    assert writer.calls[0]["review_notes"] == "CCTV checked"


def test_theft_incident_cannot_be_approved():
    req = ApprovalRequest(request_id=5, kind=RequestKind.THEFT_INCIDENT, status="Open")
    with pytest.raises(ValidationError):
        StatusTransitionGate(RecordingWriter()).apply_status(req, "Approved", ACTOR, NOW)


def test_write_failure_surfaces_as_gate_error():
    gate = StatusTransitionGate(RecordingWriter(fail_with=RuntimeError("lost connection")))
    with pytest.raises(GateError, match="lost connection"):
        gate.apply_status(cleaning_request(), "Approved", ACTOR, NOW)
