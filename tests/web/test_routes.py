from datetime import date, datetime
from decimal import Decimal

from src.ops_dashboards.ops_dashboards.approvals.model import ApprovalRequest
from src.ops_dashboards.ops_dashboards.core.enums import RequestKind, ScheduleKind
from src.ops_dashboards.ops_dashboards.core.exceptions import GateError, NotFoundError, ValidationError
from src.ops_dashboards.ops_dashboards.feedback.model import WeeklyFeedback
from src.ops_dashboards.ops_dashboards.schedules.model import ScheduleRecord

OE = "/operational-excellence"


def test_routes_require_a_session(app):
    resp = app.test_client().get(f"{OE}/attendance-dashboard/api/stats")
    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Authentication required"}


def test_stats_fall_back_to_zero_when_the_store_fails(client, services, stub):
    services.attendance_dashboard_service = stub(landing_stats=RuntimeError("db down"))
    services.production_service = stub(landing_stats=RuntimeError("db down"))
    services.theft_service = stub(landing_stats=RuntimeError("db down"))
    services.security_schedule_service = stub(landing_stats=RuntimeError("db down"))
    services.feedback_service = stub(landing_stats=RuntimeError("db down"))

    assert client.get(f"{OE}/attendance-dashboard/api/stats").get_json() == {"Total": 0, "Companies": 0, "ThisMonth": 0}
    assert client.get(f"{OE}/production-dashboard/api/stats").get_json() == {
        "total": 0,
        "pending": 0,
        "today": 0,
        "thisMonth": 0,
    }
    assert client.get(f"{OE}/theft-dashboard/api/stats").get_json() == {"pending": 0, "today": 0, "month": 0}
    assert client.get(f"{OE}/security-dashboard/api/stats").get_json() == {"Total": 0, "Active": 0, "ThisMonth": 0}
    assert client.get(f"{OE}/feedback-dashboard/api/stats").get_json() == {
        "total": 0,
        "today": 0,
        "thisWeek": 0,
        "thisMonth": 0,
    }


def test_attendance_dashboard_bad_date_is_400(client):
    resp = client.get(f"{OE}/attendance-dashboard/?fromDate=yesterday")
    assert resp.status_code == 400
    assert "fromDate" in resp.get_json()["error"]


def test_attendance_dashboard_failure_is_500(client, services, stub):
    services.attendance_dashboard_service = stub(build_dashboard=RuntimeError("timeout"))
    resp = client.get(f"{OE}/attendance-dashboard/")
    assert resp.status_code == 500
    assert resp.get_json() == {"error": "timeout"}


def test_status_update_success_passes_the_session_user(client, services, stub):
    services.extra_cleaning_service = stub(update_status=None)

    resp = client.post(f"{OE}/extra-cleaning-review/api/request/5/status", json={"status": "Approved"})

    assert resp.status_code == 200
    assert resp.get_json() == {"success": True}
    name, _, kwargs = services.extra_cleaning_service.calls[0]
    assert name == "update_status"
    assert kwargs["request_id"] == 5
    assert kwargs["status"] == "Approved"
    assert kwargs["actor"].user_id == 7


def test_status_update_error_mapping(client, services, stub):
    url = f"{OE}/production-dashboard/api/request/5/status"

    services.production_service = stub(update_status=ValidationError("status must be one of: Approved, Rejected"))
    resp = client.post(url, json={"status": "Closed"})
    assert resp.status_code == 400
    assert resp.get_json()["success"] is False

    services.production_service = stub(update_status=NotFoundError("Request not found"))
    assert client.post(url, json={"status": "Approved"}).status_code == 404

    services.production_service = stub(update_status=GateError("deadlock"))
    resp = client.post(url, json={"status": "Approved"})
    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "error": "deadlock"}


def test_request_detail_serializes_dates(client, services, stub):
    req = ApprovalRequest(
        request_id=3,
        kind=RequestKind.EXTRA_CLEANING,
        status="Pending",
        created_at=datetime(2026, 2, 1, 9, 5, 0),
        details={"start_date": date(2026, 2, 3)},
    )
    services.extra_cleaning_service = stub(get_request=req)

    data = client.get(f"{OE}/extra-cleaning-review/api/request/3").get_json()

    assert data["created_at"] == "2026-02-01 09:05:00"
    assert data["start_date"] == "2026-02-03"
    assert data["kind"] == "extra-cleaning"


def test_production_export_is_csv(client, services, stub):
    services.production_service = stub(
        export_rows=[{"RequestID": 1, "Status": "Approved", "TotalCost": Decimal("12.50"), "Description": None}]
    )

    resp = client.get(f"{OE}/production-dashboard/api/export")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "attachment" in resp.headers["Content-Disposition"]
    body = resp.data.decode("utf-8-sig").splitlines()
    assert body == ["RequestID,Status,TotalCost,Description", "1,Approved,12.5,"]


def test_theft_update_status_forwards_review_notes(client, services, stub):
    services.theft_service = stub(update_status=None)

    resp = client.post(
        f"{OE}/theft-dashboard/api/update-status/4",
        json={"status": "Reviewed", "reviewNotes": "ok"},
    )

    assert resp.get_json() == {"success": True}
    _, _, kwargs = services.theft_service.calls[0]
    assert kwargs["incident_id"] == 4
    assert kwargs["review_notes"] == "ok"


def test_theft_incident_not_found(client, services, stub):
    services.theft_service = stub(incident_detail=NotFoundError("Incident not found"))
    resp = client.get(f"{OE}/theft-dashboard/api/incident/99")
    assert resp.status_code == 404
    assert resp.get_json() == {"error": "Incident not found"}


def test_theft_dashboard_passes_status_query(client, services, stub):
    services.theft_service = stub(build_dashboard={"incidents": [], "stats": {"totalStolenValue": Decimal("1.5")}})

    data = client.get(f"{OE}/theft-dashboard/?status=all&store=Main").get_json()

    assert data["stats"]["totalStolenValue"] == 1.5
    criteria = services.theft_service.calls[0][1][0]
    assert (criteria.status, criteria.store) == ("all", "Main")


def test_schedule_view_and_missing(client, services, stub):
    sched = ScheduleRecord(
        schedule_id=2,
        kind=ScheduleKind.THIRDPARTY,
        store_name="Main",
        from_date=date(2026, 2, 16),
        to_date=date(2026, 2, 22),
        status="Submitted",
    )
    services.thirdparty_schedule_service = stub(get_schedule=sched)
    data = client.get(f"{OE}/thirdparty-dashboard/view/2").get_json()
    assert data["from_date"] == "2026-02-16"
    assert data["employees"] == []

    services.security_schedule_service = stub(get_schedule=NotFoundError("Schedule not found"))
    assert client.get(f"{OE}/security-dashboard/view/2").status_code == 404


def test_feedback_dashboard_rejects_non_numeric_store(client):
    resp = client.get(f"{OE}/feedback-dashboard/?store=1%20OR%201=1")
    assert resp.status_code == 400


def test_feedback_view(client, services, stub):
    services.feedback_service = stub(
        get_feedback=WeeklyFeedback(
            feedback_id=8,
            store_id=1,
            store_name="Main",
            week_start_date=date(2026, 2, 9),
            week_end_date=date(2026, 2, 15),
            overall_rating=4,
        )
    )
    data = client.get(f"{OE}/feedback-dashboard/view/8").get_json()
    assert data["reference"] == "WF-8"
    assert data["week_start_date"] == "2026-02-09"
