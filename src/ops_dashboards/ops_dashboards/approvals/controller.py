from __future__ import annotations

import csv
import io
import logging

from flask import Flask, jsonify, request

from ..common.web import current_user, error_response, gate_failure, jsonable, login_required
from ..container import Container
from ..core.enums import RequestKind
from ..core.exceptions import GateError, NotFoundError, ValidationError
from .service import ApprovalReviewService

logger = logging.getLogger(__name__)

CLEANING_PREFIX = "/operational-excellence/extra-cleaning-review"
PRODUCTION_PREFIX = "/operational-excellence/production-dashboard"

ZERO_STATS = {"total": 0, "pending": 0, "today": 0, "thisMonth": 0}


def _register_review_routes(app: Flask, prefix: str, name: str, service_of) -> None:
    """Routes shared by the cleaning and production review screens.

    `service_of` returns the ApprovalReviewService at request time.
    """

    @app.route(f"{prefix}/", methods=["GET"], endpoint=f"{name}_list")
    @login_required
    def review_list():
        try:
            rows = [r.to_dict() for r in service_of().list_requests()]
            return jsonify({"requests": jsonable(rows)})
        except Exception as e:
            logger.exception("Error loading %s review page", name)
            return error_response(str(e), 500)

    @app.route(f"{prefix}/api/stats", methods=["GET"], endpoint=f"{name}_stats")
    @login_required
    def review_stats():
        try:
            return jsonify(service_of().landing_stats())
        except Exception:
            logger.exception("Error getting %s stats", name)
            return jsonify(dict(ZERO_STATS))

    @app.route(f"{prefix}/api/request/<int:request_id>", methods=["GET"], endpoint=f"{name}_detail")
    @login_required
    def review_detail(request_id: int):
        try:
            return jsonify(jsonable(service_of().get_request(request_id).to_dict()))
        except NotFoundError as e:
            return error_response(str(e), 404)
        except Exception as e:
            logger.exception("Error getting %s request %s", name, request_id)
            return error_response(str(e), 500)

    @app.route(f"{prefix}/api/request/<int:request_id>/status", methods=["POST"], endpoint=f"{name}_status")
    @login_required
    def review_status(request_id: int):
        body = request.get_json(silent=True) or {}
        try:
            service_of().update_status(
                request_id=request_id,
                status=body.get("status"),
                actor=current_user(),
            )
            return jsonify({"success": True})
        except ValidationError as e:
            return gate_failure(str(e), 400)
        except NotFoundError as e:
            return gate_failure(str(e), 404)
        except GateError as e:
            return gate_failure(str(e), 500)
        except Exception as e:
            logger.exception("Error updating %s request %s", name, request_id)
            return gate_failure(str(e), 500)


def _write_csv(app: Flask, *, rows, filename: str):
    out = io.StringIO()
    fieldnames = list(rows[0].keys()) if rows else []
    writer = csv.DictWriter(out, fieldnames=fieldnames)
    writer.writeheader()
    for row in rows:
        writer.writerow({k: ("" if v is None else jsonable(v)) for k, v in row.items()})

    csv_bytes = out.getvalue().encode("utf-8-sig")
    return app.response_class(
        csv_bytes,
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


def register(app: Flask, container: Container) -> None:
    _register_review_routes(app, CLEANING_PREFIX, "extra_cleaning", lambda: container.extra_cleaning_service)
    _register_review_routes(app, PRODUCTION_PREFIX, "production", lambda: container.production_service)

    @app.route(f"{PRODUCTION_PREFIX}/api/export", methods=["GET"], endpoint="production_export")
    @login_required
    def production_export():
        service: ApprovalReviewService = container.production_service
        try:
            rows = list(service.export_rows())
        except Exception:
            logger.exception("Error exporting %s requests", RequestKind.PRODUCTION_EXTRAS.value)
            return error_response("Error exporting data", 500)
        return _write_csv(app, rows=rows, filename="production-extras-requests.csv")
