from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.web import current_user, error_response, gate_failure, jsonable, login_required
from ..container import Container
from ..core.exceptions import GateError, NotFoundError, ValidationError
from ..filters.model import FilterCriteria

logger = logging.getLogger(__name__)

PREFIX = "/operational-excellence/theft-dashboard"


def register(app: Flask, container: Container) -> None:
    @app.route(f"{PREFIX}/", methods=["GET"], endpoint="theft_dashboard")
    @login_required
    def theft_dashboard():
        try:
            criteria = FilterCriteria.from_args(request.args)
            return jsonify(jsonable(container.theft_service.build_dashboard(criteria)))
        except ValidationError as e:
            return error_response(str(e), 400)
        except Exception as e:
            logger.exception("Error loading theft dashboard")
            return error_response(str(e), 500)

    @app.route(f"{PREFIX}/api/stats", methods=["GET"], endpoint="theft_stats")
    @login_required
    def theft_stats():
        try:
            return jsonify(container.theft_service.landing_stats())
        except Exception:
            logger.exception("Error getting theft stats")
            return jsonify({"pending": 0, "today": 0, "month": 0})

    @app.route(f"{PREFIX}/api/incident/<int:incident_id>", methods=["GET"], endpoint="theft_incident")
    @login_required
    def theft_incident(incident_id: int):
        try:
            return jsonify(jsonable(container.theft_service.incident_detail(incident_id)))
        except NotFoundError as e:
            return error_response(str(e), 404)
        except Exception as e:
            logger.exception("Error getting incident %s", incident_id)
            return error_response(str(e), 500)

    @app.route(f"{PREFIX}/api/update-status/<int:incident_id>", methods=["POST"], endpoint="theft_update_status")
    @login_required
    def theft_update_status(incident_id: int):
        body = request.get_json(silent=True) or {}
        try:
            container.theft_service.update_status(
                incident_id=incident_id,
                status=body.get("status"),
                review_notes=body.get("reviewNotes"),
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
            logger.exception("Error updating incident %s", incident_id)
            return gate_failure(str(e), 500)
