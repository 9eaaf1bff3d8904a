from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.web import error_response, login_required
from ..container import Container
from ..core.exceptions import ValidationError
from ..filters.model import FilterCriteria

logger = logging.getLogger(__name__)

PREFIX = "/operational-excellence/attendance-dashboard"


def register(app: Flask, container: Container) -> None:
    @app.route(f"{PREFIX}/", methods=["GET"], endpoint="attendance_dashboard")
    @login_required
    def attendance_dashboard():
        try:
            criteria = FilterCriteria.from_args(request.args)
            dashboard = container.attendance_dashboard_service.build_dashboard(
                criteria,
                group_by=request.args.get("groupBy"),
            )
            return jsonify(dashboard.to_dict())
        except ValidationError as e:
            return error_response(str(e), 400)
        except Exception as e:
            logger.exception("Error loading attendance dashboard")
            return error_response(str(e), 500)

    @app.route(f"{PREFIX}/api/stats", methods=["GET"], endpoint="attendance_stats")
    @login_required
    def attendance_stats():
        try:
            return jsonify(container.attendance_dashboard_service.landing_stats())
        except Exception:
            logger.exception("Error getting attendance stats")
            return jsonify({"Total": 0, "Companies": 0, "ThisMonth": 0})
