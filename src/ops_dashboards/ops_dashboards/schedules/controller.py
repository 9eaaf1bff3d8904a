from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.web import error_response, jsonable, login_required
from ..container import Container
from ..core.exceptions import NotFoundError, ValidationError
from ..filters.model import FilterCriteria

logger = logging.getLogger(__name__)

SECURITY_PREFIX = "/operational-excellence/security-dashboard"
THIRDPARTY_PREFIX = "/operational-excellence/thirdparty-dashboard"


def _register_schedule_routes(app: Flask, prefix: str, name: str, service_of) -> None:
    @app.route(f"{prefix}/", methods=["GET"], endpoint=f"{name}_dashboard")
    @login_required
    def schedule_dashboard():
        try:
            criteria = FilterCriteria.from_args(request.args)
            return jsonify(jsonable(service_of().build_dashboard(criteria)))
        except ValidationError as e:
            return error_response(str(e), 400)
        except Exception as e:
            logger.exception("Error loading %s dashboard", name)
            return error_response(str(e), 500)

    @app.route(f"{prefix}/view/<int:schedule_id>", methods=["GET"], endpoint=f"{name}_view")
    @login_required
    def schedule_view(schedule_id: int):
        try:
            schedule = service_of().get_schedule(schedule_id)
            return jsonify(jsonable(schedule.to_dict(with_employees=True)))
        except NotFoundError as e:
            return error_response(str(e), 404)
        except Exception as e:
            logger.exception("Error viewing %s schedule %s", name, schedule_id)
            return error_response(str(e), 500)

    @app.route(f"{prefix}/api/stats", methods=["GET"], endpoint=f"{name}_stats")
    @login_required
    def schedule_stats():
        try:
            return jsonify(service_of().landing_stats())
        except Exception:
            logger.exception("Error getting %s stats", name)
            return jsonify({"Total": 0, "Active": 0, "ThisMonth": 0})


def register(app: Flask, container: Container) -> None:
    _register_schedule_routes(app, SECURITY_PREFIX, "security", lambda: container.security_schedule_service)
    _register_schedule_routes(app, THIRDPARTY_PREFIX, "thirdparty", lambda: container.thirdparty_schedule_service)
