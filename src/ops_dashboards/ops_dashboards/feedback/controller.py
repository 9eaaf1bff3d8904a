from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.web import error_response, jsonable, login_required
from ..container import Container
from ..core.exceptions import NotFoundError, ValidationError
from .model import FeedbackCriteria

logger = logging.getLogger(__name__)

PREFIX = "/operational-excellence/feedback-dashboard"


def register(app: Flask, container: Container) -> None:
    @app.route(f"{PREFIX}/", methods=["GET"], endpoint="feedback_dashboard")
    @login_required
    def feedback_dashboard():
        try:
            criteria = FeedbackCriteria.from_args(request.args)
            return jsonify(jsonable(container.feedback_service.build_dashboard(criteria)))
        except ValidationError as e:
            return error_response(str(e), 400)
        except Exception as e:
            logger.exception("Error loading feedback dashboard")
            return error_response(str(e), 500)

    @app.route(f"{PREFIX}/api/stats", methods=["GET"], endpoint="feedback_stats")
    @login_required
    def feedback_stats():
        try:
            return jsonify(container.feedback_service.landing_stats())
        except Exception:
            logger.exception("Error getting feedback stats")
            return jsonify({"total": 0, "today": 0, "thisWeek": 0, "thisMonth": 0})

    @app.route(f"{PREFIX}/view/<int:feedback_id>", methods=["GET"], endpoint="feedback_view")
    @login_required
    def feedback_view(feedback_id: int):
        try:
            return jsonify(jsonable(container.feedback_service.get_feedback(feedback_id).to_dict()))
        except NotFoundError as e:
            return error_response(str(e), 404)
        except Exception as e:
            logger.exception("Error viewing feedback %s", feedback_id)
            return error_response(str(e), 500)
