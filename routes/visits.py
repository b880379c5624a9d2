from flask import Blueprint, Response, current_app, jsonify, request

from models import store
from security.client_ip import client_ip

visits_bp = Blueprint("visits", __name__)


@visits_bp.post("/visit")
def record_visit():
    try:
        ip = client_ip()
        user_agent = request.headers.get("User-Agent")
        count, visited_today = store.record_visit(ip, user_agent)
    except Exception:
        current_app.logger.exception("Failed to record visit")
        return jsonify(success=False, error="Failed to record visit"), 500

    if not visited_today:
        current_app.logger.info("New visit from %s (total %d)", ip, count)
    return jsonify(count=count, visitedToday=visited_today, success=True), 200


@visits_bp.get("/visit-count")
def visit_count():
    try:
        count = store.total_count()
    except Exception:
        current_app.logger.exception("Failed to get visit count")
        return jsonify(success=False, error="Failed to get visit count"), 500

    return jsonify(count=count, success=True), 200


@visits_bp.get("/get-json")
def get_json():
    # Raw bytes of the durable document, not re-serialized
    return Response(store.raw_dump(), status=200, mimetype="application/json")
