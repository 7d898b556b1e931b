from flask import Blueprint, jsonify, request

from models.session_model import AttendanceSession
from services.analytics import attendance_report, overall_stats
from utils.auth_utils import auth_required

analytics_bp = Blueprint("analytics", __name__, url_prefix="/api/analytics")


@analytics_bp.route("/attendance")
@auth_required
def attendance():
    report = attendance_report(
        request.args.get("range", "4w"),
        request.args.get("courseId"),
    )
    return jsonify(report)


@analytics_bp.route("/stats")
@auth_required
def stats():
    return jsonify(overall_stats(AttendanceSession.query.all()))
