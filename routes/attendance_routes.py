from flask import Blueprint, g, jsonify

from models.attendance_model import AttendanceModel
from services.errors import Forbidden, ValidationError
from services.scans import find_session_for_token, submit_scan
from services.sessions import get_session
from utils.auth_utils import auth_required, get_json_body, role_required
from utils.time_utils import epoch_millis

attendance_bp = Blueprint("attendance", __name__, url_prefix="/api/attendance")


@attendance_bp.route("/scan", methods=["POST"])
@role_required("Student")
def scan():
    data = get_json_body()
    token = data.get("token")
    if not isinstance(token, str) or not token.strip():
        raise ValidationError("Token required")
    token = token.strip()

    session = find_session_for_token(token)
    outcome = submit_scan(session, g.user.id, token)

    body = {"status": outcome.status, "recordedAt": epoch_millis(outcome.recorded_at)}
    if outcome.duplicate:
        body["duplicate"] = True
    return jsonify(body)


@attendance_bp.route("/session/<int:session_id>")
@auth_required
def session_records(session_id):
    get_session(session_id)
    return jsonify(AttendanceModel.records_for_session(session_id))


@attendance_bp.route("/student/<int:student_id>")
@auth_required
def student_history(student_id):
    if g.user.is_student and g.user.id != student_id:
        raise Forbidden()
    return jsonify(AttendanceModel.history_for_student(student_id))
