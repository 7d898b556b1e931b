from flask import Blueprint, current_app, g, jsonify, request

from services import sessions as session_service
from services.tokens import issue_token
from utils.auth_utils import auth_required, get_json_body, role_required
from utils.qr_utils import render_qr_png
from utils.time_utils import isoformat

session_bp = Blueprint("sessions", __name__, url_prefix="/api/sessions")

STAFF_ROLES = ("Instructor", "Admin")


@session_bp.route("/start", methods=["POST"])
@role_required(*STAFF_ROLES)
def start_session():
    data = get_json_body()
    session = session_service.start_session(data.get("courseId"))
    current_app.logger.info("User %s started session %s", g.user.id, session.id)
    return jsonify({
        "id": session.id,
        "courseId": session.course_id,
        "startedAt": isoformat(session.started_at),
    }), 201


@session_bp.route("/<int:session_id>/end", methods=["POST"])
@role_required(*STAFF_ROLES)
def end_session(session_id):
    session = session_service.end_session(session_id)
    return jsonify({"id": session.id, "endedAt": isoformat(session.ended_at)})


@session_bp.route("/<int:session_id>/qr")
@role_required(*STAFF_ROLES)
def generate_qr(session_id):
    session = session_service.get_session(session_id)
    issued = issue_token(session)
    return jsonify({
        "token": issued.value,
        "expSeconds": current_app.config["TOKEN_TTL_SECONDS"],
        "qr": render_qr_png(issued.value),
    })


@session_bp.route("/<int:session_id>/summary")
@auth_required
def summary(session_id):
    return jsonify(session_service.summarize_session(session_id))


@session_bp.route("")
@auth_required
def list_sessions():
    sessions = session_service.list_sessions(request.args.get("courseId"))
    return jsonify([s.to_dict() for s in sessions])
