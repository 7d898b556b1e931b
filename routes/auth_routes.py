import re

from flask import Blueprint, current_app, g, jsonify, request
from sqlalchemy.exc import IntegrityError

from logging_config import security_logger, get_client_ip
from models import db
from models.user_model import User, ROLES
from services import face_gallery
from services.errors import Unauthenticated, ValidationError
from services.face_matcher import recognize_face
from utils.auth_utils import auth_required, get_json_body, role_required
from utils.jwt_utils import create_auth_token

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _auth_response(user, status=200, **extra):
    body = {"user": user.to_dict(), "token": create_auth_token(user.id)}
    body.update(extra)
    return jsonify(body), status


def _normalize_email(value):
    return value.strip().lower() if isinstance(value, str) else ""


@auth_bp.route("/register", methods=["POST"])
def register():
    data = get_json_body()
    name = data.get("name").strip() if isinstance(data.get("name"), str) else ""
    email = _normalize_email(data.get("email"))
    password = data.get("password") if isinstance(data.get("password"), str) else ""
    role = data.get("role")
    descriptor = data.get("faceDescriptor")

    errors = []
    if len(name) < 2:
        errors.append({"field": "name", "msg": "Name must be at least 2 characters"})
    if not EMAIL_RE.match(email):
        errors.append({"field": "email", "msg": "Invalid email"})
    if len(password) < 6:
        errors.append({"field": "password", "msg": "Password must be at least 6 characters"})
    if role not in ROLES:
        errors.append({"field": "role", "msg": "Invalid role"})
    elif descriptor is not None and role != "Student":
        errors.append({"field": "faceDescriptor", "msg": "Only students can enroll a face"})
    if errors:
        raise ValidationError("Invalid registration data", errors=errors)

    if User.query.filter_by(email=email).first():
        raise ValidationError("Email already registered")

    user = User(name=name, email=email, role=role)
    user.set_password(password)
    if descriptor is not None:
        user.face_descriptor = face_gallery.validate_descriptor(descriptor).tolist()

    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ValidationError("Email already registered")

    current_app.logger.info("Registered %s user %s", role, user.id)
    return _auth_response(user, 201)


@auth_bp.route("/login", methods=["POST"])
def login():
    data = get_json_body()
    email = _normalize_email(data.get("email"))
    password = data.get("password")
    if not email or not isinstance(password, str):
        raise ValidationError("Email and password required")

    user = User.query.filter_by(email=email).first()
    ok = user is not None and user.check_password(password)
    security_logger.log_login(email, get_client_ip(request), success=ok)
    if not ok:
        raise Unauthenticated("Invalid credentials")
    return _auth_response(user)


@auth_bp.route("/face-login", methods=["POST"])
def face_login():
    data = get_json_body()
    descriptor = data.get("faceDescriptor")
    if not isinstance(descriptor, list):
        raise ValidationError("Face descriptor required")

    threshold = current_app.config["FACE_MATCH_THRESHOLD"]
    result = recognize_face(descriptor, face_gallery.load_gallery(), threshold)
    if not result["success"]:
        security_logger.log_login("<face>", get_client_ip(request), success=False, method="face")
        raise Unauthenticated("Face not recognized")

    user = result["user"]
    security_logger.log_login(user.email, get_client_ip(request), success=True, method="face")
    return _auth_response(user, distance=result["distance"])


@auth_bp.route("/me")
@auth_required
def me():
    return jsonify({"user": g.user.to_dict()})


@auth_bp.route("/face", methods=["GET"])
@role_required("Student")
def face_status():
    return jsonify({"enrolled": face_gallery.has_face_recognition(g.user)})


@auth_bp.route("/face", methods=["PUT"])
@role_required("Student")
def enroll_face():
    data = get_json_body()
    if "faceDescriptor" not in data:
        raise ValidationError("Face descriptor required")
    face_gallery.enroll_descriptor(g.user, data["faceDescriptor"])
    return jsonify({"success": True, "enrolled": True})


@auth_bp.route("/face", methods=["DELETE"])
@role_required("Student")
def remove_face():
    removed = face_gallery.remove_descriptor(g.user)
    return jsonify({"success": removed, "enrolled": False})
