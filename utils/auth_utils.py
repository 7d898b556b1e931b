# utils/auth_utils.py
"""Bearer-token authentication and role checks for API routes."""
from functools import wraps

from flask import g, request

from logging_config import security_logger, get_client_ip
from models import db
from models.user_model import User
from services.errors import Forbidden, Unauthenticated
from utils.jwt_utils import verify_auth_token


def bearer_token():
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def load_user_from_request():
    token = bearer_token()
    if token is None:
        raise Unauthenticated("No token, authorization denied")
    user = db.session.get(User, verify_auth_token(token))
    if user is None:
        raise Unauthenticated("User no longer exists")
    return user


def auth_required(view_func):
    """Authenticate the request and expose the caller as g.user."""
    @wraps(view_func)
    def wrapper(*args, **kwargs):
        g.user = load_user_from_request()
        return view_func(*args, **kwargs)
    return wrapper


def role_required(*roles):
    """auth_required plus a check that the caller holds one of roles."""
    allowed = set(roles)

    def decorator(view_func):
        @wraps(view_func)
        def wrapper(*args, **kwargs):
            user = load_user_from_request()
            if allowed and user.role not in allowed:
                security_logger.log_unauthorized_access(request.path, get_client_ip(request), user.id)
                raise Forbidden()
            g.user = user
            return view_func(*args, **kwargs)
        return wrapper

    return decorator


def get_json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
