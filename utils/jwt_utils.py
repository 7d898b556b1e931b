# utils/jwt_utils.py
import jwt
from datetime import datetime, timedelta, timezone
from flask import current_app

from services.errors import Unauthenticated


def create_auth_token(user_id: int, ttl_days: int = None):
    """
    Signed JWT identifying a user. Contains:
      - user_id (int)
      - iat, exp
    """
    config = current_app.config
    if ttl_days is None:
        ttl_days = config["AUTH_TOKEN_DAYS"]
    now = datetime.now(timezone.utc)
    payload = {
        "user_id": int(user_id),
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(days=ttl_days)).timestamp())
    }
    # pyjwt returns str in v2+
    return jwt.encode(payload, config["JWT_SECRET"], algorithm=config["JWT_ALGO"])


def verify_auth_token(token: str):
    """
    Returns the user id from a valid token, else raises Unauthenticated.
    """
    config = current_app.config
    try:
        payload = jwt.decode(token, config["JWT_SECRET"], algorithms=[config["JWT_ALGO"]])
    except jwt.ExpiredSignatureError:
        raise Unauthenticated("Token expired")
    except jwt.InvalidTokenError:
        raise Unauthenticated("Invalid token")
    user_id = payload.get("user_id")
    if not isinstance(user_id, int):
        raise Unauthenticated("Invalid token")
    return user_id
