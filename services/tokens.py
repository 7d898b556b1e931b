"""Rotating attendance tokens, one live token per session."""
import logging
import secrets
from collections import namedtuple

from sqlalchemy.exc import SQLAlchemyError

from models import db
from services import get_setting
from services.errors import SessionNotActive, InternalFailure
from utils.time_utils import utcnow, epoch_seconds

logger = logging.getLogger(__name__)

TOKEN_TTL_SECONDS = 10
TOKEN_BYTES = 16

IssuedToken = namedtuple("IssuedToken", ["value", "expires_at"])


def issue_token(session, now=None, ttl_seconds=None):
    """
    Generate a new token for an active session and make it the live one.

    The previous token stops working immediately, not at its expiry.
    Returns an IssuedToken whose expires_at is in epoch seconds.
    """
    if not session.active:
        raise SessionNotActive()

    now = now or utcnow()
    if ttl_seconds is None:
        ttl_seconds = get_setting("TOKEN_TTL_SECONDS", TOKEN_TTL_SECONDS)

    value = secrets.token_hex(TOKEN_BYTES)
    expires_at = epoch_seconds(now) + int(ttl_seconds)

    session.token_value = value
    session.token_expires_at = expires_at
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Could not store token for session %s", session.id)
        raise InternalFailure()

    logger.debug("Issued token for session %s, expires at %s", session.id, expires_at)
    return IssuedToken(value, expires_at)


def token_is_live(session, token_value, now=None):
    """True when token_value is the session's current token and not past expiry.

    The expiry second itself still counts as valid.
    """
    if not session.active or not session.token_value or not token_value:
        return False
    if not secrets.compare_digest(session.token_value.encode("utf-8"), token_value.encode("utf-8")):
        return False
    now = now or utcnow()
    return epoch_seconds(now) <= session.token_expires_at
