"""
Scan classification.

A scan redeems the session's live token for attendance credit. Outcomes:
present, late, a duplicate of a scan made moments ago, or rejected.
"""
import logging
from collections import namedtuple
from datetime import timedelta

from sqlalchemy.exc import SQLAlchemyError

from models import db
from models.session_model import (
    AttendanceSession, Attendee, ScanLogEntry, STATUS_LATE, STATUS_PRESENT,
)
from services import get_setting
from services.errors import InvalidOrExpiredToken, InternalFailure
from services.tokens import token_is_live
from utils.time_utils import utcnow

logger = logging.getLogger(__name__)

DUPLICATE_WINDOW_SECONDS = 60
LATE_AFTER_SECONDS = 10 * 60

ScanOutcome = namedtuple("ScanOutcome", ["status", "recorded_at", "duplicate"])


def find_session_for_token(token_value):
    """Active session whose live token is token_value."""
    if not token_value:
        raise InvalidOrExpiredToken()
    session = AttendanceSession.query.filter_by(token_value=token_value, active=True).first()
    if session is None:
        raise InvalidOrExpiredToken()
    return session


def classify_status(started_at, now, late_after_seconds=None):
    if late_after_seconds is None:
        late_after_seconds = get_setting("LATE_AFTER_SECONDS", LATE_AFTER_SECONDS)
    if now - started_at > timedelta(seconds=late_after_seconds):
        return STATUS_LATE
    return STATUS_PRESENT


def find_recent_entry(session, student_id, now, window_seconds=None):
    """First attendee entry for the student recorded less than the window ago."""
    if window_seconds is None:
        window_seconds = get_setting("DUPLICATE_WINDOW_SECONDS", DUPLICATE_WINDOW_SECONDS)
    window = timedelta(seconds=window_seconds)
    for attendee in session.attendees:
        if attendee.student_id == student_id and now - attendee.recorded_at < window:
            return attendee
    return None


def submit_scan(session, student_id, token_value, now=None):
    """
    Redeem token_value for student_id in session.

    Raises InvalidOrExpiredToken when the token is not the live one, has
    expired or the session has ended. A repeat within the duplicate window
    returns the earlier outcome with duplicate=True and records nothing.
    """
    now = now or utcnow()

    if not token_is_live(session, token_value, now):
        logger.info("Rejected scan by student %s for session %s", student_id, session.id)
        raise InvalidOrExpiredToken()

    previous = find_recent_entry(session, student_id, now)
    if previous is not None:
        return ScanOutcome(previous.status, previous.recorded_at, True)

    status = classify_status(session.started_at, now)

    # check-then-append is one transaction but not an atomic compare-and-append
    session.attendees.append(Attendee(student_id=student_id, status=status, recorded_at=now))
    session.scans.append(ScanLogEntry(
        student_id=student_id, token=token_value, status=status, recorded_at=now,
    ))
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Could not record scan for session %s", session.id)
        raise InternalFailure()

    logger.info("Student %s marked %s in session %s", student_id, status, session.id)
    return ScanOutcome(status, now, False)
