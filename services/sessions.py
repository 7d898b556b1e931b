"""Session lifecycle: start, end and summarize course meetings."""
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from models import db
from models.session_model import AttendanceSession, STATUS_LATE, STATUS_PRESENT
from services.errors import AlreadyEnded, InternalFailure, NotFound, ValidationError
from utils.time_utils import utcnow, isoformat

logger = logging.getLogger(__name__)


def _commit(action, session_id=None):
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Could not %s session %s", action, session_id)
        raise InternalFailure()


def get_session(session_id):
    session = db.session.get(AttendanceSession, session_id)
    if session is None:
        raise NotFound("Session not found")
    return session


def list_sessions(course_id=None):
    query = AttendanceSession.query.options(selectinload(AttendanceSession.attendees))
    if course_id:
        query = query.filter_by(course_id=course_id)
    return query.order_by(AttendanceSession.started_at.desc(), AttendanceSession.id.desc()).all()


def start_session(course_id, now=None):
    """Open a new active session; several may run for one course."""
    if not isinstance(course_id, str) or not course_id.strip():
        raise ValidationError("Course ID required")
    course_id = course_id.strip()

    session = AttendanceSession(course_id=course_id, active=True, started_at=now or utcnow())
    db.session.add(session)
    _commit("start")
    logger.info("Started session %s for course %s", session.id, course_id)
    return session


def end_session(session_id, now=None):
    session = get_session(session_id)
    if not session.active:
        raise AlreadyEnded()

    session.active = False
    session.ended_at = now or utcnow()
    _commit("end", session_id)
    logger.info("Ended session %s", session_id)
    return session


def summarize_session(session_id, now=None):
    """Counts and list of attendee entries.

    absent is always 0: there is no enrollment roster to compare against.
    """
    session = get_session(session_id)
    attendees = session.attendees
    return {
        "present": sum(1 for a in attendees if a.status == STATUS_PRESENT),
        "late": sum(1 for a in attendees if a.status == STATUS_LATE),
        "absent": 0,
        "list": [a.to_dict() for a in attendees],
        "active": session.active,
        "startedAt": isoformat(session.started_at),
        "lastUpdated": isoformat(now or utcnow()),
    }
