from models import db
from models.session_model import AttendanceSession, Attendee, ScanLogEntry
from utils.time_utils import epoch_millis, isoformat


class AttendanceModel:
    """Read-side queries over the attendee and scan logs."""

    @classmethod
    def records_for_session(cls, session_id):
        attendees = Attendee.query.filter_by(session_id=session_id).order_by(Attendee.id).all()
        scans = ScanLogEntry.query.filter_by(session_id=session_id).order_by(ScanLogEntry.id).all()
        return {
            "sessionId": session_id,
            "attendees": [a.to_dict() for a in attendees],
            "scans": [s.to_dict() for s in scans],
        }

    @classmethod
    def history_for_student(cls, student_id):
        """One row per attended session, using the student's first entry in it."""
        rows = (
            db.session.query(Attendee, AttendanceSession)
            .join(AttendanceSession, Attendee.session_id == AttendanceSession.id)
            .filter(Attendee.student_id == student_id)
            .order_by(AttendanceSession.started_at.desc(), Attendee.id)
            .all()
        )
        seen = set()
        history = []
        for attendee, session in rows:
            if session.id in seen:
                continue
            seen.add(session.id)
            history.append({
                "sessionId": session.id,
                "courseId": session.course_id,
                "status": attendee.status,
                "recordedAt": epoch_millis(attendee.recorded_at),
                "startedAt": isoformat(session.started_at),
            })
        return history
