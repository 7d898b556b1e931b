from models import db
from utils.time_utils import utcnow, epoch_millis, isoformat

STATUS_PRESENT = "present"
STATUS_LATE = "late"
ATTENDANCE_STATUSES = (STATUS_PRESENT, STATUS_LATE)


class AttendanceSession(db.Model):
    __tablename__ = "attendance_session"

    id = db.Column(db.Integer, primary_key=True)
    course_id = db.Column(db.String(50), nullable=False, index=True)
    active = db.Column(db.Boolean, nullable=False, default=True)
    started_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    ended_at = db.Column(db.DateTime, nullable=True)
    # the single live token; overwritten on every regeneration
    token_value = db.Column(db.String(64), nullable=True, index=True)
    token_expires_at = db.Column(db.Integer, nullable=True)  # epoch seconds

    attendees = db.relationship(
        "Attendee", backref="session", order_by="Attendee.id", lazy="select"
    )
    scans = db.relationship(
        "ScanLogEntry", backref="session", order_by="ScanLogEntry.id", lazy="select"
    )

    def to_dict(self):
        return {
            "id": self.id,
            "courseId": self.course_id,
            "active": self.active,
            "startedAt": isoformat(self.started_at),
            "endedAt": isoformat(self.ended_at),
            "attendees": [a.to_dict() for a in self.attendees],
        }


class Attendee(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    session_id = db.Column(db.Integer, db.ForeignKey("attendance_session.id"), nullable=False)
    student_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False)
    status = db.Column(db.String(10), nullable=False)
    recorded_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def to_dict(self):
        return {
            "studentId": self.student_id,
            "status": self.status,
            "recordedAt": epoch_millis(self.recorded_at),
        }


class ScanLogEntry(db.Model):
    __tablename__ = "scan_log_entry"

    id = db.Column(db.Integer, primary_key=True)
    session_id = db.Column(db.Integer, db.ForeignKey("attendance_session.id"), nullable=False)
    student_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False)
    token = db.Column(db.String(64), nullable=False)
    recorded_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    status = db.Column(db.String(10), nullable=False)

    def to_dict(self):
        return {
            "studentId": self.student_id,
            "token": self.token,
            "status": self.status,
            "recordedAt": epoch_millis(self.recorded_at),
        }
