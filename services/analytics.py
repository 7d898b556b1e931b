"""
Attendance analytics.

Rates are an approximation: without a roster, a session's rate is its
attendee count scaled by a nominal class size and capped at 100.
"""
import math
from datetime import datetime, timedelta, time

from models.session_model import AttendanceSession, STATUS_LATE, STATUS_PRESENT
from services import get_setting
from services.errors import ValidationError
from utils.time_utils import utcnow

RANGES = {"2w": 14, "4w": 28}
NOMINAL_CLASS_SIZE = 10


def parse_range(value):
    if value is None:
        return RANGES["4w"]
    if value not in RANGES:
        raise ValidationError("range must be one of: " + ", ".join(sorted(RANGES)))
    return RANGES[value]


def round_half_up(value):
    return int(math.floor(value + 0.5))


def daily_rates(sessions, range_days, today=None, class_size=None):
    """[{date, rate}] for the last range_days days, oldest first."""
    today = today or utcnow().date()
    if class_size is None:
        class_size = get_setting("NOMINAL_CLASS_SIZE", NOMINAL_CLASS_SIZE)

    by_day = {}
    for session in sessions:
        by_day.setdefault(session.started_at.date(), []).append(session)

    daily = []
    for offset in range(range_days - 1, -1, -1):
        day = today - timedelta(days=offset)
        day_sessions = by_day.get(day, [])
        if day_sessions:
            total = sum(len(s.attendees) for s in day_sessions)
            rate = min(round_half_up(total / len(day_sessions) * class_size), 100)
        else:
            rate = 0
        daily.append({"date": day.isoformat(), "rate": rate})
    return daily


def average_rate(daily):
    if not daily:
        return 0
    return round_half_up(sum(day["rate"] for day in daily) / len(daily))


def sessions_in_range(range_days, course_id=None, today=None):
    today = today or utcnow().date()
    since = datetime.combine(today - timedelta(days=range_days), time.min)
    query = AttendanceSession.query.filter(AttendanceSession.started_at >= since)
    if course_id:
        query = query.filter(AttendanceSession.course_id == course_id)
    return query.all()


def attendance_report(range_value=None, course_id=None, today=None):
    range_days = parse_range(range_value)
    sessions = sessions_in_range(range_days, course_id, today)
    daily = daily_rates(sessions, range_days, today)
    return {"daily": daily, "rate": average_rate(daily)}


def overall_stats(sessions):
    attendees = [a for s in sessions for a in s.attendees]
    return {
        "totalSessions": len(sessions),
        "activeSessions": sum(1 for s in sessions if s.active),
        "totalAttendance": len(attendees),
        "presentCount": sum(1 for a in attendees if a.status == STATUS_PRESENT),
        "lateCount": sum(1 for a in attendees if a.status == STATUS_LATE),
    }
