from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

from models.user_model import User  # noqa: E402,F401
from models.session_model import AttendanceSession, Attendee, ScanLogEntry  # noqa: E402,F401
