"""
Error taxonomy for the attendance domain.

Every error carries the HTTP status it maps to; the app's error handlers
turn them into JSON bodies. A face that matches nobody is not an error,
``match_face`` simply returns None.
"""


class AttendanceError(Exception):
    status_code = 400
    default_message = "Request failed"

    def __init__(self, message=None, status_code=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {"success": False, "message": self.message}


class ValidationError(AttendanceError):
    default_message = "Invalid request"

    def __init__(self, message=None, errors=None):
        super().__init__(message)
        self.errors = errors or []

    def to_dict(self):
        body = super().to_dict()
        if self.errors:
            body["errors"] = self.errors
        return body


class NotFound(AttendanceError):
    status_code = 404
    default_message = "Not found"


class InvalidOrExpiredToken(AttendanceError):
    default_message = "Invalid or expired token"

    def to_dict(self):
        return {"status": "failed", "reason": self.message}


class SessionNotActive(AttendanceError):
    default_message = "Session not active"


class AlreadyEnded(AttendanceError):
    default_message = "Session already ended"


class Unauthenticated(AttendanceError):
    status_code = 401
    default_message = "Authentication required"


class Forbidden(AttendanceError):
    status_code = 403
    default_message = "Access denied"


class InternalFailure(AttendanceError):
    status_code = 500
    default_message = "Server error"
