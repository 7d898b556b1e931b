import pytest

from models import db
from models.session_model import AttendanceSession


@pytest.fixture
def instructor(make_user):
    return make_user("Instructor")


@pytest.fixture
def student(make_user):
    return make_user("Student")


def start(client, headers, course_id="CS101"):
    resp = client.post("/api/sessions/start", json={"courseId": course_id}, headers=headers)
    assert resp.status_code == 201
    return resp.get_json()["id"]


def fresh_token(client, headers, session_id):
    resp = client.get(f"/api/sessions/{session_id}/qr", headers=headers)
    assert resp.status_code == 200
    return resp.get_json()["token"]


# -------------------- Auth --------------------

def test_register_login_and_me(client):
    resp = client.post("/api/auth/register", json={
        "name": "Ada Lovelace",
        "email": "Ada@Example.com",
        "password": "secret123",
        "role": "Student",
    })
    assert resp.status_code == 201
    assert resp.get_json()["user"]["email"] == "ada@example.com"

    resp = client.post("/api/auth/login", json={"email": "ada@example.com", "password": "secret123"})
    assert resp.status_code == 200
    token = resp.get_json()["token"]

    resp = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.get_json()["user"]["name"] == "Ada Lovelace"


def test_register_validation(client):
    resp = client.post("/api/auth/register", json={
        "name": "A", "email": "nope", "password": "123", "role": "Janitor",
    })
    assert resp.status_code == 400
    fields = {e["field"] for e in resp.get_json()["errors"]}
    assert fields == {"name", "email", "password", "role"}


def test_register_duplicate_email(client, student):
    resp = client.post("/api/auth/register", json={
        "name": "Someone", "email": student.email, "password": "secret123", "role": "Student",
    })
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Email already registered"


def test_login_with_wrong_password(client, student):
    resp = client.post("/api/auth/login", json={"email": student.email, "password": "wrong-one"})
    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Invalid credentials"


def test_missing_or_bad_token(client):
    assert client.get("/api/auth/me").status_code == 401
    resp = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


def test_face_enrollment_and_login(client, student, auth_header):
    descriptor = [0.1] * 128
    resp = client.put("/api/auth/face", json={"faceDescriptor": descriptor}, headers=auth_header(student))
    assert resp.status_code == 200

    resp = client.get("/api/auth/face", headers=auth_header(student))
    assert resp.get_json() == {"enrolled": True}

    probe = [0.11] * 128
    resp = client.post("/api/auth/face-login", json={"faceDescriptor": probe})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["user"]["id"] == student.id
    assert body["distance"] < 0.6
    assert body["token"]

    resp = client.post("/api/auth/face-login", json={"faceDescriptor": [0.9] * 128})
    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Face not recognized"

    resp = client.delete("/api/auth/face", headers=auth_header(student))
    assert resp.get_json()["success"] is True


def test_face_login_requires_descriptor(client):
    resp = client.post("/api/auth/face-login", json={})
    assert resp.status_code == 400


# -------------------- Sessions --------------------

def test_students_cannot_manage_sessions(client, student, auth_header):
    resp = client.post("/api/sessions/start", json={"courseId": "CS101"}, headers=auth_header(student))
    assert resp.status_code == 403


def test_start_requires_course(client, instructor, auth_header):
    resp = client.post("/api/sessions/start", json={}, headers=auth_header(instructor))
    assert resp.status_code == 400


def test_qr_returns_token_and_image(client, instructor, auth_header):
    session_id = start(client, auth_header(instructor))
    resp = client.get(f"/api/sessions/{session_id}/qr", headers=auth_header(instructor))
    body = resp.get_json()

    assert len(body["token"]) == 32
    assert body["expSeconds"] == 10
    assert body["qr"]


def test_end_session_twice(client, instructor, auth_header):
    headers = auth_header(instructor)
    session_id = start(client, headers)

    resp = client.post(f"/api/sessions/{session_id}/end", headers=headers)
    assert resp.status_code == 200
    ended_at = resp.get_json()["endedAt"]

    resp = client.post(f"/api/sessions/{session_id}/end", headers=headers)
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Session already ended"
    assert db.session.get(AttendanceSession, session_id).ended_at.isoformat() + "Z" == ended_at

    resp = client.get(f"/api/sessions/{session_id}/qr", headers=headers)
    assert resp.status_code == 400


def test_unknown_session_is_404(client, instructor, auth_header):
    resp = client.post("/api/sessions/404/end", headers=auth_header(instructor))
    assert resp.status_code == 404
    assert resp.get_json()["message"] == "Session not found"


def test_list_sessions(client, instructor, auth_header):
    headers = auth_header(instructor)
    start(client, headers, "CS101")
    start(client, headers, "MA201")

    resp = client.get("/api/sessions?courseId=MA201", headers=headers)
    assert [s["courseId"] for s in resp.get_json()] == ["MA201"]


# -------------------- Attendance --------------------

def test_scan_flow(client, instructor, student, auth_header):
    staff = auth_header(instructor)
    session_id = start(client, staff)
    token = fresh_token(client, staff, session_id)

    resp = client.post("/api/attendance/scan", json={"token": token}, headers=auth_header(student))
    assert resp.status_code == 200
    first = resp.get_json()
    assert first["status"] == "present"
    assert "duplicate" not in first

    resp = client.post("/api/attendance/scan", json={"token": token}, headers=auth_header(student))
    second = resp.get_json()
    assert second == {"status": "present", "recordedAt": first["recordedAt"], "duplicate": True}

    summary = client.get(f"/api/sessions/{session_id}/summary", headers=staff).get_json()
    assert summary["present"] == 1
    assert summary["absent"] == 0
    assert summary["list"][0]["studentId"] == student.id

    records = client.get(f"/api/attendance/session/{session_id}", headers=staff).get_json()
    assert len(records["attendees"]) == 1
    assert records["scans"][0]["token"] == token


def test_scan_with_stale_token_fails(client, instructor, student, auth_header):
    staff = auth_header(instructor)
    session_id = start(client, staff)
    old = fresh_token(client, staff, session_id)
    fresh_token(client, staff, session_id)

    resp = client.post("/api/attendance/scan", json={"token": old}, headers=auth_header(student))
    assert resp.status_code == 400
    assert resp.get_json() == {"status": "failed", "reason": "Invalid or expired token"}


def test_scan_requires_token(client, student, auth_header):
    resp = client.post("/api/attendance/scan", json={"token": "  "}, headers=auth_header(student))
    assert resp.status_code == 400


def test_student_history(client, instructor, student, make_user, auth_header):
    staff = auth_header(instructor)
    session_id = start(client, staff, "CS101")
    token = fresh_token(client, staff, session_id)
    client.post("/api/attendance/scan", json={"token": token}, headers=auth_header(student))

    resp = client.get(f"/api/attendance/student/{student.id}", headers=auth_header(student))
    history = resp.get_json()
    assert len(history) == 1
    assert history[0]["sessionId"] == session_id
    assert history[0]["courseId"] == "CS101"
    assert history[0]["status"] == "present"

    other = make_user()
    resp = client.get(f"/api/attendance/student/{student.id}", headers=auth_header(other))
    assert resp.status_code == 403

    resp = client.get(f"/api/attendance/student/{student.id}", headers=staff)
    assert resp.status_code == 200


# -------------------- Analytics --------------------

def test_analytics(client, instructor, student, auth_header):
    staff = auth_header(instructor)
    session_id = start(client, staff)
    token = fresh_token(client, staff, session_id)
    client.post("/api/attendance/scan", json={"token": token}, headers=auth_header(student))

    resp = client.get("/api/analytics/attendance?range=2w", headers=staff)
    body = resp.get_json()
    assert len(body["daily"]) == 14
    assert body["daily"][-1]["rate"] == 10
    assert body["rate"] == 1

    resp = client.get("/api/analytics/attendance?range=1y", headers=staff)
    assert resp.status_code == 400

    stats = client.get("/api/analytics/stats", headers=staff).get_json()
    assert stats == {
        "totalSessions": 1,
        "activeSessions": 1,
        "totalAttendance": 1,
        "presentCount": 1,
        "lateCount": 0,
    }


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert resp.get_json()["success"] is False


def test_unexpected_error_is_json_500(app, client):
    def explode():
        raise RuntimeError("boom")

    app.add_url_rule("/api/explode", "explode", explode)

    resp = client.get("/api/explode")
    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "message": "Server error"}
