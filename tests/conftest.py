import pytest

from app import create_app
from config import TestConfig
from models import db
from models.user_model import User
from utils.jwt_utils import create_auth_token


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    counter = {"n": 0}

    def _make_user(role="Student", name=None, password="secret123", face_descriptor=None):
        counter["n"] += 1
        user = User(
            name=name or f"{role} {counter['n']}",
            email=f"{role.lower()}{counter['n']}@example.com",
            role=role,
            face_descriptor=face_descriptor,
        )
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        return user

    return _make_user


@pytest.fixture
def auth_header():
    def _auth_header(user):
        return {"Authorization": f"Bearer {create_auth_token(user.id)}"}
    return _auth_header
