"""Enrolled face descriptors, stored on student user records."""
import logging

from sqlalchemy.exc import SQLAlchemyError

from models import db
from models.user_model import User
from services import get_setting
from services.errors import Forbidden, InternalFailure, ValidationError
from services.face_matcher import as_descriptor

logger = logging.getLogger(__name__)

FACE_DESCRIPTOR_LENGTH = 128


def validate_descriptor(values):
    vector = as_descriptor(values)
    expected = get_setting("FACE_DESCRIPTOR_LENGTH", FACE_DESCRIPTOR_LENGTH)
    if expected and vector.size != expected:
        raise ValidationError(f"Face descriptor must have {expected} values")
    return vector


def _commit(user):
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Could not update face descriptor for user %s", user.id)
        raise InternalFailure()


def enroll_descriptor(user, descriptor):
    if not user.is_student:
        raise Forbidden("Only students can enroll a face")
    vector = validate_descriptor(descriptor)
    user.face_descriptor = vector.tolist()
    _commit(user)
    logger.info("Enrolled face descriptor for user %s", user.id)
    return user


def get_descriptor(user):
    if not user.face_descriptor:
        return None
    return as_descriptor(user.face_descriptor)


def has_face_recognition(user):
    return get_descriptor(user) is not None


def remove_descriptor(user):
    if not user.face_descriptor:
        return False
    user.face_descriptor = None
    _commit(user)
    logger.info("Removed face descriptor for user %s", user.id)
    return True


def load_gallery():
    """(User, descriptor) pairs for every enrolled student, in id order."""
    students = (
        User.query.filter(User.role == "Student", User.face_descriptor.isnot(None))
        .order_by(User.id)
        .all()
    )
    return [(student, get_descriptor(student)) for student in students if student.face_descriptor]
