from models import db
from utils.time_utils import utcnow
from werkzeug.security import generate_password_hash, check_password_hash

ROLES = ("Student", "Instructor", "Admin")


class User(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    role = db.Column(db.String(20), nullable=False)  # "Student", "Instructor" or "Admin"
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password = db.Column(db.String(200), nullable=False)  # hashed
    face_descriptor = db.Column(db.JSON(none_as_null=True), nullable=True)  # only for students
    created_at = db.Column(db.DateTime, default=utcnow)

    def set_password(self, raw_password):
        self.password = generate_password_hash(raw_password)

    def check_password(self, raw_password):
        return check_password_hash(self.password, raw_password)

    @property
    def is_student(self):
        return self.role == "Student"

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
        }
