# config.py
import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///attendance.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # auth tokens handed out on login
    JWT_SECRET = os.getenv("JWT_SECRET", "jwt-secret-please-change-before-deploying")
    JWT_ALGO = "HS256"
    AUTH_TOKEN_DAYS = int(os.getenv("AUTH_TOKEN_DAYS", "7"))

    # attendance scan protocol
    TOKEN_TTL_SECONDS = int(os.getenv("TOKEN_TTL_SECONDS", "10"))
    DUPLICATE_WINDOW_SECONDS = int(os.getenv("DUPLICATE_WINDOW_SECONDS", "60"))
    LATE_AFTER_SECONDS = int(os.getenv("LATE_AFTER_SECONDS", "600"))

    FACE_MATCH_THRESHOLD = float(os.getenv("FACE_MATCH_THRESHOLD", "0.6"))
    FACE_DESCRIPTOR_LENGTH = int(os.getenv("FACE_DESCRIPTOR_LENGTH", "128"))

    # analytics assume this many students per session (there is no roster)
    NOMINAL_CLASS_SIZE = int(os.getenv("NOMINAL_CLASS_SIZE", "10"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR = os.getenv("LOG_DIR", "logs")


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    JWT_SECRET = "test-secret-for-the-attendance-suite"
    LOG_DIR = None
