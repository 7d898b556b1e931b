# app.py
import os

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import Config
from logging_config import setup_logging
from models import db
from routes import register_blueprints
from services.errors import AttendanceError


def register_error_handlers(app):
    @app.errorhandler(AttendanceError)
    def handle_attendance_error(error):
        if error.status_code >= 500:
            app.logger.error("Request failed: %s", error.message)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({"success": False, "message": error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        app.logger.exception("Unhandled error: %s", error)
        return jsonify({"success": False, "message": "Server error"}), 500


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    setup_logging(app)

    db.init_app(app)
    with app.app_context():
        db.create_all()

    register_blueprints(app)
    register_error_handlers(app)
    app.logger.info("Attendance API ready (database: %s)", app.config["SQLALCHEMY_DATABASE_URI"])
    return app


# -------------------- Run --------------------
if __name__ == '__main__':
    debug = os.getenv('FLASK_DEBUG', 'False').lower() in ('true', '1', 'yes')
    create_app().run(
        host=os.getenv('FLASK_HOST', '127.0.0.1'),
        port=int(os.getenv('FLASK_PORT', 5000)),
        debug=debug,
    )
