from routes.auth_routes import auth_bp
from routes.session_routes import session_bp
from routes.attendance_routes import attendance_bp
from routes.analytics_routes import analytics_bp


def register_blueprints(app):
    for blueprint in (auth_bp, session_bp, attendance_bp, analytics_bp):
        app.register_blueprint(blueprint)
