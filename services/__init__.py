"""
Domain layer: token issuing, scan classification, session lifecycle,
face matching and analytics. Routes call into these; they never touch
request state directly.
"""
from flask import current_app, has_app_context


def get_setting(name, default):
    """Config value from the running app, or the default outside one."""
    if has_app_context():
        return current_app.config.get(name, default)
    return default
