"""
Logging setup for the attendance backend.
"""
import logging
import logging.handlers
from pathlib import Path

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(lineno)d - %(message)s'


def setup_logging(app, max_log_size=10 * 1024 * 1024, backup_count=5):
    """
    Configure the root, Flask and security loggers.

    Args:
        app: Flask app instance; LOG_LEVEL and LOG_DIR are read from its config
        max_log_size: size in bytes before a log file is rotated
        backup_count: number of rotated files kept
    """
    log_level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    handlers = []

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    log_dir = app.config.get('LOG_DIR')
    security_handler = None
    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_dir / 'attendance.log',
            maxBytes=max_log_size,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

        security_handler = logging.handlers.RotatingFileHandler(
            log_dir / 'security.log',
            maxBytes=max_log_size,
            backupCount=backup_count,
            encoding='utf-8'
        )
        security_handler.setLevel(logging.INFO)
        security_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in handlers:
        root_logger.addHandler(handler)

    security = logging.getLogger('security')
    security.setLevel(logging.INFO)
    for handler in security.handlers[:]:
        security.removeHandler(handler)
    if security_handler is not None:
        security.addHandler(security_handler)

    app.logger.setLevel(log_level)
    app.logger.info("Logging configured (level=%s, dir=%s)", logging.getLevelName(log_level), log_dir)


class SecurityLogger:
    """Logger for authentication and access events"""

    def __init__(self):
        self.logger = logging.getLogger('security')

    def log_login(self, email, ip_address, success=True, method='password'):
        status = "SUCCESS" if success else "FAILED"
        self.logger.info("LOGIN %s - User: %s, Method: %s, IP: %s", status, email, method, ip_address)

    def log_unauthorized_access(self, endpoint, ip_address, user_id=None):
        self.logger.warning(
            "UNAUTHORIZED ACCESS - Endpoint: %s, IP: %s, User: %s", endpoint, ip_address, user_id or "-"
        )


security_logger = SecurityLogger()


def get_client_ip(request):
    """Client IP, honouring reverse proxy headers"""
    if request.headers.get('X-Forwarded-For'):
        return request.headers.get('X-Forwarded-For').split(',')[0].strip()
    elif request.headers.get('X-Real-IP'):
        return request.headers.get('X-Real-IP')
    return request.remote_addr
