# utils/time_utils.py
from datetime import datetime, timezone


def utcnow():
    """Naive UTC now; the database stores naive UTC datetimes."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def epoch_seconds(dt: datetime) -> int:
    return int(dt.replace(tzinfo=timezone.utc).timestamp())


def epoch_millis(dt: datetime) -> int:
    return int(round(dt.replace(tzinfo=timezone.utc).timestamp() * 1000))


def isoformat(dt):
    if dt is None:
        return None
    return dt.isoformat() + "Z"
