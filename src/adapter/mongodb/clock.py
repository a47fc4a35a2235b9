from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current UTC time at millisecond precision, as MongoDB stores it."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)
