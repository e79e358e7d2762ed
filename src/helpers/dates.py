from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Наивные даты из старых записей считаются UTC"""
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
