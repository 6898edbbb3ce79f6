from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision, e.g. 2024-05-01T09:30:00.000Z"""
    return utc_now().isoformat(timespec="milliseconds").replace("+00:00", "Z")
