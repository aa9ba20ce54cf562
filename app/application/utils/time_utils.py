from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo


def safe_timezone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except Exception:
        return ZoneInfo("UTC")


def to_provider_time(value: datetime, timezone: ZoneInfo) -> datetime:
    """Normalize a timestamp to the provider's timezone. Naive values are taken as provider-local."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone)
    return value.astimezone(timezone)
