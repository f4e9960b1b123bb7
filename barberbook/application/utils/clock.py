from __future__ import annotations

from datetime import date, datetime, time, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def combine_local(day: date, at: time, tz: ZoneInfo) -> datetime:
    """Wall-clock date + time in the business timezone, as a UTC instant."""
    local = datetime.combine(day, at, tzinfo=tz)
    instant = local.astimezone(timezone.utc)
    # times skipped by a DST jump do not survive the round trip
    if instant.astimezone(tz).replace(tzinfo=None) != local.replace(tzinfo=None):
        raise ValueError(f"{day.isoformat()} {at.strftime('%H:%M')} does not exist in {tz.key}")
    return instant


def safe_timezone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo("UTC")
