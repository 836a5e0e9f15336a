from __future__ import annotations

from datetime import date, datetime, timezone

from zoneinfo import ZoneInfo


def parse_ymd(value: str | date | None) -> date | None:
    """Parse a 'YYYY-MM-DD' string into a calendar date.

    The string is split into its year/month/day components so no timezone
    conversion can move the date by one day. `date` values pass through and
    datetimes are truncated to their own date.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    parts = value.strip()[:10].split("-")
    if len(parts) != 3:
        raise ValueError(f"Invalid calendar date: {value!r}")
    year, month, day = (int(p) for p in parts)
    return date(year, month, day)


def format_ymd(value: date | None) -> str | None:
    return value.isoformat() if value is not None else None


def ensure_utc(dt: datetime) -> datetime:
    """Return `dt` as an aware UTC datetime, assuming UTC for naive values."""
    if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_timestamp(value: str | datetime | None) -> datetime | None:
    """Parse an ISO-8601 timestamp (trailing 'Z' accepted) into aware UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    s = value.strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    return ensure_utc(datetime.fromisoformat(s))


def format_timestamp(value: datetime | None) -> str | None:
    return ensure_utc(value).isoformat() if value is not None else None


def local_today(tz_name: str | None = None) -> date:
    """Today's calendar date in `tz_name`, or in the system zone when unset."""
    if tz_name:
        return datetime.now(ZoneInfo(tz_name)).date()
    return date.today()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
