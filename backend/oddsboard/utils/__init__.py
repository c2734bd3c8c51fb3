from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """Make a naive datetime timezone-aware (UTC); convert aware ones to UTC.

    Provider feeds are inconsistent: some send "Z", some an offset, some
    nothing at all. Naive values are taken to be UTC.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_utc(value: str | datetime) -> datetime:
    """Parse a date string or datetime into a tz-aware UTC datetime.

    Handles ISO 8601 strings (with or without Z/offset, with or without
    seconds) and bare datetimes.
    """
    if isinstance(value, datetime):
        return ensure_utc(value)
    return ensure_utc(datetime.fromisoformat(str(value).strip().replace("Z", "+00:00")))


def parse_day(value: str | date) -> date:
    """Accept ``YYYY-MM-DD``, ``YYYYMMDD`` or a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip().replace("-", "")
    return date(int(text[0:4]), int(text[4:6]), int(text[6:8]))


def day_window_utc(day: str | date, tz_name: str) -> tuple[datetime, datetime]:
    """Return the [start, end) UTC bounds of a calendar day in ``tz_name``."""
    local_start = datetime.combine(parse_day(day), time.min, tzinfo=ZoneInfo(tz_name))
    local_end = local_start + timedelta(days=1)
    return local_start.astimezone(timezone.utc), local_end.astimezone(timezone.utc)


def local_today(tz_name: str) -> date:
    """Today's calendar date in ``tz_name``, which runs behind UTC in the evening."""
    return utcnow().astimezone(ZoneInfo(tz_name)).date()


def is_within(value: datetime | None, start: datetime, end: datetime) -> bool:
    if value is None:
        return False
    return start <= ensure_utc(value) < end
