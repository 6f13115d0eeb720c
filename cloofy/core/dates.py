import re
from datetime import date, datetime, time, timedelta, timezone

from cloofy.core.errors import InvalidMonth

_MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def start_of_day(value: date) -> datetime:
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def trailing_window_start(days: int, *, now: datetime | None = None) -> datetime:
    today = (now or utcnow()).astimezone(timezone.utc).date()
    return start_of_day(today - timedelta(days=days))


def parse_month(value) -> tuple[datetime, datetime] | None:
    """Return the ``[start, end)`` UTC range for a ``YYYY-MM`` string.

    Blank values mean "all time" and yield ``None``.
    """
    if value is None:
        return None
    value_text = str(value).strip()
    if not value_text:
        return None
    match = _MONTH_PATTERN.match(value_text)
    if not match:
        raise InvalidMonth(value)
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise InvalidMonth(value)
    start = start_of_day(date(year, month, 1))
    if month == 12:
        end = start_of_day(date(year + 1, 1, 1))
    else:
        end = start_of_day(date(year, month + 1, 1))
    return start, end
