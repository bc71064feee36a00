"""Date arithmetic and timestamp decoding for BandSync Lite.

Stored events carry timestamps in several shapes (native datetimes, ISO
strings, epoch seconds, ``{"seconds", "nanoseconds"}`` mappings). Everything
inside the package works on timezone-aware datetimes; naive values are taken
as UTC.
"""

import logging
from collections.abc import Mapping
from datetime import UTC, date, datetime, time, timedelta, tzinfo
from typing import Any, Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

logger = logging.getLogger(__name__)


def ensure_timezone_aware(dt: datetime) -> datetime:
    """Return ``dt`` unchanged if aware, otherwise tagged as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt


def _from_epoch(seconds: float, nanos: Any = 0) -> datetime:
    if not isinstance(nanos, (int, float)) or isinstance(nanos, bool):
        raise ValueError(f"Non-numeric nanoseconds: {nanos!r}")
    try:
        return datetime.fromtimestamp(seconds + nanos / 1e9, tz=UTC)
    except (OverflowError, OSError, ValueError) as e:
        raise ValueError(f"Epoch timestamp out of range: {seconds!r}") from e


def to_datetime(value: Any) -> datetime:
    """Decode a stored timestamp value into an aware datetime.

    Args:
        value: ``datetime``, ``date``, ISO-8601 string, epoch seconds
            (int/float), a mapping with ``seconds``/``nanoseconds`` keys
            (``_seconds``/``_nanoseconds`` as serialised by some SDKs), or an
            object exposing ``seconds``/``nanoseconds`` attributes.

    Returns:
        Timezone-aware datetime (UTC when the source carried no zone)

    Raises:
        ValueError: If the value is not a recognisable timestamp
    """
    if isinstance(value, datetime):
        return ensure_timezone_aware(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=UTC)
    if isinstance(value, bool):
        raise ValueError(f"Boolean is not a timestamp: {value!r}")
    if isinstance(value, (int, float)):
        return _from_epoch(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Empty timestamp string")
        try:
            return ensure_timezone_aware(date_parser.isoparse(text))
        except (ValueError, OverflowError):
            # Looser formats such as "Jan 5 2024 19:30"
            try:
                return ensure_timezone_aware(date_parser.parse(text))
            except (ValueError, OverflowError) as e:
                raise ValueError(f"Unrecognised timestamp string: {value!r}") from e
    if isinstance(value, Mapping):
        seconds = value.get("seconds", value.get("_seconds"))
        nanos = value.get("nanoseconds", value.get("_nanoseconds", 0)) or 0
        if isinstance(seconds, (int, float)) and not isinstance(seconds, bool):
            return _from_epoch(seconds, nanos)
        raise ValueError(f"Timestamp mapping without seconds: {value!r}")

    seconds = getattr(value, "seconds", None)
    if isinstance(seconds, (int, float)) and not isinstance(seconds, bool):
        return _from_epoch(seconds, getattr(value, "nanoseconds", 0) or 0)

    raise ValueError(f"Unsupported timestamp type: {type(value).__name__}")


def end_of_day(value: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Return the last representable instant of ``value``'s calendar day.

    The calendar day is read in ``tz`` when given (the zone of the event the
    bound applies to), otherwise in ``value``'s own zone.
    """
    value = ensure_timezone_aware(value)
    if tz is not None:
        value = value.astimezone(tz)
    return datetime.combine(value.date(), time.max, tzinfo=value.tzinfo)


def end_date_bound(end_date: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Inclusive upper bound for a recurrence end date.

    An end date at exactly midnight in its own zone is a date-only value, so
    its calendar day is kept and closed at the end of that day in ``tz``.
    Any other instant is read in ``tz``.
    """
    end_date = ensure_timezone_aware(end_date)
    if end_date.time() == time.min:
        return datetime.combine(end_date.date(), time.max, tzinfo=tz or end_date.tzinfo)
    return end_of_day(end_date, tz)


def start_of_week(dt: datetime) -> datetime:
    """Return the Monday of ``dt``'s week, keeping ``dt``'s time of day."""
    return dt - timedelta(days=dt.isoweekday() - 1)


def add_months(dt: datetime, months: int) -> datetime:
    """Shift ``dt`` by whole months, clamping to the target month's last day.

    Jan 31 + 1 month is Feb 28 (Feb 29 in leap years), never Mar 3.
    """
    return dt + relativedelta(months=months)


def add_years(dt: datetime, years: int) -> datetime:
    """Shift ``dt`` by whole years; Feb 29 lands on Feb 28 in non-leap years."""
    return dt + relativedelta(years=years)


def months_between(earlier: datetime, later: datetime) -> int:
    """Calendar-month distance between two datetimes, ignoring the day."""
    return (later.year - earlier.year) * 12 + (later.month - earlier.month)
