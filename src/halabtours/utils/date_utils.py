"""Date helpers for HalabTours."""

from datetime import datetime, timezone
from typing import Optional, Union

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from ..models.filters import DateRange

DateLike = Union[datetime, str]

_WINDOWS = {
    DateRange.WEEK: relativedelta(days=7),
    DateRange.MONTH: relativedelta(months=1),
    DateRange.YEAR: relativedelta(years=1),
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_datetime(value: DateLike) -> datetime:
    """Parse an ISO-8601 string (or pass a datetime through) as an aware datetime.

    Naive values are taken to be UTC, which is what the backend emits.
    """
    if isinstance(value, str):
        value = date_parser.isoparse(value)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def window_start(date_range: DateRange, now: Optional[datetime] = None) -> Optional[datetime]:
    """Earliest creation instant admitted by a relative date window.

    Months and years are calendar months and years, so a month before
    March 31st is February 28th/29th.

    Returns:
        The window start, or None for ``DateRange.ALL``
    """
    delta = _WINDOWS.get(date_range)
    if delta is None:
        return None
    return to_datetime(now or utc_now()) - delta


def is_future_date(value: DateLike, now: Optional[datetime] = None) -> bool:
    return to_datetime(value) > to_datetime(now or utc_now())


def is_past_date(value: DateLike, now: Optional[datetime] = None) -> bool:
    return to_datetime(value) < to_datetime(now or utc_now())
