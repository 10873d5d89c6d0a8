"""Visiting-hours evaluation for HalabTours.

Places publish their visiting hours as free text, e.g. ``"9:00 AM - 5:00 PM"``.
Parsing is best-effort: a missing or unreadable schedule counts as always open.
"""

import logging
import re
from datetime import datetime
from typing import Optional

logger = logging.getLogger(__name__)

_MERIDIEM = re.compile(r"\s*(am|pm)\s*", re.IGNORECASE)


def parse_time_to_minutes(text: str) -> int:
    """Convert a human time expression to minutes since midnight.

    Accepts ``"9:00 AM"``, ``"9 pm"``, ``"12:30 am"`` and 24-hour ``"17:45"``.

    Raises:
        ValueError: If the text does not contain a readable hour and minute.
    """
    lowered = text.strip().lower()
    is_pm = "pm" in lowered
    is_am = "am" in lowered

    parts = _MERIDIEM.sub("", lowered, count=1).strip().split(":")
    hours = int(parts[0])
    minutes = int(parts[1]) if len(parts) > 1 else 0

    if is_pm and hours < 12:
        hours += 12
    if is_am and hours == 12:
        hours = 0

    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise ValueError(f"Time out of range: {text!r}")
    return hours * 60 + minutes


def is_open_now(visit_time_range: Optional[str], now: Optional[datetime] = None) -> bool:
    """Check whether ``now`` falls inside a ``"<open> - <close>"`` window.

    A window whose closing time is earlier than its opening time crosses
    midnight. Both ends are inclusive.

    Args:
        visit_time_range: Free-text visiting hours, may be None
        now: Moment to evaluate; defaults to the local wall-clock time

    Returns:
        True if the place is open, or if the schedule is missing or unreadable
    """
    if not visit_time_range or not visit_time_range.strip():
        return True

    now = now or datetime.now()
    current = now.hour * 60 + now.minute

    try:
        open_text, close_text = visit_time_range.split("-", 1)
        open_minutes = parse_time_to_minutes(open_text)
        close_minutes = parse_time_to_minutes(close_text)
    except ValueError:
        logger.debug(f"Unreadable visiting hours {visit_time_range!r}, treating as open")
        return True

    if close_minutes < open_minutes:
        return current >= open_minutes or current <= close_minutes

    return open_minutes <= current <= close_minutes
