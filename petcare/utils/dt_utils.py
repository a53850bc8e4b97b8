# File: utils/dt_utils.py
"""Date utilities for petcare.

Pure Python date functions used by every engine. The engines work at
calendar-day precision, so everything here normalizes to `datetime.date`.

The wall clock is read in exactly one place, dt_today_local(). Engines take
`today` as an explicit argument; only the outer entry points fall back to
dt_resolve_today() when the caller does not pass one.

Functions:
    - set_default_timezone / get_default_timezone: Configure local timezone
    - dt_today_local: Get today's date in local timezone
    - dt_resolve_today: Explicit today, or the local date when None
    - dt_parse_date: Normalize str/date/datetime input to a date
    - dt_parse_datetime: Normalize timestamps to aware datetimes
    - dt_add_days / dt_add_weeks / dt_add_months: Interval arithmetic
    - dt_days_between: Signed calendar-day difference
    - dt_age: Age of a pet in days, weeks, months and years
"""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
import logging
from zoneinfo import ZoneInfo

# Third-party date utilities
from dateutil.relativedelta import relativedelta

# Module-level logger
_LOGGER = logging.getLogger(__name__)

# Default timezone - can be overridden by caller
DEFAULT_TIME_ZONE: ZoneInfo = ZoneInfo("UTC")

# Accepted non-ISO date formats, tried in order
DATE_INPUT_FORMATS: tuple[str, ...] = ("%d/%m/%Y", "%Y/%m/%d", "%d-%m-%Y")


# ==============================================================================
# Timezone Configuration
# ==============================================================================


def set_default_timezone(tz: ZoneInfo) -> None:
    """Set the timezone used to turn aware datetimes and "now" into dates.

    Args:
        tz: ZoneInfo object representing the default timezone
    """
    global DEFAULT_TIME_ZONE  # noqa: PLW0603
    DEFAULT_TIME_ZONE = tz


def get_default_timezone() -> ZoneInfo:
    """Get the current default timezone."""
    return DEFAULT_TIME_ZONE


# ==============================================================================
# Current Date
# ==============================================================================


def dt_today_local(tz: ZoneInfo | None = None) -> date:
    """Return today's date in local timezone as a `datetime.date`.

    Args:
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.

    Returns:
        Today's date in the specified timezone.
    """
    tz_info = tz or DEFAULT_TIME_ZONE
    return datetime.now(UTC).astimezone(tz_info).date()


def dt_resolve_today(today: date | datetime | str | None = None) -> date:
    """Return the evaluation date for an entry point.

    Args:
        today: Explicit evaluation date (any dt_parse_date input), or None to
            read the local wall clock.

    Returns:
        The evaluation date.

    Raises:
        ValueError: If an explicit value cannot be parsed.
    """
    if today is None:
        return dt_today_local()
    parsed = dt_parse_date(today)
    if parsed is None:
        raise ValueError(f"Unparseable evaluation date: {today!r}")
    return parsed


# ==============================================================================
# Parsing
# ==============================================================================


def dt_parse_date(value: str | date | datetime | None) -> date | None:
    """Safely normalize a date-like value into a `datetime.date`.

    Accepts:
    - date objects (returned as-is)
    - datetime objects (aware ones are converted to DEFAULT_TIME_ZONE first)
    - "2025-04-07" and full ISO datetimes such as "2025-04-07T10:00:00Z"
    - "07/04/2025" (day first), "2025/04/07", "07-04-2025"

    Args:
        value: Value to parse, or None

    Returns:
        datetime.date or None if parsing fails.

    Example:
        dt_parse_date("2025-12-07T23:30:00-03:00") → datetime.date(2025, 12, 8)
        (with the default UTC timezone)
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(DEFAULT_TIME_ZONE).date()
        return value.date()

    if isinstance(value, date):
        return value

    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()

    # Try ISO format first (most common)
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass

    try:
        return dt_parse_date(datetime.fromisoformat(text))
    except ValueError:
        pass

    for fmt in DATE_INPUT_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    _LOGGER.debug("dt_parse_date: could not parse %r", value)
    return None


def dt_parse_datetime(value: str | date | datetime | None) -> datetime | None:
    """Normalize a timestamp-like value into an aware `datetime`.

    Naive values are assumed to be in DEFAULT_TIME_ZONE. Plain dates become
    local midnight. Used for ordering keys such as record creation times,
    where same-day precision matters.

    Args:
        value: Value to parse, or None

    Returns:
        Timezone-aware datetime or None if parsing fails.
    """
    if value is None:
        return None

    result: datetime | None = None
    if isinstance(value, datetime):
        result = value
    elif isinstance(value, date):
        result = datetime.combine(value, datetime.min.time())
    elif isinstance(value, str) and value.strip():
        try:
            result = datetime.fromisoformat(value.strip())
        except ValueError:
            parsed = dt_parse_date(value)
            if parsed is None:
                return None
            result = datetime.combine(parsed, datetime.min.time())
    else:
        return None

    if result.tzinfo is None:
        result = result.replace(tzinfo=DEFAULT_TIME_ZONE)
    return result


# ==============================================================================
# Interval Calculations
# ==============================================================================


def dt_add_days(base: date, days: int) -> date:
    """Add (or subtract, with a negative value) whole days to a date."""
    return base + timedelta(days=days)


def dt_add_weeks(base: date, weeks: float) -> date:
    """Add a possibly fractional number of weeks to a date.

    Fractional days truncate toward `base` (0.5 weeks = 3 days).

    Examples:
        dt_add_weeks(date(2026, 1, 1), 6) → date(2026, 2, 12)
        dt_add_weeks(date(2026, 1, 1), 1.5) → date(2026, 1, 11)
    """
    days = int(weeks * 7)
    return base + timedelta(days=days)


def dt_add_months(base: date, months: int) -> date:
    """Add calendar months to a date, clamping to the month end.

    Uses relativedelta so Jan 31 + 1 month = Feb 28 and
    Feb 29 2024 + 12 months = Feb 28 2025.
    """
    return base + relativedelta(months=months)


def dt_days_between(start: date, end: date) -> int:
    """Return the signed number of calendar days from `start` to `end`."""
    return (end - start).days


def dt_age(birth_date: date, today: date) -> dict[str, int]:
    """Calculate a pet's age at `today` in several units.

    Args:
        birth_date: Date of birth
        today: Evaluation date

    Returns:
        Dictionary with keys "days", "weeks", "months", "years". Months and
        years are whole calendar units (relativedelta). Negative ages (birth
        date in the future) are returned as zero.
    """
    days = dt_days_between(birth_date, today)
    if days < 0:
        return {"days": 0, "weeks": 0, "months": 0, "years": 0}

    delta = relativedelta(today, birth_date)
    return {
        "days": days,
        "weeks": days // 7,
        "months": delta.years * 12 + delta.months,
        "years": delta.years,
    }
