"""
Payment Date Utilities
Local calendar-date helpers and the working-day resolver
"""
import logging
from datetime import date, datetime, timedelta
from typing import Iterator, Optional, Union

from paytrack.payment.types import SaturdayMode, WorkingDaysConfig, WorkingDaysCount

logger = logging.getLogger(__name__)

DateLike = Union[str, date]

SUNDAY = 0
SATURDAY = 6

FULL_DAY = 1.0
HALF_DAY = 0.5
OFF_DAY = 0.0


def parse_date(value: DateLike) -> date:
    """Parse a YYYY-MM-DD string (dates pass through unchanged)"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValueError(f"Invalid date {value!r}, expected YYYY-MM-DD") from None


def day_of_week(value: date) -> int:
    """Weekday number with 0=Sunday .. 6=Saturday"""
    return (value.weekday() + 1) % 7


def iter_dates(start: DateLike, end: DateLike) -> Iterator[date]:
    """Yield every date in [start, end]"""
    current = parse_date(start)
    end = parse_date(end)
    while current <= end:
        yield current
        current += timedelta(days=1)


def get_days_between(start: DateLike, end: DateLike) -> int:
    """Inclusive day count; 0 when end is before start"""
    days = (parse_date(end) - parse_date(start)).days + 1
    return max(0, days)


def weekday_occurrence(value: date) -> int:
    """Which occurrence of its weekday the date is within its month (1-5)"""
    return (value.day - 1) // 7 + 1


def resolve_saturday_mode(
    config: WorkingDaysConfig,
    saturday_mode: Optional[SaturdayMode] = None,
) -> Optional[SaturdayMode]:
    return saturday_mode if saturday_mode is not None else config.saturday_mode


def is_weekly_off(
    value: DateLike,
    config: WorkingDaysConfig,
    saturday_mode: Optional[SaturdayMode] = None,
) -> bool:
    """Check if a date is an off day under the weekly-off policy"""
    value = parse_date(value)
    weekday = day_of_week(value)

    if weekday in config.weekly_offs:
        return True
    if weekday != SATURDAY:
        return False

    mode = resolve_saturday_mode(config, saturday_mode)
    occurrence = weekday_occurrence(value)

    if mode == "all-off":
        return True
    if mode == "alternate-1-3" and occurrence in (1, 3):
        return True
    if mode == "alternate-2-4" and occurrence in (2, 4):
        return True

    # Legacy flags apply whatever the mode
    if config.second_saturday_off and occurrence == 2:
        return True
    if config.fourth_saturday_off and occurrence == 4:
        return True

    return False


def is_saturday_half_day(
    value: DateLike,
    saturday_mode: Optional[SaturdayMode] = None,
) -> bool:
    return day_of_week(parse_date(value)) == SATURDAY and saturday_mode == "half-day"


def get_working_hours_factor(
    value: DateLike,
    config: WorkingDaysConfig,
    saturday_mode: Optional[SaturdayMode] = None,
) -> float:
    """1.0 for a full working day, 0.5 for a half day, 0 for an off day"""
    if is_weekly_off(value, config, saturday_mode):
        return OFF_DAY
    if is_saturday_half_day(value, resolve_saturday_mode(config, saturday_mode)):
        return HALF_DAY
    return FULL_DAY


def calculate_working_days(
    start: DateLike,
    end: DateLike,
    config: WorkingDaysConfig,
    saturday_mode: Optional[SaturdayMode] = None,
) -> WorkingDaysCount:
    """Count working days (half days as 0.5), weekly offs and half days"""
    working_days = 0.0
    weekly_offs = 0
    half_days = 0

    for current in iter_dates(start, end):
        factor = get_working_hours_factor(current, config, saturday_mode)
        if factor == OFF_DAY:
            weekly_offs += 1
        elif factor == HALF_DAY:
            half_days += 1
            working_days += HALF_DAY
        else:
            working_days += FULL_DAY

    logger.debug(
        "Working days %s..%s: working=%s offs=%s half=%s",
        start, end, working_days, weekly_offs, half_days,
    )
    return WorkingDaysCount(
        working_days=working_days,
        weekly_offs=weekly_offs,
        half_days=half_days,
    )
