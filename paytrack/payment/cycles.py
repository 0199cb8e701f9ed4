"""
Salary Cycles
Monthly pay periods with an optional custom start day (e.g. 19th to 18th)
"""
import calendar
from datetime import date
from typing import List, Optional, Tuple

from paytrack.payment.types import SalaryCycle

MIN_CYCLE_START_DAY = 1
MAX_CYCLE_START_DAY = 28


def _check_cycle_start_day(cycle_start_day: int):
    if not MIN_CYCLE_START_DAY <= cycle_start_day <= MAX_CYCLE_START_DAY:
        raise ValueError(
            f"Cycle start day must be between {MIN_CYCLE_START_DAY} and "
            f"{MAX_CYCLE_START_DAY}, got {cycle_start_day}"
        )


def _shift_month(year: int, month: int, offset: int) -> Tuple[int, int]:
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def create_monthly_cycle(year: int, month: int, cycle_start_day: int = 1) -> SalaryCycle:
    """
    Create the salary cycle that starts in the given month.

    A start day of 1 yields the calendar month; any other day runs from that
    day to the day before it in the following month.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")
    _check_cycle_start_day(cycle_start_day)

    if cycle_start_day == 1:
        last_day = calendar.monthrange(year, month)[1]
        return SalaryCycle(start_date=date(year, month, 1), end_date=date(year, month, last_day))

    end_year, end_month = _shift_month(year, month, 1)
    return SalaryCycle(
        start_date=date(year, month, cycle_start_day),
        end_date=date(end_year, end_month, cycle_start_day - 1),
    )


def _current_cycle_month(cycle_start_day: int, today: Optional[date]) -> Tuple[int, int]:
    _check_cycle_start_day(cycle_start_day)
    today = today or date.today()
    if today.day >= cycle_start_day:
        return today.year, today.month
    # Cycle started last month
    return _shift_month(today.year, today.month, -1)


def get_current_salary_cycle(cycle_start_day: int = 1, today: Optional[date] = None) -> SalaryCycle:
    year, month = _current_cycle_month(cycle_start_day, today)
    return create_monthly_cycle(year, month, cycle_start_day)


def get_last_n_cycles(n: int, cycle_start_day: int = 1, today: Optional[date] = None) -> List[SalaryCycle]:
    """The current cycle and the n-1 before it, oldest first"""
    if n < 0:
        raise ValueError("Number of cycles cannot be negative")
    year, month = _current_cycle_month(cycle_start_day, today)
    return [
        create_monthly_cycle(*_shift_month(year, month, -offset), cycle_start_day)
        for offset in reversed(range(n))
    ]


def get_next_n_cycles(n: int, cycle_start_day: int = 1, today: Optional[date] = None) -> List[SalaryCycle]:
    """The n cycles after the current one"""
    if n < 0:
        raise ValueError("Number of cycles cannot be negative")
    year, month = _current_cycle_month(cycle_start_day, today)
    return [
        create_monthly_cycle(*_shift_month(year, month, offset), cycle_start_day)
        for offset in range(1, n + 1)
    ]


def get_yearly_salary_cycles(year: int, cycle_start_day: int = 1) -> List[SalaryCycle]:
    return [create_monthly_cycle(year, month, cycle_start_day) for month in range(1, 13)]
