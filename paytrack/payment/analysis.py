"""
Attendance Analyzer
Classifies each expected working date from raw time entries
"""
import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from paytrack.payment.date_utils import DateLike, is_weekly_off, iter_dates, parse_date
from paytrack.payment.types import TimeEntry, TimeEntryAnalysis, WorkingDaysConfig

logger = logging.getLogger(__name__)

# Leave types paid in full; every other leave type is unpaid
PAID_LEAVE_TYPES = frozenset({"Sick", "Vacation"})

# A worked day below hours_per_day / 2 + margin counts as a half day.
HALF_DAY_HOURS_MARGIN = 1.0

HOLIDAY_WORK_CATEGORY = "other"


def _group_by_date(entries: Iterable[TimeEntry], start, end) -> Dict:
    grouped: Dict = defaultdict(list)
    for entry in entries:
        if start <= entry.date <= end:
            grouped[entry.date].append(entry)
    return dict(grouped)


def _is_paid_leave(entry: TimeEntry) -> bool:
    return entry.leave is not None and entry.leave.leave_type in PAID_LEAVE_TYPES


def _hours(entries: List[TimeEntry]) -> float:
    return sum((entry.total_hours or 0.0 for entry in entries), 0.0)


def analyze_time_entries(
    entries: Iterable[TimeEntry],
    start_date: DateLike,
    end_date: DateLike,
    work_config: WorkingDaysConfig,
    expected_start_time: Optional[str] = None,
    expected_end_time: Optional[str] = None,
    half_day_margin: float = HALF_DAY_HOURS_MARGIN,
) -> TimeEntryAnalysis:
    """
    Analyze time entries for a date range.

    Working dates without entries are absences, leave entries count as paid
    or unpaid leave, and worked hours feed the half-day, overtime and
    punctuality checks. Hours logged on weekly-off dates are collected
    separately as weekend hours.
    """
    start = parse_date(start_date)
    end = parse_date(end_date)
    entries_by_date = _group_by_date(entries, start, end)

    hours_per_day = work_config.hours_per_day
    half_day_limit = hours_per_day / 2 + half_day_margin

    total_hours = 0.0
    days_worked = 0
    overtime_hours = 0.0
    weekend_hours = 0.0
    holiday_hours = 0.0
    late_arrivals = 0
    early_departures = 0
    half_days = 0
    absences = 0
    paid_leaves = 0
    unpaid_leaves = 0

    for current in iter_dates(start, end):
        day_entries = entries_by_date.get(current, [])

        if is_weekly_off(current, work_config):
            weekend_hours += _hours([e for e in day_entries if not e.is_leave])
            continue

        if not day_entries:
            absences += 1
            continue

        leave_entry = next((e for e in day_entries if e.is_leave), None)
        if leave_entry is not None:
            if _is_paid_leave(leave_entry):
                paid_leaves += 1
            else:
                unpaid_leaves += 1
            continue

        day_hours = _hours(day_entries)
        total_hours += day_hours
        days_worked += 1

        if 0 < day_hours < half_day_limit:
            half_days += 1

        if day_hours > hours_per_day:
            overtime_hours += day_hours - hours_per_day

        holiday_hours += _hours([
            e for e in day_entries
            if e.is_holiday_work and e.holiday_category == HOLIDAY_WORK_CATEGORY
        ])

        # HH:mm strings compare correctly as text
        if expected_start_time:
            first_in = min(e.time_in for e in day_entries)
            if first_in > expected_start_time:
                late_arrivals += 1

        if expected_end_time:
            last_out = max(e.time_out for e in day_entries)
            if last_out and last_out < expected_end_time:
                early_departures += 1

    analysis = TimeEntryAnalysis(
        total_hours_worked=total_hours,
        total_days_worked=days_worked,
        overtime_hours=overtime_hours,
        weekend_hours=weekend_hours,
        holiday_hours=holiday_hours,
        late_arrivals=late_arrivals,
        early_departures=early_departures,
        half_days=half_days,
        absences=absences,
        paid_leaves=paid_leaves,
        unpaid_leaves=unpaid_leaves,
        entries_by_date=entries_by_date,
    )
    logger.debug(
        "Analyzed %s..%s: worked=%s absent=%s leave=%s/%s late=%s",
        start, end, days_worked, absences, paid_leaves, unpaid_leaves, late_arrivals,
    )
    return analysis
