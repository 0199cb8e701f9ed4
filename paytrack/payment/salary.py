"""
Salary History
Helpers over a user's append-only salary timeline
"""
import logging
from typing import List, Optional, Sequence, Tuple

from paytrack.payment.amounts import round2
from paytrack.payment.date_utils import DateLike, parse_date
from paytrack.payment.types import (
    OvertimeSettings,
    SalaryCycle,
    SalaryRecord,
    SalaryType,
    WorkingConfig,
)

logger = logging.getLogger(__name__)

FALLBACK_OVERTIME_MULTIPLIER = 1.5


def monthly_amount(record: SalaryRecord) -> float:
    if record.salary_type == "annual":
        return record.amount / 12
    return record.amount


def sort_salary_history(records: Sequence[SalaryRecord]) -> List[SalaryRecord]:
    return sorted(records or [], key=lambda r: r.effective_from)


def pick_effective_salary_record(
    records: Sequence[SalaryRecord],
    on_date: DateLike,
) -> Optional[SalaryRecord]:
    """Latest record whose effective_from is not after the given date"""
    on_date = parse_date(on_date)
    effective = None
    for record in sort_salary_history(records):
        if record.effective_from > on_date:
            break
        effective = record
    return effective


def select_salary_for_cycle(
    records: Sequence[SalaryRecord],
    cycle: SalaryCycle,
) -> Optional[SalaryRecord]:
    """Record in force at the end of the cycle, else the earliest record"""
    history = sort_salary_history(records)
    if not history:
        return None
    record = pick_effective_salary_record(history, cycle.end_date)
    if record is None:
        logger.warning(
            "No salary record effective by %s, using earliest from %s",
            cycle.end_date, history[0].effective_from,
        )
        record = history[0]
    return record


def add_salary_increment(
    records: Sequence[SalaryRecord],
    record: SalaryRecord,
) -> List[SalaryRecord]:
    """Return a new history with the record added; existing records are never changed"""
    if record.amount <= 0:
        raise ValueError("Salary amount must be positive")
    if any(r.effective_from == record.effective_from for r in records):
        raise ValueError(f"A salary record already takes effect on {record.effective_from}")
    return sort_salary_history([*records, record])


def hourly_from_salary(salary_type: SalaryType, amount: float, working: WorkingConfig) -> float:
    """Hourly rate implied by a salary and its working hours, rounded to 2 dp"""
    hours_per_month = working.hours_per_day * working.days_per_month
    if hours_per_month <= 0:
        return 0.0
    monthly = amount / 12 if salary_type == "annual" else amount
    return round2(monthly / hours_per_month)


def compute_earnings_with_overtime(
    total_hours: float,
    hourly_rate: float,
    overtime: Optional[OvertimeSettings] = None,
) -> float:
    """Earnings for one day's hours, paying hours past the threshold at the overtime multiplier"""
    if overtime is None or not overtime.enabled:
        return round2(total_hours * hourly_rate)

    threshold = overtime.threshold_hours_per_day
    multiplier = overtime.regular_multiplier if overtime.regular_multiplier > 0 else FALLBACK_OVERTIME_MULTIPLIER
    base_hours = min(total_hours, threshold)
    extra_hours = max(0.0, total_hours - threshold)
    return round2(base_hours * hourly_rate + extra_hours * hourly_rate * multiplier)


def effective_hourly_rate(records: Sequence[SalaryRecord], on_date: DateLike) -> float:
    """Hourly rate from the salary in force on a date, 0 when none applies"""
    record = pick_effective_salary_record(records, on_date)
    if record is None:
        return 0.0
    return hourly_from_salary(record.salary_type, record.amount, record.working)


def price_time_entry(
    total_hours: float,
    on_date: DateLike,
    records: Sequence[SalaryRecord],
    overtime: Optional[OvertimeSettings] = None,
) -> Tuple[float, float]:
    """Hourly rate and earnings for one logged session"""
    hourly_rate = effective_hourly_rate(records, on_date)
    return hourly_rate, compute_earnings_with_overtime(total_hours, hourly_rate, overtime)
