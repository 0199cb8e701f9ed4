"""
Rate Resolver
Converts a salary into daily and hourly rates for a cycle
"""
import logging
from datetime import date
from typing import Optional

from paytrack.payment.amounts import safe_divide
from paytrack.payment.date_utils import calculate_working_days, get_days_between
from paytrack.payment.types import (
    RateResolution,
    SalaryBasis,
    SalaryCycle,
    SalaryPayType,
    WorkingDaysConfig,
    WorkingDaysCount,
)

logger = logging.getLogger(__name__)

CALENDAR_MONTH_DAYS = 30


def effective_period(
    cycle: SalaryCycle,
    joining_date: Optional[date] = None,
    leaving_date: Optional[date] = None,
):
    """Narrow a cycle to the part an employee was on the payroll"""
    start = joining_date if joining_date and joining_date > cycle.start_date else cycle.start_date
    end = leaving_date if leaving_date and leaving_date < cycle.end_date else cycle.end_date
    return start, end


def resolve_rates(
    base_salary: float,
    salary_pay_type: SalaryPayType,
    salary_basis: SalaryBasis,
    cycle: SalaryCycle,
    work_config: WorkingDaysConfig,
    joining_date: Optional[date] = None,
    leaving_date: Optional[date] = None,
) -> RateResolution:
    """
    Derive daily and hourly rates.

    fixed_monthly salaries are pro-rated for mid-cycle joining/leaving and
    divided by the day count selected by the basis. daily_wage and hourly
    rates are taken as-is; pro-ration follows from the days actually worked.
    """
    effective_start, effective_end = effective_period(cycle, joining_date, leaving_date)

    total_days = get_days_between(cycle.start_date, cycle.end_date)
    effective_days = get_days_between(effective_start, effective_end)

    if effective_days > 0:
        counts = calculate_working_days(effective_start, effective_end, work_config)
    else:
        # Joined after or left before the cycle
        counts = WorkingDaysCount(working_days=0, weekly_offs=0, half_days=0)

    pro_rata_factor = safe_divide(effective_days, total_days)
    hours_per_day = work_config.hours_per_day

    if salary_pay_type == "fixed_monthly":
        pro_rated_salary = base_salary * pro_rata_factor
        if salary_basis == "calendar_month":
            daily_rate = pro_rated_salary / CALENDAR_MONTH_DAYS
        elif salary_basis == "cycle_days":
            daily_rate = safe_divide(pro_rated_salary, effective_days)
        elif salary_basis == "working_days_only":
            daily_rate = safe_divide(pro_rated_salary, counts.working_days)
        else:
            raise ValueError(f"Unknown salary basis: {salary_basis}")
        hourly_rate = safe_divide(daily_rate, hours_per_day)
    elif salary_pay_type == "daily_wage":
        daily_rate = base_salary
        hourly_rate = safe_divide(daily_rate, hours_per_day)
    elif salary_pay_type == "hourly":
        hourly_rate = base_salary
        daily_rate = hourly_rate * hours_per_day
    else:
        raise ValueError(f"Unknown salary pay type: {salary_pay_type}")

    logger.debug(
        "Rates for %s (%s/%s): daily=%.4f hourly=%.4f pro_rata=%.4f",
        cycle.start_date, salary_pay_type, salary_basis,
        daily_rate, hourly_rate, pro_rata_factor,
    )

    return RateResolution(
        daily_rate=daily_rate,
        hourly_rate=hourly_rate,
        pro_rata_factor=pro_rata_factor,
        effective_start=effective_start,
        effective_end=effective_end,
        total_days_in_cycle=total_days,
        effective_days_in_cycle=effective_days,
        working_days_in_cycle=counts.working_days,
        weekly_offs=counts.weekly_offs,
        half_days=counts.half_days,
    )
