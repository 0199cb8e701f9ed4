"""
Payslip Assembler
Builds a rounded payslip from recorded time entries and a salary record
"""
import logging
import math
from typing import Iterable

from paytrack.payment.amounts import round2, safe_divide
from paytrack.payment.analysis import analyze_time_entries
from paytrack.payment.deductions import compose_entry_deductions
from paytrack.payment.earnings import compose_entry_earnings
from paytrack.payment.rates import resolve_rates
from paytrack.payment.salary import monthly_amount
from paytrack.payment.types import (
    PaymentConfig,
    PayslipAttendance,
    PayslipData,
    PayslipDeductions,
    PayslipEarnings,
    PayslipPeriod,
    PayslipSummary,
    SalaryCycle,
    SalaryRecord,
    TimeEntry,
    WorkingDaysConfig,
)

logger = logging.getLogger(__name__)


def make_payslip_id(user_id: str, cycle: SalaryCycle) -> str:
    """PS-<last 6 of user id>-<cycle start as YYYYMMDD>"""
    return f"PS-{user_id[-6:]}-{cycle.start_date.strftime('%Y%m%d')}"


def working_days_config_for(payment_config: PaymentConfig, hours_per_day: float) -> WorkingDaysConfig:
    offs = payment_config.weekly_offs
    return WorkingDaysConfig(
        weekly_offs=offs.off_days,
        hours_per_day=hours_per_day,
        saturday_mode=offs.effective_saturday_mode,
        second_saturday_off=offs.second_saturday_off,
        fourth_saturday_off=offs.fourth_saturday_off,
    )


def generate_payslip_from_entries(
    entries: Iterable[TimeEntry],
    salary_record: SalaryRecord,
    payment_config: PaymentConfig,
    cycle: SalaryCycle,
    user_id: str,
) -> PayslipData:
    """
    Generate a payslip from time entries and salary configuration.

    The salary record's monthly amount is spread over the cycle's working
    days; pay then follows the days actually worked.
    """
    hours_per_day = salary_record.working.hours_per_day
    work_config = working_days_config_for(payment_config, hours_per_day)

    analysis = analyze_time_entries(
        entries,
        cycle.start_date,
        cycle.end_date,
        work_config,
        expected_start_time=payment_config.expected_start_time,
        expected_end_time=payment_config.expected_end_time,
    )

    rates = resolve_rates(
        monthly_amount(salary_record),
        "fixed_monthly",
        "working_days_only",
        cycle,
        work_config,
    )

    earnings = compose_entry_earnings(
        analysis,
        rates,
        payment_config.allowances,
        payment_config.overtime,
        payment_config.bonuses,
    )
    gross_earnings = earnings.gross_earnings

    deductions = compose_entry_deductions(
        basic_pay=earnings.basic_pay,
        gross_earnings=gross_earnings,
        daily_rate=rates.daily_rate,
        unpaid_leave_days=analysis.unpaid_leaves,
        late_arrivals=analysis.late_arrivals,
        tax=payment_config.tax_deductions,
    )
    net_salary = max(0.0, gross_earnings - deductions.total)

    working_days = rates.working_days_in_cycle
    weekend_work_days = math.ceil(safe_divide(analysis.weekend_hours, hours_per_day))

    payslip = PayslipData(
        id=make_payslip_id(user_id, cycle),
        user_id=user_id,
        period_start=cycle.start_date,
        period_end=cycle.end_date,
        period=PayslipPeriod(
            total_days=rates.total_days_in_cycle,
            working_days=working_days,
            weekly_offs=rates.weekly_offs,
            half_days=rates.half_days,
        ),
        attendance=PayslipAttendance(
            days_present=analysis.total_days_worked,
            days_absent=analysis.absences,
            half_days=analysis.half_days,
            late_arrivals=analysis.late_arrivals,
            early_departures=analysis.early_departures,
            paid_leave=analysis.paid_leaves,
            unpaid_leave=analysis.unpaid_leaves,
            overtime_hours=round2(analysis.overtime_hours),
            weekend_work_days=weekend_work_days,
            holiday_hours=round2(analysis.holiday_hours),
            total_hours_worked=round2(analysis.total_hours_worked),
            expected_hours=round2(working_days * hours_per_day),
        ),
        earnings=PayslipEarnings(
            basic_pay=round2(earnings.basic_pay - earnings.half_day_deduction),
            half_day_deduction=round2(earnings.half_day_deduction),
            hra=round2(earnings.hra),
            da=round2(earnings.da),
            transport_allowance=round2(earnings.transport),
            medical_allowance=round2(earnings.medical),
            special_allowance=round2(earnings.special),
            other_allowances=round2(earnings.other_allowances),
            overtime_pay=round2(earnings.overtime_pay),
            weekend_pay=round2(earnings.weekend_overtime_pay),
            holiday_pay=round2(earnings.holiday_overtime_pay),
            performance_bonus=round2(earnings.performance_bonus),
            attendance_bonus=round2(earnings.attendance_bonus),
            other_bonuses=round2(earnings.other_bonuses),
            gross_earnings=round2(gross_earnings),
        ),
        deductions=PayslipDeductions(
            income_tax=round2(deductions.income_tax),
            professional_tax=round2(deductions.professional_tax),
            provident_fund=round2(deductions.provident_fund),
            health_insurance=round2(deductions.health_insurance),
            unpaid_leave_deduction=round2(deductions.unpaid_leave),
            late_deduction=round2(deductions.late_deduction),
            other_deductions=round2(deductions.other),
            total_deductions=round2(deductions.total),
        ),
        summary=PayslipSummary(
            gross_salary=round2(gross_earnings),
            total_deductions=round2(deductions.total),
            net_salary=round2(net_salary),
            currency=payment_config.currency,
        ),
    )

    logger.debug(
        "Payslip %s: worked=%s gross=%.2f net=%.2f",
        payslip.id, analysis.total_days_worked, gross_earnings, net_salary,
    )
    return payslip
