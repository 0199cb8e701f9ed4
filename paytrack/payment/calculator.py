"""
Pay Slip Calculator
Entry-independent pay slip projection from pre-aggregated counters
"""
import logging

from paytrack.payment.amounts import round2
from paytrack.payment.deductions import compose_projected_deductions
from paytrack.payment.earnings import compose_projected_earnings
from paytrack.payment.rates import resolve_rates
from paytrack.payment.types import (
    AttendanceBreakdown,
    BonusSummary,
    DeductionsBreakdown,
    EarningsBreakdown,
    PaySlipBreakdown,
    PaySlipInput,
    PaySlipOutput,
    PeriodSummary,
    RateSummary,
)

logger = logging.getLogger(__name__)


def _base_pay(data: PaySlipInput, rates, actual_days_worked: float, unpaid_leave_deduction: float) -> float:
    if data.salary_pay_type == "fixed_monthly":
        return data.base_salary * rates.pro_rata_factor - unpaid_leave_deduction
    if data.salary_pay_type == "hourly":
        return rates.hourly_rate * actual_days_worked * data.working_days.hours_per_day
    return rates.daily_rate * actual_days_worked


def calculate_pay_slip(data: PaySlipInput) -> PaySlipOutput:
    """Calculate a complete pay slip from a projection input"""
    rates = resolve_rates(
        data.base_salary,
        data.salary_pay_type,
        data.salary_basis,
        data.cycle,
        data.working_days,
        joining_date=data.joining_date,
        leaving_date=data.leaving_date,
    )

    leaves = data.leaves
    unpaid_leave_days = leaves.unpaid_leave_taken + leaves.half_days_taken * 0.5
    unpaid_leave_deduction = rates.daily_rate * unpaid_leave_days
    actual_days_worked = max(0.0, rates.working_days_in_cycle - unpaid_leave_days)

    base_pay = _base_pay(data, rates, actual_days_worked, unpaid_leave_deduction)

    earnings = compose_projected_earnings(
        base_pay, rates, data.allowances, data.overtime, data.bonuses,
    )
    gross_earnings = earnings.gross_earnings

    deductions = compose_projected_deductions(
        base_pay, gross_earnings, unpaid_leave_deduction, data.deductions,
    )
    net_salary = max(0.0, gross_earnings - deductions.total)

    breakdown = PaySlipBreakdown(
        period=PeriodSummary(
            start=rates.effective_start,
            end=rates.effective_end,
            total_days=rates.effective_days_in_cycle,
            working_days=rates.working_days_in_cycle,
            weekly_offs=rates.weekly_offs,
            half_days=rates.half_days,
        ),
        rates=RateSummary(
            daily_rate=round2(rates.daily_rate),
            hourly_rate=round2(rates.hourly_rate),
            pro_rata_factor=rates.pro_rata_factor,
        ),
        earnings=EarningsBreakdown(
            base_pay=round2(base_pay),
            hra=round2(earnings.hra),
            da=round2(earnings.da),
            transport_allowance=round2(earnings.transport),
            medical_allowance=round2(earnings.medical),
            special_allowance=round2(earnings.special),
            other_allowances=round2(earnings.other_allowances),
            overtime_pay=round2(earnings.overtime_pay),
            weekend_overtime_pay=round2(earnings.weekend_overtime_pay),
            holiday_overtime_pay=round2(earnings.holiday_overtime_pay),
            bonuses=BonusSummary(
                performance=round2(earnings.performance_bonus),
                attendance=round2(earnings.attendance_bonus),
                other=round2(earnings.other_bonuses),
                total=round2(earnings.total_bonuses),
            ),
            gross_earnings=round2(gross_earnings),
        ),
        deductions=DeductionsBreakdown(
            fixed=round2(deductions.fixed),
            percentage=round2(deductions.percentage),
            late_deduction=round2(deductions.late_deduction),
            unpaid_leave=round2(deductions.unpaid_leave),
            professional_tax=round2(deductions.professional_tax),
            provident_fund=round2(deductions.provident_fund),
            income_tax=round2(deductions.income_tax),
            health_insurance=round2(deductions.health_insurance),
            other=round2(deductions.other),
            total=round2(deductions.total),
        ),
        attendance=AttendanceBreakdown(
            days_worked=round2(actual_days_worked),
            paid_leave_taken=leaves.paid_leave_taken,
            unpaid_leave_taken=leaves.unpaid_leave_taken,
            half_days=leaves.half_days_taken,
            overtime_hours=data.overtime.overtime_hours,
            weekend_overtime_hours=data.overtime.weekend_overtime_hours,
            holiday_overtime_hours=data.overtime.holiday_overtime_hours,
        ),
    )

    logger.debug(
        "Projected pay slip %s..%s: gross=%.2f deductions=%.2f net=%.2f",
        data.cycle.start_date, data.cycle.end_date,
        gross_earnings, deductions.total, net_salary,
    )

    return PaySlipOutput(
        gross_salary=round2(gross_earnings),
        working_days=rates.working_days_in_cycle,
        actual_days_worked=round2(actual_days_worked),
        base_pay=round2(base_pay),
        total_allowances=round2(earnings.total_allowances),
        overtime_pay=round2(earnings.total_overtime),
        deductions=round2(deductions.total),
        bonuses=round2(earnings.total_bonuses),
        net_salary=round2(net_salary),
        breakdown=breakdown,
        currency=data.currency,
    )
