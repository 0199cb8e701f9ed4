"""
Earnings Composer
Combines rates, attendance, allowances, overtime and bonuses into gross pay
"""
from pydantic import BaseModel

from paytrack.payment.amounts import safe_divide, sum_amounts
from paytrack.payment.types import (
    AllowanceConfig,
    AllowanceSettings,
    BonusConfig,
    OvertimeRules,
    OvertimeSettings,
    RateResolution,
    TimeEntryAnalysis,
)


class EarningsComponents(BaseModel):
    """Unrounded earnings lines"""
    basic_pay: float = 0.0
    half_day_deduction: float = 0.0
    hra: float = 0.0
    da: float = 0.0
    transport: float = 0.0
    medical: float = 0.0
    special: float = 0.0
    other_allowances: float = 0.0
    overtime_pay: float = 0.0
    weekend_overtime_pay: float = 0.0
    holiday_overtime_pay: float = 0.0
    performance_bonus: float = 0.0
    attendance_bonus: float = 0.0
    other_bonuses: float = 0.0

    @property
    def total_allowances(self) -> float:
        return (
            self.hra + self.da + self.transport + self.medical
            + self.special + self.other_allowances
        )

    @property
    def total_overtime(self) -> float:
        return self.overtime_pay + self.weekend_overtime_pay + self.holiday_overtime_pay

    @property
    def total_bonuses(self) -> float:
        return self.performance_bonus + self.attendance_bonus + self.other_bonuses

    @property
    def gross_earnings(self) -> float:
        return (
            self.basic_pay - self.half_day_deduction + self.total_allowances
            + self.total_overtime + self.total_bonuses
        )


def overtime_pay(hourly_rate: float, multiplier: float, hours: float) -> float:
    if hours <= 0:
        return 0.0
    return hourly_rate * multiplier * hours


def compose_entry_earnings(
    analysis: TimeEntryAnalysis,
    rates: RateResolution,
    allowances: AllowanceSettings,
    overtime: OvertimeSettings,
    bonuses: BonusConfig,
) -> EarningsComponents:
    """Earnings for a payslip driven by recorded time entries"""
    daily_rate = rates.daily_rate
    hourly_rate = rates.hourly_rate
    working_days = rates.working_days_in_cycle

    # Allowances follow attendance
    attendance_ratio = safe_divide(analysis.total_days_worked, working_days)

    regular_hours = analysis.overtime_hours
    if overtime.max_overtime_hours_per_month > 0:
        regular_hours = min(regular_hours, overtime.max_overtime_hours_per_month)

    components = EarningsComponents(
        basic_pay=daily_rate * analysis.total_days_worked,
        half_day_deduction=daily_rate / 2 * analysis.half_days,
        hra=allowances.hra * attendance_ratio,
        da=allowances.da * attendance_ratio,
        transport=allowances.transport_allowance * attendance_ratio,
        medical=allowances.medical_allowance * attendance_ratio,
        special=allowances.special_allowance * attendance_ratio,
        other_allowances=sum_amounts(allowances.other_allowances) * attendance_ratio,
        performance_bonus=bonuses.performance,
        attendance_bonus=bonuses.attendance,
        other_bonuses=sum_amounts(bonuses.other),
    )

    if overtime.enabled:
        components = components.model_copy(update={
            "overtime_pay": overtime_pay(hourly_rate, overtime.regular_multiplier, regular_hours),
            "weekend_overtime_pay": overtime_pay(hourly_rate, overtime.weekend_multiplier, analysis.weekend_hours),
            "holiday_overtime_pay": overtime_pay(hourly_rate, overtime.holiday_multiplier, analysis.holiday_hours),
        })

    return components


def compose_projected_earnings(
    base_pay: float,
    rates: RateResolution,
    allowances: AllowanceConfig,
    overtime: OvertimeRules,
    bonuses: BonusConfig,
) -> EarningsComponents:
    """Earnings for a what-if projection from pre-aggregated counters"""
    factor = rates.pro_rata_factor
    hourly_rate = rates.hourly_rate

    components = EarningsComponents(
        basic_pay=base_pay,
        hra=allowances.hra * factor,
        da=allowances.da * factor,
        transport=allowances.transport * factor,
        medical=allowances.medical * factor,
        special=allowances.special * factor,
        other_allowances=sum_amounts(allowances.other) * factor,
        performance_bonus=bonuses.performance,
        attendance_bonus=bonuses.attendance,
        other_bonuses=sum_amounts(bonuses.other),
    )

    if overtime.enabled:
        components = components.model_copy(update={
            "overtime_pay": overtime_pay(hourly_rate, overtime.multiplier, overtime.overtime_hours),
            "weekend_overtime_pay": overtime_pay(hourly_rate, overtime.weekend_multiplier, overtime.weekend_overtime_hours),
            "holiday_overtime_pay": overtime_pay(hourly_rate, overtime.holiday_multiplier, overtime.holiday_overtime_hours),
        })

    return components
