"""
Payment Types
Value types consumed and produced by the payroll calculation engine
"""
import re
from datetime import date, datetime
from typing import Optional, List, Dict, Literal
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


SalaryBasis = Literal["calendar_month", "cycle_days", "working_days_only"]
SalaryPayType = Literal["fixed_monthly", "daily_wage", "hourly"]
SaturdayMode = Literal["all-off", "working", "alternate-1-3", "alternate-2-4", "half-day"]
SalaryType = Literal["monthly", "annual"]

TIME_OF_DAY_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


def _check_weekdays(days: List[int]) -> List[int]:
    for day in days:
        if not 0 <= day <= 6:
            raise ValueError(f"Weekday must be 0 (Sunday) to 6 (Saturday), got {day}")
    return days


def normalize_time_of_day(value: Optional[str]) -> Optional[str]:
    """Zero-pad H:mm to HH:mm so times compare correctly as text; blank passes through"""
    if not value:
        return value
    match = TIME_OF_DAY_PATTERN.match(value.strip())
    if not match:
        raise ValueError(f"Invalid time {value!r}, expected HH:mm")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ValueError(f"Invalid time {value!r}, expected HH:mm")
    return f"{hour:02d}:{minute:02d}"


class FrozenModel(BaseModel):
    """Immutable value object"""

    model_config = ConfigDict(frozen=True)


# ============================================================================
# Cycle & calendar
# ============================================================================

class SalaryCycle(FrozenModel):
    """Pay period, inclusive on both ends"""
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def check_order(self):
        if self.start_date > self.end_date:
            raise ValueError(
                f"Cycle start {self.start_date} is after cycle end {self.end_date}"
            )
        return self


class WorkingDaysConfig(FrozenModel):
    """Weekly-off policy and standard working hours"""
    weekly_offs: List[int] = Field(default_factory=lambda: [0])  # 0=Sunday .. 6=Saturday
    hours_per_day: float = 8.0
    saturday_mode: Optional[SaturdayMode] = None

    # Legacy flags, OR'd in on top of the Saturday mode
    second_saturday_off: bool = False
    fourth_saturday_off: bool = False

    @field_validator("weekly_offs")
    @classmethod
    def check_weekly_offs(cls, value):
        return _check_weekdays(value)


class WorkingDaysCount(FrozenModel):
    working_days: float
    weekly_offs: int
    half_days: int


# ============================================================================
# What-if calculation input
# ============================================================================

class NamedAmount(FrozenModel):
    description: str = ""
    amount: float = 0.0


class OtherDeduction(FrozenModel):
    description: str = ""
    amount: float = 0.0
    is_percentage: bool = False


class LeaveConfig(FrozenModel):
    """Leave counters for the pay period"""
    paid_leave_limit: float = 0.0
    paid_leave_taken: float = 0.0
    unpaid_leave_taken: float = 0.0
    half_days_taken: float = 0.0  # each counts as 0.5 unpaid day


class OvertimeRules(FrozenModel):
    """Overtime multipliers and pre-aggregated overtime hours"""
    enabled: bool = False
    threshold_hours_per_day: float = 8.0
    multiplier: float = 1.5
    weekend_multiplier: float = 2.0
    holiday_multiplier: float = 2.5
    overtime_hours: float = 0.0
    weekend_overtime_hours: float = 0.0
    holiday_overtime_hours: float = 0.0


class DeductionConfig(FrozenModel):
    fixed: float = 0.0
    percentage: float = 0.0  # of gross earnings
    late_deduction: float = 0.0
    professional_tax: float = 0.0
    pf_percentage: float = 0.0  # of basic pay
    income_tax: float = 0.0
    health_insurance: float = 0.0
    other: List[OtherDeduction] = Field(default_factory=list)


class AllowanceConfig(FrozenModel):
    hra: float = 0.0
    da: float = 0.0
    transport: float = 0.0
    medical: float = 0.0
    special: float = 0.0
    other: List[NamedAmount] = Field(default_factory=list)


class BonusConfig(FrozenModel):
    performance: float = 0.0
    attendance: float = 0.0
    other: List[NamedAmount] = Field(default_factory=list)


class PaySlipInput(FrozenModel):
    """Complete input for an entry-independent pay slip projection"""
    base_salary: float
    salary_pay_type: SalaryPayType
    salary_basis: SalaryBasis
    cycle: SalaryCycle
    working_days: WorkingDaysConfig = Field(default_factory=WorkingDaysConfig)
    leaves: LeaveConfig = Field(default_factory=LeaveConfig)
    overtime: OvertimeRules = Field(default_factory=OvertimeRules)
    deductions: DeductionConfig = Field(default_factory=DeductionConfig)
    allowances: AllowanceConfig = Field(default_factory=AllowanceConfig)
    bonuses: BonusConfig = Field(default_factory=BonusConfig)
    joining_date: Optional[date] = None
    leaving_date: Optional[date] = None
    currency: str = "INR"

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "base_salary": 30000,
                "salary_pay_type": "fixed_monthly",
                "salary_basis": "working_days_only",
                "cycle": {"start_date": "2024-01-01", "end_date": "2024-01-31"},
                "working_days": {"weekly_offs": [0], "hours_per_day": 8},
            }
        },
    )


# ============================================================================
# What-if calculation output
# ============================================================================

class RateResolution(FrozenModel):
    """Daily/hourly rates derived from a salary and cycle"""
    daily_rate: float
    hourly_rate: float
    pro_rata_factor: float
    effective_start: date
    effective_end: date
    total_days_in_cycle: int
    effective_days_in_cycle: int
    working_days_in_cycle: float
    weekly_offs: int
    half_days: int


class PeriodSummary(FrozenModel):
    start: date
    end: date
    total_days: int
    working_days: float
    weekly_offs: int
    half_days: int


class RateSummary(FrozenModel):
    daily_rate: float
    hourly_rate: float
    pro_rata_factor: float


class BonusSummary(FrozenModel):
    performance: float
    attendance: float
    other: float
    total: float


class EarningsBreakdown(FrozenModel):
    base_pay: float
    hra: float
    da: float
    transport_allowance: float
    medical_allowance: float
    special_allowance: float
    other_allowances: float
    overtime_pay: float
    weekend_overtime_pay: float
    holiday_overtime_pay: float
    bonuses: BonusSummary
    gross_earnings: float


class DeductionsBreakdown(FrozenModel):
    fixed: float
    percentage: float
    late_deduction: float
    unpaid_leave: float
    professional_tax: float
    provident_fund: float
    income_tax: float
    health_insurance: float
    other: float
    total: float


class AttendanceBreakdown(FrozenModel):
    days_worked: float
    paid_leave_taken: float
    unpaid_leave_taken: float
    half_days: float
    overtime_hours: float
    weekend_overtime_hours: float
    holiday_overtime_hours: float


class PaySlipBreakdown(FrozenModel):
    period: PeriodSummary
    rates: RateSummary
    earnings: EarningsBreakdown
    deductions: DeductionsBreakdown
    attendance: AttendanceBreakdown


class PaySlipOutput(FrozenModel):
    gross_salary: float
    working_days: float
    actual_days_worked: float
    base_pay: float
    total_allowances: float
    overtime_pay: float
    deductions: float
    bonuses: float
    net_salary: float
    breakdown: PaySlipBreakdown
    currency: str


# ============================================================================
# Time entries (owned by the time-tracking layer)
# ============================================================================

class LeaveEntry(FrozenModel):
    is_leave: bool = False
    leave_type: Optional[str] = None  # Sick, Vacation, Personal, Holiday, Other
    leave_reason: Optional[str] = None


class TimeEntry(FrozenModel):
    """One logged work session or leave day"""
    id: Optional[str] = None
    user_id: str = ""
    date: date
    time_in: str = ""  # HH:mm
    time_out: str = ""  # HH:mm
    break_minutes: float = 0.0
    hourly_rate: float = 0.0
    total_hours: float = 0.0
    total_earnings: float = 0.0
    work_description: str = ""
    project: Optional[str] = None
    leave: Optional[LeaveEntry] = None
    is_holiday_work: bool = False
    holiday_category: Optional[Literal["sunday", "saturday", "other"]] = None
    deleted_at: Optional[datetime] = None

    @field_validator("time_in", "time_out")
    @classmethod
    def check_time(cls, value):
        return normalize_time_of_day(value)

    @property
    def is_leave(self) -> bool:
        return self.leave is not None and self.leave.is_leave


class TimeEntryAnalysis(FrozenModel):
    """Attendance counters for a date range"""
    total_hours_worked: float = 0.0
    total_days_worked: int = 0
    overtime_hours: float = 0.0
    weekend_hours: float = 0.0
    holiday_hours: float = 0.0
    late_arrivals: int = 0
    early_departures: int = 0
    half_days: int = 0
    absences: int = 0
    paid_leaves: int = 0
    unpaid_leaves: int = 0
    entries_by_date: Dict[date, List[TimeEntry]] = Field(default_factory=dict)


# ============================================================================
# Salary history & payment configuration (owned by the profile layer)
# ============================================================================

class WorkingConfig(FrozenModel):
    hours_per_day: float = 8.0
    days_per_month: float = 22.0


class SalaryRecord(FrozenModel):
    """One entry in a user's append-only salary history"""
    amount: float
    salary_type: SalaryType = "monthly"
    effective_from: date
    working: WorkingConfig = Field(default_factory=WorkingConfig)
    note: Optional[str] = None
    created_at: Optional[datetime] = None


class SalaryCycleSettings(FrozenModel):
    cycle_start_day: int = Field(1, ge=1, le=28)
    use_calendar_month: bool = True


class WeeklyOffSettings(FrozenModel):
    off_days: List[int] = Field(default_factory=lambda: [0])
    second_saturday_off: bool = False
    fourth_saturday_off: bool = False
    saturday_half_day: bool = False  # legacy, superseded by saturday_mode
    saturday_mode: Optional[SaturdayMode] = None

    @field_validator("off_days")
    @classmethod
    def check_off_days(cls, value):
        return _check_weekdays(value)

    @property
    def effective_saturday_mode(self) -> Optional[SaturdayMode]:
        if self.saturday_mode is None and self.saturday_half_day:
            return "half-day"
        return self.saturday_mode


class LeaveAllowanceSettings(FrozenModel):
    casual_leave_per_month: float = 1.0
    sick_leave_per_month: float = 1.0
    earned_leave_per_year: float = 15.0
    carry_forward_enabled: bool = False
    max_carry_forward_days: float = 0.0


class OvertimeSettings(FrozenModel):
    enabled: bool = False
    threshold_hours_per_day: float = 8.0
    regular_multiplier: float = 1.5
    weekend_multiplier: float = 2.0
    holiday_multiplier: float = 2.5
    max_overtime_hours_per_month: float = 0.0  # 0 = no cap


class TaxDeductionSettings(FrozenModel):
    tax_enabled: bool = False
    tax_regime: str = "standard"
    fixed_tax_percentage: float = 0.0
    professional_tax: float = 0.0
    pf_percentage: float = 0.0
    health_insurance: float = 0.0
    other_deductions: List[OtherDeduction] = Field(default_factory=list)
    late_arrival_penalty: float = 50.0  # per late arrival


class AllowanceSettings(FrozenModel):
    hra: float = 0.0
    da: float = 0.0
    transport_allowance: float = 0.0
    medical_allowance: float = 0.0
    special_allowance: float = 0.0
    other_allowances: List[NamedAmount] = Field(default_factory=list)


class PaymentConfig(FrozenModel):
    """Per-user payroll configuration, completed by schema defaults"""
    salary_cycle: SalaryCycleSettings = Field(default_factory=SalaryCycleSettings)
    weekly_offs: WeeklyOffSettings = Field(default_factory=WeeklyOffSettings)
    leave_allowance: LeaveAllowanceSettings = Field(default_factory=LeaveAllowanceSettings)
    overtime: OvertimeSettings = Field(default_factory=OvertimeSettings)
    tax_deductions: TaxDeductionSettings = Field(default_factory=TaxDeductionSettings)
    allowances: AllowanceSettings = Field(default_factory=AllowanceSettings)
    bonuses: BonusConfig = Field(default_factory=BonusConfig)
    expected_start_time: Optional[str] = None  # HH:mm
    expected_end_time: Optional[str] = None  # HH:mm
    currency: str = "INR"
    locale: str = "en-IN"

    @field_validator("expected_start_time", "expected_end_time")
    @classmethod
    def check_expected_time(cls, value):
        return normalize_time_of_day(value)


# ============================================================================
# Entry-driven payslip
# ============================================================================

class PayslipPeriod(FrozenModel):
    total_days: int
    working_days: float
    weekly_offs: int
    half_days: int


class PayslipAttendance(FrozenModel):
    days_present: int
    days_absent: int
    half_days: int
    late_arrivals: int
    early_departures: int
    paid_leave: int
    unpaid_leave: int
    overtime_hours: float
    weekend_work_days: int
    holiday_hours: float
    total_hours_worked: float
    expected_hours: float


class PayslipEarnings(FrozenModel):
    basic_pay: float  # after half-day deduction
    half_day_deduction: float
    hra: float
    da: float
    transport_allowance: float
    medical_allowance: float
    special_allowance: float
    other_allowances: float
    overtime_pay: float
    weekend_pay: float
    holiday_pay: float
    performance_bonus: float
    attendance_bonus: float
    other_bonuses: float
    gross_earnings: float


class PayslipDeductions(FrozenModel):
    income_tax: float
    professional_tax: float
    provident_fund: float
    health_insurance: float
    unpaid_leave_deduction: float
    late_deduction: float
    other_deductions: float
    total_deductions: float


class PayslipSummary(FrozenModel):
    gross_salary: float
    total_deductions: float
    net_salary: float
    payment_mode: str = "Bank Transfer"
    currency: str = "INR"


class PayslipData(FrozenModel):
    """Fully assembled payslip for one user and cycle"""
    id: str
    user_id: str
    period_start: date
    period_end: date
    generated_at: Optional[datetime] = None
    period: PayslipPeriod
    attendance: PayslipAttendance
    earnings: PayslipEarnings
    deductions: PayslipDeductions
    summary: PayslipSummary
