"""
Payment Defaults
Factory functions for default configuration objects
"""
from paytrack.payment.date_utils import SATURDAY, SUNDAY
from paytrack.payment.types import (
    AllowanceConfig,
    BonusConfig,
    DeductionConfig,
    LeaveConfig,
    OvertimeRules,
    PaymentConfig,
    TaxDeductionSettings,
    WorkingDaysConfig,
)


def get_default_working_days_config() -> WorkingDaysConfig:
    """Six-day week, Sunday off, 8 hours per day"""
    return WorkingDaysConfig(weekly_offs=[SUNDAY], hours_per_day=8)


def get_five_day_work_week_config() -> WorkingDaysConfig:
    """Monday to Friday, 8 hours per day"""
    return WorkingDaysConfig(weekly_offs=[SUNDAY, SATURDAY], hours_per_day=8)


def get_default_leave_config() -> LeaveConfig:
    return LeaveConfig(paid_leave_limit=2)


def get_default_overtime_rules() -> OvertimeRules:
    return OvertimeRules()


def get_default_deduction_config() -> DeductionConfig:
    return DeductionConfig()


def get_default_allowance_config() -> AllowanceConfig:
    return AllowanceConfig()


def get_default_bonus_config() -> BonusConfig:
    return BonusConfig()


def get_default_payment_config(
    currency: str = "INR",
    locale: str = "en-IN",
    late_arrival_penalty: float = 50.0,
) -> PaymentConfig:
    return PaymentConfig(
        currency=currency,
        locale=locale,
        tax_deductions=TaxDeductionSettings(late_arrival_penalty=late_arrival_penalty),
    )
