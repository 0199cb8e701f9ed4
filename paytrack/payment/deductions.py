"""
Deduction Composer
Statutory, configured and attendance-based deductions
"""
from pydantic import BaseModel

from paytrack.payment.amounts import sum_other_deductions
from paytrack.payment.types import DeductionConfig, TaxDeductionSettings


class DeductionComponents(BaseModel):
    """Unrounded deduction lines and their total"""
    fixed: float = 0.0
    percentage: float = 0.0
    late_deduction: float = 0.0
    unpaid_leave: float = 0.0
    professional_tax: float = 0.0
    provident_fund: float = 0.0
    income_tax: float = 0.0
    health_insurance: float = 0.0
    other: float = 0.0
    total: float = 0.0


def compose_entry_deductions(
    basic_pay: float,
    gross_earnings: float,
    daily_rate: float,
    unpaid_leave_days: float,
    late_arrivals: int,
    tax: TaxDeductionSettings,
) -> DeductionComponents:
    """Deductions for a payslip driven by recorded time entries"""
    professional_tax = tax.professional_tax
    provident_fund = basic_pay * tax.pf_percentage / 100
    health_insurance = tax.health_insurance

    income_tax = 0.0
    if tax.tax_enabled:
        income_tax = gross_earnings * tax.fixed_tax_percentage / 100

    unpaid_leave = daily_rate * unpaid_leave_days
    late_deduction = late_arrivals * tax.late_arrival_penalty
    other = sum_other_deductions(tax.other_deductions, gross_earnings)

    total = (
        professional_tax + provident_fund + health_insurance + income_tax
        + unpaid_leave + late_deduction + other
    )
    return DeductionComponents(
        late_deduction=late_deduction,
        unpaid_leave=unpaid_leave,
        professional_tax=professional_tax,
        provident_fund=provident_fund,
        income_tax=income_tax,
        health_insurance=health_insurance,
        other=other,
        total=total,
    )


def compose_projected_deductions(
    base_pay: float,
    gross_earnings: float,
    unpaid_leave_deduction: float,
    deductions: DeductionConfig,
) -> DeductionComponents:
    """
    Deductions for a what-if projection.

    Unpaid leave is reported but left out of the total: the projection
    already removes it from base pay.
    """
    percentage = gross_earnings * deductions.percentage / 100
    provident_fund = base_pay * deductions.pf_percentage / 100
    other = sum_other_deductions(deductions.other, gross_earnings)

    total = (
        deductions.fixed + percentage + deductions.late_deduction
        + deductions.professional_tax + provident_fund + deductions.income_tax
        + deductions.health_insurance + other
    )
    return DeductionComponents(
        fixed=deductions.fixed,
        percentage=percentage,
        late_deduction=deductions.late_deduction,
        unpaid_leave=unpaid_leave_deduction,
        professional_tax=deductions.professional_tax,
        provident_fund=provident_fund,
        income_tax=deductions.income_tax,
        health_insurance=deductions.health_insurance,
        other=other,
        total=total,
    )
