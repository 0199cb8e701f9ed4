import pytest
from datetime import date, timedelta

from paytrack.payment.amounts import round2

from paytrack.payment.payslip import generate_payslip_from_entries, make_payslip_id
from paytrack.payment.types import (
    AllowanceSettings,
    BonusConfig,
    OtherDeduction,
    OvertimeSettings,
    PaymentConfig,
    SalaryRecord,
    TaxDeductionSettings,
    WeeklyOffSettings,
)

USER_ID = "user-abc123456"


@pytest.fixture
def full_config():
    return PaymentConfig(
        expected_start_time="09:15",
        overtime=OvertimeSettings(enabled=True),
        tax_deductions=TaxDeductionSettings(pf_percentage=10),
        allowances=AllowanceSettings(hra=6000),
    )


def test_payslip_id(first_week_jan_2024):
    assert make_payslip_id(USER_ID, first_week_jan_2024) == "PS-123456-20240101"
    assert make_payslip_id("u1", first_week_jan_2024) == "PS-u1-20240101"


def test_default_config_payslip(first_week_jan_2024, week_entries, monthly_salary, payment_config):
    payslip = generate_payslip_from_entries(
        week_entries, monthly_salary, payment_config, first_week_jan_2024, USER_ID,
    )
    assert payslip.id == "PS-123456-20240101"
    assert payslip.period_start == date(2024, 1, 1)
    assert payslip.period_end == date(2024, 1, 7)
    assert payslip.generated_at is None

    assert payslip.period.total_days == 7
    assert payslip.period.working_days == 6
    assert payslip.period.weekly_offs == 1

    attendance = payslip.attendance
    assert attendance.days_present == 3
    assert attendance.days_absent == 1
    assert attendance.half_days == 1
    assert attendance.paid_leave == 1
    assert attendance.unpaid_leave == 1
    assert attendance.late_arrivals == 0
    assert attendance.overtime_hours == 2
    assert attendance.weekend_work_days == 1
    assert attendance.total_hours_worked == 22
    assert attendance.expected_hours == 48

    earnings = payslip.earnings
    assert earnings.half_day_deduction == 500
    assert earnings.basic_pay == 2500
    assert earnings.overtime_pay == 0
    assert earnings.weekend_pay == 0
    assert earnings.gross_earnings == 2500

    deductions = payslip.deductions
    assert deductions.unpaid_leave_deduction == 1000
    assert deductions.late_deduction == 0
    assert deductions.total_deductions == 1000

    assert payslip.summary.gross_salary == 2500
    assert payslip.summary.net_salary == 1500
    assert payslip.summary.payment_mode == "Bank Transfer"
    assert payslip.summary.currency == "INR"


def test_full_config_payslip(first_week_jan_2024, week_entries, monthly_salary, full_config):
    payslip = generate_payslip_from_entries(
        week_entries, monthly_salary, full_config, first_week_jan_2024, USER_ID,
    )
    earnings = payslip.earnings
    # Allowances scaled by 3 of 6 working days attended
    assert earnings.hra == 3000
    # Hourly rate 1000 / 8 = 125
    assert earnings.overtime_pay == 375
    assert earnings.weekend_pay == 750
    assert earnings.holiday_pay == 0
    assert earnings.gross_earnings == 6625

    deductions = payslip.deductions
    assert payslip.attendance.late_arrivals == 1
    assert deductions.late_deduction == 50
    assert deductions.provident_fund == 300
    assert deductions.total_deductions == 1350
    assert payslip.summary.net_salary == 5275


def test_monthly_overtime_cap(first_week_jan_2024, week_entries, monthly_salary, full_config):
    config = full_config.model_copy(update={
        "overtime": OvertimeSettings(enabled=True, max_overtime_hours_per_month=1),
    })
    payslip = generate_payslip_from_entries(
        week_entries, monthly_salary, config, first_week_jan_2024, USER_ID,
    )
    assert payslip.earnings.overtime_pay == 187.5
    # Reported hours are not capped
    assert payslip.attendance.overtime_hours == 2


def test_income_tax_only_when_enabled(first_week_jan_2024, week_entries, monthly_salary):
    disabled = PaymentConfig(tax_deductions=TaxDeductionSettings(fixed_tax_percentage=10))
    enabled = PaymentConfig(tax_deductions=TaxDeductionSettings(tax_enabled=True, fixed_tax_percentage=10))

    without_tax = generate_payslip_from_entries(
        week_entries, monthly_salary, disabled, first_week_jan_2024, USER_ID,
    )
    with_tax = generate_payslip_from_entries(
        week_entries, monthly_salary, enabled, first_week_jan_2024, USER_ID,
    )
    assert without_tax.deductions.income_tax == 0
    assert with_tax.deductions.income_tax == 250


def test_custom_late_penalty(first_week_jan_2024, week_entries, monthly_salary):
    config = PaymentConfig(
        expected_start_time="09:00",
        tax_deductions=TaxDeductionSettings(late_arrival_penalty=120),
    )
    payslip = generate_payslip_from_entries(
        week_entries, monthly_salary, config, first_week_jan_2024, USER_ID,
    )
    assert payslip.attendance.late_arrivals == 1
    assert payslip.deductions.late_deduction == 120


def test_bonuses_and_other_deductions(first_week_jan_2024, week_entries, monthly_salary):
    config = PaymentConfig(
        bonuses=BonusConfig(performance=400, attendance=100),
        tax_deductions=TaxDeductionSettings(other_deductions=[
            OtherDeduction(description="Canteen", amount=200),
            OtherDeduction(description="Welfare", amount=10, is_percentage=True),
        ]),
    )
    payslip = generate_payslip_from_entries(
        week_entries, monthly_salary, config, first_week_jan_2024, USER_ID,
    )
    assert payslip.earnings.performance_bonus == 400
    assert payslip.earnings.gross_earnings == 3000
    assert payslip.deductions.other_deductions == 500


def test_legacy_saturday_half_day(first_week_jan_2024, monthly_salary):
    config = PaymentConfig(weekly_offs=WeeklyOffSettings(off_days=[0], saturday_half_day=True))
    payslip = generate_payslip_from_entries([], monthly_salary, config, first_week_jan_2024, USER_ID)
    assert payslip.period.working_days == 5.5
    assert payslip.period.half_days == 1


def test_annual_salary_uses_monthly_amount(first_week_jan_2024, week_entries, payment_config):
    annual = SalaryRecord(amount=72000, salary_type="annual", effective_from=date(2023, 1, 1))
    payslip = generate_payslip_from_entries(
        week_entries, annual, payment_config, first_week_jan_2024, USER_ID,
    )
    assert payslip.earnings.basic_pay == 2500


def test_no_entries(jan_2024, monthly_salary, payment_config):
    payslip = generate_payslip_from_entries([], monthly_salary, payment_config, jan_2024, USER_ID)
    assert payslip.attendance.days_absent == 27
    assert payslip.earnings.gross_earnings == 0
    assert payslip.summary.net_salary == 0


def test_net_salary_never_negative(first_week_jan_2024, week_entries, monthly_salary):
    config = PaymentConfig(tax_deductions=TaxDeductionSettings(professional_tax=100000))
    payslip = generate_payslip_from_entries(
        week_entries, monthly_salary, config, first_week_jan_2024, USER_ID,
    )
    assert payslip.summary.net_salary == 0


def test_idempotent(jan_2024, week_entries, monthly_salary, full_config):
    first = generate_payslip_from_entries(week_entries, monthly_salary, full_config, jan_2024, USER_ID)
    second = generate_payslip_from_entries(week_entries, monthly_salary, full_config, jan_2024, USER_ID)
    assert first == second


def test_partial_config_completed_by_defaults():
    config = PaymentConfig.model_validate({
        "overtime": {"enabled": True},
        "weekly_offs": {"off_days": [0, 6]},
    })
    assert config.overtime.regular_multiplier == 1.5
    assert config.tax_deductions.late_arrival_penalty == 50
    assert config.weekly_offs.second_saturday_off is False


def test_invalid_expected_time_rejected():
    with pytest.raises(ValueError):
        PaymentConfig(expected_start_time="9am")


def _money_leaves(value, path=""):
    if isinstance(value, dict):
        for key, item in value.items():
            yield from _money_leaves(item, f"{path}.{key}")
    elif isinstance(value, float):
        yield path, value


def test_monetary_fields_are_two_decimal(jan_2024, make_entry):
    entries = [
        make_entry(jan_2024.start_date + timedelta(days=offset), 7.3 + (offset % 4) * 1.15,
                   time_in="09:2%d" % (offset % 10))
        for offset in range(31)
        if offset % 9 != 4
    ]
    entries.append(make_entry(date(2024, 1, 26), 6.7, is_holiday_work=True, holiday_category="other"))
    config = PaymentConfig(
        expected_start_time="9:25",
        overtime=OvertimeSettings(enabled=True, max_overtime_hours_per_month=13.7),
        tax_deductions=TaxDeductionSettings(
            tax_enabled=True,
            fixed_tax_percentage=5.5,
            pf_percentage=12,
            professional_tax=208.33,
            other_deductions=[OtherDeduction(description="Welfare", amount=7.7, is_percentage=True)],
        ),
        allowances=AllowanceSettings(hra=4444.44, da=1234.56, medical_allowance=1250.5),
        bonuses=BonusConfig(performance=999.99),
    )
    salary = SalaryRecord(amount=33333.33, effective_from=date(2023, 1, 1))

    payslip = generate_payslip_from_entries(entries, salary, config, jan_2024, USER_ID)
    assert payslip.earnings.overtime_pay > 0
    assert payslip.attendance.late_arrivals > 0
    for path, value in _money_leaves(payslip.model_dump()):
        assert round2(value) == value, path


def test_unpadded_expected_start_time(first_week_jan_2024, week_entries, monthly_salary):
    config = PaymentConfig(expected_start_time="9:15")
    assert config.expected_start_time == "09:15"
    payslip = generate_payslip_from_entries(
        week_entries, monthly_salary, config, first_week_jan_2024, USER_ID,
    )
    assert payslip.attendance.late_arrivals == 1


def test_payslip_values_are_immutable(first_week_jan_2024, week_entries, monthly_salary, payment_config):
    payslip = generate_payslip_from_entries(
        week_entries, monthly_salary, payment_config, first_week_jan_2024, USER_ID,
    )
    with pytest.raises(ValueError):
        payslip.summary.net_salary = 1_000_000
