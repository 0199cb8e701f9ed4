import pytest
from datetime import date

from paytrack.payment.types import (
    LeaveEntry,
    PaymentConfig,
    SalaryCycle,
    SalaryRecord,
    TimeEntry,
    WorkingDaysConfig,
)


@pytest.fixture
def jan_2024():
    return SalaryCycle(start_date=date(2024, 1, 1), end_date=date(2024, 1, 31))


@pytest.fixture
def first_week_jan_2024():
    # Monday 1st to Sunday 7th
    return SalaryCycle(start_date=date(2024, 1, 1), end_date=date(2024, 1, 7))


@pytest.fixture
def sunday_off():
    return WorkingDaysConfig(weekly_offs=[0], hours_per_day=8)


@pytest.fixture
def make_entry():
    def _make(day, hours=8.0, time_in="09:00", time_out="17:00", leave_type=None, **extra):
        if leave_type is not None:
            return TimeEntry(
                date=day,
                leave=LeaveEntry(is_leave=True, leave_type=leave_type),
                **extra,
            )
        return TimeEntry(date=day, time_in=time_in, time_out=time_out, total_hours=hours, **extra)
    return _make


@pytest.fixture
def week_entries(make_entry):
    """One of everything across the first week of January 2024"""
    return [
        make_entry(date(2024, 1, 1), 8),
        make_entry(date(2024, 1, 2), 4, time_out="13:00"),
        make_entry(date(2024, 1, 3), 10, time_in="09:30", time_out="19:30"),
        make_entry(date(2024, 1, 4), leave_type="Sick"),
        make_entry(date(2024, 1, 5), leave_type="Personal"),
        # Saturday 6th: nothing logged
        make_entry(date(2024, 1, 7), 3, time_in="10:00", time_out="13:00"),
    ]


@pytest.fixture
def monthly_salary():
    return SalaryRecord(amount=6000, effective_from=date(2023, 1, 1))


@pytest.fixture
def payment_config():
    return PaymentConfig()
