import asyncio
from datetime import date, timedelta
import random
from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient
from paytrack.config import settings
from paytrack.models.profile import PayrollProfile
from paytrack.models.time_entry import TimeEntryRecord
from paytrack.models.payslip import Payslip
from paytrack.payment.defaults import get_default_payment_config
from paytrack.payment.types import (
    AllowanceSettings,
    LeaveEntry,
    OvertimeSettings,
    SalaryRecord,
    TaxDeductionSettings,
    WeeklyOffSettings,
)

USERS = {
    "user-alice01": 30000,
    "user-bob0002": 42000,
    "user-chris03": 55000,
}


def _hhmm(hour: int, minute: int) -> str:
    return f"{hour:02d}:{minute:02d}"


async def create_sample_data():
    """Populate database with payroll profiles and 45 days of time entries"""
    print("🚀 Starting Sample Data Generation...")

    # Initialize Beanie
    client = AsyncIOMotorClient(settings.MONGODB_URL)
    await init_beanie(
        database=client[settings.MONGODB_DB_NAME],
        document_models=[PayrollProfile, TimeEntryRecord, Payslip]
    )

    base_config = get_default_payment_config(
        currency=settings.DEFAULT_CURRENCY,
        locale=settings.DEFAULT_LOCALE,
        late_arrival_penalty=settings.LATE_ARRIVAL_PENALTY,
    )
    payment_config = base_config.model_copy(update={
        "weekly_offs": WeeklyOffSettings(off_days=[0], saturday_mode="alternate-2-4"),
        "overtime": OvertimeSettings(enabled=True),
        "tax_deductions": TaxDeductionSettings(professional_tax=200, pf_percentage=12),
        "allowances": AllowanceSettings(hra=5000, transport_allowance=1600),
        "expected_start_time": "09:15",
        "expected_end_time": "17:30",
    })

    today = date.today()
    for user_id, amount in USERS.items():
        # Check if already exists
        existing = await PayrollProfile.find_one(PayrollProfile.user_id == user_id)
        if existing:
            print(f"⏩ {user_id} already exists, skipping...")
            continue

        profile = PayrollProfile(user_id=user_id, payment_config=payment_config)
        profile.add_salary_record(SalaryRecord(
            amount=amount,
            effective_from=today - timedelta(days=365),
            note="Joining salary",
        ))
        profile.add_salary_record(SalaryRecord(
            amount=round(amount * 1.1),
            effective_from=today - timedelta(days=20),
            note="Annual increment",
        ))
        await profile.insert()
        print(f"✅ Created payroll profile: {user_id}")

        # Time entries for the last 45 days
        for d in range(45):
            day = today - timedelta(days=d)
            # Skip Sundays
            if day.weekday() == 6:
                continue

            roll = random.random()
            # Randomly skip some days to simulate absence
            if roll < 0.05:
                continue
            if roll < 0.1:
                entry = TimeEntryRecord(
                    user_id=user_id,
                    date=day,
                    leave=LeaveEntry(is_leave=True, leave_type=random.choice(["Sick", "Personal"])),
                )
                await entry.insert()
                continue

            start_minute = random.randint(0, 40)
            start = _hhmm(9, start_minute)
            hours = round(random.uniform(3.5, 10.0), 2)
            end_total = 9 * 60 + start_minute + int(hours * 60)
            entry = TimeEntryRecord(
                user_id=user_id,
                date=day,
                time_in=start,
                time_out=_hhmm(end_total // 60, end_total % 60),
                total_hours=hours,
                work_description="Sample work session",
            )
            entry.apply_salary(profile.salary_history, payment_config.overtime)
            await entry.insert()

    print("✨ Sample Data Generation Complete!")

if __name__ == "__main__":
    asyncio.run(create_sample_data())
