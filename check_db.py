import asyncio
from motor.motor_asyncio import AsyncIOMotorClient
from paytrack.config import settings

async def check():
    client = AsyncIOMotorClient(settings.MONGODB_URL)
    db = client[settings.MONGODB_DB_NAME]
    profile_count = await db.payroll_profiles.count_documents({})
    entry_count = await db.time_entries.count_documents({"deleted_at": None})
    payslip_count = await db.payslips.count_documents({})
    print(f"COUNT_STATUS: Profiles={profile_count}, TimeEntries={entry_count}, Payslips={payslip_count}")

if __name__ == "__main__":
    asyncio.run(check())
