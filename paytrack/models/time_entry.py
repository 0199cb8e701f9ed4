"""
Time Entry Model
Database schema for logged work sessions and leave days
"""
from datetime import date, datetime
from typing import List, Optional, Literal, Sequence
from pydantic import Field, field_validator
from beanie import Document

from paytrack.payment.salary import price_time_entry
from paytrack.payment.types import (
    LeaveEntry,
    OvertimeSettings,
    SalaryRecord,
    TimeEntry,
    normalize_time_of_day,
)


class TimeEntryRecord(Document):
    """Time entry document"""

    user_id: str
    date: date

    # Session
    time_in: str = ""  # HH:mm
    time_out: str = ""  # HH:mm
    break_minutes: float = 0.0
    hourly_rate: float = 0.0
    total_hours: float = 0.0
    total_earnings: float = 0.0
    work_description: str = ""
    project: Optional[str] = None

    # Leave / holiday work
    leave: Optional[LeaveEntry] = None
    is_holiday_work: bool = False
    holiday_category: Optional[Literal["sunday", "saturday", "other"]] = None

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
    deleted_at: Optional[datetime] = None

    class Settings:
        name = "time_entries"
        indexes = [
            "user_id",
            "date",
            "deleted_at"
        ]

    @field_validator("time_in", "time_out")
    @classmethod
    def check_time(cls, value):
        return normalize_time_of_day(value)

    def apply_salary(
        self,
        salary_history: Sequence[SalaryRecord],
        overtime: Optional[OvertimeSettings] = None,
    ):
        """Fill hourly rate and earnings from the salary in force on the entry date"""
        if self.leave is not None and self.leave.is_leave:
            self.hourly_rate = 0.0
            self.total_earnings = 0.0
            return
        self.hourly_rate, self.total_earnings = price_time_entry(
            self.total_hours, self.date, salary_history, overtime,
        )
        self.updated_at = datetime.utcnow()

    def to_entry(self) -> TimeEntry:
        """Convert to the calculation engine's value type"""
        return TimeEntry(
            id=str(self.id) if self.id else None,
            user_id=self.user_id,
            date=self.date,
            time_in=self.time_in,
            time_out=self.time_out,
            break_minutes=self.break_minutes,
            hourly_rate=self.hourly_rate,
            total_hours=self.total_hours,
            total_earnings=self.total_earnings,
            work_description=self.work_description,
            project=self.project,
            leave=self.leave,
            is_holiday_work=self.is_holiday_work,
            holiday_category=self.holiday_category,
            deleted_at=self.deleted_at,
        )

    @classmethod
    async def active_for_user(cls, user_id: str, start: date, end: date) -> List[TimeEntry]:
        """Non-deleted entries for a user within [start, end], as engine values"""
        records = await cls.find(
            cls.user_id == user_id,
            cls.date >= start,
            cls.date <= end,
            cls.deleted_at == None,
        ).sort("+date").to_list()
        return [record.to_entry() for record in records]
