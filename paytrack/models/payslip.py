"""
Payslip Model
Database schema for generated payslips
"""
from datetime import date, datetime
from typing import Optional
from pydantic import Field
from beanie import Document

from paytrack.payment.types import (
    PayslipAttendance,
    PayslipData,
    PayslipDeductions,
    PayslipEarnings,
    PayslipPeriod,
    PayslipSummary,
)


class Payslip(Document):
    """Payslip document model, one per user and cycle"""
    payslip_id: str
    user_id: str

    period_start: date
    period_end: date

    period: PayslipPeriod
    attendance: PayslipAttendance
    earnings: PayslipEarnings
    deductions: PayslipDeductions
    summary: PayslipSummary

    generated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "payslips"
        indexes = [
            "user_id",
            "period_start",
            "generated_at"
        ]

    @classmethod
    def from_payslip_data(cls, data: PayslipData, generated_at: Optional[datetime] = None) -> "Payslip":
        return cls(
            payslip_id=data.id,
            user_id=data.user_id,
            period_start=data.period_start,
            period_end=data.period_end,
            period=data.period,
            attendance=data.attendance,
            earnings=data.earnings,
            deductions=data.deductions,
            summary=data.summary,
            generated_at=generated_at or data.generated_at or datetime.utcnow(),
        )

    def to_payslip_data(self) -> PayslipData:
        return PayslipData(
            id=self.payslip_id,
            user_id=self.user_id,
            period_start=self.period_start,
            period_end=self.period_end,
            generated_at=self.generated_at,
            period=self.period,
            attendance=self.attendance,
            earnings=self.earnings,
            deductions=self.deductions,
            summary=self.summary,
        )
