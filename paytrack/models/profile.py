"""
Payroll Profile Model
Database schema for a user's salary history and payment configuration
"""
from datetime import datetime
from typing import Optional, List
from pydantic import Field
from beanie import Document

from paytrack.payment.types import PaymentConfig, SalaryRecord
from paytrack.payment.salary import add_salary_increment


class PayrollProfile(Document):
    """Per-user payroll profile document"""

    user_id: str
    salary_history: List[SalaryRecord] = Field(default_factory=list)
    payment_config: Optional[PaymentConfig] = None

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "payroll_profiles"
        indexes = [
            "user_id"
        ]

    def add_salary_record(self, record: SalaryRecord):
        """Append a salary record; earlier records are never rewritten"""
        self.salary_history = add_salary_increment(self.salary_history, record)
        self.updated_at = datetime.utcnow()
