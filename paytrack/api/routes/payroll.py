"""
Payroll Routes
Pay slip projection, salary cycles, salary history and payslip generation
"""
import logging
from fastapi import APIRouter, HTTPException, Query, status
from typing import List, Literal, Optional
from datetime import date, datetime

from paytrack.config import settings
from paytrack.models.payslip import Payslip
from paytrack.models.profile import PayrollProfile
from paytrack.models.time_entry import TimeEntryRecord
from paytrack.payment.amounts import format_currency
from paytrack.payment.calculator import calculate_pay_slip
from paytrack.payment.cycles import (
    create_monthly_cycle,
    get_current_salary_cycle,
    get_last_n_cycles,
    get_next_n_cycles,
    get_yearly_salary_cycles,
)
from paytrack.payment.defaults import get_default_payment_config
from paytrack.payment.payslip import generate_payslip_from_entries
from paytrack.payment.salary import select_salary_for_cycle
from paytrack.payment.types import (
    PaySlipInput,
    PaySlipOutput,
    PaymentConfig,
    PayslipData,
    LeaveEntry,
    SalaryCycle,
    SalaryRecord,
    TimeEntry,
    normalize_time_of_day,
)
from pydantic import BaseModel, field_validator

logger = logging.getLogger(__name__)

router = APIRouter()


class GeneratePayslipRequest(BaseModel):
    user_id: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    year: Optional[int] = None
    month: Optional[int] = None
    regenerate: bool = False


class TimeEntryCreate(BaseModel):
    date: date
    time_in: str = ""
    time_out: str = ""
    break_minutes: float = 0.0
    total_hours: float = 0.0
    work_description: str = ""
    project: Optional[str] = None
    leave: Optional[LeaveEntry] = None
    is_holiday_work: bool = False
    holiday_category: Optional[Literal["sunday", "saturday", "other"]] = None

    @field_validator("time_in", "time_out")
    @classmethod
    def check_time(cls, value):
        return normalize_time_of_day(value)


def default_payment_config() -> PaymentConfig:
    """Payment config for users without one stored"""
    config = get_default_payment_config(
        currency=settings.DEFAULT_CURRENCY,
        locale=settings.DEFAULT_LOCALE,
        late_arrival_penalty=settings.LATE_ARRIVAL_PENALTY,
    )
    if settings.DEFAULT_CYCLE_START_DAY != 1:
        config = config.model_copy(update={
            "salary_cycle": config.salary_cycle.model_copy(
                update={"cycle_start_day": settings.DEFAULT_CYCLE_START_DAY}
            )
        })
    return config


def resolve_cycle(
    request: GeneratePayslipRequest,
    cycle_start_day: int,
    today: Optional[date] = None,
) -> SalaryCycle:
    """Explicit range, else year/month, else the current cycle"""
    if request.start_date and request.end_date:
        return SalaryCycle(start_date=request.start_date, end_date=request.end_date)
    if request.start_date or request.end_date:
        raise ValueError("Both start_date and end_date are required for a custom range")
    if request.year is not None and request.month is not None:
        return create_monthly_cycle(request.year, request.month, cycle_start_day)
    if request.year is not None or request.month is not None:
        raise ValueError("Both year and month are required")
    return get_current_salary_cycle(cycle_start_day, today)


@router.post("/calculate", response_model=PaySlipOutput)
async def calculate(data: PaySlipInput):
    """Project a pay slip from pre-aggregated counters"""
    try:
        return calculate_pay_slip(data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/cycles", response_model=List[SalaryCycle])
async def list_recent_cycles(
    cycle_start_day: int = Query(1, ge=1, le=28),
    count: Optional[int] = Query(None, ge=0, le=60),
):
    """Current cycle and the ones before it, oldest first"""
    n = settings.PAYSLIP_HISTORY_CYCLES if count is None else count
    return get_last_n_cycles(n, cycle_start_day)


@router.get("/cycles/upcoming", response_model=List[SalaryCycle])
async def list_upcoming_cycles(
    cycle_start_day: int = Query(1, ge=1, le=28),
    count: int = Query(3, ge=0, le=60),
):
    """Cycles after the current one"""
    return get_next_n_cycles(count, cycle_start_day)


@router.get("/cycles/year/{year}", response_model=List[SalaryCycle])
async def list_yearly_cycles(
    year: int,
    cycle_start_day: int = Query(1, ge=1, le=28),
):
    """The twelve cycles starting in a year"""
    try:
        return get_yearly_salary_cycles(year, cycle_start_day)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/salary/{user_id}", status_code=status.HTTP_201_CREATED)
async def add_salary_record(user_id: str, record: SalaryRecord):
    """Append a salary record to a user's history"""
    profile = await PayrollProfile.find_one(PayrollProfile.user_id == user_id)
    if not profile:
        profile = PayrollProfile(user_id=user_id)

    if record.created_at is None:
        record = record.model_copy(update={"created_at": datetime.utcnow()})

    try:
        profile.add_salary_record(record)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    await profile.save()
    logger.info("Salary record added for %s effective %s", user_id, record.effective_from)

    return {
        "message": "Salary record added successfully",
        "salary_history": profile.salary_history,
    }


@router.post("/time-entries/{user_id}", status_code=status.HTTP_201_CREATED, response_model=TimeEntry)
async def log_time_entry(user_id: str, data: TimeEntryCreate):
    """Record a work session or leave day, priced from the salary in force on its date"""
    record = TimeEntryRecord(user_id=user_id, **data.model_dump())

    profile = await PayrollProfile.find_one(PayrollProfile.user_id == user_id)
    if profile and profile.salary_history:
        payment_config = profile.payment_config or default_payment_config()
        record.apply_salary(profile.salary_history, payment_config.overtime)
    else:
        logger.warning("No salary configured for %s, entry on %s left unpriced", user_id, data.date)

    await record.insert()
    return record.to_entry()


@router.post("/payslip", response_model=PayslipData)
async def generate_payslip(request: GeneratePayslipRequest):
    """Generate (or fetch the stored) payslip for a user and cycle"""
    profile = await PayrollProfile.find_one(PayrollProfile.user_id == request.user_id)
    if not profile or not profile.salary_history:
        raise HTTPException(status_code=404, detail="No salary configured for user")

    payment_config = profile.payment_config or default_payment_config()

    try:
        cycle = resolve_cycle(request, payment_config.salary_cycle.cycle_start_day)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    existing = await Payslip.find_one(
        Payslip.user_id == request.user_id,
        Payslip.period_start == cycle.start_date,
    )
    if existing and not request.regenerate:
        return existing.to_payslip_data()

    salary_record = select_salary_for_cycle(profile.salary_history, cycle)
    entries = await TimeEntryRecord.active_for_user(request.user_id, cycle.start_date, cycle.end_date)

    try:
        data = generate_payslip_from_entries(
            entries, salary_record, payment_config, cycle, request.user_id,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    payslip = Payslip.from_payslip_data(data, generated_at=datetime.utcnow())
    if existing:
        payslip.id = existing.id
        await payslip.replace()
    else:
        await payslip.insert()

    logger.info(
        "Generated payslip %s for %s (%s..%s), net %s",
        data.id, request.user_id, cycle.start_date, cycle.end_date,
        format_currency(data.summary.net_salary, payment_config.currency, payment_config.locale),
    )
    return payslip.to_payslip_data()


@router.get("/payslips/{user_id}", response_model=List[PayslipData])
async def get_user_payslips(user_id: str):
    """Stored payslips for a user, newest period first"""
    payslips = await Payslip.find(Payslip.user_id == user_id).sort("-period_start").to_list()
    return [payslip.to_payslip_data() for payslip in payslips]
