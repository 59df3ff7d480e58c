"""
Task log, leave log and medical expense writes.

Every write re-runs the same checks the UI shows as a preview (daily
allocation, pro-rated vacation quota, pro-rated medical budget) against the
stored data, then re-derives the affected annual record(s).
"""
from datetime import date
from typing import Any, List, Optional, Type
import logging

from sqlalchemy.orm import Session

from hr_portal.core.exceptions import AccessDeniedError, DailyAllocationExceededError, NotFoundError, QuotaExceededError
from hr_portal.database import commit_or_rollback
from hr_portal.models.holiday import Holiday
from hr_portal.models.leave_log import LeaveLog, LeaveType
from hr_portal.models.medical_expense import MedicalExpense
from hr_portal.models.task_log import TaskLog
from hr_portal.models.user import User
from hr_portal.schemas.logs import (
    LeaveLogCreate, LeaveLogUpdate,
    MedicalExpenseCreate, MedicalExpenseUpdate,
    TaskLogCreate, TaskLogUpdate,
)
from hr_portal.schemas.quota import AllocationCheck
from hr_portal.services import annual_record_service, calendar, daily_allocation, quota_calculator, task_service

logger = logging.getLogger(__name__)


# ============================================================================
# SHARED CHECKS
# ============================================================================

def _get_owned(db: Session, model: Type[Any], log_id: int, user: User, owner_field: str) -> Any:
    entry = db.get(model, log_id)
    if not entry:
        raise NotFoundError(model.__name__, log_id)
    if getattr(entry, owner_field) != user.id and not user.is_admin:
        raise AccessDeniedError(f"{model.__name__} {log_id} belongs to another user")
    return entry


def preview_allocation(
    db: Session,
    user_id: int,
    day: date,
    proposed: float,
    exclude_task_log_id: Optional[int] = None,
    exclude_leave_log_id: Optional[int] = None
) -> AllocationCheck:
    task_logs = db.query(TaskLog).filter(
        TaskLog.created_by_user_id == user_id,
        TaskLog.worked_date == day
    ).all()
    leave_logs = db.query(LeaveLog).filter(
        LeaveLog.user_id == user_id,
        LeaveLog.date == day
    ).all()
    return daily_allocation.check_allocation(
        task_logs, leave_logs, day, proposed,
        exclude_task_log_id=exclude_task_log_id,
        exclude_leave_log_id=exclude_leave_log_id
    )


def _enforce_allocation(db: Session, user_id: int, day: date, proposed: float, **exclude: Optional[int]) -> None:
    check = preview_allocation(db, user_id, day, proposed, **exclude)
    if not check.is_valid:
        logger.info(f"Daily allocation rejected for user {user_id} on {day}: {check.allocated} + {proposed}")
        raise DailyAllocationExceededError(
            f"Logging {proposed:.2f} day(s) on {day.isoformat()} would exceed one day "
            f"({check.remaining:.2f} remaining)",
            details=check.model_dump(mode="json")
        )


def _enforce_vacation_quota(
    db: Session,
    user_id: int,
    day: date,
    days: float,
    credit: float = 0.0,
    today: Optional[date] = None
) -> None:
    """Reject vacation leave beyond the pro-rated quota of ``day``'s year; ``credit`` is the amount being replaced."""
    record = annual_record_service.sync_user_record(db, user_id, day.year)
    quota_vacation_day, _ = annual_record_service.effective_quota(record)
    result = quota_calculator.validate_leave_quota(
        quota_vacation_day,
        record.rollover_vacation_day,
        record.worked_on_holiday_day,
        record.used_vacation_day - credit,
        days,
        as_of=quota_calculator.accrual_date(day.year, today)
    )
    if not result.is_valid:
        raise QuotaExceededError(result.message, details=result.model_dump())


def _enforce_medical_budget(
    db: Session,
    user_id: int,
    receipt_date: date,
    amount: float,
    credit: float = 0.0,
    today: Optional[date] = None
) -> None:
    record = annual_record_service.sync_user_record(db, user_id, receipt_date.year)
    _, quota_medical = annual_record_service.effective_quota(record)
    result = quota_calculator.validate_medical_expense(
        quota_medical,
        record.used_medical_expense_baht - credit,
        amount,
        as_of=quota_calculator.accrual_date(receipt_date.year, today)
    )
    if not result.is_valid:
        raise QuotaExceededError(result.message, details=result.model_dump())


def _resync(db: Session, user_id: int, *years: int) -> None:
    for year in set(years):
        annual_record_service.sync_user_record(db, user_id, year)


def _is_holiday(db: Session, day: date) -> bool:
    holidays = db.query(Holiday).filter(Holiday.date == day).all()
    return calendar.is_holiday(day, holidays)


# ============================================================================
# TASK LOGS
# ============================================================================

def list_task_logs(db: Session, user_id: int, year: Optional[int] = None, task_id: Optional[int] = None) -> List[TaskLog]:
    query = db.query(TaskLog).filter(TaskLog.created_by_user_id == user_id)
    if task_id is not None:
        query = query.filter(TaskLog.task_id == task_id)
    if year is not None:
        query = query.filter(TaskLog.worked_date.between(date(year, 1, 1), date(year, 12, 31)))
    return query.order_by(TaskLog.worked_date.desc()).all()


def create_task_log(db: Session, user: User, data: TaskLogCreate) -> TaskLog:
    task_service.get_task(db, data.task_id)
    _enforce_allocation(db, user.id, data.worked_date, data.worked_day)

    log = TaskLog(
        task_id=data.task_id,
        worked_day=data.worked_day,
        created_by_user_id=user.id,
        worked_date=data.worked_date,
        is_work_on_holiday=_is_holiday(db, data.worked_date)
    )
    db.add(log)
    db.flush()
    _resync(db, user.id, data.worked_date.year)
    commit_or_rollback(db)
    db.refresh(log)
    return log


def update_task_log(db: Session, user: User, log_id: int, data: TaskLogUpdate) -> TaskLog:
    log = _get_owned(db, TaskLog, log_id, user, "created_by_user_id")
    old_year = log.worked_date.year
    if data.task_id is not None:
        task_service.get_task(db, data.task_id)
    worked_date = data.worked_date or log.worked_date
    worked_day = data.worked_day if data.worked_day is not None else log.worked_day

    _enforce_allocation(db, log.created_by_user_id, worked_date, worked_day, exclude_task_log_id=log.id)

    log.worked_date = worked_date
    log.worked_day = worked_day
    if data.task_id is not None:
        log.task_id = data.task_id
    log.is_work_on_holiday = _is_holiday(db, worked_date)
    db.flush()
    _resync(db, log.created_by_user_id, old_year, worked_date.year)
    commit_or_rollback(db)
    db.refresh(log)
    return log


def delete_task_log(db: Session, user: User, log_id: int) -> None:
    log = _get_owned(db, TaskLog, log_id, user, "created_by_user_id")
    owner_id, year = log.created_by_user_id, log.worked_date.year
    db.delete(log)
    db.flush()
    _resync(db, owner_id, year)
    commit_or_rollback(db)


# ============================================================================
# LEAVE LOGS
# ============================================================================

def list_leave_logs(db: Session, user_id: int, year: Optional[int] = None) -> List[LeaveLog]:
    query = db.query(LeaveLog).filter(LeaveLog.user_id == user_id)
    if year is not None:
        query = query.filter(LeaveLog.date.between(date(year, 1, 1), date(year, 12, 31)))
    return query.order_by(LeaveLog.date.desc()).all()


def create_leave_log(db: Session, user: User, data: LeaveLogCreate, today: Optional[date] = None) -> LeaveLog:
    _enforce_allocation(db, user.id, data.date, data.worked_day)
    if data.type == LeaveType.VACATION:
        _enforce_vacation_quota(db, user.id, data.date, data.worked_day, today=today)

    log = LeaveLog(
        user_id=user.id,
        type=data.type.value,
        date=data.date,
        worked_day=data.worked_day,
        note=data.note
    )
    db.add(log)
    db.flush()
    _resync(db, user.id, data.date.year)
    commit_or_rollback(db)
    db.refresh(log)
    return log


def update_leave_log(db: Session, user: User, log_id: int, data: LeaveLogUpdate, today: Optional[date] = None) -> LeaveLog:
    log = _get_owned(db, LeaveLog, log_id, user, "user_id")
    old_year = log.date.year
    leave_type = data.type.value if data.type is not None else log.type
    day = data.date or log.date
    worked_day = data.worked_day if data.worked_day is not None else log.worked_day

    _enforce_allocation(db, log.user_id, day, worked_day, exclude_leave_log_id=log.id)
    if leave_type == LeaveType.VACATION.value:
        # The edited log is already counted as used when it stays a vacation in the same year
        credit = log.worked_day if log.type == LeaveType.VACATION.value and old_year == day.year else 0.0
        _enforce_vacation_quota(db, log.user_id, day, worked_day, credit=credit, today=today)

    log.type = leave_type
    log.date = day
    log.worked_day = worked_day
    if data.note is not None:
        log.note = data.note
    db.flush()
    _resync(db, log.user_id, old_year, day.year)
    commit_or_rollback(db)
    db.refresh(log)
    return log


def delete_leave_log(db: Session, user: User, log_id: int) -> None:
    log = _get_owned(db, LeaveLog, log_id, user, "user_id")
    owner_id, year = log.user_id, log.date.year
    db.delete(log)
    db.flush()
    _resync(db, owner_id, year)
    commit_or_rollback(db)


# ============================================================================
# MEDICAL EXPENSES
# ============================================================================

def list_medical_expenses(db: Session, user_id: int, year: Optional[int] = None) -> List[MedicalExpense]:
    query = db.query(MedicalExpense).filter(MedicalExpense.user_id == user_id)
    if year is not None:
        query = query.filter(MedicalExpense.receipt_date.between(date(year, 1, 1), date(year, 12, 31)))
    return query.order_by(MedicalExpense.receipt_date.desc()).all()


def create_medical_expense(db: Session, user: User, data: MedicalExpenseCreate, today: Optional[date] = None) -> MedicalExpense:
    _enforce_medical_budget(db, user.id, data.receipt_date, data.amount, today=today)

    expense = MedicalExpense(
        user_id=user.id,
        amount=data.amount,
        receipt_name=data.receipt_name,
        receipt_date=data.receipt_date,
        note=data.note
    )
    db.add(expense)
    db.flush()
    _resync(db, user.id, data.receipt_date.year)
    commit_or_rollback(db)
    db.refresh(expense)
    logger.info(f"Medical expense {expense.id} of {expense.amount} recorded for user {user.id}")
    return expense


def update_medical_expense(
    db: Session,
    user: User,
    expense_id: int,
    data: MedicalExpenseUpdate,
    today: Optional[date] = None
) -> MedicalExpense:
    expense = _get_owned(db, MedicalExpense, expense_id, user, "user_id")
    old_year = expense.receipt_date.year
    receipt_date = data.receipt_date or expense.receipt_date
    amount = data.amount if data.amount is not None else expense.amount

    credit = expense.amount if old_year == receipt_date.year else 0.0
    _enforce_medical_budget(db, expense.user_id, receipt_date, amount, credit=credit, today=today)

    expense.amount = amount
    expense.receipt_date = receipt_date
    if data.receipt_name is not None:
        expense.receipt_name = data.receipt_name
    if data.note is not None:
        expense.note = data.note
    db.flush()
    _resync(db, expense.user_id, old_year, receipt_date.year)
    commit_or_rollback(db)
    db.refresh(expense)
    return expense


def delete_medical_expense(db: Session, user: User, expense_id: int) -> None:
    expense = _get_owned(db, MedicalExpense, expense_id, user, "user_id")
    owner_id, year = expense.user_id, expense.receipt_date.year
    db.delete(expense)
    db.flush()
    _resync(db, owner_id, year)
    commit_or_rollback(db)
