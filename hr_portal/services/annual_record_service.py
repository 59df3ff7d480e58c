"""
Annual Record Service Layer

Owns the per-user, per-year ledger: creating records on demand, re-deriving
usage from the underlying logs, assigning quota plans and rolling unused
vacation into the next year.

Architecture:
- Router -> Service (this module) -> Models
- Helpers (ensure/sync) only flush; operations exposed to routers commit
"""
from datetime import date
from typing import List, Optional, Tuple
import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from hr_portal.core.config import settings
from hr_portal.core.exceptions import NotFoundError
from hr_portal.database import commit_or_rollback
from hr_portal.models.annual_record import AnnualRecord
from hr_portal.models.leave_log import LeaveLog, LeaveType
from hr_portal.models.medical_expense import MedicalExpense
from hr_portal.models.quota_plan import QuotaPlan
from hr_portal.models.task_log import TaskLog
from hr_portal.models.user import User
from hr_portal.schemas.quota import AnnualRecordUpdate, QuotaSummary, RolloverResult
from hr_portal.services import quota_calculator

logger = logging.getLogger(__name__)


def _year_bounds(year: int) -> Tuple[date, date]:
    return date(year, 1, 1), date(year, 12, 31)


def get_record(db: Session, user_id: int, year: int) -> AnnualRecord:
    record = db.query(AnnualRecord).filter(
        AnnualRecord.user_id == user_id,
        AnnualRecord.year == year
    ).first()
    if not record:
        raise NotFoundError("Annual record", f"for user {user_id} in {year}")
    return record


def list_records(db: Session, user_id: Optional[int] = None, year: Optional[int] = None) -> List[AnnualRecord]:
    query = db.query(AnnualRecord)
    if user_id is not None:
        query = query.filter(AnnualRecord.user_id == user_id)
    if year is not None:
        query = query.filter(AnnualRecord.year == year)
    return query.order_by(AnnualRecord.year.desc(), AnnualRecord.user_id).all()


def find_default_plan(db: Session, year: int) -> Optional[QuotaPlan]:
    """The year's plan named after settings.quota.plan_name, else its oldest plan."""
    plan = db.query(QuotaPlan).filter(
        QuotaPlan.year == year,
        QuotaPlan.plan_name == settings.quota.plan_name
    ).first()
    if plan:
        return plan
    return db.query(QuotaPlan).filter(QuotaPlan.year == year).order_by(QuotaPlan.id).first()


def ensure_record(db: Session, user_id: int, year: int) -> AnnualRecord:
    record = db.query(AnnualRecord).filter(
        AnnualRecord.user_id == user_id,
        AnnualRecord.year == year
    ).first()
    if record:
        return record

    plan = find_default_plan(db, year)
    if not plan:
        logger.info(f"No quota plan found for year {year}, creating record for user {user_id} without one")

    record = AnnualRecord(
        user_id=user_id,
        year=year,
        quota_plan_id=plan.id if plan else None,
        rollover_vacation_day=0.0,
        used_vacation_day=0.0,
        used_sick_leave_day=0.0,
        worked_on_holiday_day=0.0,
        worked_day=0.0,
        used_medical_expense_baht=0.0
    )
    db.add(record)
    db.flush()
    return record


def effective_quota(record: AnnualRecord) -> Tuple[float, float]:
    """(quota_vacation_day, quota_medical_expense_baht) from the linked plan, zeros if unlinked."""
    return record.quota_vacation_day, record.quota_medical_expense_baht


def sync_user_record(db: Session, user_id: int, year: int) -> AnnualRecord:
    """Re-derive usage columns from leave logs, task logs and medical expenses."""
    start, end = _year_bounds(year)
    record = ensure_record(db, user_id, year)

    leave_rows = db.query(LeaveLog.type, func.sum(LeaveLog.worked_day)).filter(
        LeaveLog.user_id == user_id,
        LeaveLog.date.between(start, end)
    ).group_by(LeaveLog.type).all()
    leave_by_type = {leave_type: total or 0.0 for leave_type, total in leave_rows}

    worked_total = db.query(func.sum(TaskLog.worked_day)).filter(
        TaskLog.created_by_user_id == user_id,
        TaskLog.worked_date.between(start, end)
    ).scalar()
    holiday_total = db.query(func.sum(TaskLog.worked_day)).filter(
        TaskLog.created_by_user_id == user_id,
        TaskLog.worked_date.between(start, end),
        TaskLog.is_work_on_holiday.is_(True)
    ).scalar()
    medical_total = db.query(func.sum(MedicalExpense.amount)).filter(
        MedicalExpense.user_id == user_id,
        MedicalExpense.receipt_date.between(start, end)
    ).scalar()

    record.used_vacation_day = leave_by_type.get(LeaveType.VACATION.value, 0.0)
    record.used_sick_leave_day = leave_by_type.get(LeaveType.SICK.value, 0.0)
    record.worked_day = worked_total or 0.0
    record.worked_on_holiday_day = holiday_total or 0.0
    record.used_medical_expense_baht = medical_total or 0.0
    db.flush()
    return record


def sync_all_records(db: Session, year: int) -> List[AnnualRecord]:
    records = db.query(AnnualRecord).filter(AnnualRecord.year == year).all()
    try:
        synced = [sync_user_record(db, record.user_id, year) for record in records]
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info(f"Synchronized {len(synced)} annual records for {year}")
    return synced


def update_record(db: Session, user_id: int, year: int, data: AnnualRecordUpdate) -> AnnualRecord:
    record = get_record(db, user_id, year)
    changes = data.model_dump(exclude_unset=True)

    if changes.get("quota_plan_id") is not None:
        if not db.get(QuotaPlan, changes["quota_plan_id"]):
            raise NotFoundError("Quota plan", changes["quota_plan_id"])

    for field, value in changes.items():
        setattr(record, field, value)

    commit_or_rollback(db)
    db.refresh(record)
    return record


def assign_plan_to_all_users(db: Session, plan: QuotaPlan) -> int:
    """
    Link every record of the plan's year to it and open records for active
    users who have none yet. Returns the number of records touched.
    """
    records = db.query(AnnualRecord).filter(AnnualRecord.year == plan.year).all()
    for record in records:
        record.quota_plan_id = plan.id

    covered = {record.user_id for record in records}
    users = db.query(User).filter(User.is_active.is_(True)).all()
    created = 0
    for user in users:
        if user.id in covered:
            continue
        db.add(AnnualRecord(
            user_id=user.id,
            year=plan.year,
            quota_plan_id=plan.id,
            rollover_vacation_day=0.0,
            used_vacation_day=0.0,
            used_sick_leave_day=0.0,
            worked_on_holiday_day=0.0,
            worked_day=0.0,
            used_medical_expense_baht=0.0
        ))
        created += 1

    commit_or_rollback(db)
    logger.info(f"Assigned quota plan {plan.id} to {len(records)} existing and {created} new records for {plan.year}")
    return len(records) + created


def rollover_year(db: Session, this_year: int) -> RolloverResult:
    """
    Open next-year records carrying unused vacation forward.

    rollover = max(quota + worked_on_holiday - used, 0) of the current year.
    Users who already have a next-year record are left untouched, so the
    operation can be re-run safely.
    """
    next_year = this_year + 1
    plan = find_default_plan(db, next_year)
    if not plan:
        logger.warning(f"No quota plan for {next_year}; rolled-over records will have no plan")

    existing = {
        user_id for (user_id,) in
        db.query(AnnualRecord.user_id).filter(AnnualRecord.year == next_year).all()
    }
    current = {
        record.user_id: record for record in
        db.query(AnnualRecord).filter(AnnualRecord.year == this_year).all()
    }

    created = 0
    for user in db.query(User).filter(User.is_active.is_(True)).all():
        if user.id in existing:
            continue
        rollover = 0.0
        record = current.get(user.id)
        if record:
            quota_vacation_day, _ = effective_quota(record)
            rollover = max(quota_vacation_day + record.worked_on_holiday_day - record.used_vacation_day, 0.0)
        db.add(AnnualRecord(
            user_id=user.id,
            year=next_year,
            quota_plan_id=plan.id if plan else None,
            rollover_vacation_day=rollover,
            used_vacation_day=0.0,
            used_sick_leave_day=0.0,
            worked_on_holiday_day=0.0,
            worked_day=0.0,
            used_medical_expense_baht=0.0
        ))
        created += 1

    commit_or_rollback(db)
    logger.info(f"Year-end rollover {this_year} -> {next_year}: created {created} records")
    return RolloverResult(from_year=this_year, to_year=next_year, created=created)


def quota_summary(db: Session, user_id: int, year: int, today: Optional[date] = None) -> QuotaSummary:
    record = get_record(db, user_id, year)
    quota_vacation_day, quota_medical = effective_quota(record)

    as_of = quota_calculator.accrual_date(year, today)
    days_passed = quota_calculator.days_passed_in_year(as_of)
    total_days = quota_calculator.days_in_year(year)

    return QuotaSummary(
        user_id=user_id,
        year=year,
        as_of=as_of,
        days_passed=days_passed,
        days_in_year=total_days,
        quota_vacation_day=quota_vacation_day,
        pro_rated_vacation_day=quota_calculator.pro_rated(quota_vacation_day, days_passed, total_days),
        remaining_vacation_day=quota_calculator.remaining_vacation_days(
            quota_vacation_day,
            record.rollover_vacation_day,
            record.worked_on_holiday_day,
            record.used_vacation_day,
            days_passed,
            total_days
        ),
        quota_medical_expense_baht=quota_medical,
        pro_rated_medical_expense_baht=quota_calculator.pro_rated(quota_medical, days_passed, total_days),
        remaining_medical_expense_baht=quota_calculator.remaining_medical_budget(
            quota_medical,
            record.used_medical_expense_baht,
            days_passed,
            total_days
        )
    )
