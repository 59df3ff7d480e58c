"""
Preview endpoints for the UI.
These return the same numbers the write endpoints enforce, so forms can
warn before submitting; they never change state.
"""
from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hr_portal.core.schemas import ApiResponse
from hr_portal.database import get_db
from hr_portal.models.user import User
from hr_portal.routers.auth_deps import get_current_user, get_today
from hr_portal.schemas.logs import DailyAllocationRequest
from hr_portal.schemas.quota import AllocationCheck, LeaveQuotaCheckRequest, MedicalExpenseCheckRequest, QuotaCheckResult
from hr_portal.services import log_service, quota_calculator

router = APIRouter(prefix="/validation", tags=["validation"])


@router.post("/medical-expense", response_model=ApiResponse[QuotaCheckResult])
def check_medical_expense(
    data: MedicalExpenseCheckRequest,
    _: User = Depends(get_current_user),
    today: date = Depends(get_today)
):
    result = quota_calculator.validate_medical_expense(
        data.quota_medical_expense_baht,
        data.used_medical_expense_baht,
        data.new_expense_baht,
        as_of=data.as_of or today
    )
    return ApiResponse.ok(result)


@router.post("/leave-quota", response_model=ApiResponse[QuotaCheckResult])
def check_leave_quota(
    data: LeaveQuotaCheckRequest,
    _: User = Depends(get_current_user),
    today: date = Depends(get_today)
):
    result = quota_calculator.validate_leave_quota(
        data.quota_vacation_day,
        data.rollover_vacation_day,
        data.worked_on_holiday_day,
        data.used_vacation_day,
        data.new_leave_days,
        as_of=data.as_of or today
    )
    return ApiResponse.ok(result)


@router.post("/daily-allocation", response_model=ApiResponse[AllocationCheck])
def check_daily_allocation(
    data: DailyAllocationRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    result = log_service.preview_allocation(
        db,
        current_user.id,
        data.date,
        data.proposed,
        exclude_task_log_id=data.exclude_task_log_id,
        exclude_leave_log_id=data.exclude_leave_log_id
    )
    return ApiResponse.ok(result)
