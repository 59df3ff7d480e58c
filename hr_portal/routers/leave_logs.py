from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from hr_portal.database import get_db
from hr_portal.models.user import User
from hr_portal.routers.auth_deps import get_current_user, get_today
from hr_portal.schemas.logs import LeaveLogCreate, LeaveLogResponse, LeaveLogUpdate
from hr_portal.services import log_service

router = APIRouter(prefix="/leave-logs", tags=["leave-logs"])


@router.get("", response_model=List[LeaveLogResponse])
def list_leave_logs(year: Optional[int] = None, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return log_service.list_leave_logs(db, current_user.id, year)


@router.post("", response_model=LeaveLogResponse, status_code=status.HTTP_201_CREATED)
def create_leave_log(
    data: LeaveLogCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    today: date = Depends(get_today)
):
    return log_service.create_leave_log(db, current_user, data, today=today)


@router.put("/{log_id}", response_model=LeaveLogResponse)
def update_leave_log(
    log_id: int,
    data: LeaveLogUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    today: date = Depends(get_today)
):
    return log_service.update_leave_log(db, current_user, log_id, data, today=today)


@router.delete("/{log_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_leave_log(log_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    log_service.delete_leave_log(db, current_user, log_id)
