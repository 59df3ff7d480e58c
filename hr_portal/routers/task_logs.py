from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from hr_portal.database import get_db
from hr_portal.models.user import User
from hr_portal.routers.auth_deps import get_current_user
from hr_portal.schemas.logs import TaskLogCreate, TaskLogResponse, TaskLogUpdate
from hr_portal.services import log_service

router = APIRouter(prefix="/task-logs", tags=["task-logs"])


@router.get("", response_model=List[TaskLogResponse])
def list_task_logs(
    year: Optional[int] = None,
    task_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return log_service.list_task_logs(db, current_user.id, year, task_id)


@router.post("", response_model=TaskLogResponse, status_code=status.HTTP_201_CREATED)
def create_task_log(data: TaskLogCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return log_service.create_task_log(db, current_user, data)


@router.put("/{log_id}", response_model=TaskLogResponse)
def update_task_log(
    log_id: int,
    data: TaskLogUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return log_service.update_task_log(db, current_user, log_id, data)


@router.delete("/{log_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task_log(log_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    log_service.delete_task_log(db, current_user, log_id)
