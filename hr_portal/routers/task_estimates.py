from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from hr_portal.database import get_db
from hr_portal.models.user import User
from hr_portal.routers.auth_deps import get_current_user
from hr_portal.schemas.task import TaskEstimateCreate, TaskEstimateResponse, TaskEstimateUpdate
from hr_portal.services import task_service

router = APIRouter(prefix="/task-estimates", tags=["task-estimates"])


@router.get("", response_model=List[TaskEstimateResponse])
def list_task_estimates(
    task_id: Optional[int] = None,
    mine: bool = False,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return task_service.list_estimates(db, task_id=task_id, user_id=current_user.id if mine else None)


@router.post("", response_model=TaskEstimateResponse, status_code=status.HTTP_201_CREATED)
def create_task_estimate(
    data: TaskEstimateCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return task_service.create_estimate(db, current_user, data)


@router.put("/{estimate_id}", response_model=TaskEstimateResponse)
def update_task_estimate(
    estimate_id: int,
    data: TaskEstimateUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return task_service.update_estimate(db, current_user, estimate_id, data)


@router.delete("/{estimate_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task_estimate(estimate_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    task_service.delete_estimate(db, current_user, estimate_id)
