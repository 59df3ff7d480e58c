from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from hr_portal.database import get_db
from hr_portal.models.user import User
from hr_portal.routers.auth_deps import get_current_user, require_admin
from hr_portal.schemas.task import TaskCategoryCreate, TaskCategoryResponse, TaskCategoryTree, TaskCategoryUpdate
from hr_portal.services import task_service

router = APIRouter(prefix="/task-categories", tags=["task-categories"])


@router.get("", response_model=List[TaskCategoryResponse])
def list_task_categories(
    parent_id: Optional[int] = None,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user)
):
    return task_service.list_categories(db, parent_id)


@router.get("/tree", response_model=List[TaskCategoryTree])
def get_task_category_tree(db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return task_service.category_tree(db)


@router.get("/{category_id}", response_model=TaskCategoryResponse)
def get_task_category(category_id: int, db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return task_service.get_category(db, category_id)


@router.post("", response_model=TaskCategoryResponse, status_code=status.HTTP_201_CREATED)
def create_task_category(data: TaskCategoryCreate, db: Session = Depends(get_db), _: User = Depends(require_admin())):
    return task_service.create_category(db, data)


@router.put("/{category_id}", response_model=TaskCategoryResponse)
def update_task_category(
    category_id: int,
    data: TaskCategoryUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin())
):
    return task_service.update_category(db, category_id, data)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task_category(category_id: int, db: Session = Depends(get_db), _: User = Depends(require_admin())):
    task_service.delete_category(db, category_id)
