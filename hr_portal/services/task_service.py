"""
Task catalogue: a category tree, the tasks filed under it and per-user
effort estimates. Task logs reference tasks from here.
"""
from typing import List, Optional, Set
import logging

from sqlalchemy.orm import Session

from hr_portal.core.exceptions import AccessDeniedError, AppException, ConflictError, NotFoundError
from hr_portal.database import commit_or_rollback
from hr_portal.models.task import Task
from hr_portal.models.task_category import TaskCategory
from hr_portal.models.task_estimate import TaskEstimate
from hr_portal.models.task_log import TaskLog
from hr_portal.models.user import User
from hr_portal.schemas.task import (
    TaskCategoryCreate, TaskCategoryTree, TaskCategoryUpdate,
    TaskCreate, TaskEstimateCreate, TaskEstimateUpdate, TaskUpdate,
)

logger = logging.getLogger(__name__)


# ============================================================================
# CATEGORIES
# ============================================================================

def get_category(db: Session, category_id: int) -> TaskCategory:
    category = db.get(TaskCategory, category_id)
    if not category:
        raise NotFoundError("Task category", category_id)
    return category


def list_categories(db: Session, parent_id: Optional[int] = None) -> List[TaskCategory]:
    query = db.query(TaskCategory)
    if parent_id is not None:
        query = query.filter(TaskCategory.parent_id == parent_id)
    return query.order_by(TaskCategory.name).all()


def category_tree(db: Session) -> List[TaskCategoryTree]:
    """Root categories with their descendants nested under ``children``."""
    roots = db.query(TaskCategory).filter(TaskCategory.parent_id.is_(None)).order_by(TaskCategory.name).all()
    # children is an ordered relationship, so validation walks the whole subtree
    return [TaskCategoryTree.model_validate(root) for root in roots]


def subcategory_ids(db: Session, category_id: int) -> Set[int]:
    """``category_id`` and every category below it."""
    found = {category_id}
    frontier = [category_id]
    while frontier:
        children = db.query(TaskCategory.id).filter(TaskCategory.parent_id.in_(frontier)).all()
        frontier = [child_id for (child_id,) in children if child_id not in found]
        found.update(frontier)
    return found


def create_category(db: Session, data: TaskCategoryCreate) -> TaskCategory:
    if data.parent_id is not None:
        get_category(db, data.parent_id)
    category = TaskCategory(**data.model_dump())
    db.add(category)
    commit_or_rollback(db)
    db.refresh(category)
    return category


def update_category(db: Session, category_id: int, data: TaskCategoryUpdate) -> TaskCategory:
    category = get_category(db, category_id)
    changes = data.model_dump(exclude_unset=True)

    parent_id = changes.get("parent_id")
    if parent_id is not None:
        get_category(db, parent_id)
        if parent_id in subcategory_ids(db, category.id):
            raise AppException(
                f"Task category {category.id} cannot be moved under its own subtree",
                status_code=400,
                error_code="INVALID_PARENT"
            )

    for field, value in changes.items():
        setattr(category, field, value)
    commit_or_rollback(db)
    db.refresh(category)
    return category


def delete_category(db: Session, category_id: int) -> None:
    category = get_category(db, category_id)
    if category.children or category.tasks:
        raise ConflictError(f"Task category {category.id} still has subcategories or tasks")
    db.delete(category)
    commit_or_rollback(db)


# ============================================================================
# TASKS
# ============================================================================

def get_task(db: Session, task_id: int) -> Task:
    task = db.get(Task, task_id)
    if not task:
        raise NotFoundError("Task", task_id)
    return task


def list_tasks(db: Session, category_id: Optional[int] = None) -> List[Task]:
    """All tasks, or those filed under ``category_id`` including its subcategories."""
    query = db.query(Task)
    if category_id is not None:
        get_category(db, category_id)
        query = query.filter(Task.task_category_id.in_(subcategory_ids(db, category_id)))
    return query.order_by(Task.created_at.desc(), Task.id.desc()).all()


def create_task(db: Session, data: TaskCreate) -> Task:
    if data.task_category_id is not None:
        get_category(db, data.task_category_id)
    task = Task(**data.model_dump())
    db.add(task)
    commit_or_rollback(db)
    db.refresh(task)
    logger.info(f"Task {task.id} '{task.title}' created")
    return task


def update_task(db: Session, task_id: int, data: TaskUpdate) -> Task:
    task = get_task(db, task_id)
    changes = data.model_dump(exclude_unset=True)
    if changes.get("task_category_id") is not None:
        get_category(db, changes["task_category_id"])
    for field, value in changes.items():
        setattr(task, field, value)
    commit_or_rollback(db)
    db.refresh(task)
    return task


def delete_task(db: Session, task_id: int) -> None:
    task = get_task(db, task_id)
    logged = db.query(TaskLog).filter(TaskLog.task_id == task.id).count()
    if logged:
        raise ConflictError(f"Task {task.id} has {logged} task log(s) and cannot be deleted")
    db.delete(task)
    commit_or_rollback(db)


# ============================================================================
# ESTIMATES
# ============================================================================

def _get_estimate(db: Session, estimate_id: int, user: User) -> TaskEstimate:
    estimate = db.get(TaskEstimate, estimate_id)
    if not estimate:
        raise NotFoundError("Task estimate", estimate_id)
    if estimate.created_by_user_id != user.id and not user.is_admin:
        raise AccessDeniedError(f"Task estimate {estimate_id} belongs to another user")
    return estimate


def list_estimates(db: Session, task_id: Optional[int] = None, user_id: Optional[int] = None) -> List[TaskEstimate]:
    query = db.query(TaskEstimate)
    if task_id is not None:
        query = query.filter(TaskEstimate.task_id == task_id)
    if user_id is not None:
        query = query.filter(TaskEstimate.created_by_user_id == user_id)
    return query.order_by(TaskEstimate.created_at.desc(), TaskEstimate.id.desc()).all()


def create_estimate(db: Session, user: User, data: TaskEstimateCreate) -> TaskEstimate:
    get_task(db, data.task_id)
    estimate = TaskEstimate(**data.model_dump(), created_by_user_id=user.id)
    db.add(estimate)
    commit_or_rollback(db)
    db.refresh(estimate)
    return estimate


def update_estimate(db: Session, user: User, estimate_id: int, data: TaskEstimateUpdate) -> TaskEstimate:
    estimate = _get_estimate(db, estimate_id, user)
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(estimate, field, value)
    commit_or_rollback(db)
    db.refresh(estimate)
    return estimate


def delete_estimate(db: Session, user: User, estimate_id: int) -> None:
    db.delete(_get_estimate(db, estimate_id, user))
    commit_or_rollback(db)
