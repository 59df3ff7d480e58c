from typing import List, Optional
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from hr_portal.core.exceptions import ConflictError, NotFoundError
from hr_portal.database import commit_or_rollback, get_db
from hr_portal.models.quota_plan import QuotaPlan
from hr_portal.models.user import User
from hr_portal.routers.auth_deps import get_current_user, require_admin
from hr_portal.schemas.quota import QuotaPlanCreate, QuotaPlanResponse, QuotaPlanUpdate
from hr_portal.services import annual_record_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quota-plans", tags=["quota-plans"])


def _get_plan(db: Session, plan_id: int) -> QuotaPlan:
    plan = db.get(QuotaPlan, plan_id)
    if not plan:
        raise NotFoundError("Quota plan", plan_id)
    return plan


def _ensure_unique(db: Session, plan_name: str, year: int, exclude_id: Optional[int] = None):
    query = db.query(QuotaPlan).filter(QuotaPlan.plan_name == plan_name, QuotaPlan.year == year)
    if exclude_id is not None:
        query = query.filter(QuotaPlan.id != exclude_id)
    if query.first():
        raise ConflictError(f"Quota plan '{plan_name}' already exists for {year}")


@router.get("", response_model=List[QuotaPlanResponse])
def list_quota_plans(
    year: Optional[int] = None,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user)
):
    query = db.query(QuotaPlan)
    if year is not None:
        query = query.filter(QuotaPlan.year == year)
    return query.order_by(QuotaPlan.year.desc(), QuotaPlan.plan_name).all()


@router.get("/{plan_id}", response_model=QuotaPlanResponse)
def get_quota_plan(plan_id: int, db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return _get_plan(db, plan_id)


@router.post("", response_model=QuotaPlanResponse, status_code=status.HTTP_201_CREATED)
def create_quota_plan(
    data: QuotaPlanCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin())
):
    _ensure_unique(db, data.plan_name, data.year)
    plan = QuotaPlan(**data.model_dump(), created_by_user_id=current_user.id)
    db.add(plan)
    commit_or_rollback(db)
    db.refresh(plan)
    logger.info(f"Quota plan {plan.id} '{plan.plan_name}' created for {plan.year}")
    return plan


@router.put("/{plan_id}", response_model=QuotaPlanResponse)
def update_quota_plan(
    plan_id: int,
    data: QuotaPlanUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin())
):
    plan = _get_plan(db, plan_id)
    changes = data.model_dump(exclude_unset=True)
    if changes.get("year", plan.year) != plan.year and plan.annual_records:
        raise ConflictError(
            f"Quota plan {plan.id} is linked to {len(plan.annual_records)} annual record(s) for {plan.year}; "
            "create a plan for the new year instead"
        )
    _ensure_unique(db, changes.get("plan_name", plan.plan_name), changes.get("year", plan.year), exclude_id=plan.id)
    for field, value in changes.items():
        setattr(plan, field, value)
    commit_or_rollback(db)
    db.refresh(plan)
    # Every linked annual record now sees the new allowances
    logger.info(f"Quota plan {plan.id} updated: {changes}")
    return plan


@router.delete("/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_quota_plan(plan_id: int, db: Session = Depends(get_db), _: User = Depends(require_admin())):
    plan = _get_plan(db, plan_id)
    for record in plan.annual_records:
        record.quota_plan_id = None
    db.delete(plan)
    commit_or_rollback(db)


@router.post("/{plan_id}/assign")
def assign_quota_plan(plan_id: int, db: Session = Depends(get_db), _: User = Depends(require_admin())):
    """Assign the plan to every user for the plan's year."""
    plan = _get_plan(db, plan_id)
    touched = annual_record_service.assign_plan_to_all_users(db, plan)
    return {"quota_plan_id": plan.id, "year": plan.year, "records": touched}
