from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hr_portal.core.exceptions import AccessDeniedError
from hr_portal.database import commit_or_rollback, get_db
from hr_portal.models.user import User
from hr_portal.routers.auth_deps import get_current_user, get_today, require_admin
from hr_portal.schemas.quota import AnnualRecordResponse, AnnualRecordUpdate, QuotaSummary, RolloverResult
from hr_portal.services import annual_record_service

router = APIRouter(prefix="/annual-records", tags=["annual-records"])


@router.get("", response_model=List[AnnualRecordResponse])
def list_annual_records(
    user_id: Optional[int] = None,
    year: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if not current_user.is_admin:
        if user_id is not None and user_id != current_user.id:
            raise AccessDeniedError("You can only view your own annual records")
        user_id = current_user.id
    return annual_record_service.list_records(db, user_id=user_id, year=year)


@router.get("/me/{year}", response_model=AnnualRecordResponse)
def get_my_annual_record(year: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    record = annual_record_service.ensure_record(db, current_user.id, year)
    commit_or_rollback(db)
    db.refresh(record)
    return record


@router.get("/summary/{year}", response_model=QuotaSummary)
def get_quota_summary(
    year: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    today: date = Depends(get_today)
):
    annual_record_service.ensure_record(db, current_user.id, year)
    commit_or_rollback(db)
    return annual_record_service.quota_summary(db, current_user.id, year, today)


@router.put("/{user_id}/{year}", response_model=AnnualRecordResponse)
def update_annual_record(
    user_id: int,
    year: int,
    data: AnnualRecordUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin())
):
    return annual_record_service.update_record(db, user_id, year, data)


@router.post("/sync/{year}", response_model=List[AnnualRecordResponse])
def sync_all_annual_records(year: int, db: Session = Depends(get_db), _: User = Depends(require_admin())):
    return annual_record_service.sync_all_records(db, year)


@router.post("/sync/{year}/{user_id}", response_model=AnnualRecordResponse)
def sync_user_annual_record(
    year: int,
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if user_id != current_user.id and not current_user.is_admin:
        raise AccessDeniedError("You can only synchronize your own annual record")
    record = annual_record_service.sync_user_record(db, user_id, year)
    commit_or_rollback(db)
    db.refresh(record)
    return record


@router.post("/rollover/{year}", response_model=RolloverResult)
def rollover_annual_records(year: int, db: Session = Depends(get_db), _: User = Depends(require_admin())):
    """Open records for year + 1, carrying unused vacation forward."""
    return annual_record_service.rollover_year(db, year)
