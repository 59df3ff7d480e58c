from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from hr_portal.core.exceptions import ConflictError, NotFoundError
from hr_portal.database import commit_or_rollback, get_db
from hr_portal.models.holiday import Holiday
from hr_portal.models.user import User
from hr_portal.routers.auth_deps import get_current_user, require_admin
from hr_portal.schemas.calendar import HolidayCheck, HolidayCreate, HolidayResponse, HolidayUpdate
from hr_portal.services import calendar

router = APIRouter(prefix="/holidays", tags=["holidays"])


def _get_holiday(db: Session, holiday_id: int) -> Holiday:
    holiday = db.get(Holiday, holiday_id)
    if not holiday:
        raise NotFoundError("Holiday", holiday_id)
    return holiday


@router.get("", response_model=List[HolidayResponse])
def list_holidays(year: Optional[int] = None, db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    query = db.query(Holiday)
    if year is not None:
        query = query.filter(Holiday.date.between(date(year, 1, 1), date(year, 12, 31)))
    return query.order_by(Holiday.date).all()


@router.get("/check/{day}", response_model=HolidayCheck)
def check_holiday(day: date, db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    holidays = db.query(Holiday).filter(Holiday.date == day).all()
    reason = calendar.holiday_reason(day, holidays)
    return HolidayCheck(date=day, is_holiday=reason is not None, reason=reason)


@router.post("", response_model=HolidayResponse, status_code=status.HTTP_201_CREATED)
def create_holiday(data: HolidayCreate, db: Session = Depends(get_db), _: User = Depends(require_admin())):
    if db.query(Holiday).filter(Holiday.date == data.date).first():
        raise ConflictError(f"A holiday already exists on {data.date.isoformat()}")
    holiday = Holiday(**data.model_dump())
    db.add(holiday)
    commit_or_rollback(db)
    db.refresh(holiday)
    return holiday


@router.put("/{holiday_id}", response_model=HolidayResponse)
def update_holiday(
    holiday_id: int,
    data: HolidayUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin())
):
    holiday = _get_holiday(db, holiday_id)
    changes = data.model_dump(exclude_unset=True)
    if "date" in changes and changes["date"] != holiday.date:
        if db.query(Holiday).filter(Holiday.date == changes["date"]).first():
            raise ConflictError(f"A holiday already exists on {changes['date'].isoformat()}")
    for field, value in changes.items():
        setattr(holiday, field, value)
    commit_or_rollback(db)
    db.refresh(holiday)
    return holiday


@router.delete("/{holiday_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_holiday(holiday_id: int, db: Session = Depends(get_db), _: User = Depends(require_admin())):
    db.delete(_get_holiday(db, holiday_id))
    commit_or_rollback(db)
