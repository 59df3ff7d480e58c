from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from hr_portal.database import get_db
from hr_portal.models.user import User
from hr_portal.routers.auth_deps import get_current_user, get_today
from hr_portal.schemas.logs import MedicalExpenseCreate, MedicalExpenseResponse, MedicalExpenseUpdate
from hr_portal.services import log_service

router = APIRouter(prefix="/medical-expenses", tags=["medical-expenses"])


@router.get("", response_model=List[MedicalExpenseResponse])
def list_medical_expenses(
    year: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return log_service.list_medical_expenses(db, current_user.id, year)


@router.post("", response_model=MedicalExpenseResponse, status_code=status.HTTP_201_CREATED)
def create_medical_expense(
    data: MedicalExpenseCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    today: date = Depends(get_today)
):
    return log_service.create_medical_expense(db, current_user, data, today=today)


@router.put("/{expense_id}", response_model=MedicalExpenseResponse)
def update_medical_expense(
    expense_id: int,
    data: MedicalExpenseUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    today: date = Depends(get_today)
):
    return log_service.update_medical_expense(db, current_user, expense_id, data, today=today)


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_medical_expense(expense_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    log_service.delete_medical_expense(db, current_user, expense_id)
