from pydantic import BaseModel, ConfigDict, Field
from datetime import date, datetime
from typing import ClassVar, Optional, Tuple
from hr_portal.core.schemas import PartialUpdate


class QuotaCheckResult(BaseModel):
    """Outcome of a pro-rated quota check, in baht or days."""
    is_valid: bool
    remaining_before: float
    remaining_after: float
    message: str


class AllocationCheck(BaseModel):
    """Outcome of a daily allocation check for one user and date."""
    date: date
    allocated: float
    proposed: float
    remaining: float
    is_valid: bool


class QuotaPlanBase(BaseModel):
    plan_name: str = Field(..., min_length=1, max_length=100)
    year: int = Field(..., ge=1900, le=9999)
    quota_vacation_day: float = Field(0.0, ge=0)
    quota_medical_expense_baht: float = Field(0.0, ge=0)


class QuotaPlanCreate(QuotaPlanBase):
    pass


class QuotaPlanUpdate(PartialUpdate):
    non_nullable: ClassVar[Tuple[str, ...]] = ("plan_name", "year", "quota_vacation_day", "quota_medical_expense_baht")

    plan_name: Optional[str] = Field(None, min_length=1, max_length=100)
    year: Optional[int] = Field(None, ge=1900, le=9999)
    quota_vacation_day: Optional[float] = Field(None, ge=0)
    quota_medical_expense_baht: Optional[float] = Field(None, ge=0)


class QuotaPlanResponse(QuotaPlanBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_by_user_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AnnualRecordUpdate(PartialUpdate):
    # quota_plan_id may be cleared to unlink the plan
    non_nullable: ClassVar[Tuple[str, ...]] = (
        "rollover_vacation_day", "used_vacation_day", "used_sick_leave_day",
        "worked_on_holiday_day", "worked_day", "used_medical_expense_baht"
    )

    quota_plan_id: Optional[int] = None
    rollover_vacation_day: Optional[float] = Field(None, ge=0)
    used_vacation_day: Optional[float] = Field(None, ge=0)
    used_sick_leave_day: Optional[float] = Field(None, ge=0)
    worked_on_holiday_day: Optional[float] = Field(None, ge=0)
    worked_day: Optional[float] = Field(None, ge=0)
    used_medical_expense_baht: Optional[float] = Field(None, ge=0)


class AnnualRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    year: int
    quota_plan_id: Optional[int] = None
    rollover_vacation_day: float
    used_vacation_day: float
    used_sick_leave_day: float
    worked_on_holiday_day: float
    worked_day: float
    used_medical_expense_baht: float
    # Joined from the quota plan
    quota_vacation_day: float = 0.0
    quota_medical_expense_baht: float = 0.0


class QuotaSummary(BaseModel):
    user_id: int
    year: int
    as_of: date
    days_passed: int
    days_in_year: int
    quota_vacation_day: float
    pro_rated_vacation_day: float
    remaining_vacation_day: float
    quota_medical_expense_baht: float
    pro_rated_medical_expense_baht: float
    remaining_medical_expense_baht: float


class RolloverResult(BaseModel):
    from_year: int
    to_year: int
    created: int


class MedicalExpenseCheckRequest(BaseModel):
    quota_medical_expense_baht: float
    used_medical_expense_baht: float
    new_expense_baht: float
    as_of: Optional[date] = None


class LeaveQuotaCheckRequest(BaseModel):
    quota_vacation_day: float
    rollover_vacation_day: float = 0.0
    worked_on_holiday_day: float = 0.0
    used_vacation_day: float = 0.0
    new_leave_days: float
    as_of: Optional[date] = None


# Resolve forward references for Pydantic V2
AllocationCheck.model_rebuild()
QuotaSummary.model_rebuild()
