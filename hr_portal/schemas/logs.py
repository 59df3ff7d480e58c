from pydantic import BaseModel, ConfigDict, Field
import datetime as dt
from typing import Optional
from hr_portal.models.leave_log import LeaveType


class TaskLogCreate(BaseModel):
    task_id: int
    worked_day: float = Field(1.0, gt=0, le=1)
    worked_date: dt.date


class TaskLogUpdate(BaseModel):
    task_id: Optional[int] = None
    worked_day: Optional[float] = Field(None, gt=0, le=1)
    worked_date: Optional[dt.date] = None


class TaskLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    task_id: int
    worked_day: float
    created_by_user_id: int
    worked_date: dt.date
    is_work_on_holiday: bool
    created_at: Optional[dt.datetime] = None


class LeaveLogCreate(BaseModel):
    type: LeaveType
    date: dt.date
    worked_day: float = Field(1.0, gt=0, le=1)
    note: Optional[str] = None


class LeaveLogUpdate(BaseModel):
    type: Optional[LeaveType] = None
    date: Optional[dt.date] = None
    worked_day: Optional[float] = Field(None, gt=0, le=1)
    note: Optional[str] = None


class LeaveLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    type: str
    date: dt.date
    worked_day: float
    note: Optional[str] = None
    created_at: Optional[dt.datetime] = None


class MedicalExpenseCreate(BaseModel):
    amount: float = Field(..., gt=0)
    receipt_name: Optional[str] = None
    receipt_date: dt.date
    note: Optional[str] = None


class MedicalExpenseUpdate(BaseModel):
    amount: Optional[float] = Field(None, gt=0)
    receipt_name: Optional[str] = None
    receipt_date: Optional[dt.date] = None
    note: Optional[str] = None


class MedicalExpenseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    amount: float
    receipt_name: Optional[str] = None
    receipt_date: dt.date
    note: Optional[str] = None
    created_at: Optional[dt.datetime] = None


class DailyAllocationRequest(BaseModel):
    date: dt.date
    proposed: float = Field(..., ge=0)
    exclude_task_log_id: Optional[int] = None
    exclude_leave_log_id: Optional[int] = None
