from pydantic import BaseModel, ConfigDict, Field
import datetime as dt
from typing import ClassVar, Optional, Tuple
from hr_portal.core.schemas import PartialUpdate


class HolidayCreate(BaseModel):
    date: dt.date
    name: str = Field(..., min_length=1, max_length=255)
    note: Optional[str] = None


class HolidayUpdate(PartialUpdate):
    non_nullable: ClassVar[Tuple[str, ...]] = ("date", "name")

    date: Optional[dt.date] = None
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    note: Optional[str] = None


class HolidayResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    date: dt.date
    name: str
    note: Optional[str] = None
    created_at: Optional[dt.datetime] = None


class HolidayCheck(BaseModel):
    date: dt.date
    is_holiday: bool
    reason: Optional[str] = None
