from sqlalchemy import Column, Integer, String, Float, Date, Text, DateTime, ForeignKey
from sqlalchemy.sql import func
from hr_portal.database import Base
import enum

class LeaveType(str, enum.Enum):
    VACATION = "vacation"
    SICK = "sick"
    PERSONAL = "personal"
    OTHER = "other"

class LeaveLog(Base):
    __tablename__ = "leave_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    type = Column(String, index=True, nullable=False)  # LeaveType value, stored as string for SQLite
    date = Column(Date, index=True, nullable=False)
    worked_day = Column(Float, default=1.0, nullable=False)
    note = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
