from sqlalchemy import Column, Integer, Float, Date, Boolean, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from hr_portal.database import Base

class TaskLog(Base):
    __tablename__ = "task_logs"

    id = Column(Integer, primary_key=True, index=True)
    task_id = Column(Integer, ForeignKey("tasks.id"), index=True, nullable=False)
    worked_day = Column(Float, nullable=False)
    created_by_user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    worked_date = Column(Date, index=True, nullable=False)
    is_work_on_holiday = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    task = relationship("Task", back_populates="logs")

    @property
    def date(self):
        return self.worked_date
