from sqlalchemy import Column, Integer, Float, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from hr_portal.database import Base

class AnnualRecord(Base):
    __tablename__ = "annual_records"
    __table_args__ = (UniqueConstraint("user_id", "year", name="uq_annual_record_user_year"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    year = Column(Integer, index=True, nullable=False)
    quota_plan_id = Column(Integer, ForeignKey("quota_plans.id", ondelete="SET NULL"), nullable=True)

    rollover_vacation_day = Column(Float, default=0.0, nullable=False)
    used_vacation_day = Column(Float, default=0.0, nullable=False)
    used_sick_leave_day = Column(Float, default=0.0, nullable=False)
    worked_on_holiday_day = Column(Float, default=0.0, nullable=False)
    worked_day = Column(Float, default=0.0, nullable=False)
    used_medical_expense_baht = Column(Float, default=0.0, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("User", back_populates="annual_records")
    quota_plan = relationship("QuotaPlan", back_populates="annual_records")

    @property
    def quota_vacation_day(self) -> float:
        return self.quota_plan.quota_vacation_day if self.quota_plan else 0.0

    @property
    def quota_medical_expense_baht(self) -> float:
        return self.quota_plan.quota_medical_expense_baht if self.quota_plan else 0.0
