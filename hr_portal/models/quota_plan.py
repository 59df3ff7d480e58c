from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from hr_portal.database import Base

class QuotaPlan(Base):
    __tablename__ = "quota_plans"
    __table_args__ = (UniqueConstraint("plan_name", "year", name="uq_quota_plan_name_year"),)

    id = Column(Integer, primary_key=True, index=True)
    plan_name = Column(String, nullable=False)
    year = Column(Integer, index=True, nullable=False)
    quota_vacation_day = Column(Float, default=0.0, nullable=False)
    quota_medical_expense_baht = Column(Float, default=0.0, nullable=False)
    created_by_user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Edits to a plan apply to every record linked here
    annual_records = relationship("AnnualRecord", back_populates="quota_plan")
