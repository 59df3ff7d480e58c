from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from hr_portal.database import Base

class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    url = Column(Text, nullable=True)  # link to the external tracker, if any
    task_category_id = Column(Integer, ForeignKey("task_categories.id"), index=True, nullable=True)
    title = Column(Text, nullable=True)
    note = Column(Text, nullable=True)
    status = Column(Text, nullable=True)
    status_color = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    category = relationship("TaskCategory", back_populates="tasks")
    estimates = relationship("TaskEstimate", back_populates="task", cascade="all, delete-orphan")
    logs = relationship("TaskLog", back_populates="task")

    @property
    def category_name(self):
        return self.category.name if self.category else None
