from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from hr_portal.database import Base

class TaskCategory(Base):
    """Node of the category tree; root categories have no parent."""
    __tablename__ = "task_categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    parent_id = Column(Integer, ForeignKey("task_categories.id"), index=True, nullable=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    parent = relationship("TaskCategory", remote_side=[id], back_populates="children")
    children = relationship("TaskCategory", back_populates="parent", order_by="TaskCategory.name")
    tasks = relationship("Task", back_populates="category")
