from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import ClassVar, List, Optional, Tuple
from hr_portal.core.schemas import PartialUpdate


class TaskCategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    parent_id: Optional[int] = None
    description: Optional[str] = None


class TaskCategoryUpdate(PartialUpdate):
    # parent_id may be cleared to move the category to the root
    non_nullable: ClassVar[Tuple[str, ...]] = ("name",)

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    parent_id: Optional[int] = None
    description: Optional[str] = None


class TaskCategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    parent_id: Optional[int] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TaskCategoryTree(TaskCategoryResponse):
    children: List["TaskCategoryTree"] = []


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1)
    url: Optional[str] = None
    task_category_id: Optional[int] = None
    note: Optional[str] = None
    status: Optional[str] = None
    status_color: Optional[str] = None


class TaskUpdate(PartialUpdate):
    non_nullable: ClassVar[Tuple[str, ...]] = ("title",)

    title: Optional[str] = Field(None, min_length=1)
    url: Optional[str] = None
    task_category_id: Optional[int] = None
    note: Optional[str] = None
    status: Optional[str] = None
    status_color: Optional[str] = None


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: Optional[str] = None
    url: Optional[str] = None
    task_category_id: Optional[int] = None
    category_name: Optional[str] = None
    note: Optional[str] = None
    status: Optional[str] = None
    status_color: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TaskEstimateCreate(BaseModel):
    task_id: int
    estimate_day: float = Field(..., gt=0)
    note: Optional[str] = None


class TaskEstimateUpdate(PartialUpdate):
    non_nullable: ClassVar[Tuple[str, ...]] = ("estimate_day",)

    estimate_day: Optional[float] = Field(None, gt=0)
    note: Optional[str] = None


class TaskEstimateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    task_id: int
    estimate_day: float
    note: Optional[str] = None
    created_by_user_id: int
    created_at: Optional[datetime] = None


# Resolve the self-reference for Pydantic V2
TaskCategoryTree.model_rebuild()
