from typing import Any, ClassVar, Dict, Generic, Optional, Tuple, TypeVar
from pydantic import BaseModel, Field, model_validator
from datetime import datetime, timezone

T = TypeVar("T")

class ApiResponse(BaseModel, Generic[T]):
    success: bool
    data: Optional[T] = None
    metadata: Dict[str, Any] = {}
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def ok(cls, data: T, metadata: Optional[Dict[str, Any]] = None) -> "ApiResponse[T]":
        return cls(success=True, data=data, metadata=metadata or {})

class PartialUpdate(BaseModel):
    """
    Body of a PUT that only touches the fields it sends.
    Fields named in ``non_nullable`` back NOT NULL columns: they may be
    omitted, but an explicit null is rejected.
    """
    non_nullable: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def _reject_explicit_nulls(self):
        nulls = [
            name for name in self.non_nullable
            if name in self.model_fields_set and getattr(self, name) is None
        ]
        if nulls:
            raise ValueError(f"{', '.join(nulls)} may not be null")
        return self
