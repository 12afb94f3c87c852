"""
Todo Pydantic schemas.

``TodoCreate`` and ``TodoUpdate`` are the validation layer: every request
body passes through one of them before it reaches the repository.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, StrictBool, StringConstraints, field_validator

from app.utils.time import as_utc

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=TITLE_MAX_LENGTH)]
Description = Annotated[str, StringConstraints(strip_whitespace=True, max_length=DESCRIPTION_MAX_LENGTH)]


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TodoCreate(BaseModel):
    """Schema for creating a new todo. Unknown keys are ignored."""

    title: Title
    description: Description = ""
    priority: Priority = Priority.MEDIUM


class TodoUpdate(BaseModel):
    """
    Schema for a partial update. All fields optional.

    A field that is present must satisfy the same rule as on create;
    sending ``null`` for a field is rejected rather than treated as absent.
    """

    title: Optional[Title] = None
    description: Optional[Description] = None
    completed: Optional[StrictBool] = None
    priority: Optional[Priority] = None

    @field_validator("title", "description", "completed", "priority", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("must not be null")
        return value

    def present_fields(self) -> Dict[str, Any]:
        """Fields the client actually sent, limited to the updatable set."""
        return self.model_dump(exclude_unset=True)


class TodoRead(BaseModel):
    """Schema for reading todo data (API response)."""

    id: int
    title: str
    description: str = ""
    completed: bool
    priority: Priority
    created_at: datetime
    updated_at: datetime

    # This tells Pydantic to work with SQLAlchemy models
    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at", "updated_at")
    @classmethod
    def ensure_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    @field_validator("description", mode="before")
    @classmethod
    def empty_description(cls, value: Optional[str]) -> str:
        return value or ""
