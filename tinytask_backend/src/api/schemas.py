from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import Task
from .service import MIN_TITLE_LENGTH


# PUBLIC_INTERFACE
class TaskCreateRequest(BaseModel):
    """
    Schema for creating a new Todo item.

    Only the title is accepted; id and done are always decided by the server.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Learn the domain",
            }
        }
    )

    title: Optional[str] = Field(
        default=None,
        description=f"Short title for the todo item, at least {MIN_TITLE_LENGTH} non-blank characters",
        validate_default=True,
    )

    @field_validator("title", mode="before")
    @classmethod
    def coerce_title(cls, v: object) -> object:
        """
        Accept JSON numbers as their text form ({"title": 12345} -> "12345").
        Booleans are not coerced.
        """
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: Optional[str]) -> Optional[str]:
        """
        Reject missing, blank and too-short titles. The value itself is kept
        untrimmed.
        """
        if v is None or not v.strip():
            raise ValueError("Title is required")
        if len(v.strip()) < MIN_TITLE_LENGTH:
            raise ValueError(f"Title must be at least {MIN_TITLE_LENGTH} characters")
        return v

    def to_task(self) -> Task:
        """Build an unsaved Task from the request."""
        return Task(title=self.title)


# PUBLIC_INTERFACE
class TaskOut(BaseModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Learn the domain",
                "done": False,
            }
        },
    )

    id: int = Field(..., description="Unique identifier of the todo item")
    title: str = Field(..., description="Short title for the todo item")
    done: bool = Field(..., description="Completion status flag")


# PUBLIC_INTERFACE
class ErrorOut(BaseModel):
    """
    Body of every error response.
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"error": "Todo not found with id: 1"}}
    )

    error: str = Field(..., description="Human readable error message")
