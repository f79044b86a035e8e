"""Post schemas."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class PostCreate(BaseModel):
    """Schema for creating a post. The author always comes from the token."""
    content: str = Field(..., min_length=1)


class PostUpdate(BaseModel):
    """Schema for updating a post. Omitted fields keep their value."""
    content: Optional[str] = Field(default=None, min_length=1)

    @field_validator("content")
    @classmethod
    def content_not_null(cls, value: Optional[str]) -> str:
        if value is None:
            raise ValueError("content may be omitted but not null")
        return value


class PostRead(BaseModel):
    """Public view of a post; the author reference is never part of it."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    content: str
    timestamp: datetime
