"""
Note schemas.

These schemas define the API contracts for note CRUD operations and the
note list query.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _not_blank(value: Optional[str], field: str) -> Optional[str]:
    if value is not None and len(value.strip()) == 0:
        raise ValueError(f"{field} cannot be empty")
    return value


class NoteOrderField(str, Enum):
    """Columns a note list can be ordered by."""

    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"


class NoteCreate(BaseModel):
    """Note creation request schema."""

    title: str = Field(min_length=1, max_length=200, description="Note title")
    subject: str = Field(min_length=1, max_length=100, description="Subject, e.g. Mathematics")
    content: str = Field(min_length=1, description="Note content")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        return _not_blank(v, "Title")

    @field_validator("subject")
    @classmethod
    def validate_subject(cls, v):
        return _not_blank(v, "Subject").strip()

    @field_validator("content")
    @classmethod
    def validate_content(cls, v):
        return _not_blank(v, "Content")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Calc Notes",
                "subject": "Math",
                "content": "Derivative of x^2 is 2x.",
            }
        }
    )


class NoteUpdate(BaseModel):
    """Note update request schema. Ownership is not part of the payload."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=200, description="Note title")
    subject: Optional[str] = Field(default=None, min_length=1, max_length=100, description="Subject")
    content: Optional[str] = Field(default=None, min_length=1, description="Note content")

    model_config = ConfigDict(extra="forbid")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        return _not_blank(v, "Title")

    @field_validator("subject")
    @classmethod
    def validate_subject(cls, v):
        v = _not_blank(v, "Subject")
        return v.strip() if v is not None else v

    @field_validator("content")
    @classmethod
    def validate_content(cls, v):
        return _not_blank(v, "Content")

    def changes(self) -> dict:
        """Fields the caller actually supplied."""
        return self.model_dump(exclude_none=True)


class NoteResponse(BaseModel):
    """Note response schema, with the owner's username joined in."""

    id: uuid.UUID = Field(description="Note unique identifier")
    title: str = Field(description="Note title")
    subject: str = Field(description="Note subject")
    content: str = Field(description="Note content")
    user_id: uuid.UUID = Field(description="Owner ID")
    owner_username: Optional[str] = Field(default=None, description="Owner username")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "title": "Calc Notes",
                "subject": "Math",
                "content": "Derivative of x^2 is 2x.",
                "user_id": "456e7890-e89b-12d3-a456-426614174000",
                "owner_username": "Alice",
                "created_at": "2026-01-10T10:30:00Z",
                "updated_at": "2026-01-10T10:30:00Z",
            }
        },
    )

    @property
    def was_edited(self) -> bool:
        return self.updated_at != self.created_at


class NoteQuery(BaseModel):
    """Filters and ordering for note lists."""

    owner_id: Optional[uuid.UUID] = Field(default=None, description="Only notes of this owner")
    query: Optional[str] = Field(default=None, description="Substring matched on title, subject, content")
    subject: Optional[str] = Field(default=None, description="Exact subject match")
    order_by: NoteOrderField = Field(default=NoteOrderField.CREATED_AT, description="Sort column")
    ascending: bool = Field(default=False, description="Sort direction")
