"""
Authentication schemas.

These schemas define the API contracts for registration, login and the
current user's profile.
"""

import re
import uuid
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

LOGIN_ID_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


def _validate_login_id(v: str) -> str:
    v = v.strip()
    if not LOGIN_ID_PATTERN.match(v):
        raise ValueError("User ID can only contain letters, numbers, dots, hyphens, and underscores")
    return v


def _validate_username(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Username cannot be empty")
    return v


class LoginRequest(BaseModel):
    """User login request schema."""

    login_id: str = Field(min_length=1, max_length=50, description="User ID chosen at registration")
    password: str = Field(min_length=1, max_length=128, description="User password")

    model_config = ConfigDict(
        json_schema_extra={"example": {"login_id": "alice1", "password": "p@ss"}}
    )


class RegisterRequest(BaseModel):
    """User registration request schema."""

    username: str = Field(min_length=1, max_length=50, description="Display name")
    login_id: str = Field(min_length=3, max_length=50, description="Unique user ID used to log in")
    password: str = Field(min_length=1, max_length=128, description="User password")
    date_of_birth: date = Field(description="Date of birth (YYYY-MM-DD)")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v):
        return _validate_username(v)

    @field_validator("login_id")
    @classmethod
    def validate_login_id(cls, v):
        return _validate_login_id(v)

    @field_validator("date_of_birth")
    @classmethod
    def validate_date_of_birth(cls, v):
        if v > date.today():
            raise ValueError("Date of birth cannot be in the future")
        return v

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "Alice",
                "login_id": "alice1",
                "password": "p@ss",
                "date_of_birth": "2000-01-01",
            }
        }
    )


class UserResponse(BaseModel):
    """User information response schema."""

    id: uuid.UUID = Field(description="User unique identifier")
    username: str = Field(description="Display name")
    login_id: str = Field(description="Login handle")
    date_of_birth: date = Field(description="Date of birth")
    created_at: datetime = Field(description="Account creation timestamp")
    updated_at: Optional[datetime] = Field(default=None, description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
    """Session issued on login or registration."""

    access_token: str = Field(description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(description="Token expiration time in seconds")
    user: UserResponse = Field(description="User information")


class UserUpdateRequest(BaseModel):
    """User profile update request schema."""

    username: Optional[str] = Field(default=None, min_length=1, max_length=50, description="Display name")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v):
        if v is None:
            return v
        return _validate_username(v)
