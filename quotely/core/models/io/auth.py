"""
Schema models for registration, login and account API requests and responses.

These schemas are separate from the ``User`` entity so the password hash can
never leak into a response.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from quotely.core.database.entities.users import EMAIL_MAX_LENGTH, NAME_MAX_LENGTH, User


class RegisterRequest(BaseModel):
    """Schema for creating an account."""

    email: str = Field(
        max_length=EMAIL_MAX_LENGTH, description="Email address, used as the login name", examples=["ada@example.com"]
    )
    password: str = Field(description="Plain-text password")
    name: str = Field(max_length=NAME_MAX_LENGTH, description="Display name", examples=["Ada Lovelace"])

    model_config = ConfigDict(
        json_schema_extra={"example": {"email": "ada@example.com", "password": "analytical-engine", "name": "Ada"}}
    )


class LoginRequest(BaseModel):
    """Schema for exchanging credentials for a token."""

    email: str = Field(max_length=EMAIL_MAX_LENGTH)
    password: str


class UserRead(BaseModel):
    """Schema for reading an account."""

    id: int
    email: str
    name: str
    role: str
    status: str
    created_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserRead":
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            role=user.role,
            status=user.status,
            created_at=user.created_at,
        )


class AuthResponse(BaseModel):
    """Token plus the account it was issued for."""

    token: str
    user: UserRead
    message: str
