"""Schema models for account profile and administration endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from quotely.core.database.entities.users import NAME_MAX_LENGTH

from .auth import UserRead


class UserStatsRead(BaseModel):
    """Activity counters shown on the profile."""

    favorites: int = 0
    likes: int = 0
    submissions: int = 0


class UserProfileResponse(BaseModel):
    user: UserRead
    stats: UserStatsRead


class ProfileUpdate(BaseModel):
    """Schema for changing the caller's own profile."""

    name: str = Field(max_length=NAME_MAX_LENGTH, description="Display name", examples=["Ada Lovelace"])


class AccountStatusUpdate(BaseModel):
    """Schema for activating or deactivating an account."""

    status: str = Field(description="Either 'active' or 'inactive'", examples=["inactive"])


class UserResponse(BaseModel):
    user: UserRead
