"""API request and response schemas."""

from .auth import AuthResponse, LoginRequest, RegisterRequest, UserRead
from .common import ErrorResponse, MessageResponse, Pagination
from .content import (
    CategoriesResponse,
    ContentCreate,
    ContentItemRead,
    ContentItemResponse,
    ContentListResponse,
    StatusUpdate,
)
from .relationships import RelatedContentRead, RelationshipListResponse, ToggleRequest, ToggleResponse
from .users import AccountStatusUpdate, ProfileUpdate, UserProfileResponse, UserResponse, UserStatsRead

__all__ = [
    "AccountStatusUpdate",
    "AuthResponse",
    "CategoriesResponse",
    "ContentCreate",
    "ContentItemRead",
    "ContentItemResponse",
    "ContentListResponse",
    "ErrorResponse",
    "LoginRequest",
    "MessageResponse",
    "Pagination",
    "ProfileUpdate",
    "RegisterRequest",
    "RelatedContentRead",
    "RelationshipListResponse",
    "StatusUpdate",
    "ToggleRequest",
    "ToggleResponse",
    "UserProfileResponse",
    "UserRead",
    "UserResponse",
    "UserStatsRead",
]
