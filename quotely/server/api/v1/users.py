"""
User Endpoints.

The caller's own profile and the administrative account status switch.
"""

from __future__ import annotations

from fastapi import APIRouter

from quotely.core.models.io import (
    AccountStatusUpdate,
    ErrorResponse,
    ProfileUpdate,
    UserProfileResponse,
    UserRead,
    UserResponse,
)
from quotely.server.services.deps import CredentialServiceDep, CurrentUserDep

router = APIRouter()


@router.get(
    "/me",
    response_model=UserProfileResponse,
    summary="Current User",
    responses={401: {"model": ErrorResponse, "description": "Missing or invalid token"}},
)
async def read_me(user: CurrentUserDep, service: CredentialServiceDep) -> UserProfileResponse:
    return UserProfileResponse(user=UserRead.from_entity(user), stats=await service.stats(user))


@router.put(
    "/me",
    response_model=UserResponse,
    summary="Update Current User",
    responses={
        400: {"model": ErrorResponse, "description": "Blank or too long name"},
        401: {"model": ErrorResponse, "description": "Missing or invalid token"},
    },
)
async def update_me(payload: ProfileUpdate, user: CurrentUserDep, service: CredentialServiceDep) -> UserResponse:
    updated = await service.update_profile(user, payload.name)
    return UserResponse(user=UserRead.from_entity(updated))


@router.put(
    "/{user_id}/status",
    response_model=UserResponse,
    summary="Set Account Status",
    description="Activate or deactivate an account. Administrators only.",
    responses={
        400: {"model": ErrorResponse, "description": "Unknown status"},
        403: {"model": ErrorResponse, "description": "Caller is not an administrator"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
async def set_account_status(
    user_id: int,
    payload: AccountStatusUpdate,
    user: CurrentUserDep,
    service: CredentialServiceDep,
) -> UserResponse:
    updated = await service.set_account_status(user_id, payload.status, user)
    return UserResponse(user=UserRead.from_entity(updated))
