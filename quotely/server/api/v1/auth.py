"""
Authentication Endpoints.

Registration and login exchange credentials for a bearer token. Tokens are
stateless, so logout only acknowledges; the client drops its token.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from quotely.core.models.io import AuthResponse, ErrorResponse, LoginRequest, MessageResponse, RegisterRequest, UserRead
from quotely.server.services.deps import CredentialServiceDep, CurrentUserDep

router = APIRouter()


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register",
    description="Create a user account and return its first bearer token.",
    responses={
        400: {"model": ErrorResponse, "description": "Missing or malformed field"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
    },
)
async def register(payload: RegisterRequest, service: CredentialServiceDep) -> AuthResponse:
    user, token = await service.register(payload.email, payload.password, payload.name)
    return AuthResponse(token=token, user=UserRead.from_entity(user), message="Registration successful")


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Login",
    description="Exchange an email and password for a bearer token.",
    responses={
        401: {"model": ErrorResponse, "description": "Incorrect email or password"},
        403: {"model": ErrorResponse, "description": "Account deactivated"},
    },
)
async def login(payload: LoginRequest, service: CredentialServiceDep) -> AuthResponse:
    user, token = await service.authenticate(payload.email, payload.password)
    return AuthResponse(token=token, user=UserRead.from_entity(user), message="Login successful")


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Logout",
    description="Acknowledge a logout. The client should discard its token.",
    responses={401: {"model": ErrorResponse, "description": "Missing or invalid token"}},
)
async def logout(user: CurrentUserDep) -> MessageResponse:
    return MessageResponse(message="Logout successful")
