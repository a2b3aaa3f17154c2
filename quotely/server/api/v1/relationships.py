"""
Relationship Endpoints.

Favorites and likes share one toggle and one listing, selected by the
``kind`` path segment.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query

from quotely.core.models.domain.enums import RelationshipKind
from quotely.core.models.io import ErrorResponse, Pagination, RelationshipListResponse, ToggleRequest, ToggleResponse
from quotely.server.services.deps import CurrentUserDep, ToggleEngineDep

router = APIRouter()


@router.post(
    "/{kind}/toggle",
    response_model=ToggleResponse,
    summary="Toggle Relationship",
    description="Add the relationship if absent, remove it if present.",
    responses={
        401: {"model": ErrorResponse, "description": "Missing or invalid token"},
        404: {"model": ErrorResponse, "description": "Item missing or not approved"},
    },
)
async def toggle_relationship(
    kind: RelationshipKind,
    payload: ToggleRequest,
    user: CurrentUserDep,
    engine: ToggleEngineDep,
) -> ToggleResponse:
    result = await engine.toggle(user.id, payload.item_id, kind)
    return ToggleResponse(action=result.action)


@router.get(
    "/{kind}",
    response_model=RelationshipListResponse,
    summary="List Relationships",
    description="List the caller's approved items of this kind, most recent first.",
    responses={401: {"model": ErrorResponse, "description": "Missing or invalid token"}},
)
async def list_relationships(
    kind: RelationshipKind,
    user: CurrentUserDep,
    engine: ToggleEngineDep,
    page: int = Query(default=1),
    limit: Optional[int] = Query(default=None),
) -> RelationshipListResponse:
    result = await engine.list(user.id, kind, page, limit)
    return RelationshipListResponse(items=result.items, pagination=Pagination.from_page(result))
