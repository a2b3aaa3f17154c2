"""
Content Endpoints.

Browsing, submission and moderation of quotes and proverbs. Listings are
public; what an anonymous or regular caller can see is decided by the query
composer, not here.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query, status

from quotely.core.models.domain.enums import ContentKind, ContentSort
from quotely.core.models.domain.models import ContentQuery
from quotely.core.models.io import (
    CategoriesResponse,
    ContentCreate,
    ContentItemRead,
    ContentItemResponse,
    ContentListResponse,
    ErrorResponse,
    Pagination,
    StatusUpdate,
)
from quotely.server.services.deps import (
    CurrentUserDep,
    ModerationServiceDep,
    OptionalUserDep,
    QueryComposerDep,
)

router = APIRouter()


@router.get(
    "",
    response_model=ContentListResponse,
    summary="List Content",
    description="List content items, newest first unless another sort key is given.",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid paging or filter value"},
        403: {"model": ErrorResponse, "description": "Status filter requires an administrator"},
    },
)
async def list_content(
    composer: QueryComposerDep,
    viewer: OptionalUserDep,
    page: int = Query(default=1, description="1-based page number"),
    limit: Optional[int] = Query(default=None, description="Page size, capped by the server"),
    category: Optional[str] = Query(default=None, description="Exact category"),
    origin: Optional[str] = Query(default=None, description="Substring of the proverb origin or quote author"),
    search: Optional[str] = Query(default=None, description="Substring of body, author or origin"),
    status_filter: Optional[str] = Query(default=None, alias="status", description="approved, pending, rejected or all"),
    kind: Optional[ContentKind] = Query(default=None, description="quote or proverb"),
    sort: ContentSort = Query(default=ContentSort.created_at, description="created_at, author, category or popular"),
) -> ContentListResponse:
    query = ContentQuery(
        page=page,
        page_size=limit,
        category=category,
        origin=origin,
        search=search,
        status=status_filter,
        kind=kind,
        sort=sort,
    )
    result = await composer.list(query, viewer)
    return ContentListResponse(items=result.items, pagination=Pagination.from_page(result))


@router.get(
    "/random",
    response_model=ContentItemResponse,
    summary="Random Content",
    responses={404: {"model": ErrorResponse, "description": "No approved content"}},
)
async def random_content(
    composer: QueryComposerDep,
    viewer: OptionalUserDep,
    kind: Optional[ContentKind] = Query(default=None),
) -> ContentItemResponse:
    return ContentItemResponse(item=await composer.random(viewer, kind))


@router.get(
    "/daily",
    response_model=ContentItemResponse,
    summary="Daily Content",
    description="The same approved item for every caller during one UTC day.",
    responses={404: {"model": ErrorResponse, "description": "No approved content"}},
)
async def daily_content(
    composer: QueryComposerDep,
    viewer: OptionalUserDep,
    kind: Optional[ContentKind] = Query(default=None),
) -> ContentItemResponse:
    return ContentItemResponse(item=await composer.daily(viewer, kind))


@router.get(
    "/categories",
    response_model=CategoriesResponse,
    summary="List Categories",
)
async def list_categories(
    composer: QueryComposerDep,
    kind: Optional[ContentKind] = Query(default=None),
) -> CategoriesResponse:
    return CategoriesResponse(categories=await composer.categories(kind))


@router.get(
    "/{item_id}",
    response_model=ContentItemResponse,
    summary="Get Content Item",
    responses={404: {"model": ErrorResponse, "description": "Item missing or not visible"}},
)
async def get_content(item_id: int, composer: QueryComposerDep, viewer: OptionalUserDep) -> ContentItemResponse:
    return ContentItemResponse(item=await composer.get(item_id, viewer))


@router.post(
    "",
    response_model=ContentItemResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit Content",
    description="Submit a quote or proverb. It stays pending until an administrator reviews it.",
    responses={
        400: {"model": ErrorResponse, "description": "Blank body or missing author"},
        401: {"model": ErrorResponse, "description": "Missing or invalid token"},
    },
)
async def submit_content(
    payload: ContentCreate,
    user: CurrentUserDep,
    moderation: ModerationServiceDep,
) -> ContentItemResponse:
    item = await moderation.submit(
        body=payload.body,
        submitter_id=user.id,
        kind=payload.kind,
        secondary=payload.secondary,
        category=payload.category,
        origin=payload.origin,
        tags=payload.tags,
    )
    return ContentItemResponse(item=ContentItemRead.from_entity(item), message="Submitted for review")


@router.put(
    "/{item_id}/status",
    response_model=ContentItemResponse,
    summary="Moderate Content",
    description="Approve or reject a pending item. Decisions are final.",
    responses={
        400: {"model": ErrorResponse, "description": "Not a decision, or item already decided"},
        403: {"model": ErrorResponse, "description": "Caller is not an administrator"},
        404: {"model": ErrorResponse, "description": "Item not found"},
    },
)
async def moderate_content(
    item_id: int,
    payload: StatusUpdate,
    user: CurrentUserDep,
    moderation: ModerationServiceDep,
) -> ContentItemResponse:
    item = await moderation.set_status(item_id, payload.status, user.id)
    return ContentItemResponse(item=ContentItemRead.from_entity(item))
