"""Forum endpoints for the Civic Commons API."""

from __future__ import annotations

from typing import Annotated, Literal

from fastapi import APIRouter, Query, status

from civic_commons.api.dependencies import CurrentUserDep, StorageDep
from civic_commons.core.errors import NotFoundError
from civic_commons.models import Forum, Post
from civic_commons.schemas.forum import ForumCreate, ForumResponse
from civic_commons.schemas.post import PostResponse
from civic_commons.storage.base import DEFAULT_LIST_LIMIT

router = APIRouter(prefix="/forums", tags=["forums"])


@router.get("/", response_model=list[ForumResponse])
async def list_forums(
    storage: StorageDep,
    forum_type: Annotated[Literal["location", "topic"] | None, Query(alias="type")] = None,
) -> list[Forum]:
    """List forums, optionally restricted to one forum type."""
    return storage.list_forums(forum_type)


@router.get("/{forum_id}", response_model=ForumResponse)
async def get_forum(forum_id: int, storage: StorageDep) -> Forum:
    """Get a specific forum by ID."""
    forum = storage.get_forum(forum_id)
    if forum is None:
        raise NotFoundError("Forum", forum_id)
    return forum


@router.post("/", response_model=ForumResponse, status_code=status.HTTP_201_CREATED)
async def create_forum(
    forum_data: ForumCreate,
    _current_user: CurrentUserDep,
    storage: StorageDep,
) -> Forum:
    """Create a new forum."""
    if forum_data.parent_id is not None and storage.get_forum(forum_data.parent_id) is None:
        raise NotFoundError("Forum", forum_data.parent_id)

    with storage.transaction():
        forum = storage.create_forum(Forum(**forum_data.model_dump()))
    return forum


@router.get("/{forum_id}/posts", response_model=list[PostResponse])
async def list_forum_posts(
    forum_id: int,
    storage: StorageDep,
    limit: Annotated[int, Query(ge=1, le=200)] = DEFAULT_LIST_LIMIT,
) -> list[Post]:
    """List top-level posts in a forum, newest first."""
    if storage.get_forum(forum_id) is None:
        raise NotFoundError("Forum", forum_id)
    return storage.list_posts_by_forum(forum_id, limit)
