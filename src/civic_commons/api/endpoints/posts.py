"""Post and vote endpoints for the Civic Commons API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query, status

from civic_commons.api.dependencies import CurrentUserDep, StorageDep
from civic_commons.core.errors import InvalidArgumentError, NotFoundError
from civic_commons.models import Post, PostVote
from civic_commons.schemas.post import PostCreate, PostResponse
from civic_commons.schemas.vote import VoteAck, VoteCreate, VoteResponse
from civic_commons.services.votes import VoteLedger
from civic_commons.storage import Storage
from civic_commons.storage.base import DEFAULT_SHORT_LIST_LIMIT

router = APIRouter(prefix="/posts", tags=["posts"])
search_router = APIRouter(prefix="/search", tags=["posts"])


def _get_post_or_404(storage: Storage, post_id: int) -> Post:
    post = storage.get_post(post_id)
    if post is None:
        raise NotFoundError("Post", post_id)
    return post


# Declared before "/{post_id}" so "search" is not parsed as an id.
@search_router.get("/posts", response_model=list[PostResponse])
@router.get("/search", response_model=list[PostResponse])
async def search_posts(
    storage: StorageDep,
    q: str | None = None,
    limit: Annotated[int, Query(ge=1, le=100)] = DEFAULT_SHORT_LIST_LIMIT,
) -> list[Post]:
    """Search posts by a case-insensitive title substring."""
    if not q or not q.strip():
        raise InvalidArgumentError("Search query required")
    return storage.search_posts(q.strip(), limit)


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: int, storage: StorageDep) -> Post:
    """Get a specific post by ID."""
    return _get_post_or_404(storage, post_id)


@router.get("/{post_id}/replies", response_model=list[PostResponse])
async def list_replies(post_id: int, storage: StorageDep) -> list[Post]:
    """List replies to a post, oldest first."""
    _get_post_or_404(storage, post_id)
    return storage.list_post_replies(post_id)


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    current_user: CurrentUserDep,
    storage: StorageDep,
) -> Post:
    """Create a new post or reply authored by the caller."""
    if storage.get_forum(post_data.forum_id) is None:
        raise NotFoundError("Forum", post_data.forum_id)

    if post_data.parent_id is not None:
        parent = _get_post_or_404(storage, post_data.parent_id)
        if parent.forum_id != post_data.forum_id:
            raise InvalidArgumentError("Reply must be posted in the parent's forum")

    with storage.transaction():
        post = storage.create_post(
            Post(
                title=post_data.title,
                content=post_data.content,
                author_id=current_user.id,
                forum_id=post_data.forum_id,
                parent_id=post_data.parent_id,
            )
        )
    return post


@router.post("/{post_id}/vote", response_model=VoteAck)
async def vote_on_post(
    post_id: int,
    vote_data: VoteCreate,
    current_user: CurrentUserDep,
    storage: StorageDep,
) -> VoteAck:
    """Cast or switch the caller's vote on a post."""
    post = VoteLedger(storage).record_vote(post_id, current_user.id, vote_data.vote_type)
    return VoteAck(
        post_id=post.id,
        vote_type=vote_data.vote_type,
        upvotes=post.upvotes,
        downvotes=post.downvotes,
    )


@router.get("/{post_id}/my-vote", response_model=VoteResponse | None)
async def get_my_vote(
    post_id: int,
    current_user: CurrentUserDep,
    storage: StorageDep,
) -> PostVote | None:
    """Return the caller's current vote on a post, or null."""
    _get_post_or_404(storage, post_id)
    return VoteLedger(storage).get_user_vote(post_id, current_user.id)
