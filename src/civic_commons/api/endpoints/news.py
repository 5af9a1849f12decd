"""News endpoints for the Civic Commons API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query, status

from civic_commons.api.dependencies import CurrentUserDep, StorageDep
from civic_commons.models import NewsArticle
from civic_commons.schemas.news import NewsArticleCreate, NewsArticleResponse
from civic_commons.storage.base import DEFAULT_LIST_LIMIT, DEFAULT_SHORT_LIST_LIMIT

router = APIRouter(prefix="/news", tags=["news"])


@router.get("/", response_model=list[NewsArticleResponse])
async def list_news(
    storage: StorageDep,
    category: str | None = None,
    limit: Annotated[int | None, Query(ge=1, le=200)] = None,
) -> list[NewsArticle]:
    """List news articles, most recently published first."""
    if category:
        return storage.list_news(category, limit or DEFAULT_SHORT_LIST_LIMIT)
    return storage.list_news(None, limit or DEFAULT_LIST_LIMIT)


@router.post("/", response_model=NewsArticleResponse, status_code=status.HTTP_201_CREATED)
async def create_news_article(
    article_data: NewsArticleCreate,
    _current_user: CurrentUserDep,
    storage: StorageDep,
) -> NewsArticle:
    """Submit a news article; a URL that is already stored is a conflict."""
    with storage.transaction():
        article = storage.create_news_article(NewsArticle(**article_data.model_dump()))
    return article
