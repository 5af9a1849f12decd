"""News ingestion from a NewsAPI-compatible headline feed.

This module provides ``NewsService``, which fetches top headlines, maps them
onto ``NewsArticle`` rows and stores them with URL-based deduplication, and
``NewsIngestionWorker``, which runs the service on a fixed interval in the
background of the API process.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Mapping
from contextlib import AbstractContextManager
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

import httpx
from sqlalchemy.exc import SQLAlchemyError

from civic_commons.core.errors import ConflictError
from civic_commons.core.settings import settings
from civic_commons.db.time import utcnow
from civic_commons.models import NewsArticle
from civic_commons.storage import Storage

logger = logging.getLogger(__name__)

# (category, page size) pairs requested on every run.
HEADLINE_CATEGORIES: tuple[tuple[str, int], ...] = (("general", 10), ("politics", 5))

StorageScope = Callable[[], AbstractContextManager[Storage]]


class NewsFetchError(RuntimeError):
    """Raised when the headline feed answers with a non-success status."""


@dataclass
class IngestionResult:
    """Counts describing one ingestion run."""

    fetched: int = 0
    stored: int = 0
    duplicates: int = 0
    skipped: int = 0


def _sample_articles() -> list[NewsArticle]:
    now = utcnow()
    return [
        NewsArticle(
            title="City Council Approves New Community Center",
            summary=(
                "The proposed community center will include recreational facilities, "
                "meeting spaces, and educational programs for all ages."
            ),
            content=(
                "After months of planning and community input, the city council has "
                "unanimously approved the construction of a new community center. The "
                "facility will serve as a hub for local activities and civic engagement."
            ),
            author="Local Reporter",
            source="City News",
            url="https://example.com/community-center",
            category="local",
            location="Local Community",
            published_at=now - timedelta(hours=2),
        ),
        NewsArticle(
            title="Public Hearing Scheduled for Infrastructure Updates",
            summary=(
                "Residents invited to share feedback on proposed road improvements and "
                "public transportation enhancements."
            ),
            content=(
                "The city will hold a public hearing next week to discuss infrastructure "
                "improvements including road repairs, bike lanes, and enhanced public "
                "transportation routes."
            ),
            author="City Planning",
            source="Municipal Updates",
            url="https://example.com/infrastructure",
            category="government",
            location="Local Community",
            published_at=now - timedelta(hours=4),
        ),
        NewsArticle(
            title="Environmental Initiative Gains Community Support",
            summary=(
                "Local environmental group's tree planting program receives overwhelming "
                "volunteer response from residents."
            ),
            content=(
                "The Green Community Initiative has exceeded expectations with over 200 "
                "volunteers signing up for the neighborhood tree planting program "
                "scheduled for next month."
            ),
            author="Environmental Reporter",
            source="Green News",
            url="https://example.com/environment",
            category="environment",
            location="Local Community",
            published_at=now - timedelta(hours=6),
        ),
    ]


def _parse_published_at(value: str) -> datetime:
    # NewsAPI timestamps end in "Z", which fromisoformat only accepts on 3.11+.
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class NewsService:
    """Fetch headlines and store them as deduplicated ``NewsArticle`` rows."""

    def __init__(
        self,
        storage_scope: StorageScope,
        *,
        client: httpx.AsyncClient | None = None,
        api_key: str | None = None,
        base_url: str | None = None,
        country: str | None = None,
        default_location: str | None = None,
        fetch_interval_seconds: float | None = None,
        timeout_seconds: float | None = None,
        sample_fallback: bool | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            storage_scope: Callable returning a context manager that yields a
                storage for the duration of one ingestion run.
            client: Optional shared HTTP client. When omitted a client is
                created per run and closed afterwards.

        Remaining keyword arguments override the matching ``NEWS_*`` settings.
        """
        self._storage_scope = storage_scope
        self._client = client
        self.api_key = api_key if api_key is not None else settings.news_api_key
        self.base_url = (base_url or settings.news_api_base_url).rstrip("/")
        self.country = country or settings.news_country
        self.default_location = default_location or settings.news_default_location
        self.fetch_interval = (
            fetch_interval_seconds
            if fetch_interval_seconds is not None
            else settings.news_fetch_interval_seconds
        )
        self.timeout = timeout_seconds or settings.news_http_timeout_seconds
        self.sample_fallback = (
            sample_fallback if sample_fallback is not None else settings.news_sample_fallback
        )
        self._last_fetch: float | None = None

    def _is_fresh(self) -> bool:
        return (
            self._last_fetch is not None
            and time.monotonic() - self._last_fetch < self.fetch_interval
        )

    async def fetch_and_store(self, *, force: bool = False) -> IngestionResult | None:
        """Run one ingestion pass.

        Returns ``None`` when the pass was skipped because the previous
        successful fetch is younger than the fetch interval, or when the
        fetch failed and no fallback applied.
        """
        if not force and self._is_fresh():
            return None

        if not self.api_key:
            logger.info("No news API key configured; skipping live headline fetch")
            return await self._store_fallback()

        logger.info("Fetching headlines from %s", self.base_url)
        try:
            items = await self._fetch_headlines()
        except (NewsFetchError, httpx.HTTPError, ValueError, TypeError, AttributeError) as exc:
            logger.error("Error fetching news: %s", exc)
            return None

        result = await asyncio.to_thread(self._store_items, items)
        self._last_fetch = time.monotonic()
        logger.info(
            "Fetched %d headlines: %d stored, %d duplicates, %d skipped",
            result.fetched,
            result.stored,
            result.duplicates,
            result.skipped,
        )
        return result

    async def _store_fallback(self) -> IngestionResult | None:
        if not self.sample_fallback:
            return None
        logger.info("Creating sample news articles")
        result = await asyncio.to_thread(self._store_articles, _sample_articles())
        self._last_fetch = time.monotonic()
        return result

    async def _fetch_headlines(self) -> list[Any]:
        if self._client is not None:
            return await self._fetch_with(self._client)
        async with httpx.AsyncClient(timeout=httpx.Timeout(self.timeout)) as client:
            return await self._fetch_with(client)

    async def _fetch_with(self, client: httpx.AsyncClient) -> list[Any]:
        url = f"{self.base_url}/top-headlines"
        responses = await asyncio.gather(
            *(
                client.get(
                    url,
                    params={
                        "country": self.country,
                        "category": category,
                        "pageSize": page_size,
                        "apiKey": self.api_key,
                    },
                )
                for category, page_size in HEADLINE_CATEGORIES
            )
        )

        if not all(response.is_success for response in responses):
            statuses = " ".join(str(response.status_code) for response in responses)
            raise NewsFetchError(f"News API error: {statuses}")

        items: list[Any] = []
        for (category, _), response in zip(HEADLINE_CATEGORIES, responses, strict=True):
            for article in response.json().get("articles") or []:
                # Non-object entries are passed through and skipped when stored.
                if isinstance(article, Mapping):
                    article = {**article, "category": category}
                items.append(article)
        return items

    def _to_article(self, item: Mapping[str, Any]) -> NewsArticle | None:
        title = item.get("title")
        url = item.get("url")
        published = item.get("publishedAt")
        if not (title and url and published):
            return None

        source = item.get("source") or {}
        description = item.get("description") or None
        return NewsArticle(
            title=title,
            summary=description,
            content=item.get("content") or description,
            author=item.get("author") or None,
            source=source.get("name") or "Unknown",
            url=url,
            image_url=item.get("urlToImage") or None,
            category=item.get("category") or "general",
            location=self.default_location,
            published_at=_parse_published_at(published),
        )

    def _store_items(self, items: list[Any]) -> IngestionResult:
        articles: list[NewsArticle] = []
        skipped = 0
        for item in items:
            if not isinstance(item, Mapping):
                logger.warning("Skipping non-object article entry: %r", item)
                skipped += 1
                continue
            try:
                article = self._to_article(item)
            except (ValueError, TypeError, AttributeError) as exc:
                logger.warning("Skipping malformed article %r: %s", item.get("url"), exc)
                article = None
            if article is None:
                skipped += 1
                continue
            articles.append(article)

        result = self._store_articles(articles)
        result.fetched = len(items)
        result.skipped += skipped
        return result

    def _store_articles(self, articles: list[NewsArticle]) -> IngestionResult:
        result = IngestionResult(fetched=len(articles))
        with self._storage_scope() as storage:
            for article in articles:
                try:
                    with storage.transaction():
                        storage.create_news_article(article)
                except ConflictError:
                    logger.debug("Skipping duplicate article %s", article.url)
                    result.duplicates += 1
                    continue
                result.stored += 1
        return result


class NewsIngestionWorker:
    """Runs ``NewsService.fetch_and_store`` immediately and then on a fixed interval."""

    def __init__(self, service: NewsService, interval_seconds: float | None = None) -> None:
        self.service = service
        self.interval = max(
            0.1,
            float(
                interval_seconds
                if interval_seconds is not None
                else settings.news_fetch_interval_seconds
            ),
        )
        self._task: asyncio.Task[None] | None = None
        self._stopping = asyncio.Event()

    async def start(self) -> None:
        """Start the background ingestion loop."""
        if self._task is None or self._task.done():
            self._stopping.clear()
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Stop the background ingestion loop and wait for it to finish."""
        if self._task is None:
            return

        self._stopping.set()
        await self._task
        self._task = None

    async def _run(self) -> None:
        while not self._stopping.is_set():
            try:
                await self.service.fetch_and_store(force=True)
            except SQLAlchemyError as exc:
                logger.error("News ingestion failed to store articles: %s", exc, exc_info=True)
            except (OSError, ConnectionError, TimeoutError) as exc:
                logger.warning("News ingestion encountered network error: %s", exc)
            except (ValueError, TypeError, KeyError, AttributeError) as exc:
                logger.error(
                    "News ingestion encountered data processing error: %s", exc, exc_info=True
                )

            try:
                await asyncio.wait_for(self._stopping.wait(), timeout=self.interval)
            except TimeoutError:
                continue
