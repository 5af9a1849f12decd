"""HTTP API routers."""

from .endpoints import (
    analytics_router,
    auth_router,
    events_router,
    forums_router,
    news_router,
    petitions_router,
    posts_router,
    representatives_router,
    search_router,
)

__all__ = [
    "analytics_router",
    "auth_router",
    "events_router",
    "forums_router",
    "news_router",
    "petitions_router",
    "posts_router",
    "representatives_router",
    "search_router",
]
