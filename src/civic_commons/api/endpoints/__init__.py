"""API endpoint modules."""

from .analytics import router as analytics_router
from .auth import router as auth_router
from .events import router as events_router
from .forums import router as forums_router
from .news import router as news_router
from .petitions import router as petitions_router
from .posts import router as posts_router
from .posts import search_router
from .representatives import router as representatives_router

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
