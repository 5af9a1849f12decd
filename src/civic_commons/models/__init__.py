# src/civic_commons/models/__init__.py
"""SQLAlchemy models for the Civic Commons application."""

from .event import Event, EventAttendee
from .forum import Forum
from .news import NewsArticle
from .petition import Petition, PetitionSignature
from .post import Post
from .representative import Representative
from .user import User
from .vote import PostVote

__all__ = [
    "Event", "EventAttendee",
    "Forum",
    "NewsArticle",
    "Petition", "PetitionSignature",
    "Post",
    "Representative",
    "User",
    "PostVote",
]
