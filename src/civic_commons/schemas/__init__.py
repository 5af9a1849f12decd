"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .analytics import AnalyticsSummary
from .event import (
    AttendanceAck,
    AttendanceRequest,
    AttendeeResponse,
    EventCreate,
    EventResponse,
)
from .forum import ForumCreate, ForumResponse
from .news import NewsArticleCreate, NewsArticleResponse
from .petition import (
    PetitionCreate,
    PetitionResponse,
    SignatureAck,
    SignatureResponse,
    SignRequest,
)
from .post import PostCreate, PostResponse
from .representative import RepresentativeCreate, RepresentativeResponse
from .user import UserResponse
from .vote import VoteAck, VoteCreate, VoteResponse

__all__ = [
    "AnalyticsSummary",
    "AttendanceAck",
    "AttendanceRequest",
    "AttendeeResponse",
    "EventCreate",
    "EventResponse",
    "ForumCreate",
    "ForumResponse",
    "NewsArticleCreate",
    "NewsArticleResponse",
    "PetitionCreate",
    "PetitionResponse",
    "PostCreate",
    "PostResponse",
    "RepresentativeCreate",
    "RepresentativeResponse",
    "SignatureAck",
    "SignatureResponse",
    "SignRequest",
    "UserResponse",
    "VoteAck",
    "VoteCreate",
    "VoteResponse",
]
