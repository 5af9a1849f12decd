"""Analytics Pydantic schemas."""

from pydantic import BaseModel


class AnalyticsSummary(BaseModel):
    """Platform-wide totals computed from storage."""

    users: int
    forums: int
    posts: int
    events: int
    petitions: int
    representatives: int
    news_articles: int
    votes: int
    signatures: int
    attendances: int
