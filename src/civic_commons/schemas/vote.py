"""Vote-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class VoteCreate(BaseModel):
    """Schema for casting or switching a vote.

    ``vote_type`` is validated by the vote ledger so that an unknown value is
    reported as a 400 rather than a schema error.
    """

    vote_type: str = Field(..., description="'upvote' or 'downvote'")


class VoteAck(BaseModel):
    """Acknowledgement carrying the post's recomputed counters."""

    message: str = "Vote recorded"
    post_id: int
    vote_type: str
    upvotes: int
    downvotes: int


class VoteResponse(BaseModel):
    """Schema for a stored vote row."""

    post_id: int
    user_id: str
    vote_type: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
