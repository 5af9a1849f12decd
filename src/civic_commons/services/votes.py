"""Vote ledger for forum posts."""
from __future__ import annotations

import logging

from civic_commons.core.errors import InvalidArgumentError, NotFoundError
from civic_commons.models import Post, PostVote
from civic_commons.models.vote import VOTE_DOWNVOTE, VOTE_TYPES, VOTE_UPVOTE
from civic_commons.storage import Storage

logger = logging.getLogger(__name__)


class VoteLedger:
    """Records one mutable vote per (post, user) and keeps post counters in sync."""

    def __init__(self, storage: Storage) -> None:
        self.storage = storage

    def record_vote(self, post_id: int, user_id: str, vote_type: str) -> Post:
        """Cast or switch a user's vote and recompute the post's counters.

        Args:
            post_id: Post being voted on.
            user_id: Authenticated caller.
            vote_type: ``"upvote"`` or ``"downvote"``.

        Returns:
            The post with ``upvotes`` and ``downvotes`` recomputed from the ledger.

        Raises:
            InvalidArgumentError: If ``vote_type`` is not a known vote type.
            NotFoundError: If the post does not exist.
        """
        if vote_type not in VOTE_TYPES:
            raise InvalidArgumentError(f"Invalid vote type: {vote_type!r}")

        with self.storage.transaction():
            post = self.storage.get_post(post_id, for_update=True)
            if post is None:
                raise NotFoundError("Post", post_id)

            existing = self.storage.get_post_vote(post_id, user_id)
            if existing is None:
                self.storage.add_post_vote(
                    PostVote(post_id=post_id, user_id=user_id, vote_type=vote_type)
                )
            elif existing.vote_type != vote_type:
                existing.vote_type = vote_type

            post.upvotes = self.storage.count_post_votes(post_id, VOTE_UPVOTE)
            post.downvotes = self.storage.count_post_votes(post_id, VOTE_DOWNVOTE)

        logger.debug(
            "Recorded %s by %s on post %d (up=%d, down=%d)",
            vote_type,
            user_id,
            post_id,
            post.upvotes,
            post.downvotes,
        )
        return post

    def get_user_vote(self, post_id: int, user_id: str) -> PostVote | None:
        """Return the caller's current vote on a post, if any."""
        return self.storage.get_post_vote(post_id, user_id)
