"""Signature ledger for petitions."""
from __future__ import annotations

import logging

from civic_commons.core.errors import ConflictError, NotFoundError
from civic_commons.db.time import ensure_utc, utcnow
from civic_commons.models import Petition, PetitionSignature
from civic_commons.models.petition import (
    PETITION_STATUS_ACTIVE,
    PETITION_STATUS_SUCCESSFUL,
)
from civic_commons.storage import Storage

logger = logging.getLogger(__name__)


class SignatureLedger:
    """Records petition signatures and drives the active -> successful transition."""

    def __init__(self, storage: Storage) -> None:
        self.storage = storage

    def sign_petition(
        self, petition_id: int, user_id: str, comment: str | None = None
    ) -> Petition:
        """Add the caller's signature and bump ``current_signatures`` by one.

        Once the count reaches ``target_signatures`` the petition becomes
        ``successful`` and stops accepting signatures.

        Raises:
            NotFoundError: If the petition does not exist.
            ConflictError: If the petition is not open for signing or the user
                already signed it.
        """
        with self.storage.transaction():
            petition = self.storage.get_petition(petition_id, for_update=True)
            if petition is None:
                raise NotFoundError("Petition", petition_id)

            self._ensure_open(petition)
            if self.storage.get_petition_signature(petition_id, user_id) is not None:
                raise ConflictError("Petition already signed by this user")

            self.storage.add_petition_signature(
                PetitionSignature(petition_id=petition_id, user_id=user_id, comment=comment)
            )
            signatures = self.storage.increment_petition_signatures(petition)

            if signatures >= petition.target_signatures:
                petition.status = PETITION_STATUS_SUCCESSFUL
                logger.info(
                    "Petition %d reached its target of %d signatures",
                    petition_id,
                    petition.target_signatures,
                )

        logger.debug("Recorded signature by %s on petition %d", user_id, petition_id)
        return petition

    @staticmethod
    def _ensure_open(petition: Petition) -> None:
        if petition.status != PETITION_STATUS_ACTIVE:
            raise ConflictError(f"Petition is {petition.status} and no longer accepts signatures")
        if petition.deadline is not None and ensure_utc(petition.deadline) < utcnow():
            raise ConflictError("Petition deadline has passed")

    def get_user_signature(self, petition_id: int, user_id: str) -> PetitionSignature | None:
        """Return the caller's signature on a petition, if any."""
        return self.storage.get_petition_signature(petition_id, user_id)

    def list_signatures(self, petition_id: int) -> list[PetitionSignature]:
        """Return all signatures for a petition.

        Raises:
            NotFoundError: If the petition does not exist.
        """
        if self.storage.get_petition(petition_id) is None:
            raise NotFoundError("Petition", petition_id)
        return self.storage.list_petition_signatures(petition_id)
