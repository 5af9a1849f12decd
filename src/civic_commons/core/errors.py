"""Domain exceptions raised by storage and ledger operations.

The API layer maps each subclass to a distinct HTTP status code; nothing in
the domain layer knows about HTTP.
"""

from __future__ import annotations


class CivicError(RuntimeError):
    """Base exception for all domain failures."""

    status_code = 500


class NotFoundError(CivicError):
    """Raised when a referenced entity does not exist."""

    status_code = 404

    def __init__(self, entity: str, entity_id: object) -> None:
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.entity_id = entity_id


class InvalidArgumentError(CivicError):
    """Raised for malformed input such as an unrecognized enum value."""

    status_code = 400


class UnauthorizedError(CivicError):
    """Raised when no authenticated caller can be established."""

    status_code = 401


class ConflictError(CivicError):
    """Raised when a write collides with existing state.

    Examples are a second signature on the same petition, a signature on a
    petition that no longer accepts them, or a duplicate news URL.
    """

    status_code = 409
