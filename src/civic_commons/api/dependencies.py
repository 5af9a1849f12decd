"""Shared API dependencies for storage access and authentication."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from civic_commons.core.errors import UnauthorizedError
from civic_commons.core.security import decode_access_token
from civic_commons.db.session import get_db
from civic_commons.models import User
from civic_commons.storage import SqlStorage, Storage

# Missing credentials are reported by get_current_user so every auth failure
# goes through the same 401 handler.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_storage(db: SessionDep) -> Storage:
    """Return the request-scoped storage.

    Tests override this dependency to swap in another backend.
    """
    return SqlStorage(db)


StorageDep = Annotated[Storage, Depends(get_storage)]


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    storage: StorageDep,
) -> User:
    """Get the current authenticated user from the bearer token.

    Args:
        credentials: HTTP Bearer token credentials, if any were sent
        storage: Request-scoped storage

    Returns:
        User object for the authenticated user

    Raises:
        UnauthorizedError: If the token is missing or invalid, or the user is unknown
    """
    if credentials is None:
        raise UnauthorizedError("Not authenticated")

    user_id = decode_access_token(credentials.credentials)
    user = storage.get_user(user_id)
    if user is None:
        raise UnauthorizedError("User not found")
    return user


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]
