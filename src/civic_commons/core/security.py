"""Bearer token helpers shared by the API layer and local tooling."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from civic_commons.core.errors import UnauthorizedError
from civic_commons.core.settings import settings


def create_access_token(user_id: str, extra_claims: dict[str, str] | None = None) -> str:
    """Create a signed JWT whose subject is the given user id."""
    to_encode: dict[str, object] = {"sub": user_id}
    if extra_claims:
        to_encode.update(extra_claims)
    expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = expire
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str) -> str:
    """Return the user id carried by a bearer token.

    Raises:
        UnauthorizedError: If the token is malformed, expired, or has no subject.
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as err:
        raise UnauthorizedError("Could not validate credentials") from err

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        raise UnauthorizedError("Could not validate credentials")
    return subject
