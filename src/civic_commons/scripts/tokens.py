"""Issue a bearer token for local testing against the API.

Usage::

    python -m civic_commons.scripts.tokens USER_ID [--email EMAIL] [--first-name NAME]

The user row is created (or its profile fields updated) before the token is
printed, so the token is immediately accepted by authenticated endpoints.
"""

from __future__ import annotations

import argparse

from civic_commons.core.security import create_access_token
from civic_commons.models import User
from civic_commons.storage import Storage
from civic_commons.storage.sql import session_scope


def issue_token(
    storage: Storage,
    user_id: str,
    *,
    email: str | None = None,
    first_name: str | None = None,
    last_name: str | None = None,
) -> str:
    """Upsert the user and return a signed access token for it."""
    with storage.transaction():
        storage.upsert_user(
            User(id=user_id, email=email, first_name=first_name, last_name=last_name)
        )
    return create_access_token(user_id)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Print a bearer token for a local user.")
    parser.add_argument("user_id")
    parser.add_argument("--email")
    parser.add_argument("--first-name")
    parser.add_argument("--last-name")
    args = parser.parse_args(argv)

    with session_scope() as storage:
        token = issue_token(
            storage,
            args.user_id,
            email=args.email,
            first_name=args.first_name,
            last_name=args.last_name,
        )
    print(token)


if __name__ == "__main__":
    main()
