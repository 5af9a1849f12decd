"""Authentication endpoints for the Civic Commons API."""

from fastapi import APIRouter

from civic_commons.api.dependencies import CurrentUserDep
from civic_commons.models import User
from civic_commons.schemas.user import UserResponse

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.get("/user", response_model=UserResponse)
async def get_authenticated_user(current_user: CurrentUserDep) -> User:
    """Return the profile of the caller identified by the bearer token."""
    return current_user
