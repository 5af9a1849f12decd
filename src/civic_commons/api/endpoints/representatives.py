"""Representative directory endpoints for the Civic Commons API."""

from typing import Literal

from fastapi import APIRouter, status

from civic_commons.api.dependencies import CurrentUserDep, StorageDep
from civic_commons.models import Representative
from civic_commons.schemas.representative import (
    RepresentativeCreate,
    RepresentativeResponse,
)

router = APIRouter(prefix="/representatives", tags=["representatives"])


@router.get("/", response_model=list[RepresentativeResponse])
async def list_representatives(
    storage: StorageDep,
    level: Literal["federal", "state", "local"] | None = None,
) -> list[Representative]:
    """List representatives by name, optionally for one level of government."""
    return storage.list_representatives(level)


@router.post("/", response_model=RepresentativeResponse, status_code=status.HTTP_201_CREATED)
async def create_representative(
    representative_data: RepresentativeCreate,
    _current_user: CurrentUserDep,
    storage: StorageDep,
) -> Representative:
    with storage.transaction():
        representative = storage.create_representative(
            Representative(**representative_data.model_dump())
        )
    return representative
