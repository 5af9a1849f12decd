"""Petition and signature endpoints for the Civic Commons API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query, status

from civic_commons.api.dependencies import CurrentUserDep, StorageDep
from civic_commons.core.errors import NotFoundError
from civic_commons.models import Petition, PetitionSignature
from civic_commons.schemas.petition import (
    PetitionCreate,
    PetitionResponse,
    SignatureAck,
    SignatureResponse,
    SignRequest,
)
from civic_commons.services.petitions import SignatureLedger
from civic_commons.storage.base import DEFAULT_LIST_LIMIT, DEFAULT_SHORT_LIST_LIMIT

router = APIRouter(prefix="/petitions", tags=["petitions"])


@router.get("/", response_model=list[PetitionResponse])
async def list_petitions(
    storage: StorageDep,
    active: bool = False,
    limit: Annotated[int | None, Query(ge=1, le=200)] = None,
) -> list[Petition]:
    """List petitions newest first, or only active ones when ``active`` is set."""
    if active:
        return storage.list_active_petitions(limit or DEFAULT_SHORT_LIST_LIMIT)
    return storage.list_petitions(limit or DEFAULT_LIST_LIMIT)


@router.get("/{petition_id}", response_model=PetitionResponse)
async def get_petition(petition_id: int, storage: StorageDep) -> Petition:
    """Get a specific petition by ID."""
    petition = storage.get_petition(petition_id)
    if petition is None:
        raise NotFoundError("Petition", petition_id)
    return petition


@router.post("/", response_model=PetitionResponse, status_code=status.HTTP_201_CREATED)
async def create_petition(
    petition_data: PetitionCreate,
    current_user: CurrentUserDep,
    storage: StorageDep,
) -> Petition:
    """Create a new petition started by the caller."""
    with storage.transaction():
        petition = storage.create_petition(
            Petition(**petition_data.model_dump(), creator_id=current_user.id)
        )
    return petition


@router.post("/{petition_id}/sign", response_model=SignatureAck)
async def sign_petition(
    petition_id: int,
    current_user: CurrentUserDep,
    storage: StorageDep,
    sign_data: SignRequest | None = None,
) -> SignatureAck:
    """Sign a petition as the caller."""
    comment = sign_data.comment if sign_data else None
    petition = SignatureLedger(storage).sign_petition(petition_id, current_user.id, comment)
    return SignatureAck(
        petition_id=petition.id,
        current_signatures=petition.current_signatures,
        target_signatures=petition.target_signatures,
        status=petition.status,
    )


@router.get("/{petition_id}/signatures", response_model=list[SignatureResponse])
async def list_signatures(petition_id: int, storage: StorageDep) -> list[PetitionSignature]:
    """List every signature on a petition."""
    return SignatureLedger(storage).list_signatures(petition_id)
