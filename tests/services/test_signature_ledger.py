"""Tests for the petition signature ledger."""

from __future__ import annotations

import threading
from datetime import timedelta

import pytest
from sqlalchemy.exc import OperationalError

from civic_commons.core.errors import ConflictError, NotFoundError
from civic_commons.db.time import utcnow
from civic_commons.models import Petition, User
from civic_commons.services.petitions import SignatureLedger
from civic_commons.storage import MemoryStorage, SqlStorage, Storage


def _create_petition(storage: Storage, target: int, **overrides: object) -> Petition:
    with storage.transaction():
        storage.upsert_user(User(id="creator"))
        return storage.create_petition(
            Petition(
                title="Create More Bike-Friendly Streets",
                description="Protected bike lanes across the city.",
                target_signatures=target,
                creator_id="creator",
                **overrides,
            )
        )


def test_signing_increments_counter(any_storage: Storage) -> None:
    petition = _create_petition(any_storage, target=10)
    ledger = SignatureLedger(any_storage)

    updated = ledger.sign_petition(petition.id, "A", "Long overdue")

    assert updated.current_signatures == 1
    assert updated.status == "active"
    signature = ledger.get_user_signature(petition.id, "A")
    assert signature is not None
    assert signature.comment == "Long overdue"


def test_second_signature_by_same_user_conflicts(any_storage: Storage) -> None:
    petition = _create_petition(any_storage, target=10)
    ledger = SignatureLedger(any_storage)
    ledger.sign_petition(petition.id, "A")

    with pytest.raises(ConflictError):
        ledger.sign_petition(petition.id, "A")

    refreshed = any_storage.get_petition(petition.id)
    assert refreshed is not None
    assert refreshed.current_signatures == 1
    assert any_storage.count_petition_signatures(petition.id) == 1


def test_reaching_target_marks_successful(any_storage: Storage) -> None:
    petition = _create_petition(any_storage, target=500)
    ledger = SignatureLedger(any_storage)
    with any_storage.transaction():
        for i in range(500):
            any_storage.upsert_user(User(id=f"signer-{i}"))

    previous = 0
    for i in range(500):
        updated = ledger.sign_petition(petition.id, f"signer-{i}")
        assert updated.current_signatures == previous + 1
        previous = updated.current_signatures
        if i < 499:
            assert updated.status == "active"

    assert updated.current_signatures == 500
    assert updated.status == "successful"
    assert any_storage.count_petition_signatures(petition.id) == 500


def test_successful_petition_rejects_signatures(any_storage: Storage) -> None:
    petition = _create_petition(any_storage, target=1)
    ledger = SignatureLedger(any_storage)
    assert ledger.sign_petition(petition.id, "A").status == "successful"

    with pytest.raises(ConflictError):
        ledger.sign_petition(petition.id, "B")

    assert len(ledger.list_signatures(petition.id)) == 1


def test_closed_petition_rejects_signatures(any_storage: Storage) -> None:
    petition = _create_petition(any_storage, target=10, status="closed")

    with pytest.raises(ConflictError):
        SignatureLedger(any_storage).sign_petition(petition.id, "A")

    assert any_storage.count_petition_signatures(petition.id) == 0


def test_past_deadline_rejects_signatures(any_storage: Storage) -> None:
    petition = _create_petition(
        any_storage, target=10, deadline=utcnow() - timedelta(days=1)
    )

    with pytest.raises(ConflictError):
        SignatureLedger(any_storage).sign_petition(petition.id, "A")


def test_missing_petition(any_storage: Storage) -> None:
    ledger = SignatureLedger(any_storage)

    with pytest.raises(NotFoundError):
        ledger.sign_petition(999, "A")
    with pytest.raises(NotFoundError):
        ledger.list_signatures(999)


def test_concurrent_signers_are_all_counted() -> None:
    storage = MemoryStorage()
    petition = _create_petition(storage, target=1000)
    ledger = SignatureLedger(storage)

    threads = [
        threading.Thread(target=ledger.sign_petition, args=(petition.id, f"user-{i}"))
        for i in range(50)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert petition.current_signatures == 50
    assert storage.count_petition_signatures(petition.id) == 50


def test_failed_increment_rolls_back_signature(storage: SqlStorage, mocker) -> None:
    petition = _create_petition(storage, target=10)
    ledger = SignatureLedger(storage)
    mocker.patch.object(
        storage,
        "increment_petition_signatures",
        side_effect=OperationalError("UPDATE petitions", {}, Exception("database is locked")),
    )

    with pytest.raises(OperationalError):
        ledger.sign_petition(petition.id, "A")
    mocker.stopall()

    assert storage.get_petition_signature(petition.id, "A") is None
    assert storage.count_petition_signatures(petition.id) == 0
    refreshed = storage.get_petition(petition.id)
    assert refreshed is not None
    assert refreshed.current_signatures == 0
    assert refreshed.status == "active"
