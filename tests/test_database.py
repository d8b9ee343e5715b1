from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from firebase_admin import firestore
from google.api_core import exceptions as google_exceptions

from event_backend.config import CLIENT_ID, ConfigError
from event_backend.database import (
    DatabaseError,
    DuplicateKeyError,
    FirestoreDatabase,
    InMemoryDatabase,
    create_database,
)
from tests.conftest import make_settings


@pytest.fixture()
def db() -> InMemoryDatabase:
    return InMemoryDatabase()


def test_add_assigns_identifier(db: InMemoryDatabase) -> None:
    doc_id = db.speakers.add({"name": "Ada"})

    document = db.speakers.get(doc_id)
    assert document is not None
    assert document.id == doc_id
    assert document.data == {"name": "Ada"}


def test_stored_data_is_isolated_from_caller(db: InMemoryDatabase) -> None:
    data = {"name": "Ada"}
    doc_id = db.speakers.add(data)
    data["name"] = "Changed"

    assert db.speakers.get(doc_id).data["name"] == "Ada"


def test_set_replaces_whole_document(db: InMemoryDatabase) -> None:
    doc_id = db.speakers.add({"name": "Ada", "bio": "Math"})
    db.speakers.set(doc_id, {"name": "Ada Lovelace"})

    assert db.speakers.get(doc_id).data == {"name": "Ada Lovelace"}


def test_add_unique_rejects_duplicate(db: InMemoryDatabase) -> None:
    db.attendees.add_unique({"email": "a@example.com"}, "email")

    with pytest.raises(DuplicateKeyError) as exc_info:
        db.attendees.add_unique({"email": "a@example.com"}, "email")

    assert exc_info.value.field_name == "email"
    assert db.attendees.count() == 1


def test_find_one_and_missing(db: InMemoryDatabase) -> None:
    doc_id = db.attendees.add({"email": "a@example.com"})

    assert db.attendees.find_one("email", "a@example.com").id == doc_id
    assert db.attendees.find_one("email", "b@example.com") is None
    assert db.attendees.get("missing") is None


def test_list_ordering(db: InMemoryDatabase) -> None:
    now = datetime.now(timezone.utc)
    older = db.todos.add({"title": "old", "createdAt": now - timedelta(hours=1)})
    newer = db.todos.add({"title": "new", "createdAt": now})

    ids = [doc.id for doc in db.todos.list(order_by="createdAt", descending=True)]
    assert ids == [newer, older]


def test_delete_reports_absence(db: InMemoryDatabase) -> None:
    doc_id = db.todos.add({"title": "x"})

    assert db.todos.delete(doc_id) is True
    assert db.todos.delete(doc_id) is False
    assert db.todos.count() == 0


def test_reset_clears_all_collections(db: InMemoryDatabase) -> None:
    db.attendees.add({"email": "a@example.com"})
    db.sessions.add({"title": "Keynote"})
    db.reset()

    assert db.attendees.count() == 0
    assert db.sessions.count() == 0


def test_create_database_memory_backend(tmp_path: Path) -> None:
    database = create_database(make_settings(tmp_path))

    assert isinstance(database, InMemoryDatabase)


def test_missing_credentials_file_is_fatal(tmp_path: Path) -> None:
    settings = make_settings(
        tmp_path,
        DATABASE_BACKEND="firestore",
        FIRESTORE_CREDENTIALS_PATH=str(tmp_path / "missing.json"),
    )

    with pytest.raises(ConfigError):
        create_database(settings)


# ==================== Firestore ====================


@pytest.fixture()
def firestore_client() -> MagicMock:
    return MagicMock()


@pytest.fixture()
def firestore_db(firestore_client: MagicMock) -> FirestoreDatabase:
    return FirestoreDatabase(firestore_client, CLIENT_ID)


@pytest.fixture()
def collection_ref(firestore_client: MagicMock) -> MagicMock:
    return firestore_client.collection.return_value.document.return_value.collection.return_value


def test_firestore_collections_live_under_tenant(firestore_client: MagicMock) -> None:
    FirestoreDatabase(firestore_client, CLIENT_ID)

    firestore_client.collection.assert_called_with("clients")
    firestore_client.collection.return_value.document.assert_called_with(CLIENT_ID)
    tenant_ref = firestore_client.collection.return_value.document.return_value
    names = [call.args[0] for call in tenant_ref.collection.call_args_list]
    assert names == ["attendees", "speakers", "sessions", "todos"]


def test_firestore_add_returns_document_id(
    firestore_db: FirestoreDatabase, collection_ref: MagicMock
) -> None:
    collection_ref.add.return_value = (None, MagicMock(id="new-id"))

    assert firestore_db.speakers.add({"name": "Ada"}) == "new-id"
    collection_ref.add.assert_called_once_with({"name": "Ada"})


def test_firestore_get_builds_document(
    firestore_db: FirestoreDatabase, collection_ref: MagicMock
) -> None:
    snapshot = MagicMock(id="s1", exists=True)
    snapshot.to_dict.return_value = {"name": "Ada"}
    collection_ref.document.return_value.get.return_value = snapshot

    document = firestore_db.speakers.get("s1")

    collection_ref.document.assert_called_with("s1")
    assert document.id == "s1"
    assert document.data == {"name": "Ada"}


def test_firestore_get_missing(firestore_db: FirestoreDatabase, collection_ref: MagicMock) -> None:
    collection_ref.document.return_value.get.return_value = MagicMock(exists=False)

    assert firestore_db.speakers.get("missing") is None


def test_firestore_count_reads_aggregation(
    firestore_db: FirestoreDatabase, collection_ref: MagicMock
) -> None:
    collection_ref.count.return_value.get.return_value = [[MagicMock(value=7)]]

    assert firestore_db.attendees.count() == 7


def test_firestore_count_without_results(
    firestore_db: FirestoreDatabase, collection_ref: MagicMock
) -> None:
    collection_ref.count.return_value.get.return_value = []

    assert firestore_db.attendees.count() == 0


def test_firestore_delete_missing_returns_false(
    firestore_db: FirestoreDatabase, collection_ref: MagicMock
) -> None:
    doc_ref = collection_ref.document.return_value
    doc_ref.get.return_value = MagicMock(exists=False)

    assert firestore_db.todos.delete("missing") is False
    doc_ref.delete.assert_not_called()


def test_firestore_delete_existing(firestore_db: FirestoreDatabase, collection_ref: MagicMock) -> None:
    doc_ref = collection_ref.document.return_value
    doc_ref.get.return_value = MagicMock(exists=True)

    assert firestore_db.todos.delete("t1") is True
    doc_ref.delete.assert_called_once_with()


def test_firestore_api_error_becomes_database_error(
    firestore_db: FirestoreDatabase, collection_ref: MagicMock
) -> None:
    collection_ref.document.return_value.set.side_effect = google_exceptions.ServiceUnavailable(
        "backend unavailable"
    )

    with pytest.raises(DatabaseError) as exc_info:
        firestore_db.speakers.set("s1", {"name": "Ada"})

    assert "backend unavailable" in str(exc_info.value)


def test_firestore_ping_error_becomes_database_error(
    firestore_db: FirestoreDatabase, firestore_client: MagicMock
) -> None:
    tenant_doc = firestore_client.collection.return_value.document.return_value
    tenant_doc.get.side_effect = google_exceptions.PermissionDenied("no access")

    with pytest.raises(DatabaseError) as exc_info:
        firestore_db.ping()

    assert "no access" in str(exc_info.value)


@pytest.fixture()
def plain_transactions(monkeypatch: pytest.MonkeyPatch) -> None:
    """Вызывает транзакционную функцию один раз, без повторов и коммита."""
    monkeypatch.setattr(firestore, "transactional", lambda func: func)


def test_firestore_add_unique_inserts_in_transaction(
    plain_transactions: None,
    firestore_db: FirestoreDatabase,
    firestore_client: MagicMock,
    collection_ref: MagicMock,
) -> None:
    transaction = firestore_client.transaction.return_value
    transaction.get.return_value = iter([])
    doc_ref = collection_ref.document.return_value
    doc_ref.id = "a1"

    doc_id = firestore_db.attendees.add_unique({"email": "a@example.com"}, "email")

    assert doc_id == "a1"
    transaction.get.assert_called_once()
    transaction.set.assert_called_once_with(doc_ref, {"email": "a@example.com"})


def test_firestore_add_unique_rejects_duplicate(
    plain_transactions: None,
    firestore_db: FirestoreDatabase,
    firestore_client: MagicMock,
) -> None:
    transaction = firestore_client.transaction.return_value
    transaction.get.return_value = iter([MagicMock(id="existing")])

    with pytest.raises(DuplicateKeyError) as exc_info:
        firestore_db.attendees.add_unique({"email": "a@example.com"}, "email")

    assert exc_info.value.field_name == "email"
    transaction.set.assert_not_called()


def test_firestore_add_unique_api_error(
    plain_transactions: None,
    firestore_db: FirestoreDatabase,
    firestore_client: MagicMock,
) -> None:
    transaction = firestore_client.transaction.return_value
    transaction.get.side_effect = google_exceptions.DeadlineExceeded("timed out")

    with pytest.raises(DatabaseError, match="timed out"):
        firestore_db.attendees.add_unique({"email": "a@example.com"}, "email")
