# -*- coding: utf-8 -*-
"""
Шлюз к документной базе данных.

Все коллекции лежат под фиксированным документом арендатора
clients/{CLIENT_ID}: attendees, speakers, sessions, todos.

Реализации:
- FirestoreDatabase: Cloud Firestore через firebase-admin
- InMemoryDatabase: хранилище в памяти процесса (разработка и тесты)
"""

import copy
import logging
import threading
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Protocol

from event_backend.config import CLIENT_ID, ConfigError, Settings

logger = logging.getLogger("event_backend.database")

TENANTS_COLLECTION = "clients"
ATTENDEES_COLLECTION = "attendees"
SPEAKERS_COLLECTION = "speakers"
SESSIONS_COLLECTION = "sessions"
TODOS_COLLECTION = "todos"


class DatabaseError(Exception):
    """Ошибка вызова базы данных (текст исходной ошибки сохраняется)."""


class DuplicateKeyError(Exception):
    """Документ с таким значением уникального поля уже существует."""

    def __init__(self, collection: str, field_name: str, value: Any):
        super().__init__(f"{collection}.{field_name} = {value!r} уже существует")
        self.collection = collection
        self.field_name = field_name
        self.value = value


@dataclass
class Document:
    """Документ коллекции: идентификатор и плоские данные."""
    id: str
    data: Dict[str, Any] = field(default_factory=dict)


class Collection(Protocol):
    """Интерфейс коллекции одной сущности."""

    name: str

    def add(self, data: Dict[str, Any]) -> str:
        ...

    def add_unique(self, data: Dict[str, Any], field_name: str) -> str:
        ...

    def set(self, doc_id: str, data: Dict[str, Any]) -> None:
        ...

    def get(self, doc_id: str) -> Optional[Document]:
        ...

    def find_one(self, field_name: str, value: Any) -> Optional[Document]:
        ...

    def list(
        self, order_by: Optional[str] = None, descending: bool = False
    ) -> List[Document]:
        ...

    def delete(self, doc_id: str) -> bool:
        ...

    def count(self) -> int:
        ...


class Database(Protocol):
    """Интерфейс шлюза: по одной коллекции на сущность."""

    @property
    def attendees(self) -> Collection:
        ...

    @property
    def speakers(self) -> Collection:
        ...

    @property
    def sessions(self) -> Collection:
        ...

    @property
    def todos(self) -> Collection:
        ...

    def ping(self) -> None:
        ...

    def close(self) -> None:
        ...


# ==================== In-memory ====================


class InMemoryCollection:
    """Коллекция в памяти. Потокобезопасна: FastAPI выполняет обработчики в пуле потоков."""

    def __init__(self, name: str):
        self.name = name
        self._docs: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()

    def add(self, data: Dict[str, Any]) -> str:
        doc_id = uuid.uuid4().hex
        with self._lock:
            self._docs[doc_id] = copy.deepcopy(data)
        return doc_id

    def add_unique(self, data: Dict[str, Any], field_name: str) -> str:
        value = data.get(field_name)
        with self._lock:
            for stored in self._docs.values():
                if stored.get(field_name) == value:
                    raise DuplicateKeyError(self.name, field_name, value)
            doc_id = uuid.uuid4().hex
            self._docs[doc_id] = copy.deepcopy(data)
        return doc_id

    def set(self, doc_id: str, data: Dict[str, Any]) -> None:
        with self._lock:
            self._docs[doc_id] = copy.deepcopy(data)

    def get(self, doc_id: str) -> Optional[Document]:
        with self._lock:
            data = self._docs.get(doc_id)
            if data is None:
                return None
            return Document(id=doc_id, data=copy.deepcopy(data))

    def find_one(self, field_name: str, value: Any) -> Optional[Document]:
        with self._lock:
            for doc_id, data in self._docs.items():
                if data.get(field_name) == value:
                    return Document(id=doc_id, data=copy.deepcopy(data))
        return None

    def list(
        self, order_by: Optional[str] = None, descending: bool = False
    ) -> List[Document]:
        with self._lock:
            docs = [
                Document(id=doc_id, data=copy.deepcopy(data))
                for doc_id, data in self._docs.items()
            ]
        if order_by:
            # Документы без поля идут последними при прямой сортировке
            docs.sort(
                key=lambda doc: (doc.data.get(order_by) is None, doc.data.get(order_by)),
                reverse=descending,
            )
        return docs

    def delete(self, doc_id: str) -> bool:
        with self._lock:
            return self._docs.pop(doc_id, None) is not None

    def count(self) -> int:
        with self._lock:
            return len(self._docs)

    def clear(self) -> None:
        with self._lock:
            self._docs.clear()


class InMemoryDatabase:
    """Простая база данных в памяти для разработки и тестов."""

    def __init__(self, tenant_id: str = CLIENT_ID):
        self.tenant_id = tenant_id
        self._attendees = InMemoryCollection(ATTENDEES_COLLECTION)
        self._speakers = InMemoryCollection(SPEAKERS_COLLECTION)
        self._sessions = InMemoryCollection(SESSIONS_COLLECTION)
        self._todos = InMemoryCollection(TODOS_COLLECTION)

    @property
    def attendees(self) -> InMemoryCollection:
        return self._attendees

    @property
    def speakers(self) -> InMemoryCollection:
        return self._speakers

    @property
    def sessions(self) -> InMemoryCollection:
        return self._sessions

    @property
    def todos(self) -> InMemoryCollection:
        return self._todos

    def ping(self) -> None:
        return None

    def close(self) -> None:
        return None

    def reset(self) -> None:
        """Очищает все коллекции (удобно в тестах)."""
        for collection in (self._attendees, self._speakers, self._sessions, self._todos):
            collection.clear()


# ==================== Firestore ====================


@contextmanager
def _upstream_errors(action: str) -> Iterator[None]:
    """Превращает ошибки Google API в DatabaseError с исходным текстом."""
    from google.api_core import exceptions as google_exceptions

    try:
        yield
    except google_exceptions.GoogleAPIError as exc:
        logger.error(f"Ошибка Firestore ({action}): {exc}")
        raise DatabaseError(f"{action}: {exc}") from exc


class FirestoreCollection:
    """Коллекция Firestore под документом арендатора."""

    def __init__(self, client, tenant_ref, name: str):
        self.name = name
        self._client = client
        self._ref = tenant_ref.collection(name)

    def _where_equal(self, field_name: str, value: Any):
        from google.cloud.firestore_v1.base_query import FieldFilter

        return self._ref.where(filter=FieldFilter(field_name, "==", value))

    def add(self, data: Dict[str, Any]) -> str:
        with _upstream_errors(f"add {self.name}"):
            _, doc_ref = self._ref.add(data)
        return doc_ref.id

    def add_unique(self, data: Dict[str, Any], field_name: str) -> str:
        """
        Атомарно проверяет уникальность поля и вставляет документ.

        Запрос на существование и запись выполняются в одной транзакции,
        поэтому две параллельные вставки с одинаковым значением не пройдут обе.

        Raises:
            DuplicateKeyError: Если документ с таким значением уже есть
        """
        from firebase_admin import firestore

        value = data.get(field_name)
        doc_ref = self._ref.document()
        query = self._where_equal(field_name, value).limit(1)

        @firestore.transactional
        def insert(transaction):
            if list(transaction.get(query)):
                raise DuplicateKeyError(self.name, field_name, value)
            transaction.set(doc_ref, data)

        with _upstream_errors(f"add_unique {self.name}"):
            insert(self._client.transaction())
        return doc_ref.id

    def set(self, doc_id: str, data: Dict[str, Any]) -> None:
        with _upstream_errors(f"set {self.name}/{doc_id}"):
            self._ref.document(doc_id).set(data)

    def get(self, doc_id: str) -> Optional[Document]:
        with _upstream_errors(f"get {self.name}/{doc_id}"):
            snapshot = self._ref.document(doc_id).get()
        if not snapshot.exists:
            return None
        return Document(id=snapshot.id, data=snapshot.to_dict() or {})

    def find_one(self, field_name: str, value: Any) -> Optional[Document]:
        with _upstream_errors(f"query {self.name}"):
            for snapshot in self._where_equal(field_name, value).limit(1).stream():
                return Document(id=snapshot.id, data=snapshot.to_dict() or {})
        return None

    def list(
        self, order_by: Optional[str] = None, descending: bool = False
    ) -> List[Document]:
        from firebase_admin import firestore

        query = self._ref
        if order_by:
            direction = firestore.Query.DESCENDING if descending else firestore.Query.ASCENDING
            query = query.order_by(order_by, direction=direction)
        with _upstream_errors(f"list {self.name}"):
            return [
                Document(id=snapshot.id, data=snapshot.to_dict() or {})
                for snapshot in query.stream()
            ]

    def delete(self, doc_id: str) -> bool:
        doc_ref = self._ref.document(doc_id)
        with _upstream_errors(f"delete {self.name}/{doc_id}"):
            if not doc_ref.get().exists:
                return False
            doc_ref.delete()
        return True

    def count(self) -> int:
        with _upstream_errors(f"count {self.name}"):
            results = self._ref.count().get()
        return int(results[0][0].value) if results else 0


class FirestoreDatabase:
    """Cloud Firestore с коллекциями под clients/{tenant_id}."""

    APP_NAME = "event_backend"

    def __init__(self, client, tenant_id: str = CLIENT_ID, app=None):
        self.tenant_id = tenant_id
        self._client = client
        self._app = app
        tenant_ref = client.collection(TENANTS_COLLECTION).document(tenant_id)
        self._attendees = FirestoreCollection(client, tenant_ref, ATTENDEES_COLLECTION)
        self._speakers = FirestoreCollection(client, tenant_ref, SPEAKERS_COLLECTION)
        self._sessions = FirestoreCollection(client, tenant_ref, SESSIONS_COLLECTION)
        self._todos = FirestoreCollection(client, tenant_ref, TODOS_COLLECTION)

    @classmethod
    def from_settings(cls, settings: Settings) -> "FirestoreDatabase":
        """
        Инициализирует firebase-admin и клиент Firestore.

        Args:
            settings: Настройки сервиса

        Returns:
            Готовый шлюз FirestoreDatabase

        Raises:
            ConfigError: Если указан несуществующий файл учётных данных
        """
        import firebase_admin
        from firebase_admin import credentials, firestore

        credential = None
        credentials_path = settings.FIRESTORE_CREDENTIALS_PATH
        if credentials_path:
            if not Path(credentials_path).is_file():
                raise ConfigError(f"Файл учётных данных Firestore не найден: {credentials_path}")
            credential = credentials.Certificate(credentials_path)
            logger.info(f"Учётные данные Firestore: {credentials_path}")
        else:
            logger.info("Используются Application Default Credentials (ADC) для Firestore")

        options = {}
        if settings.FIRESTORE_PROJECT_ID:
            options["projectId"] = settings.FIRESTORE_PROJECT_ID

        try:
            app = firebase_admin.get_app(cls.APP_NAME)
        except ValueError:
            app = firebase_admin.initialize_app(credential, options or None, name=cls.APP_NAME)

        client = firestore.client(app=app)
        logger.info("Клиент Firestore инициализирован")
        return cls(client, CLIENT_ID, app=app)

    @property
    def attendees(self) -> FirestoreCollection:
        return self._attendees

    @property
    def speakers(self) -> FirestoreCollection:
        return self._speakers

    @property
    def sessions(self) -> FirestoreCollection:
        return self._sessions

    @property
    def todos(self) -> FirestoreCollection:
        return self._todos

    def ping(self) -> None:
        """Проверяет доступность Firestore чтением документа арендатора."""
        with _upstream_errors("ping"):
            self._client.collection(TENANTS_COLLECTION).document(self.tenant_id).get()

    def close(self) -> None:
        self._client.close()


def create_database(settings: Settings) -> Database:
    """
    Создаёт шлюз по настройке DATABASE_BACKEND.

    Args:
        settings: Настройки сервиса

    Returns:
        InMemoryDatabase или FirestoreDatabase
    """
    if settings.DATABASE_BACKEND == "memory":
        logger.info("Используется база данных в памяти")
        return InMemoryDatabase(CLIENT_ID)
    return FirestoreDatabase.from_settings(settings)
