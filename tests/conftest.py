from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from event_backend.config import Settings
from event_backend.database import InMemoryDatabase
from event_backend.main import create_app

ADMIN_PASSWORD = "admin123"
JWT_SECRET = "tests-secret-key"


def make_settings(tmp_path: Path, **overrides) -> Settings:
    values = {
        "ADMIN_PASSWORD": ADMIN_PASSWORD,
        "JWT_SECRET": JWT_SECRET,
        "DATABASE_BACKEND": "memory",
        "STATIC_DIR": str(tmp_path / "static"),
        "LOG_FILE": str(tmp_path / "logs" / "app.log"),
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return make_settings(tmp_path)


@pytest.fixture()
def database() -> InMemoryDatabase:
    return InMemoryDatabase()


@pytest.fixture()
def client(settings: Settings, database: InMemoryDatabase):
    app = create_app(settings=settings, database=database)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def admin_headers(client: TestClient) -> dict[str, str]:
    response = client.post("/api/admin/login", json={"password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
