"""Shared fixtures for fileshare tests."""

import os
import re
import tempfile
import uuid
from pathlib import Path

# Point settings at a throwaway database and uploads dir before the app is imported.
_TMP = Path(tempfile.mkdtemp(prefix="fileshare-tests-"))
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TMP / 'fileshare.db'}"
os.environ["FILE_STORAGE_PATH"] = str(_TMP / "uploads")
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from fileshare.main import app
from fileshare.models.file_record import FileRecord
from fileshare.services.file_storage import FileStorageService, get_file_storage

LINK_RE = re.compile(r'href="(?P<link>[^"]*/file/(?P<id>[0-9a-f-]{36}))"')


@pytest.fixture
def storage(tmp_path):
    """Storage service writing into a per-test uploads dir.

    Yields:
        FileStorageService bound to tmp_path / 'uploads'.
    """
    service = FileStorageService(str(tmp_path / "uploads"))
    app.dependency_overrides[get_file_storage] = lambda: service
    yield service
    app.dependency_overrides.pop(get_file_storage, None)


@pytest.fixture
def client(storage):
    """TestClient with the lifespan (table creation) running.

    Yields:
        Starlette TestClient for the app.
    """
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db_session():
    """Synchronous session on the same SQLite file, for asserting on rows.

    Yields:
        SQLAlchemy Session.
    """
    engine = create_engine(f"sqlite:///{_TMP / 'fileshare.db'}")
    with Session(engine) as session:
        yield session
    engine.dispose()


@pytest.fixture
def upload(client):
    """Upload helper returning (file_id, link, response)."""

    def _upload(name="a.txt", content=b"hello world", password=None, headers=None):
        data = {} if password is None else {"password": password}
        response = client.post(
            "/upload",
            files={"file": (name, content, "text/plain")},
            data=data,
            headers=headers or {},
        )
        assert response.status_code == 200, response.text
        match = LINK_RE.search(response.text)
        assert match, response.text
        return match.group("id"), match.group("link"), response

    return _upload


@pytest.fixture
def fetch_record(db_session):
    """Fresh read of a FileRecord by its string id."""

    def _fetch(file_id):
        db_session.expire_all()
        return db_session.get(FileRecord, uuid.UUID(file_id))

    return _fetch
