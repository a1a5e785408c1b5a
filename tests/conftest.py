"""
Pytest configuration and fixtures.
"""

from typing import Callable

import pytest
from fastapi.testclient import TestClient

from storage_gateway.context import AppContext, build_context
from storage_gateway.infra.auth.credentials import CredentialStore, UserRecord
from storage_gateway.infra.config.settings import Settings
from storage_gateway.infra.sessions import InMemorySessionStore
from storage_gateway.infra.storage.object_storage import ObjectStorage
from storage_gateway.main import create_app
from tests._helpers.auth import ALICE_TOKEN, BOB_TOKEN, fast_hash
from tests._helpers.fakes import FakeS3Bucket, FakeS3Client


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        USERS_FILE=str(tmp_path / "users.json"),
        STATIC_DIR=str(tmp_path / "no-static"),
        R2_BUCKET_NAME="test-bucket",
        PRODUCTION=False,
        SESSION_BACKEND="memory",
        CORS_ORIGINS="",
    )


@pytest.fixture
def credentials():
    return CredentialStore(
        {
            "alice": UserRecord(name="Alice A.", token_hash=fast_hash(ALICE_TOKEN)),
            "bob": UserRecord(name="Bob B.", token_hash=fast_hash(BOB_TOKEN)),
        }
    )


@pytest.fixture
def s3_bucket():
    return FakeS3Bucket("test-bucket")


@pytest.fixture
def storage(s3_bucket):
    return ObjectStorage(
        bucket="test-bucket",
        client_factory=lambda: FakeS3Client(s3_bucket),
        base_path="content/md",
    )


@pytest.fixture
def sessions():
    return InMemorySessionStore()


@pytest.fixture
def context(settings, credentials, sessions, storage) -> AppContext:
    return build_context(
        settings, credentials=credentials, sessions=sessions, storage=storage
    )


@pytest.fixture
def app(context):
    return create_app(context)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def login(client) -> Callable[..., str]:
    """Log in and return the issued session id.

    The client's cookie jar is emptied afterwards so tests pass the cookie
    explicitly and can keep using an id after logout.
    """

    def _login(username: str = "alice", token: str = ALICE_TOKEN) -> str:
        res = client.post("/api/login", json={"username": username, "token": token})
        assert res.status_code == 200, res.text
        session_id = res.cookies["session_id"]
        client.cookies.clear()
        return session_id

    return _login
