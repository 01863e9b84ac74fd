from datetime import datetime, timedelta, timezone
import pytest
from fastapi.testclient import TestClient
from resume_builder.core.config import Settings
from resume_builder.core.database import Database
from resume_builder.factory import create_app
from resume_builder.services.auth_service import AuthService
from resume_builder.services.resume_service import ResumeService
from resume_builder.stores.credential_store import CredentialStore
from resume_builder.stores.resume_store import ResumeStore
from tests.helpers import signup_form


class FakeClock:
    def __init__(self):
        self.now = datetime.now(timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        SECRET_KEY="test-secret-key",
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        BCRYPT_ROUNDS=4,
        UPLOAD_DIR=str(tmp_path / "uploads"),
        OTP_DEBUG_ECHO=True,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def database(settings):
    db = Database(settings.DATABASE_URL)
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def credential_store(database):
    return CredentialStore(database)


@pytest.fixture
def resume_store(database):
    return ResumeStore(database)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def auth_service(credential_store, settings, clock):
    return AuthService(credential_store, settings, clock=clock)


@pytest.fixture
def resume_service(resume_store):
    return ResumeService(resume_store)


@pytest.fixture
def app(settings, database):
    return create_app(settings, database)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def signed_up(client):
    """Signs up the default user through the API, returns (token, user)"""
    response = client.post("/api/auth/signup", data=signup_form())
    assert response.status_code == 201, response.text
    body = response.json()
    return body["token"], body["user"]
