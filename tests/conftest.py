import pytest
import os
import requests
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key"

from pathforge.database import Base, get_db
from pathforge.main import app
from fastapi.testclient import TestClient

# SQLite in-memory database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TEST_BASE_URL = "http://testserver"
USER_PASSWORD = "Password123!"


@pytest.fixture(scope="session", autouse=True)
def setup_database():
    """Create tables once for the whole test session."""
    import pathforge.models  # noqa: F401
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Get a clean database session for each test function with rollback safety."""
    connection = engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


def _make_user(db_session, name, email):
    from pathforge.models.user import User
    from pathforge.services import auth as auth_service

    user = User(
        name=name,
        email=email,
        hashed_password=auth_service.get_password_hash(USER_PASSWORD),
    )
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture(scope="function")
def user(db_session):
    return _make_user(db_session, "Ada Lovelace", "ada@example.com")


@pytest.fixture(scope="function")
def other_user(db_session):
    return _make_user(db_session, "Grace Hopper", "grace@example.com")


@pytest.fixture(scope="function")
def get_token():
    """Helper fixture to create access tokens for a user."""
    from pathforge.services.auth import create_access_token

    def _get_token(user, **kwargs):
        return create_access_token(data={"sub": str(user.id), "email": user.email}, **kwargs)
    return _get_token


@pytest.fixture(scope="function")
def auth_headers(user, get_token):
    return {"Authorization": f"Bearer {get_token(user)}"}


@pytest.fixture(scope="function")
def client(db_session):
    """Get a TestClient that uses the test database session via dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


class TestClientTransport:
    """
    Stands in for ``requests.Session`` and routes calls into the FastAPI TestClient.

    Methods listed in ``fail_methods`` raise a connection error instead of reaching the app.
    """
    __test__ = False

    def __init__(self, client, base_url=TEST_BASE_URL):
        self.client = client
        self.base_url = base_url
        self.fail_methods = set()
        self.calls = []

    def request(self, method, url, headers=None, json=None, timeout=None):
        self.calls.append((method, url, timeout))
        if method in self.fail_methods:
            raise requests.ConnectionError("simulated outage")
        return self.client.request(method, url[len(self.base_url):], headers=headers, json=json)


@pytest.fixture(scope="function")
def transport(client):
    return TestClientTransport(client)


@pytest.fixture(scope="function")
def client_settings(tmp_path):
    from pathforge.core.config import ClientSettings
    return ClientSettings(
        api_url=TEST_BASE_URL,
        session_file=str(tmp_path / "session.json"),
        request_timeout=10,
        health_timeout=2,
    )


@pytest.fixture(scope="function")
def session_store(client_settings):
    from pathforge.client.session import SessionStore
    return SessionStore(client_settings.session_file)
