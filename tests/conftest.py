"""Shared test fixtures."""

from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from app.auth.session import create_user_from_external_identity
from app.catalog.service import load_seed_data
from app.core.config import settings
from app.core.database import get_session
from app.main import app

LINE_CLIENT_ID = "1653666685"
LINE_CHANNEL_SECRET = "test-channel-secret"
SEED_PATH = Path(__file__).parent.parent / "data" / "catalog.json"


@pytest.fixture(name="engine")
def engine_fixture():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Create a new database session for each test."""
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session):
    """Create a test client with the test database session."""

    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def line_settings(monkeypatch):
    """Configure a fake LINE channel."""
    monkeypatch.setattr(settings, "line_client_id", LINE_CLIENT_ID)
    monkeypatch.setattr(settings, "line_channel_secret", LINE_CHANNEL_SECRET)
    monkeypatch.setattr(settings, "app_url", "https://clavision.web.app")


@pytest.fixture(name="catalog")
def catalog_fixture(session: Session) -> dict:
    """Load the bundled room and class catalog."""
    return load_seed_data(session, SEED_PATH)


@pytest.fixture(name="access_token")
def access_token_fixture(session: Session) -> str:
    """Create a user and return their access token."""
    return create_user_from_external_identity(
        session, "Test Student", "U1234567890abcdef", "a" * 64
    )


def make_id_token(
    sub: str = "U1234567890abcdef",
    name: str = "Test Student",
    picture: str | None = "https://profile.line-scdn.net/abc",
    issuer: str = "https://access.line.me",
    audience: str = LINE_CLIENT_ID,
    secret: str = LINE_CHANNEL_SECRET,
) -> str:
    """Sign an ID token the way LINE does."""
    now = datetime.now(UTC)
    claims = {
        "iss": issuer,
        "sub": sub,
        "aud": audience,
        "exp": int((now + timedelta(hours=1)).timestamp()),
        "iat": int(now.timestamp()),
        "name": name,
    }
    if picture is not None:
        claims["picture"] = picture
    return jwt.encode(claims, secret, algorithm="HS256")
