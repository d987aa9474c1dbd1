"""
Shared pytest fixtures for CMIS Admin Console API tests.

Provides:
- Isolated file-based SQLite database per test
- FastAPI TestClient with dependency overrides
- Authentication fixtures (tenants, users, bearer tokens)
- Mailer mocking and a temporary document bucket
"""

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from cmis_api.config import get_api_settings
from cmis_api.database import Base, get_db, get_session_factory
from cmis_api.dependencies import get_document_storage, get_mailer
from cmis_api.main import app
from cmis_api.middleware.rate_limit import limiter
from cmis_api.models import RoleName, Tenant, TenantType, User
from cmis_api.services import DocumentStorage, IdentityProvider, NotificationDispatcher

from tests.fixtures.factories import create_tenant, create_user
from tests.mocks.mock_mailer import create_mock_mailer


# ============================================
# Database Fixtures
# ============================================


@pytest.fixture(scope="function")
def test_engine(tmp_path):
    """
    Create an isolated SQLite database engine for each test.

    Uses a file-based database in tmp_path so the notification dispatcher's
    separate sessions see the same data.
    """
    db_path = tmp_path / "test.db"
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )
    return engine


@pytest.fixture(scope="function")
def test_db(test_engine) -> Generator[Session, None, None]:
    """
    Create database tables and provide a session.

    Yields a Session that is isolated to this test.
    Tables are created before and dropped after.
    """
    # Import all models to ensure they're registered with Base.metadata
    from cmis_api.models import (  # noqa: F401
        application,
        auth_account,
        cooperative,
        notification,
        tenant,
        user,
    )

    Base.metadata.create_all(bind=test_engine)

    TestingSessionLocal = sessionmaker(bind=test_engine)
    db = TestingSessionLocal()

    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def session_factory(test_engine, test_db):
    """Session factory bound to the test database (for the dispatcher)"""
    return sessionmaker(bind=test_engine)


# ============================================
# Collaborator Fixtures
# ============================================


@pytest.fixture
def mock_mailer():
    """Mock StatusMailer whose send() succeeds"""
    return create_mock_mailer()


@pytest.fixture
def dispatcher(session_factory) -> NotificationDispatcher:
    """Notification dispatcher without email"""
    return NotificationDispatcher(session_factory)


@pytest.fixture
def identity(test_db: Session) -> IdentityProvider:
    return IdentityProvider(test_db, get_api_settings().secret_key, token_ttl_minutes=60)


@pytest.fixture
def document_storage(tmp_path) -> DocumentStorage:
    """Document bucket in a temporary directory"""
    return DocumentStorage(
        root=tmp_path / "registration-documents",
        secret_key=get_api_settings().secret_key,
        ttl_seconds=3600,
    )


@pytest.fixture(scope="function")
def client(
    test_db: Session, session_factory, document_storage: DocumentStorage
) -> Generator[TestClient, None, None]:
    """
    FastAPI TestClient with the database and collaborators overridden.

    Uses the test_db session instead of the production database, a
    temporary document bucket, and no email.
    """

    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_mailer] = lambda: None
    app.dependency_overrides[get_document_storage] = lambda: document_storage
    limiter.reset()

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ============================================
# Tenant & User Fixtures
# ============================================


@pytest.fixture
def national_tenant(test_db: Session) -> Tenant:
    return create_tenant(
        test_db,
        name="State Department for Cooperatives - National HQ",
        type=TenantType.NATIONAL,
        county_code=None,
    )


@pytest.fixture
def county_tenant(test_db: Session) -> Tenant:
    return create_tenant(test_db, name="Nairobi County", county_code="047")


@pytest.fixture
def other_county(test_db: Session) -> Tenant:
    return create_tenant(test_db, name="Mombasa County", county_code="001")


@pytest.fixture
def super_admin(test_db: Session, national_tenant: Tenant) -> User:
    return create_user(
        test_db,
        national_tenant,
        email="admin@cmis.go.ke",
        full_name="System Administrator",
        role=RoleName.SUPER_ADMIN,
    )


@pytest.fixture
def county_admin(test_db: Session, county_tenant: Tenant) -> User:
    return create_user(
        test_db,
        county_tenant,
        email="county.admin@nairobi.go.ke",
        full_name="Nairobi Admin",
        role=RoleName.COUNTY_ADMIN,
    )


@pytest.fixture
def county_officer(test_db: Session, county_tenant: Tenant) -> User:
    return create_user(
        test_db,
        county_tenant,
        email="officer@nairobi.go.ke",
        full_name="Nairobi Officer",
        role=RoleName.COUNTY_OFFICER,
    )


@pytest.fixture
def citizen(test_db: Session, county_tenant: Tenant) -> User:
    return create_user(
        test_db,
        county_tenant,
        email="wanjiku@example.com",
        full_name="Wanjiku Kamau",
        role=RoleName.CITIZEN,
    )


# ============================================
# Authentication Fixtures
# ============================================


def bearer_headers(user: User) -> dict[str, str]:
    """
    HTTP headers with a session token for the given user.

    Usage:
        response = client.get("/api/v1/users", headers=bearer_headers(user))
    """
    settings = get_api_settings()
    token, _ = IdentityProvider(None, settings.secret_key).issue_token(user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(super_admin: User) -> dict[str, str]:
    return bearer_headers(super_admin)


@pytest.fixture
def county_admin_headers(county_admin: User) -> dict[str, str]:
    return bearer_headers(county_admin)


@pytest.fixture
def officer_headers(county_officer: User) -> dict[str, str]:
    return bearer_headers(county_officer)


@pytest.fixture
def citizen_headers(citizen: User) -> dict[str, str]:
    return bearer_headers(citizen)
