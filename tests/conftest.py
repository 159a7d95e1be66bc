import os

# Settings are read at import time and SECRET_KEY has no default
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "development"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from datetime import datetime, timedelta, UTC
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from jose import jwt

from app.database import configure_sqlite, get_db
from app.models.base import Base
from app.config import settings
from app.core.security import create_access_token, hash_password
# Import all model classes to ensure they're registered with SQLAlchemy
from app.models.tenant import Tenant, SubscriptionPlan
from app.models.user import User
from app.models.note import Note
from app.models.role import UserRole
from app.models.session_identity import SessionIdentity
# Import FastAPI app AFTER model imports
from app.main import app

DEFAULT_PASSWORD = "password"

# Test database (SQLite in-memory for speed)
# Use StaticPool to ensure all connections share the same in-memory database
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
configure_sqlite(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Create fresh database for each test"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


def _override_get_db(db_session):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    return override_get_db


@pytest.fixture(scope="function")
def client(db_session):
    """FastAPI test client with test database"""
    app.dependency_overrides[get_db] = _override_get_db(db_session)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def lenient_client(db_session):
    """Test client that returns 500 responses instead of re-raising server errors"""
    app.dependency_overrides[get_db] = _override_get_db(db_session)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ── Data helpers ─────────────────────────────────────────────


def make_tenant(db, slug: str, name: str, subscription=SubscriptionPlan.FREE) -> Tenant:
    tenant = Tenant(slug=slug, name=name, subscription=subscription)
    db.add(tenant)
    db.commit()
    db.refresh(tenant)
    return tenant


def make_user(db, tenant: Tenant, email: str, role=UserRole.MEMBER, password=DEFAULT_PASSWORD) -> User:
    user = User(
        email=email,
        password_hash=hash_password(password),
        role=role,
        tenant_id=tenant.id,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_notes(db, user: User, count: int) -> list[Note]:
    notes = [
        Note(title=f"Note {i}", content=f"Content {i}", user_id=user.id, tenant_id=user.tenant_id)
        for i in range(count)
    ]
    db.add_all(notes)
    db.commit()
    return notes


def headers_for(user: User) -> dict:
    """Authorization headers carrying a real session token for user"""
    token = create_access_token(SessionIdentity.from_user(user))
    return {"Authorization": f"Bearer {token}"}


def create_test_token(
    user_id: str = "test-user-123",
    tenant_id: str = "test-tenant-123",
    tenant_slug: str = "test",
    role: str = "member",
    email: str = "test@test.test",
    expired: bool = False,
    key: str | None = None,
    **overrides,
) -> str:
    """
    Generate JWT token for testing, bypassing the application codec.

    Args:
        expired: If True, create expired token
        key: Signing key, defaults to the configured SECRET_KEY
        overrides: Extra or replacement claims; a value of None drops the claim

    Returns:
        Encoded JWT token
    """
    if expired:
        exp = datetime.now(UTC) - timedelta(minutes=5)
    else:
        exp = datetime.now(UTC) + timedelta(minutes=15)

    payload = {
        "sub": user_id,
        "email": email,
        "role": role,
        "tenant_id": tenant_id,
        "tenant_slug": tenant_slug,
        "exp": exp,
        "iat": datetime.now(UTC),
    }
    payload.update(overrides)
    payload = {k: v for k, v in payload.items() if v is not None}

    return jwt.encode(payload, key or settings.SECRET_KEY, algorithm="HS256")


# ── Tenants and users ────────────────────────────────────────


@pytest.fixture
def acme(db_session):
    """Free-plan tenant 'acme'"""
    return make_tenant(db_session, "acme", "Acme Corp")


@pytest.fixture
def globex(db_session):
    """Free-plan tenant 'globex'"""
    return make_tenant(db_session, "globex", "Globex Corporation")


@pytest.fixture
def acme_admin(db_session, acme):
    return make_user(db_session, acme, "admin@acme.test", role=UserRole.ADMIN)


@pytest.fixture
def acme_member(db_session, acme):
    return make_user(db_session, acme, "user@acme.test")


@pytest.fixture
def globex_admin(db_session, globex):
    return make_user(db_session, globex, "admin@globex.test", role=UserRole.ADMIN)


@pytest.fixture
def globex_member(db_session, globex):
    return make_user(db_session, globex, "user@globex.test")


@pytest.fixture
def admin_headers(acme_admin):
    """Authorization headers for admin@acme.test"""
    return headers_for(acme_admin)


@pytest.fixture
def member_headers(acme_member):
    """Authorization headers for user@acme.test"""
    return headers_for(acme_member)


@pytest.fixture
def globex_admin_headers(globex_admin):
    """Authorization headers for admin@globex.test"""
    return headers_for(globex_admin)


@pytest.fixture
def globex_member_headers(globex_member):
    """Authorization headers for user@globex.test"""
    return headers_for(globex_member)
