"""Shared fixtures: in-memory database, API client and record factories."""

import os

# Settings are cached on first import, so the test environment goes in first.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["SHOP_TIMEZONE"] = "UTC"
os.environ["BUSINESS_DAY_START"] = "08:00"
os.environ["BUSINESS_DAY_END"] = "17:00"
os.environ["SLOT_DURATION_MINUTES"] = "30"

from datetime import datetime
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.core.database import get_db
from app.core.permissions import Role
from app.core.security import get_password_hash
from app.main import app as fastapi_app
from app.models import Appointment, Service, Skill, Tech, Tenant, User
from app.models.base import Base
from app.services.auth_service import issue_access_token_for_user
from tests.helpers import TEST_PASSWORD


@pytest.fixture(scope="session")
def password_hash() -> str:
    """Hash once per run; bcrypt is slow."""
    return get_password_hash(TEST_PASSWORD)


@pytest.fixture
def db_session() -> Session:
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(engine)
    TestingSession = sessionmaker(bind=engine, autoflush=False, future=True)
    session = TestingSession()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def client(db_session: Session) -> TestClient:
    def override_get_db():
        yield db_session

    fastapi_app.dependency_overrides[get_db] = override_get_db
    with TestClient(fastapi_app) as test_client:
        yield test_client
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def make_tenant(db_session: Session):
    def _make(name: str = "Patriot Auto") -> Tenant:
        tenant = Tenant(name=name)
        db_session.add(tenant)
        db_session.commit()
        return tenant

    return _make


@pytest.fixture
def tenant(make_tenant) -> Tenant:
    return make_tenant("Patriot Auto")


@pytest.fixture
def other_tenant(make_tenant) -> Tenant:
    return make_tenant("Rival Garage")


@pytest.fixture
def make_user(db_session: Session, password_hash: str):
    def _make(tenant: Tenant, role: Role, email: str | None = None) -> User:
        user = User(
            tenant_id=tenant.id,
            email=email or f"{role.value.lower()}-{uuid4().hex[:8]}@example.com",
            hashed_password=password_hash,
            role=role,
        )
        db_session.add(user)
        db_session.commit()
        return user

    return _make


@pytest.fixture
def auth_headers(make_user, tenant: Tenant):
    """Bearer headers for a fresh user with the given role (default tenant unless given)."""

    def _headers(role: Role, for_tenant: Tenant | None = None) -> dict[str, str]:
        user = make_user(for_tenant or tenant, role)
        return {"Authorization": f"Bearer {issue_access_token_for_user(user)}"}

    return _headers


@pytest.fixture
def make_tech(db_session: Session):
    def _make(tenant: Tenant, name: str, skills: list[str] | None = None, is_active: bool = True) -> Tech:
        tech = Tech(
            tenant_id=tenant.id,
            name=name,
            is_active=is_active,
            skills=[Skill(tenant_id=tenant.id, name=s) for s in (skills or [])],
        )
        db_session.add(tech)
        db_session.commit()
        return tech

    return _make


@pytest.fixture
def make_service(db_session: Session):
    def _make(tenant: Tenant, name: str, duration_minutes: int | None = None) -> Service:
        service = Service(tenant_id=tenant.id, name=name, duration_minutes=duration_minutes)
        db_session.add(service)
        db_session.commit()
        return service

    return _make


@pytest.fixture
def make_appointment(db_session: Session):
    def _make(tech: Tech, start: datetime, end: datetime, title: str = "Oil change") -> Appointment:
        appointment = Appointment(
            tenant_id=tech.tenant_id,
            title=title,
            start_time=start,
            end_time=end,
            tech_id=tech.id,
        )
        db_session.add(appointment)
        db_session.commit()
        return appointment

    return _make
