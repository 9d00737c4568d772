"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown with seeded companies, jobs and users
- FastAPI test client
- Bearer tokens for a regular user and an admin
"""

import pytest
from decimal import Decimal
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from jobly.core.config import Settings
from jobly.core.database import Base, create_db_engine, get_db
from jobly.core.security import build_password_context, create_token, get_password_hash
from jobly.models import Company, Job, User
from main import create_app


TEST_SETTINGS = Settings(
    DATABASE_URL="sqlite://",
    SECRET_KEY="test-secret-key",
    ALGORITHM="HS256",
    BCRYPT_ROUNDS=4,  # bcrypt minimum; keeps hashing fast
    LOG_LEVEL="WARNING",
    JSON_LOGS=False,
)

# Use in-memory SQLite for testing (fast, isolated)
engine = create_db_engine(TEST_SETTINGS.SQLALCHEMY_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

app = create_app(TEST_SETTINGS)
pwd_context = build_password_context(TEST_SETTINGS.BCRYPT_ROUNDS)


def seed(db):
    """Three companies (c3 has no jobs), three jobs, a regular user and an admin."""
    db.add_all([
        Company(handle="c1", name="C1", description="Desc1", num_employees=1, logo_url="http://c1.img"),
        Company(handle="c2", name="C2", description="Desc2", num_employees=2, logo_url="http://c2.img"),
        Company(handle="c3", name="C3", description="Desc3", num_employees=3, logo_url="http://c3.img"),
    ])
    db.flush()
    db.add_all([
        Job(title="job1", salary=100, equity=Decimal("0.1"), company_handle="c1"),
        Job(title="job2", salary=200, equity=Decimal("0.2"), company_handle="c2"),
        Job(title="job3", salary=300, equity=None, company_handle="c1"),
    ])
    db.add_all([
        User(
            username="u1",
            password=get_password_hash(pwd_context, "password1"),
            first_name="U1F",
            last_name="U1L",
            email="user1@example.com",
            is_admin=False,
        ),
        User(
            username="admin",
            password=get_password_hash(pwd_context, "adminpass"),
            first_name="AdF",
            last_name="AdL",
            email="admin@example.com",
            is_admin=True,
        ),
    ])
    db.commit()


@pytest.fixture
def db_session():
    """
    Create a fresh, seeded database for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    seed(db)
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def u1_token():
    return create_token({"username": "u1", "isAdmin": False}, TEST_SETTINGS.SECRET_KEY)


@pytest.fixture
def admin_token():
    return create_token({"username": "admin", "isAdmin": True}, TEST_SETTINGS.SECRET_KEY)


@pytest.fixture
def u1_headers(u1_token):
    return {"Authorization": f"Bearer {u1_token}"}


@pytest.fixture
def admin_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def job_ids(db_session):
    """Seeded job ids keyed by title."""
    return {job.title: job.id for job in db_session.query(Job).all()}
