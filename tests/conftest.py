"""Pytest fixtures for testing"""

import os

# Point settings at SQLite before any application module builds its engine
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("ADVICE_ENABLED", "false")

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from giving_ledger.api.main import create_app
from giving_ledger.domain.models import UserFinancialProfile
from giving_ledger.infrastructure.database.models import Base
from giving_ledger.infrastructure.database.session import get_db
from tests.fakes import InMemoryLedgerStore, InMemoryProfileStore


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def ledger() -> InMemoryLedgerStore:
    return InMemoryLedgerStore()


@pytest.fixture
def profiles() -> InMemoryProfileStore:
    store = InMemoryProfileStore()
    store.create(UserFinancialProfile(user_id="user_1", donation_percentage=5))
    return store


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)
