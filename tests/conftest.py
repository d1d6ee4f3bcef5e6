"""Pytest fixtures for testing"""

import pytest
from datetime import date
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from installment_tracker.api.main import create_app
from installment_tracker.domain.store import PlanStore
from installment_tracker.infrastructure.database.models import Base
from installment_tracker.infrastructure.database.session import get_db


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


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


@pytest.fixture
def store() -> PlanStore:
    """Store holding three plans: Laptop, Phone, Sofa (in that order)"""
    store = PlanStore()
    store.add_plan("Laptop", date(2024, 1, 1), 3, 300)
    store.add_plan("Phone", date(2024, 2, 15), 6, 1200)
    store.add_plan("Sofa", date(2023, 11, 30), 4, 1000)
    return store
