"""Pytest fixtures for testing"""

import os

# Point the app at the test database before settings are loaded
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from datetime import datetime, timedelta, timezone
from typing import Generator, List
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from creditgo_gateway.api.main import create_app
from creditgo_gateway.infrastructure.database.models import Base
from creditgo_gateway.infrastructure.database.session import get_db
from creditgo_gateway.infrastructure.clients.demo_messages import DEMO_SMS_MESSAGES
from creditgo_gateway.domain.models import RawMessage, Transaction, TransactionType


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
def base_date() -> datetime:
    return datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def demo_messages() -> List[RawMessage]:
    """Three months of bank alerts: salary, Upwork, Fiverr, rent and POS"""
    return list(DEMO_SMS_MESSAGES)


@pytest.fixture
def salary_transactions(base_date: datetime) -> List[Transaction]:
    """Three monthly salary credits and weekly spending, newest first"""
    transactions = []

    for month in range(3):
        transactions.append(
            Transaction(
                id=f"credit_{month}",
                type=TransactionType.CREDIT,
                amount=300_000,
                description=f"SALARY/{month}",
                date=base_date + timedelta(days=month * 30),
                source="Salary",
            )
        )

    for day in range(0, 60, 7):
        transactions.append(
            Transaction(
                id=f"debit_{day}",
                type=TransactionType.DEBIT,
                amount=20_000,
                description="Groceries",
                date=base_date + timedelta(days=day),
                source="POS",
            )
        )

    return sorted(transactions, key=lambda t: t.date, reverse=True)
