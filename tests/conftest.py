"""
Pytest fixtures for the warehouse inventory backend.

Provides:
- An in-memory SQLite database, recreated for every test
- A SQLAlchemy session and a FastAPI TestClient bound to it
- Factories for users, items and requests

DATABASE_URL and LOG_DIR are set before the application is imported so the
engine and the log file handler pick them up.
"""

import os
import tempfile

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="warehouse-logs-"))

import pytest
from decimal import Decimal

from fastapi.testclient import TestClient

from database import Base, engine, SessionLocal
import main
from crud import stock_ledger
from models.items import Item
from models.request_items import RequestItem
from models.requests import Request, RequestStatus, RequestPriority
from models.users import User, UserRole
from utils.auth_utils import hash_password


@pytest.fixture(autouse=True)
def _reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(main.app) as test_client:
        yield test_client


@pytest.fixture
def create_user(db):
    """Factory: insert a user with a hashed password."""
    counter = {"n": 0}

    def _create(name=None, email=None, password="secret", role=UserRole.USER, hashed=True):
        counter["n"] += 1
        user = User(
            name=name or f"User {counter['n']}",
            email=email or f"user{counter['n']}@example.com",
            password=hash_password(password) if hashed else password,
            role=role,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _create


@pytest.fixture
def create_item(db):
    """Factory: insert an item directly, without an opening history entry."""

    def _create(name="Widget", quantity=10, min_quantity=2, category="general", unit="pcs", is_active=True):
        item = Item(
            name=name,
            category=category,
            quantity=quantity,
            min_quantity=min_quantity,
            unit=unit,
            price=Decimal("0"),
            status=stock_ledger.derive_status(quantity, min_quantity),
            is_active=is_active,
        )
        db.add(item)
        db.commit()
        db.refresh(item)
        return item

    return _create


@pytest.fixture
def create_request(db):
    """Factory: insert a request with lines given as (item, quantity) pairs."""

    def _create(lines, status=RequestStatus.PENDING, requester=None, project_name="Site build"):
        request = Request(
            project_name=project_name,
            requester_id=requester.id if requester else None,
            reason="",
            priority=RequestPriority.MEDIUM,
            status=status,
        )
        request.items = [RequestItem(item_id=item.id, quantity=quantity) for item, quantity in lines]
        db.add(request)
        db.commit()
        db.refresh(request)
        return request

    return _create
