"""
Shared pytest fixtures.
"""
import os

# Settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["STORAGE_BACKEND"] = "database"
os.environ["SEED_DATA"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"

from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from hotelpro import models  # noqa: F401
from hotelpro.db import Base, get_db
from hotelpro.main import app
from hotelpro.security import hash_password, issue_token
from hotelpro.storage import DatabaseStorage, MemStorage, reset_memory_storage


@pytest.fixture(scope="function")
def db_engine():
    """In-memory database engine."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine):
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture(scope="function")
def db_storage(db_session):
    """Storage over the same session the test client uses."""
    return DatabaseStorage(db_session)


@pytest.fixture(scope="function")
def fk_session():
    """Session on an in-memory database that enforces foreign keys."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    reset_memory_storage()


@pytest.fixture(params=["memory", "database"])
def storage(request, db_session):
    """Runs a test once per storage backend."""
    if request.param == "memory":
        return MemStorage()
    return DatabaseStorage(db_session)


# ============== Entity helpers ==============

def make_hotel(storage, name="Grand Plaza Hotel"):
    return storage.create_hotel(
        name=name,
        address="123 Downtown Avenue",
        phone="+1-555-0123",
        email="info@grandplaza.com",
        owner_id=1,
    )


def make_room(storage, hotel_id, number="101", room_type="standard", status="available", price="120.00"):
    return storage.create_room(
        hotel_id=hotel_id,
        room_number=number,
        type=room_type,
        status=status,
        price_per_night=Decimal(price),
        amenities=["WiFi", "TV"],
    )


def make_guest(storage, first_name="John", last_name="Smith", email="john.smith@email.com"):
    return storage.create_guest(first_name=first_name, last_name=last_name, email=email, phone="+1-555-0101")


def make_booking(storage, hotel_id, room_id, guest_id, status="pending", payment_status="pending",
                 amount="240.00", created_at=None):
    check_in = datetime(2026, 11, 2, 14, 0)
    fields = dict(
        hotel_id=hotel_id,
        room_id=room_id,
        guest_id=guest_id,
        check_in_date=check_in,
        check_out_date=check_in + timedelta(days=2),
        total_amount=Decimal(amount),
        status=status,
        payment_status=payment_status,
    )
    if created_at is not None:
        fields["created_at"] = created_at
    return storage.create_booking(**fields)


@pytest.fixture
def hotel(storage):
    return make_hotel(storage)


@pytest.fixture
def api_hotel(db_storage):
    return make_hotel(db_storage)


@pytest.fixture
def manager(db_storage):
    return db_storage.create_user(
        username="manager",
        email="manager@grandplaza.com",
        hashed_password=hash_password("secret123"),
        role="manager",
    )


@pytest.fixture
def auth_headers(manager):
    return {"Authorization": f"Bearer {issue_token(manager.id)}"}
