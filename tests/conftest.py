import os
from datetime import datetime, timedelta
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker

from app.main import app
from app.db import Base, get_db
from app.models.booking import Booking, BookingStatus
from app.models.item import Item
from app.models.user import User
from app.utils.auth import create_access_token, get_password_hash
from app.utils.clock import get_now

# Test database setup
if not os.path.exists("./out"):
    os.makedirs("./out")

SQLALCHEMY_DATABASE_URL = "sqlite:///./out/tests.db"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create test tables
Base.metadata.create_all(bind=engine)

# Every request sees the same instant
NOW = datetime(2026, 3, 15, 12, 0, 0)


# Dependency override
def override_get_db():
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db
app.dependency_overrides[get_now] = lambda: NOW


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def now():
    return NOW


# Fixtures
@pytest.fixture(autouse=True)
def clear_db():
    """Clear all data from all tables after each test"""
    yield
    with engine.connect() as conn:
        trans = conn.begin()
        conn.execute(text("PRAGMA foreign_keys = OFF"))
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())
        conn.execute(text("PRAGMA foreign_keys = ON"))
        trans.commit()


@pytest.fixture
def test_db():
    """Provide a database session for testing"""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_next_user():
    """Helper function to generate unique user numbers"""
    if not hasattr(get_next_user, "user_count"):
        get_next_user.user_count = 0
    get_next_user.user_count += 1
    return get_next_user.user_count


@pytest.fixture
def make_user(test_db):
    """Factory creating users directly in the database"""

    def _make_user(name=None, password="testpassword"):
        number = get_next_user()
        user = User(
            name=name or f"user_{number}",
            email=f"user_{number}@example.com",
            hashed_password=get_password_hash(password),
        )
        test_db.add(user)
        test_db.commit()
        test_db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_item(test_db):
    def _make_item(owner, name="Drill", description="Cordless drill", available=True, request_id=None):
        item = Item(
            name=name,
            description=description,
            available=available,
            owner_id=owner.id,
            request_id=request_id,
        )
        test_db.add(item)
        test_db.commit()
        test_db.refresh(item)
        return item

    return _make_item


@pytest.fixture
def make_booking(test_db):
    """Insert a booking with any status, bypassing the lifecycle checks"""

    def _make_booking(item, booker, start_offset, end_offset, status=BookingStatus.WAITING):
        booking = Booking(
            item_id=item.id,
            booker_id=booker.id,
            start_time=NOW + timedelta(days=start_offset),
            end_time=NOW + timedelta(days=end_offset),
            status=status,
        )
        test_db.add(booking)
        test_db.commit()
        test_db.refresh(booking)
        return booking

    return _make_booking


@pytest.fixture
def owner(make_user):
    return make_user(name="owner")


@pytest.fixture
def booker(make_user):
    return make_user(name="booker")


@pytest.fixture
def item(make_item, owner):
    return make_item(owner)


@pytest.fixture
def auth_headers():
    """Build bearer headers for a user without going through /auth/login"""

    def _auth_headers(user):
        token = create_access_token({"sub": user.email})
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
