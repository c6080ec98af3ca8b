import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker

from roombooker.main import app
from roombooker.db import Base, get_db
from roombooker.models.booking import Booking
from roombooker.models.user import User
from roombooker.utils.auth import ADMIN_ROLE, create_access_token
from tests.helpers import END_DATE, START_DATE

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


# Dependency override
def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


# Fixtures
@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture(autouse=True)
def clear_db():
    """Clear all data from all tables after each test"""
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


@pytest.fixture
def test_users(test_db):
    """Three users: u1, u2 and u3."""
    users = [
        User(
            id=f"u{n}",
            first_name=f"First{n}",
            last_name=f"Last{n}",
            position="Engineer",
            picture=f"https://example.com/u{n}.png",
            email=f"u{n}@example.com",
        )
        for n in (1, 2, 3)
    ]
    test_db.add_all(users)
    test_db.commit()
    for user in users:
        test_db.refresh(user)
    return users


@pytest.fixture
def test_booking(test_db, test_users):
    """A booking in room-1 attached to u1 and u2."""
    booking = Booking(
        start_date=START_DATE,
        end_date=END_DATE,
        purpose="Team Meeting",
        room_id="room-1",
        users=test_users[:2],
    )
    test_db.add(booking)
    test_db.commit()
    test_db.refresh(booking)
    return booking


@pytest.fixture
def auth_headers():
    """Bearer token for u1 without extra roles."""
    return {"Authorization": f"Bearer {create_access_token('u1')}"}


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {create_access_token('admin-1', roles=[ADMIN_ROLE])}"}
