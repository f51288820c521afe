"""Pytest configuration and fixtures."""

import os
from datetime import UTC, datetime
from decimal import Decimal

# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace(
        "/gift_coordination", "/gift_coordination_test"
    )
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
    os.environ["DATABASE_URL"] = SQLALCHEMY_DATABASE_URL

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from src.database import Base  # noqa: E402
from src.models import (  # noqa: E402
    Celebration,
    Contribution,
    Group,
    GroupMember,
    Item,
    User,
)
from src.models.enums import BudgetApproach, ItemType  # noqa: E402
from src.services.favorite_service import FavoriteService  # noqa: E402
from src.services.locks import KeyedLock  # noqa: E402
from src.store import Store  # noqa: E402

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def store(db):
    """Store client bound to the test session."""
    return Store(db)


@pytest.fixture
def favorites(store):
    """Favorite service with its own lock registry."""
    return FavoriteService(store, locks=KeyedLock())


@pytest.fixture
def make_user(db):
    """Factory creating users."""
    counter = {"n": 0}

    def _make_user(name: str = "Member") -> User:
        counter["n"] += 1
        user = User(email=f"user{counter['n']}@example.com", name=name)
        db.add(user)
        db.commit()
        return user

    return _make_user


@pytest.fixture
def make_group(db):
    """Factory creating groups with members."""

    def _make_group(
        *members: User,
        name: str = "Family",
        approach: BudgetApproach | None = None,
        amount: int | None = None,
        created_at: datetime | None = None,
    ) -> Group:
        group = Group(
            name=name,
            budget_approach=approach,
            budget_amount=amount,
            created_at=created_at or datetime(2025, 6, 1, tzinfo=UTC),
        )
        db.add(group)
        db.flush()
        for member in members:
            db.add(GroupMember(group_id=group.id, user_id=member.id, role="member"))
        db.commit()
        return group

    return _make_group


@pytest.fixture
def make_item(db):
    """Factory creating wishlist items directly in the table."""

    def _make_item(
        owner: User,
        title: str = "Headphones",
        priority: int = 0,
        item_type: ItemType = ItemType.STANDARD,
    ) -> Item:
        item = Item(owner_id=owner.id, title=title, priority=priority, item_type=item_type)
        db.add(item)
        db.commit()
        return item

    return _make_item


@pytest.fixture
def add_celebration(db):
    """Factory creating a celebration with contribution amounts (dollar strings)."""

    def _add_celebration(group: Group, created_at: datetime, *amounts: str) -> Celebration:
        celebration = Celebration(group_id=group.id, title="Birthday", created_at=created_at)
        db.add(celebration)
        db.flush()
        for amount in amounts:
            db.add(Contribution(celebration_id=celebration.id, amount=Decimal(amount)))
        db.commit()
        return celebration

    return _add_celebration
