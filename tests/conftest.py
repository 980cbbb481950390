"""
Test configuration and fixtures for the LightBnB data-access layer.
Provides a recording fake client, an in-memory SQLite database, and test data factories.
"""

import pytest
from datetime import date
from typing import Any, AsyncGenerator, Dict, List, Optional, Sequence
from sqlalchemy import (
    Boolean,
    Column,
    Date,
    ForeignKey,
    Integer,
    MetaData,
    SmallInteger,
    String,
    Table,
    Text,
)
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from lightbnb.database import QueryResult, SQLAlchemyDatabase
from lightbnb.repositories import PropertyRepository, ReservationRepository, UserRepository


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# LightBnB schema, for the SQLite-backed tests only
metadata = MetaData()

users_table = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String(255), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column("password", String(255), nullable=False),
)

properties_table = Table(
    "properties",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("owner_id", Integer, ForeignKey("users.id")),
    Column("title", String(255)),
    Column("description", Text),
    Column("thumbnail_photo_url", String(255)),
    Column("cover_photo_url", String(255)),
    Column("cost_per_night", Integer, nullable=False, server_default="0"),
    Column("parking_spaces", Integer, server_default="0"),
    Column("number_of_bathrooms", Integer, server_default="0"),
    Column("number_of_bedrooms", Integer, server_default="0"),
    Column("country", String(255)),
    Column("street", String(255)),
    Column("city", String(255)),
    Column("province", String(255)),
    Column("post_code", String(255)),
    Column("active", Boolean, server_default="1"),
)

reservations_table = Table(
    "reservations",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("start_date", Date, nullable=False),
    Column("end_date", Date, nullable=False),
    Column("property_id", Integer, ForeignKey("properties.id")),
    Column("guest_id", Integer, ForeignKey("users.id")),
)

property_reviews_table = Table(
    "property_reviews",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("guest_id", Integer, ForeignKey("users.id")),
    Column("property_id", Integer, ForeignKey("properties.id")),
    Column("reservation_id", Integer, ForeignKey("reservations.id")),
    Column("rating", SmallInteger, nullable=False, server_default="0"),
    Column("message", Text),
)


class RecordingDatabase:
    """DatabaseClient double that records statements and replays canned rows."""

    def __init__(self, rows: Optional[List[Dict[str, Any]]] = None, error: Optional[Exception] = None):
        self.rows = rows or []
        self.error = error
        self.calls = []

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> QueryResult:
        self.calls.append((sql, list(params)))
        if self.error is not None:
            raise self.error
        return QueryResult(rows=[dict(row) for row in self.rows])

    @property
    def last_sql(self) -> str:
        return self.calls[-1][0]

    @property
    def last_params(self) -> List[Any]:
        return self.calls[-1][1]


@pytest.fixture
def recording_db() -> RecordingDatabase:
    """Fake client returning no rows."""
    return RecordingDatabase()


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory SQLite engine with the LightBnB tables created."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def database(engine: AsyncEngine) -> SQLAlchemyDatabase:
    """SQLAlchemy-backed client over the test engine."""
    return SQLAlchemyDatabase(engine)


# Repository fixtures
@pytest.fixture
def user_repository(database: SQLAlchemyDatabase) -> UserRepository:
    return UserRepository(database)


@pytest.fixture
def property_repository(database: SQLAlchemyDatabase) -> PropertyRepository:
    return PropertyRepository(database)


@pytest.fixture
def reservation_repository(database: SQLAlchemyDatabase) -> ReservationRepository:
    return ReservationRepository(database)


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    def create_user_data(
        name: str = "Test User",
        email: str = "test@example.com",
        password: str = "$2a$10$FB/BOAVhpuLvpOREQVmvmezD4ED/.JBIDRh70tGevYzYzQgFId2u.",
    ) -> dict:
        return {"name": name, "email": email, "password": password}


class PropertyFactory:
    """Factory for creating test property rows."""

    @staticmethod
    def create_property_data(
        owner_id: int = 1,
        title: str = "Test Property",
        city: str = "Test City",
        cost_per_night: int = 100,
        **extra
    ) -> dict:
        return {
            "owner_id": owner_id,
            "title": title,
            "city": city,
            "cost_per_night": cost_per_night,
            **extra,
        }


async def seed(engine: AsyncEngine, table: Table, rows: List[Dict[str, Any]]) -> None:
    """Insert fixture rows directly, bypassing the repositories."""
    async with engine.begin() as conn:
        await conn.execute(table.insert(), rows)


@pytest.fixture
async def listings(engine: AsyncEngine) -> None:
    """
    Two owners, four reviewed properties and one unreviewed property.

    Average ratings: Cancun 4.5, Cancun Beach 2.0, Vancouver 5.0, Toronto 3.0.
    """
    await seed(engine, users_table, [
        {"id": 1, "name": "Owner One", "email": "one@example.com", "password": "x"},
        {"id": 2, "name": "Owner Two", "email": "two@example.com", "password": "x"},
        {"id": 3, "name": "Guest", "email": "guest@example.com", "password": "x"},
    ])
    await seed(engine, properties_table, [
        {"id": 1, "owner_id": 1, "title": "Cancun", "city": "Cancun", "cost_per_night": 300},
        {"id": 2, "owner_id": 2, "title": "Cancun Beach", "city": "Cancun", "cost_per_night": 150},
        {"id": 3, "owner_id": 1, "title": "Vancouver", "city": "Vancouver", "cost_per_night": 500},
        {"id": 4, "owner_id": 2, "title": "Toronto", "city": "Toronto", "cost_per_night": 80},
        {"id": 5, "owner_id": 1, "title": "Unreviewed", "city": "Cancun", "cost_per_night": 50},
    ])
    await seed(engine, property_reviews_table, [
        {"guest_id": 3, "property_id": 1, "rating": 4},
        {"guest_id": 3, "property_id": 1, "rating": 5},
        {"guest_id": 3, "property_id": 2, "rating": 2},
        {"guest_id": 3, "property_id": 3, "rating": 5},
        {"guest_id": 3, "property_id": 4, "rating": 3},
    ])


@pytest.fixture
async def guest_reservations(engine: AsyncEngine, listings) -> None:
    """Twelve reservations for guest 3, inserted out of date order."""
    rows = []
    for index in range(12):
        day = 28 - index * 2
        rows.append({
            "id": index + 1,
            "start_date": date(2023, 6, day),
            "end_date": date(2023, 6, day + 1),
            "property_id": (index % 4) + 1,
            "guest_id": 3,
        })
    await seed(engine, reservations_table, rows)
