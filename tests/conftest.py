from datetime import date
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from app.db import base  # noqa: F401
from app.db.session import get_session
from app.main import app
from app.models.author_model import Author
from app.models.book_model import Book
from tests.mocks.mock_repositories import (
    InMemoryCatalog,
    FakeBookRepository,
    FakeAuthorRepository,
    FakeBookAuthorRepository,
)
from tests.mocks.db_factories import create_author, create_book

# --- Test Database Setup ---
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# --- Pytest Fixtures ---


@pytest_asyncio.fixture(scope="function")
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    A fresh in-memory database with all tables for each test function.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """
    Provides a session bound to the per-test database.
    """
    session_factory = sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def test_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Provides an HTTP client for API testing, overriding the DB dependency.
    """

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_session] = override_get_session

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://testserver"
    ) as client:
        yield client

    app.dependency_overrides.clear()


# --- Fake repositories ---


@pytest.fixture
def catalog() -> InMemoryCatalog:
    """Empty in-memory catalog shared by the fake repositories."""
    return InMemoryCatalog()


@pytest.fixture
def fake_repositories(catalog: InMemoryCatalog):
    return (
        FakeBookRepository(catalog),
        FakeAuthorRepository(catalog),
        FakeBookAuthorRepository(catalog),
    )


# --- Test Data Fixtures ---


@pytest_asyncio.fixture
async def sample_authors(db_session: AsyncSession) -> list[Author]:
    """Three stored authors."""
    return [
        await create_author(db_session, "Jane Doe", date(1970, 5, 1)),
        await create_author(db_session, "John Roe", date(1965, 3, 12)),
        await create_author(db_session, "Mary Major", date(1990, 11, 30)),
    ]


@pytest_asyncio.fixture
async def sample_book(db_session: AsyncSession, sample_authors: list[Author]) -> Book:
    """A book linked to the first two sample authors."""
    return await create_book(
        db_session,
        "Shared Worlds",
        author_ids=[sample_authors[0].id, sample_authors[1].id],
    )
