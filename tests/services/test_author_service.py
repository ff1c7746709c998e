# tests/services/test_author_service.py
from datetime import date

import pytest

from app.services.author_service import AuthorService
from app.schemas.author_schema import AuthorCreate, AuthorUpdate
from app.core.exceptions import ResourceNotFound
from tests.mocks.mock_repositories import InMemoryCatalog

pytestmark = pytest.mark.asyncio


@pytest.fixture
def authors(fake_repositories) -> AuthorService:
    service = AuthorService()
    service.author_repository = fake_repositories[1]
    return service


async def test_register_author(authors: AuthorService, catalog: InMemoryCatalog):
    author_id = await authors.register_author(
        None, author_data=AuthorCreate(name="  Jane Doe ", birthday="1970-05-01")
    )

    assert author_id == 1
    assert catalog.authors[1].name == "Jane Doe"
    assert catalog.authors[1].birthday == date(1970, 5, 1)


async def test_register_author_twice_creates_two_rows(
    authors: AuthorService, catalog: InMemoryCatalog
):
    data = AuthorCreate(name="Jane Doe", birthday="1970-05-01")

    first = await authors.register_author(None, author_data=data)
    second = await authors.register_author(None, author_data=data)

    assert first != second
    assert len(catalog.authors) == 2


async def test_update_author(authors: AuthorService, catalog: InMemoryCatalog):
    catalog.add_author(4, "Jane Doe")

    result = await authors.update_author(
        None,
        author_id=4,
        author_data=AuthorUpdate(name="Jane A. Doe", birthday="1971-01-02"),
    )

    assert result == 4
    assert catalog.authors[4].name == "Jane A. Doe"
    assert catalog.authors[4].birthday == date(1971, 1, 2)


async def test_update_author_not_found(authors: AuthorService, catalog: InMemoryCatalog):
    with pytest.raises(ResourceNotFound, match="Author with id 8 not found."):
        await authors.update_author(
            None,
            author_id=8,
            author_data=AuthorUpdate(name="Jane Doe", birthday="1971-01-02"),
        )

    assert ("author.update", 8) not in catalog.calls
