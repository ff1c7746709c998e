# tests/services/test_lookup_service.py
import pytest

from app.services.lookup_service import LookupService
from app.schemas.book_schema import BookSummary
from app.core.exceptions import ResourceNotFound, InvalidReference
from tests.mocks.mock_repositories import InMemoryCatalog

pytestmark = pytest.mark.asyncio


@pytest.fixture
def lookup(fake_repositories) -> LookupService:
    service = LookupService()
    service.book_repository, service.author_repository, _ = fake_repositories
    return service


async def test_find_books_by_author_name_collects_books_of_all_namesakes(
    lookup: LookupService, catalog: InMemoryCatalog
):
    catalog.add_author(5, "Jane Doe")
    catalog.add_author(9, "Jane Doe")
    catalog.add_author(6, "John Roe")
    catalog.add_book(200, "Second", price=900, is_published=False)
    catalog.add_book(100, "First", price=1200)
    catalog.add_book(300, "Other")
    catalog.link(200, 9)
    catalog.link(100, 5)
    catalog.link(300, 6)

    books = await lookup.find_books_by_author_name(None, name="Jane Doe")

    assert books == [
        BookSummary(title="First", price=1200, is_published=True),
        BookSummary(title="Second", price=900, is_published=False),
    ]


async def test_find_books_by_author_name_no_match(
    lookup: LookupService, catalog: InMemoryCatalog
):
    catalog.add_author(5, "Jane Doe")

    with pytest.raises(ResourceNotFound, match="No books match the search criteria."):
        await lookup.find_books_by_author_name(None, name="Nobody")


async def test_find_books_by_author_name_author_without_books(
    lookup: LookupService, catalog: InMemoryCatalog
):
    catalog.add_author(5, "Jane Doe")

    with pytest.raises(ResourceNotFound):
        await lookup.find_books_by_author_name(None, name="Jane Doe")


async def test_find_books_by_author_name_dangling_link(
    lookup: LookupService, catalog: InMemoryCatalog
):
    catalog.add_author(5, "Jane Doe")
    catalog.link(404, 5)

    with pytest.raises(InvalidReference) as exc:
        await lookup.find_books_by_author_name(None, name="Jane Doe")

    assert exc.value.status_code == 422
