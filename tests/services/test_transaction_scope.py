# tests/services/test_transaction_scope.py
"""
Services against the SQLite test database, with and without a transaction scope.

Without a scope every repository write commits on its own, so a failure
halfway leaves the earlier writes in place. Inside a scope nothing is kept.
"""
import pytest

from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession

from app.crud.book_author_crud import book_author_repository
from app.crud.book_crud import book_repository
from app.db.session import transaction_scope, in_transaction_scope
from app.models.author_model import Author
from app.models.book_model import Book
from app.schemas.book_schema import BookRegister, BookAuthorsUpdate
from app.services.book_sync_service import book_sync_service
from app.services.registration_service import registration_service
from app.core.exceptions import InvalidReference

pytestmark = pytest.mark.asyncio


async def count_books(db_session: AsyncSession) -> int:
    result = await db_session.execute(select(func.count()).select_from(Book))
    return result.scalar_one()


def register_request(author_ids) -> BookRegister:
    return BookRegister(
        title="Half Written",
        price=100,
        is_published=False,
        authors=[
            {"author_id": author_id, "name": "Jane Doe", "birthday": "1970-05-01"}
            for author_id in author_ids
        ],
    )


async def test_register_book_non_atomic_keeps_partial_writes(
    db_session: AsyncSession, sample_authors: list[Author]
):
    with pytest.raises(InvalidReference):
        await registration_service.register_book(
            db_session,
            book_data=register_request([sample_authors[0].id, 999]),
            atomic=False,
        )

    assert await count_books(db_session) == 1


async def test_register_book_atomic_rolls_back(
    db_session: AsyncSession, sample_authors: list[Author]
):
    with pytest.raises(InvalidReference):
        await registration_service.register_book(
            db_session,
            book_data=register_request([sample_authors[0].id, 999]),
            atomic=True,
        )

    assert await count_books(db_session) == 0
    assert not in_transaction_scope(db_session)


async def test_register_book_atomic_commits_on_success(
    db_session: AsyncSession, sample_authors: list[Author]
):
    book_id = await registration_service.register_book(
        db_session,
        book_data=register_request([author.id for author in sample_authors]),
        atomic=True,
    )

    author_ids = await book_author_repository.get_author_ids(
        db=db_session, book_id=book_id
    )
    assert author_ids == sorted(author.id for author in sample_authors)


async def test_update_book_authors_atomic_restores_links(
    db_session: AsyncSession, sample_book: Book, sample_authors: list[Author]
):
    # rollback expires loaded objects, keep plain ids
    book_id = sample_book.id
    jane_id, john_id = sample_authors[0].id, sample_authors[1].id

    with pytest.raises(InvalidReference):
        await book_sync_service.update_book_authors(
            db_session,
            book_id=book_id,
            book_data=BookAuthorsUpdate(author_ids=[jane_id, 999], price=1),
            atomic=True,
        )

    author_ids = await book_author_repository.get_author_ids(
        db=db_session, book_id=book_id
    )
    book = await book_repository.get(db=db_session, obj_id=book_id)
    assert author_ids == sorted([jane_id, john_id])
    assert book.price == 1000


async def test_update_book_authors_non_atomic_keeps_unlinks(
    db_session: AsyncSession, sample_book: Book, sample_authors: list[Author]
):
    jane, _, _ = sample_authors

    with pytest.raises(InvalidReference):
        await book_sync_service.update_book_authors(
            db_session,
            book_id=sample_book.id,
            book_data=BookAuthorsUpdate(author_ids=[jane.id, 999]),
            atomic=False,
        )

    assert await book_author_repository.get_author_ids(
        db=db_session, book_id=sample_book.id
    ) == [jane.id]


async def test_nested_scope_is_noop(db_session: AsyncSession):
    async with transaction_scope(db_session, atomic=True):
        async with transaction_scope(db_session, atomic=True):
            assert in_transaction_scope(db_session)
        # inner scope must not end the outer one
        assert in_transaction_scope(db_session)

    assert not in_transaction_scope(db_session)
