# tests/mocks/db_factories.py
from datetime import date

from sqlmodel.ext.asyncio.session import AsyncSession

from app.models.author_model import Author
from app.models.book_model import Book
from app.models.book_author_model import BookAuthor


async def create_author(
    db_session: AsyncSession, name: str, birthday: date = date(1980, 1, 1)
) -> Author:
    author = Author(name=name, birthday=birthday)
    db_session.add(author)
    await db_session.commit()
    await db_session.refresh(author)
    return author


async def create_book(
    db_session: AsyncSession,
    title: str,
    *,
    price: int = 1000,
    is_published: bool = True,
    author_ids=(),
) -> Book:
    """Store a book directly, linked to ``author_ids``."""
    book = Book(title=title, price=price, is_published=is_published)
    db_session.add(book)
    await db_session.commit()
    await db_session.refresh(book)

    for author_id in author_ids:
        db_session.add(BookAuthor(book_id=book.id, author_id=author_id))
    await db_session.commit()
    return book
