# In app/crud/book_author_crud.py

import logging
from typing import List
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlalchemy import select, delete, and_
from sqlalchemy.dialects import postgresql, sqlite

from app.models.book_author_model import BookAuthor
from app.db.session import persist
from app.core.exceptions import InternalServerError
from app.core.exception_utils import handle_exceptions

logger = logging.getLogger(__name__)

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class BookAuthorRepository:
    """A specialized repository for the books_authors link table."""

    def __init__(self):
        self.model = BookAuthor
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected database error occurred.",
    )
    async def get_author_ids(self, db: AsyncSession, *, book_id: int) -> List[int]:
        """Lists the ids of the authors linked to a book."""
        statement = (
            select(self.model.author_id)
            .where(self.model.book_id == book_id)
            .order_by(self.model.author_id)
        )
        result = await db.execute(statement)
        return list(result.scalars().all())

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected database error occurred.",
    )
    async def create(self, db: AsyncSession, *, book_id: int, author_id: int) -> None:
        """
        Links an author to a book.

        Linking a pair that is already linked is a no-op.
        """
        insert = _UPSERT_DIALECTS.get(db.bind.dialect.name)
        if insert is not None:
            statement = (
                insert(self.model)
                .values(book_id=book_id, author_id=author_id)
                .on_conflict_do_nothing(index_elements=["book_id", "author_id"])
            )
            await db.execute(statement)
        else:
            existing = await db.execute(
                select(self.model).where(
                    and_(
                        self.model.book_id == book_id,
                        self.model.author_id == author_id,
                    )
                )
            )
            if existing.scalar_one_or_none() is None:
                db.add(self.model(book_id=book_id, author_id=author_id))

        await persist(db)
        self._logger.debug(f"Author {author_id} linked to book {book_id}")

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected database error occurred.",
    )
    async def delete(self, db: AsyncSession, *, book_id: int, author_id: int) -> None:
        """Unlinks an author from a book; a missing link is ignored."""
        statement = delete(self.model).where(
            and_(self.model.book_id == book_id, self.model.author_id == author_id)
        )
        await db.execute(statement)
        await persist(db)
        self._logger.debug(f"Author {author_id} unlinked from book {book_id}")


# Singleton instance
book_author_repository = BookAuthorRepository()
