import logging
from typing import Optional, List, Dict, Any, Union

from app.models.book_model import Book
from app.models.author_model import Author
from app.models.book_author_model import BookAuthor
from app.schemas.author_schema import ExistingAuthor, NewAuthor

from sqlmodel.ext.asyncio.session import AsyncSession
from sqlmodel import select, func, and_
from sqlalchemy import update

from app.crud.base import BaseRepository
from app.db.session import persist
from app.core.exception_utils import handle_exceptions, raise_for_status
from app.core.exceptions import InternalServerError


logger = logging.getLogger(__name__)


class BookRepository(BaseRepository[Book]):
    """Repository for all database operations related to the Book model."""

    def __init__(self):
        super().__init__(Book)
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected database error occurred.",
    )
    async def get(self, db: AsyncSession, *, obj_id: int) -> Optional[Book]:
        """Retrieves a book by its ID."""
        statement = (
            select(self.model)
            .where(self.model.id == obj_id)
            .execution_options(populate_existing=True)
        )
        result = await db.execute(statement)
        return result.scalar_one_or_none()

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected database error occurred.",
    )
    async def exists(self, db: AsyncSession, *, obj_id: int) -> bool:
        """Check if a book exists by id"""
        statement = (
            select(func.count()).select_from(self.model).where(self.model.id == obj_id)
        )
        result = await db.execute(statement)
        return result.scalar_one() > 0

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected database error occurred.",
    )
    async def count_by_title_and_authors(
        self,
        db: AsyncSession,
        *,
        title: str,
        authors: List[Union[ExistingAuthor, NewAuthor]],
    ) -> int:
        """
        Counts books titled ``title`` that are already linked to any of ``authors``.

        Authors given by id are matched on the link table, authors given by
        value are matched on exact name and birthday. The count is summed over
        all authors.
        """
        total = 0
        for author in authors:
            statement = (
                select(func.count())
                .select_from(self.model)
                .join(BookAuthor, BookAuthor.book_id == self.model.id)
            )
            if isinstance(author, ExistingAuthor):
                statement = statement.where(
                    and_(
                        self.model.title == title,
                        BookAuthor.author_id == author.author_id,
                    )
                )
            else:
                statement = statement.join(
                    Author, Author.id == BookAuthor.author_id
                ).where(
                    and_(
                        self.model.title == title,
                        Author.name == author.name,
                        Author.birthday == author.birthday,
                    )
                )
            total += (await db.execute(statement)).scalar_one()

        return total

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected database error occurred.",
    )
    async def create(self, db: AsyncSession, *, obj_in: Book) -> Book:
        """Create a new book. Expects a pre-constructed Book model object."""
        db.add(obj_in)
        await persist(db)
        await db.refresh(obj_in)

        raise_for_status(
            condition=obj_in.id is None,
            exception=InternalServerError,
            detail="Inserting into books did not return an id.",
        )
        self._logger.info(f"Book created: {obj_in.id}")
        return obj_in

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected database error occurred.",
    )
    async def update_by_id(
        self, db: AsyncSession, *, obj_id: int, fields_to_update: Dict[str, Any]
    ) -> int:
        """Updates specific fields of a book and refreshes its modification time."""
        values = {
            field: value
            for field, value in fields_to_update.items()
            if field not in {"id", "created_at", "updated_at"}
        }
        statement = (
            update(self.model)
            .where(self.model.id == obj_id)
            .values(**values, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(statement)
        await persist(db)

        self._logger.info(f"Book fields updated for {obj_id}: {list(values.keys())}")
        return result.rowcount


book_repository = BookRepository()
