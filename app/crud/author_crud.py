import logging
from datetime import date
from typing import Optional, List, Dict, Any

from app.models.author_model import Author
from app.models.book_author_model import BookAuthor

from sqlmodel.ext.asyncio.session import AsyncSession
from sqlmodel import select, func, and_
from sqlalchemy import update

from app.crud.base import BaseRepository
from app.db.session import persist
from app.core.exception_utils import handle_exceptions, raise_for_status
from app.core.exceptions import InternalServerError


logger = logging.getLogger(__name__)


class AuthorRepository(BaseRepository[Author]):
    """Repository for all database operations related to the Author model."""

    def __init__(self):
        super().__init__(Author)
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected database error occurred.",
    )
    async def get(self, db: AsyncSession, *, obj_id: int) -> Optional[Author]:
        """Get author by id"""

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
        """Check if an author exists by id"""
        statement = (
            select(func.count()).select_from(self.model).where(self.model.id == obj_id)
        )
        result = await db.execute(statement)
        return result.scalar_one() > 0

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected database error occurred.",
    )
    async def get_by_name_and_birthday(
        self, db: AsyncSession, *, name: str, birthday: date
    ) -> Optional[Author]:
        """Fetch the oldest author with exactly this name and birthday"""

        statement = (
            select(self.model)
            .where(and_(self.model.name == name, self.model.birthday == birthday))
            .order_by(self.model.id)
            .limit(1)
        )
        result = await db.execute(statement)
        return result.scalar_one_or_none()

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected database error occurred.",
    )
    async def get_book_ids_by_name(self, db: AsyncSession, *, name: str) -> List[int]:
        """
        Collects the ids of books linked to any author named exactly ``name``.

        Authors sharing a name each contribute their books. Ids come back
        ordered by author id, then book id.
        """
        statement = (
            select(BookAuthor.book_id)
            .join(self.model, self.model.id == BookAuthor.author_id)
            .where(self.model.name == name)
            .order_by(BookAuthor.author_id, BookAuthor.book_id)
        )
        result = await db.execute(statement)
        return list(result.scalars().all())

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected database error occurred.",
    )
    async def create(self, db: AsyncSession, *, obj_in: Author) -> Author:
        """create an author"""

        db.add(obj_in)
        await persist(db)
        await db.refresh(obj_in)

        raise_for_status(
            condition=obj_in.id is None,
            exception=InternalServerError,
            detail="Inserting into authors did not return an id.",
        )
        self._logger.info(f"Author created: {obj_in.id}")
        return obj_in

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected database error occurred.",
    )
    async def update_by_id(
        self, db: AsyncSession, *, obj_id: int, fields_to_update: Dict[str, Any]
    ) -> int:
        """Update an author and refresh its modification time"""

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

        self._logger.info(
            f"Author fields updated for {obj_id}: {list(values.keys())}"
        )
        return result.rowcount


author_repository = AuthorRepository()
