import logging
from typing import Optional, List, Union

from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import settings
from app.crud.book_crud import book_repository
from app.crud.author_crud import author_repository
from app.crud.book_author_crud import book_author_repository
from app.db.session import transaction_scope
from app.models.book_model import Book
from app.models.author_model import Author
from app.schemas.author_schema import ExistingAuthor, NewAuthor
from app.schemas.book_schema import BookRegister
from app.core.exception_utils import raise_for_status
from app.core.exceptions import ResourceAlreadyExists, InvalidReference

logger = logging.getLogger(__name__)


class RegistrationService:
    """
    Registers a book together with its authors.

    A book is refused when a book with the same title is already linked to
    any of the requested authors. Otherwise the book row is inserted first,
    then each author is resolved (reused, created, or checked by id) and
    linked in request order.
    """

    def __init__(self):
        self.book_repository = book_repository
        self.author_repository = author_repository
        self.book_author_repository = book_author_repository
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    async def register_book(
        self,
        db: AsyncSession,
        *,
        book_data: BookRegister,
        atomic: Optional[bool] = None,
    ) -> int:
        """Register a book and return its id."""
        if atomic is None:
            atomic = settings.ATOMIC_BOOK_WRITES

        duplicates = await self.book_repository.count_by_title_and_authors(
            db=db, title=book_data.title, authors=book_data.authors
        )
        raise_for_status(
            condition=duplicates > 0,
            exception=ResourceAlreadyExists,
            resource_type="Book",
            detail=f"Book '{book_data.title}' is already registered for one of these authors.",
        )

        async with transaction_scope(db, atomic=atomic):
            book = await self.book_repository.create(
                db=db,
                obj_in=Book(**book_data.model_dump(exclude={"authors"})),
            )

            author_ids: List[int] = []
            for entry in book_data.authors:
                author_id = await self._resolve_author(db, entry=entry)
                await self.book_author_repository.create(
                    db=db, book_id=book.id, author_id=author_id
                )
                author_ids.append(author_id)

        self._logger.info(
            f"New book registered: {book.id}",
            extra={"book_id": book.id, "author_ids": author_ids},
        )
        return book.id

    async def _resolve_author(
        self, db: AsyncSession, *, entry: Union[ExistingAuthor, NewAuthor]
    ) -> int:
        """Return the id of the author an entry stands for, creating it if needed."""
        if isinstance(entry, ExistingAuthor):
            author_exists = await self.author_repository.exists(
                db=db, obj_id=entry.author_id
            )
            raise_for_status(
                condition=not author_exists,
                exception=InvalidReference,
                resource_type="Author",
                detail=f"author id {entry.author_id} does not exist",
            )
            return entry.author_id

        existing = await self.author_repository.get_by_name_and_birthday(
            db=db, name=entry.name, birthday=entry.birthday
        )
        if existing is not None:
            return existing.id

        author = await self.author_repository.create(
            db=db, obj_in=Author(**entry.model_dump(include={"name", "birthday"}))
        )
        return author.id


registration_service = RegistrationService()
