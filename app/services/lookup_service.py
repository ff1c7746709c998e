import logging
from typing import List

from sqlmodel.ext.asyncio.session import AsyncSession

from app.crud.book_crud import book_repository
from app.crud.author_crud import author_repository
from app.schemas.book_schema import BookSummary
from app.core.exception_utils import raise_for_status
from app.core.exceptions import ResourceNotFound, InvalidReference

logger = logging.getLogger(__name__)


class LookupService:
    """Read-only queries from authors to their books."""

    def __init__(self):
        self.book_repository = book_repository
        self.author_repository = author_repository
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    async def find_books_by_author_name(
        self, db: AsyncSession, *, name: str
    ) -> List[BookSummary]:
        """
        Get the books of every author whose name matches exactly.

        Books are returned in the order their ids were resolved.
        """
        book_ids = await self.author_repository.get_book_ids_by_name(db=db, name=name)
        raise_for_status(
            condition=not book_ids,
            exception=ResourceNotFound,
            resource_type="Author",
            detail="No books match the search criteria.",
        )

        books: List[BookSummary] = []
        for book_id in book_ids:
            book = await self.book_repository.get(db=db, obj_id=book_id)
            raise_for_status(
                condition=book is None,
                exception=InvalidReference,
                resource_type="Book",
                detail=f"Book with id {book_id} is linked but does not exist.",
            )
            books.append(BookSummary.model_validate(book))

        self._logger.info(f"Book lookup by author name: {len(books)} books returned")
        return books


lookup_service = LookupService()
