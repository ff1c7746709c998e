import logging
from typing import Optional, List

from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import settings
from app.crud.book_crud import book_repository
from app.crud.author_crud import author_repository
from app.crud.book_author_crud import book_author_repository
from app.db.session import transaction_scope
from app.models.author_model import Author
from app.schemas.author_schema import ExistingAuthor
from app.schemas.book_schema import BookUpdate, BookAuthorsUpdate
from app.core.exception_utils import raise_for_status
from app.core.exceptions import (
    ResourceNotFound,
    InvalidReference,
    InvalidState,
)

logger = logging.getLogger(__name__)

BOOK_FIELDS = {"title", "price", "is_published"}


class BookSyncService:
    """
    Updates a book and reconciles the authors linked to it.

    Two forms are supported:

    * ``update_book_authors`` takes a flat list of author ids. Links missing
      from the list are removed, then every requested id is checked and
      linked.
    * ``update_book`` takes author entries. Links to authors not referenced
      by id are removed, referenced authors are overwritten and new authors
      are created.

    Every repository write commits on its own unless the call runs atomically,
    so a failure halfway leaves the earlier steps applied.
    """

    def __init__(self):
        self.book_repository = book_repository
        self.author_repository = author_repository
        self.book_author_repository = book_author_repository
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    async def update_book(
        self,
        db: AsyncSession,
        *,
        book_id: int,
        book_data: BookUpdate,
        atomic: Optional[bool] = None,
    ) -> int:
        """Update book fields, then upsert its authors."""
        if atomic is None:
            atomic = settings.ATOMIC_BOOK_WRITES

        async with transaction_scope(db, atomic=atomic):
            await self._ensure_book_exists(db, book_id=book_id)

            await self.book_repository.update_by_id(
                db=db,
                obj_id=book_id,
                fields_to_update=book_data.model_dump(include=BOOK_FIELDS),
            )

            current_ids = await self.book_author_repository.get_author_ids(
                db=db, book_id=book_id
            )
            requested_ids = [
                entry.author_id
                for entry in book_data.authors
                if isinstance(entry, ExistingAuthor)
            ]

            removed = await self._unlink_missing(
                db, book_id=book_id, current_ids=current_ids, requested_ids=requested_ids
            )

            updated: List[int] = []
            created: List[int] = []
            for entry in book_data.authors:
                author_fields = entry.model_dump(include={"name", "birthday"})

                if isinstance(entry, ExistingAuthor):
                    matched = await self.author_repository.update_by_id(
                        db=db, obj_id=entry.author_id, fields_to_update=author_fields
                    )
                    if not matched:
                        self._logger.warning(
                            f"Author {entry.author_id} referenced by book {book_id} "
                            "does not exist, nothing updated"
                        )
                    else:
                        updated.append(entry.author_id)
                    continue

                author = await self.author_repository.create(
                    db=db, obj_in=Author(**author_fields)
                )
                created.append(author.id)

                # New authors stay unlinked unless explicitly configured.
                if settings.LINK_NEW_AUTHORS_ON_UPDATE:
                    await self.book_author_repository.create(
                        db=db, book_id=book_id, author_id=author.id
                    )

        self._logger.info(
            f"Book {book_id} updated",
            extra={
                "book_id": book_id,
                "unlinked_author_ids": removed,
                "updated_author_ids": updated,
                "created_author_ids": created,
            },
        )
        return book_id

    async def update_book_authors(
        self,
        db: AsyncSession,
        *,
        book_id: int,
        book_data: BookAuthorsUpdate,
        atomic: Optional[bool] = None,
    ) -> int:
        """Replace the set of authors linked to a book with the requested ids."""
        if atomic is None:
            atomic = settings.ATOMIC_BOOK_WRITES

        async with transaction_scope(db, atomic=atomic):
            await self._ensure_book_exists(db, book_id=book_id)

            fields_to_update = book_data.model_dump(include=BOOK_FIELDS, exclude_none=True)
            if fields_to_update:
                await self.book_repository.update_by_id(
                    db=db, obj_id=book_id, fields_to_update=fields_to_update
                )

            current_ids = await self.book_author_repository.get_author_ids(
                db=db, book_id=book_id
            )
            raise_for_status(
                condition=not current_ids,
                exception=InvalidState,
                resource_type="Book",
                detail=f"No authors are associated with book id {book_id}.",
            )

            requested_ids = book_data.author_ids
            removed = await self._unlink_missing(
                db, book_id=book_id, current_ids=current_ids, requested_ids=requested_ids
            )

            for author_id in requested_ids:
                author_exists = await self.author_repository.exists(db=db, obj_id=author_id)
                raise_for_status(
                    condition=not author_exists,
                    exception=InvalidReference,
                    resource_type="Author",
                    detail=f"author id {author_id} does not exist",
                )
                await self.book_author_repository.create(
                    db=db, book_id=book_id, author_id=author_id
                )

        self._logger.info(
            f"Authors of book {book_id} synchronized",
            extra={
                "book_id": book_id,
                "unlinked_author_ids": removed,
                "linked_author_ids": requested_ids,
            },
        )
        return book_id

    # Helper Functions
    async def _ensure_book_exists(self, db: AsyncSession, *, book_id: int) -> None:
        book_exists = await self.book_repository.exists(db=db, obj_id=book_id)
        raise_for_status(
            condition=not book_exists,
            exception=ResourceNotFound,
            resource_type="Book",
            detail=f"Book with id {book_id} not found.",
        )

    async def _unlink_missing(
        self,
        db: AsyncSession,
        *,
        book_id: int,
        current_ids: List[int],
        requested_ids: List[int],
    ) -> List[int]:
        """Delete links whose author id is not requested; returns the removed ids."""
        keep = set(requested_ids)
        removed = [author_id for author_id in current_ids if author_id not in keep]
        for author_id in removed:
            await self.book_author_repository.delete(
                db=db, book_id=book_id, author_id=author_id
            )
        return removed


book_sync_service = BookSyncService()
