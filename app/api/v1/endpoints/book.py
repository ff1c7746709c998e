import logging

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import settings
from app.db.session import get_session

from app.schemas.book_schema import (
    BookRegister,
    BookUpdate,
    BookAuthorsUpdate,
    BookWriteResponse,
)
from app.services.registration_service import registration_service
from app.services.book_sync_service import book_sync_service


logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Books"],
    prefix=f"{settings.API_V1_STR}/books",
)


@router.post(
    "/",
    response_model=BookWriteResponse,
    summary="Register a new book",
    status_code=status.HTTP_201_CREATED,
    description="Register a book together with its authors",
)
async def register_book(
    *,
    db: AsyncSession = Depends(get_session),
    book_data: BookRegister,
):
    """
    Register a new book.
    - **title**: The title of the book (required)
    - **price**: Price of the book, not negative
    - **is_published**: Publication state (required)
    - **authors**: 1 to 100 authors. An author with `author_id` must exist,
      an author without one is reused when name and birthday match, or created.

    Fails with 409 when a book with this title is already linked to one of the authors.
    """
    book_id = await registration_service.register_book(db=db, book_data=book_data)
    return BookWriteResponse(message="Book registered successfully", book_id=book_id)


@router.put(
    "/{book_id}",
    response_model=BookWriteResponse,
    summary="Update a book",
    status_code=status.HTTP_200_OK,
    description="Update a book and upsert its authors",
)
async def update_book(
    *,
    db: AsyncSession = Depends(get_session),
    book_id: int,
    book_data: BookUpdate,
):
    """
    Update a book.

    Authors given with an `author_id` are overwritten, authors without one are
    created. Links to authors not referenced by id are removed.
    """
    await book_sync_service.update_book(db=db, book_id=book_id, book_data=book_data)
    return BookWriteResponse(message="Book updated successfully", book_id=book_id)


@router.put(
    "/{book_id}/authors",
    response_model=BookWriteResponse,
    summary="Replace the authors of a book",
    status_code=status.HTTP_200_OK,
    description="Synchronize the authors linked to a book with a list of author ids",
)
async def update_book_authors(
    *,
    db: AsyncSession = Depends(get_session),
    book_id: int,
    book_data: BookAuthorsUpdate,
):
    """
    Replace the authors linked to a book.

    Every id must belong to an existing author. A book without any linked
    author is rejected.
    """
    await book_sync_service.update_book_authors(
        db=db, book_id=book_id, book_data=book_data
    )
    return BookWriteResponse(message="Book authors updated successfully", book_id=book_id)
