import logging

from fastapi import APIRouter, Depends, status, Query
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import settings
from app.db.session import get_session

from app.schemas.author_schema import (
    AuthorCreate,
    AuthorUpdate,
    AuthorWriteResponse,
)
from app.schemas.book_schema import AuthorBooksResponse
from app.services.author_service import author_service
from app.services.lookup_service import lookup_service


logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Authors"],
    prefix=f"{settings.API_V1_STR}/authors",
)


@router.get(
    "/books",
    status_code=status.HTTP_200_OK,
    summary="Get books by author name",
    response_model=AuthorBooksResponse,
    description="List the books of every author with exactly this name",
)
async def get_books_by_author_name(
    *,
    db: AsyncSession = Depends(get_session),
    name: str = Query(..., min_length=1, max_length=255, description="Author name"),
):
    """Get books by author name"""

    books = await lookup_service.find_books_by_author_name(db=db, name=name)
    return AuthorBooksResponse(books=books)


# ======CREATE========
@router.post(
    "/",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthorWriteResponse,
    summary="Register an author",
    description="Register an author without linking it to a book",
)
async def register_author(
    *,
    author_data: AuthorCreate,
    db: AsyncSession = Depends(get_session),
):
    """Register an author"""

    author_id = await author_service.register_author(db=db, author_data=author_data)
    return AuthorWriteResponse(
        message="Author registered successfully", author_id=author_id
    )


# ======Update========
@router.put(
    "/{author_id}",
    status_code=status.HTTP_200_OK,
    response_model=AuthorWriteResponse,
    summary="Update an author",
    description="Overwrite the name and birthday of an author by its id",
)
async def update_author(
    *,
    author_id: int,
    author_data: AuthorUpdate,
    db: AsyncSession = Depends(get_session),
):
    """Update an author by it's ID"""

    await author_service.update_author(
        db=db, author_id=author_id, author_data=author_data
    )
    return AuthorWriteResponse(
        message="Author updated successfully", author_id=author_id
    )
