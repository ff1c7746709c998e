# app/schemas/book_schema.py
"""
Book schemas for request/response models.

This module defines Pydantic schemas for book registration, the two
book update forms (full update with author upserts, and author id list
sync) and the lookup responses.
"""
from typing import Optional, List, Annotated

from pydantic import (
    BaseModel,
    Field,
    ConfigDict,
    field_validator,
)

from app.schemas.author_schema import AuthorEntry

MAX_AUTHORS_PER_BOOK = 100


class BookBase(BaseModel):
    """Base schema for book data."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="The title of the book",
        examples=["The Great Gatsby"],
    )
    price: Annotated[
        int,
        Field(
            ge=0,
            description="The price of the book, must not be negative",
            examples=[1500],
        ),
    ] = 0
    is_published: bool = Field(
        ..., description="Whether the book is published", examples=[True]
    )

    @field_validator("title")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip leading and trailing whitespace, rejecting blank titles."""
        v = v.strip()
        if not v:
            raise ValueError("Title must not be blank")
        return v


class BookRegister(BookBase):
    """Schema for registering a new book together with its authors."""

    authors: List[AuthorEntry] = Field(
        ...,
        min_length=1,
        max_length=MAX_AUTHORS_PER_BOOK,
        description="Authors of the book, by id or by name and birthday",
    )


class BookUpdate(BookRegister):
    """
    Schema for a full book update.

    Entries with an ``author_id`` overwrite that author, entries without one
    create a new author.
    """

    @field_validator("is_published")
    @classmethod
    def forbid_unpublishing(cls, v: bool) -> bool:
        """A book cannot be switched back to unpublished."""
        if not v:
            raise ValueError("A book cannot be updated to unpublished")
        return v


class BookAuthorsUpdate(BaseModel):
    """
    Schema for replacing the set of authors linked to a book by id.

    Book fields are optional here; the ones provided are updated as well.
    """

    author_ids: List[Annotated[int, Field(gt=0)]] = Field(
        ...,
        min_length=1,
        max_length=MAX_AUTHORS_PER_BOOK,
        description="IDs of the authors the book should be linked to",
        examples=[[10, 12]],
    )
    title: Optional[Annotated[str, Field(min_length=1, max_length=255)]] = None
    price: Optional[Annotated[int, Field(ge=0)]] = None
    is_published: Optional[bool] = None

    @field_validator("title")
    @classmethod
    def strip_whitespace(cls, v: Optional[str]) -> Optional[str]:
        """Same title rules as registration; an omitted title stays None."""
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Title must not be blank")
        return v

    @field_validator("is_published")
    @classmethod
    def forbid_unpublishing(cls, v: Optional[bool]) -> Optional[bool]:
        if v is False:
            raise ValueError("A book cannot be updated to unpublished")
        return v


# ------- Response Schemas -------
class BookSummary(BaseModel):
    """Title, price and publication state of a book."""

    model_config = ConfigDict(from_attributes=True)

    title: str = Field(..., description="The title of the book")
    price: int = Field(..., ge=0, description="The price of the book")
    is_published: bool = Field(..., description="Whether the book is published")


class BookWriteResponse(BaseModel):
    message: str = Field(..., description="Result message")
    book_id: int = Field(..., description="ID of the book")


class AuthorBooksResponse(BaseModel):
    """Books linked to every author matching a name."""

    books: List[BookSummary] = Field(
        default_factory=list, description="Books of the matching authors"
    )


# Export all schemas
__all__ = [
    "BookBase",
    "BookRegister",
    "BookUpdate",
    "BookAuthorsUpdate",
    "BookSummary",
    "BookWriteResponse",
    "AuthorBooksResponse",
]
