# app/models/author_model.py
"""
Author model definition.

Authors are linked to books through the books_authors table. The same
name and birthday may be stored more than once.
"""

from typing import List, TYPE_CHECKING, Optional
from datetime import date, datetime

from sqlmodel import SQLModel, Field, Relationship, Column, DateTime
from sqlalchemy import Index, func

from app.models.book_author_model import BookAuthor

if TYPE_CHECKING:
    from app.models.book_model import Book


class AuthorBase(SQLModel):
    """Base author model with common attributes."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Author name",
        schema_extra={"example": "Jane Doe"},
    )
    birthday: date = Field(
        ...,
        description="Author birthday",
        schema_extra={"example": "1980-01-01"},
    )


class Author(AuthorBase, table=True):
    __tablename__ = "authors"
    __table_args__ = (Index("idx_author_name_birthday", "name", "birthday"),)

    id: Optional[int] = Field(
        default=None, primary_key=True, description="Unique identifier for authors."
    )

    # Time stamps
    created_at: datetime = Field(
        default=None,
        sa_column=Column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        ),
        description="Author creation timestamp",
    )
    updated_at: datetime = Field(
        default=None,
        sa_column=Column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        ),
        description="Author last updated timestamp",
    )

    # Relationships
    books: List["Book"] = Relationship(
        back_populates="authors",
        link_model=BookAuthor,
        sa_relationship_kwargs={"lazy": "selectin"},
    )

    def __repr__(self) -> str:
        return f"<Author(id={self.id}, name='{self.name}', birthday={self.birthday})>"
