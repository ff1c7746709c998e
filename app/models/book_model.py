# app/models/book_model.py
"""
Book model definition.

This module defines the Book SQLModel and its many-to-many
relationship with authors through the books_authors table.
"""

from sqlmodel import SQLModel, Field, Column, DateTime, Relationship
from sqlalchemy import func, Index, CheckConstraint
from typing import TYPE_CHECKING, Optional, List
from datetime import datetime

from app.models.book_author_model import BookAuthor

if TYPE_CHECKING:
    from app.models.author_model import Author


class BookBase(SQLModel):

    title: str = Field(
        min_length=1,
        max_length=255,
        description="The title of the book",
        schema_extra={"example": "The Great Gatsby"},
    )
    price: int = Field(
        default=0,
        ge=0,
        description="The price of the book in the smallest currency unit",
        schema_extra={"example": 1500},
    )
    is_published: bool = Field(
        default=False,
        description="Whether the book has been published",
    )


class Book(BookBase, table=True):
    __tablename__ = "books"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_book_price_non_negative"),
        Index("idx_book_title", "title"),
    )

    id: Optional[int] = Field(
        default=None, primary_key=True, description="A unique identifier for Book"
    )

    created_at: datetime = Field(
        default=None,
        sa_column=Column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        ),
        description="Book creation timestamp",
    )
    updated_at: datetime = Field(
        default=None,
        sa_column=Column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        ),
        description="Book last updated timestamp",
    )

    # Relationships
    authors: List["Author"] = Relationship(
        back_populates="books",
        link_model=BookAuthor,
        sa_relationship_kwargs={"lazy": "selectin"},
    )

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, title='{self.title}', price={self.price})>"
