# app/models/book_author_model.py
"""
BookAuthor association model.

This module defines the many-to-many relationship between books and authors.
"""

from datetime import datetime

from sqlmodel import SQLModel, Field, Column, DateTime
from sqlalchemy import Index, func


class BookAuthor(SQLModel, table=True):
    __tablename__ = "books_authors"
    __table_args__ = (
        Index("idx_books_authors_book_id", "book_id"),
        Index("idx_books_authors_author_id", "author_id"),
    )

    book_id: int = Field(
        foreign_key="books.id", primary_key=True, description="Book ID"
    )
    author_id: int = Field(
        foreign_key="authors.id", primary_key=True, description="Author ID"
    )

    created_at: datetime = Field(
        default=None,
        sa_column=Column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        ),
        description="When the author was linked to the book",
    )

    def __repr__(self) -> str:
        return f"<BookAuthor(book_id={self.book_id}, author_id={self.author_id})>"
