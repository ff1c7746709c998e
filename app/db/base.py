# app/db/base.py
"""Imports every table model so SQLModel.metadata knows all tables."""

from app.models.book_model import Book  # noqa: F401
from app.models.author_model import Author  # noqa: F401
from app.models.book_author_model import BookAuthor  # noqa: F401
