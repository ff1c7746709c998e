# app/schemas/author_schema.py
"""
Author schemas for request/response models.

A book request lists its authors as a discriminated union: an entry with an
``author_id`` refers to a stored author (whose name and birthday are
overwritten), an entry without one describes an author to create.
"""

from datetime import date
from typing import Annotated, Any, Union

from pydantic import (
    BaseModel,
    Discriminator,
    Field,
    Tag,
    field_validator,
)


# ------ Base Schemas ------
class AuthorBase(BaseModel):
    """Base schema for author data."""

    name: Annotated[
        str,
        Field(
            min_length=1,
            max_length=255,
            description="Author name",
            examples=["Jane Doe"],
        ),
    ]
    birthday: date = Field(
        ..., description="Author birthday, must be in the past", examples=["1980-01-01"]
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Reject blank names."""
        v = v.strip()
        if not v:
            raise ValueError("Author name must not be blank")
        return v

    @field_validator("birthday")
    @classmethod
    def validate_birthday(cls, v: date) -> date:
        """Ensure the birthday lies strictly in the past."""
        if v >= date.today():
            raise ValueError("Birthday must be a date in the past")
        return v


# ------ CRUD Schemas -------
class AuthorCreate(AuthorBase):
    """Schema for registering a standalone author."""

    pass


class AuthorUpdate(AuthorBase):
    """Schema for overwriting an author's name and birthday."""

    pass


# ------ Book request entries ------
class ExistingAuthor(AuthorBase):
    """Reference to a stored author, with the values to overwrite it with."""

    author_id: int = Field(..., gt=0, description="ID of an existing author")


class NewAuthor(AuthorBase):
    """An author to be created and linked to the book."""

    pass


def _author_entry_kind(value: Any) -> str:
    if isinstance(value, dict):
        author_id = value.get("author_id")
    else:
        author_id = getattr(value, "author_id", None)
    return "existing" if author_id is not None else "new"


AuthorEntry = Annotated[
    Union[
        Annotated[ExistingAuthor, Tag("existing")],
        Annotated[NewAuthor, Tag("new")],
    ],
    Discriminator(_author_entry_kind),
]


# ------- Response Schemas -------
class AuthorWriteResponse(BaseModel):
    message: str = Field(..., description="Result message")
    author_id: int = Field(..., description="ID of the author")


# Export all schemas
__all__ = [
    "AuthorBase",
    "AuthorCreate",
    "AuthorUpdate",
    "ExistingAuthor",
    "NewAuthor",
    "AuthorEntry",
    "AuthorWriteResponse",
]
