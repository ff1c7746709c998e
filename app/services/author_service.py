import logging

from sqlmodel.ext.asyncio.session import AsyncSession

from app.crud.author_crud import author_repository
from app.models.author_model import Author
from app.schemas.author_schema import AuthorCreate, AuthorUpdate
from app.core.exception_utils import raise_for_status
from app.core.exceptions import ResourceNotFound

logger = logging.getLogger(__name__)


class AuthorService:
    """Standalone author registration and updates."""

    def __init__(self):
        self.author_repository = author_repository
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    async def register_author(self, db: AsyncSession, *, author_data: AuthorCreate) -> int:
        """Register an author. The same name and birthday may be registered twice."""
        author = await self.author_repository.create(
            db=db, obj_in=Author(**author_data.model_dump())
        )
        self._logger.info(f"New author registered: {author.id}")
        return author.id

    async def update_author(
        self, db: AsyncSession, *, author_id: int, author_data: AuthorUpdate
    ) -> int:
        """Overwrite the name and birthday of an existing author."""
        author_exists = await self.author_repository.exists(db=db, obj_id=author_id)
        raise_for_status(
            condition=not author_exists,
            exception=ResourceNotFound,
            resource_type="Author",
            detail=f"Author with id {author_id} not found.",
        )

        await self.author_repository.update_by_id(
            db=db, obj_id=author_id, fields_to_update=author_data.model_dump()
        )
        self._logger.info(
            f"Author {author_id} updated",
            extra={"updated_author_id": author_id},
        )
        return author_id


author_service = AuthorService()
