from typing import Optional, Dict, Any, TypeVar, Generic
from abc import ABC, abstractmethod

from sqlmodel.ext.asyncio.session import AsyncSession

T = TypeVar("T")


class BaseRepository(ABC, Generic[T]):
    """Abstract base repository providing consistent interface for database operations."""

    def __init__(self, model: type[T]):
        self.model = model

    @abstractmethod
    async def get(self, db: AsyncSession, *, obj_id: int) -> Optional[T]:
        """Get entity by its primary key."""
        pass

    @abstractmethod
    async def exists(self, db: AsyncSession, *, obj_id: int) -> bool:
        """Check whether an entity with this primary key is stored."""
        pass

    @abstractmethod
    async def create(self, db: AsyncSession, *, obj_in: T) -> T:
        """Create a new entity and return it with its generated id."""
        pass

    @abstractmethod
    async def update_by_id(
        self, db: AsyncSession, *, obj_id: int, fields_to_update: Dict[str, Any]
    ) -> int:
        """Update an entity by primary key, returning the number of rows matched."""
        pass
