from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, TypeVar

from faystar.domain.models.user import User

T = TypeVar('T')  # Generic type for the entity
K = TypeVar('K')  # Generic type for the entity ID


class RepositoryInterface(Generic[T, K], ABC):
    """
    Generic repository interface defining standard CRUD operations.
    Following the Repository pattern to abstract data access.
    """

    @abstractmethod
    async def get(self, id: K) -> Optional[T]:
        """
        Retrieves an entity by its ID.

        Args:
            id: The ID of the entity to retrieve

        Returns:
            The entity if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, entity: T) -> T:
        """
        Creates a new entity.

        Args:
            entity: The entity to create

        Returns:
            The created entity
        """
        pass

    @abstractmethod
    async def update(self, id: K, data: Dict[str, Any]) -> Optional[T]:
        """
        Updates an existing entity.

        Args:
            id: The ID of the entity to update
            data: Dictionary of fields to update

        Returns:
            The updated entity if found, None otherwise
        """
        pass

    @abstractmethod
    async def delete(self, id: K) -> bool:
        """
        Deletes an entity by its ID.

        Returns:
            True if the entity was deleted, False if not found
        """
        pass

    @abstractmethod
    async def list(self, skip: int = 0, limit: int = 100) -> List[T]:
        """Lists entities with pagination."""
        pass


class UserRepositoryInterface(RepositoryInterface[User, str], ABC):
    """User repository with lookup by email."""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Retrieves a user by email, compared case-insensitively.

        Returns:
            The user if found, None otherwise
        """
        pass
