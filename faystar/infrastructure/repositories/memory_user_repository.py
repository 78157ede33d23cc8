import asyncio
import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional

from faystar.domain.interfaces.repository_interface import UserRepositoryInterface
from faystar.domain.models.user import User

logger = logging.getLogger(__name__)


class InMemoryUserRepository(UserRepositoryInterface):
    """
    Process-local user store keyed by id. Contents are lost on restart.
    """

    _UPDATABLE = {"first_name", "last_name", "password_hash", "is_active"}

    def __init__(self):
        self._users: Dict[str, User] = {}
        self._lock = asyncio.Lock()

    async def get(self, id: str) -> Optional[User]:
        return self._users.get(id)

    async def get_by_email(self, email: str) -> Optional[User]:
        email = email.lower()
        for user in self._users.values():
            if user.email.lower() == email:
                return user
        return None

    async def create(self, entity: User) -> User:
        async with self._lock:
            if entity.id in self._users:
                raise ValueError(f"User {entity.id} already exists")
            self._users[entity.id] = entity
        logger.debug("Stored user", extra={"user_id": entity.id})
        return entity

    async def update(self, id: str, data: Dict[str, Any]) -> Optional[User]:
        async with self._lock:
            user = self._users.get(id)
            if user is None:
                return None
            changes = {k: v for k, v in data.items() if k in self._UPDATABLE}
            updated = replace(user, **changes)
            self._users[id] = updated
        return updated

    async def delete(self, id: str) -> bool:
        async with self._lock:
            return self._users.pop(id, None) is not None

    async def list(self, skip: int = 0, limit: int = 100) -> List[User]:
        return list(self._users.values())[skip:skip + limit]
