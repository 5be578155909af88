"""Abstract user repository used by the service layer."""
from typing import Optional, Protocol

from ..models.user import CreateUserData, UpdateUserData, User


class UserRepository(Protocol):
    """Interface for persisting and querying ``User`` records."""

    async def create_user(self, data: CreateUserData) -> User:
        """Persist a new user with a database-assigned creation timestamp."""
        raise NotImplementedError

    async def find_user_by_email(self, email: str) -> Optional[User]:
        """Return the user with ``email`` or ``None`` when absent."""
        raise NotImplementedError

    async def find_all_users(self) -> list[User]:
        """Return every user ordered by creation time, oldest first."""
        raise NotImplementedError

    async def update_user(self, email: str, updates: UpdateUserData) -> Optional[User]:
        """Apply ``updates`` and return the stored user, or ``None`` if absent."""
        raise NotImplementedError

    async def delete_user(self, email: str) -> None:
        raise NotImplementedError

    async def clear_all(self) -> None:
        raise NotImplementedError

    async def count_users(self) -> int:
        raise NotImplementedError
