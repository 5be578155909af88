"""Validating service layer on top of a :class:`UserRepository`."""

import re
from collections import Counter
from typing import Optional

from loguru import logger
from neo4j.exceptions import ConstraintError

from ..exceptions import (
    DatabaseError,
    UserAlreadyExistsError,
    UserNotFoundError,
    ValidationError,
)
from ..interfaces import UserRepository
from ..models.user import (
    CreateUserData,
    DeleteResult,
    UpdateUserData,
    User,
    UserStats,
)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def validate_email(email: Optional[str]) -> bool:
    return bool(email) and EMAIL_PATTERN.match(email) is not None


def validate_user_data(data: CreateUserData) -> list[str]:
    """Collect every problem with ``data`` instead of stopping at the first."""
    errors: list[str] = []
    if not data.name or not data.name.strip():
        errors.append("Name is required")
    if not validate_email(data.email):
        errors.append("Valid email is required")
    return errors


def email_domain(email: str) -> str:
    parts = email.split("@")
    return parts[1] if len(parts) > 1 else ""


def count_email_domains(users: list[User]) -> dict[str, int]:
    return dict(Counter(email_domain(user.email) for user in users))


def _is_constraint_violation(error: DatabaseError) -> bool:
    return isinstance(error.cause, ConstraintError)


class UserService:
    """
    Business operations on users.

    Input is validated before the repository is touched, so a rejected call
    never performs a partial write. Uniqueness and existence are checked with
    a read before the write; the unique-email constraint in the database
    catches the create race the read cannot.
    """

    def __init__(self, repository: UserRepository) -> None:
        self._repository = repository

    async def create_user(self, data: CreateUserData) -> User:
        errors = validate_user_data(data)
        if errors:
            logger.warning(f"Rejected user creation: {errors}")
            raise ValidationError(f"Validation failed: {', '.join(errors)}")

        existing = await self._repository.find_user_by_email(data.email)
        if existing is not None:
            logger.warning(f"User {data.email} already exists")
            raise UserAlreadyExistsError(data.email)

        try:
            return await self._repository.create_user(
                CreateUserData(name=data.name.strip(), email=data.email)
            )
        except DatabaseError as e:
            if _is_constraint_violation(e):
                logger.warning(f"User {data.email} was created concurrently")
                raise UserAlreadyExistsError(data.email) from e
            raise

    async def get_user_by_email(self, email: str) -> Optional[User]:
        if not validate_email(email):
            raise ValidationError("Invalid email format")
        return await self._repository.find_user_by_email(email)

    async def get_all_users(self) -> list[User]:
        return await self._repository.find_all_users()

    async def update_user(self, email: str, updates: UpdateUserData) -> User:
        if not validate_email(email):
            raise ValidationError("Invalid email format")

        sanitized = updates.model_copy()
        if updates.name is not None:
            name = updates.name.strip()
            if not name:
                raise ValidationError("Name cannot be empty")
            sanitized.name = name

        updated = await self._repository.update_user(email, sanitized)
        if updated is None:
            logger.warning(f"Cannot update missing user {email}")
            raise UserNotFoundError(email)
        return updated

    async def delete_user(self, email: str) -> DeleteResult:
        if not validate_email(email):
            raise ValidationError("Invalid email format")

        existing = await self._repository.find_user_by_email(email)
        if existing is None:
            logger.warning(f"Cannot delete missing user {email}")
            raise UserNotFoundError(email)

        await self._repository.delete_user(email)
        return DeleteResult(message="User deleted successfully")

    async def get_user_stats(self) -> UserStats:
        total = await self._repository.count_users()
        users = await self._repository.find_all_users()
        return UserStats(total=total, domains=count_email_domains(users))
