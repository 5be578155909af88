"""Exceptions raised by the user repository and service layers."""

from enum import Enum
from typing import Optional


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    USER_ALREADY_EXISTS = "USER_ALREADY_EXISTS"
    DATABASE_ERROR = "DATABASE_ERROR"


class UserStoreError(Exception):
    """Base exception carrying a message and a machine-readable code."""

    code: ErrorCode

    def __init__(self, message: str, code: ErrorCode) -> None:
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(UserStoreError):
    """Malformed input, rejected before any database call."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorCode.VALIDATION_ERROR)


class UserNotFoundError(UserStoreError):
    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"User with email {email} not found", ErrorCode.USER_NOT_FOUND)


class UserAlreadyExistsError(UserStoreError):
    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(
            f"User with email {email} already exists", ErrorCode.USER_ALREADY_EXISTS
        )


class DatabaseError(UserStoreError):
    """Uniform wrapper for any failure raised while running a query."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        self.cause = cause
        super().__init__(message, ErrorCode.DATABASE_ERROR)
