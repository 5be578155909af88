"""Domain interfaces for dependency inversion."""

from .user_repository import UserRepository

__all__ = ["UserRepository"]
