"""Domain service layer."""

from .user_service import UserService, validate_email

__all__ = ["UserService", "validate_email"]
