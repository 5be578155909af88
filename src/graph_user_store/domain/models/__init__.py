from .user import CreateUserData, DeleteResult, UpdateUserData, User, UserStats

__all__ = ["User", "CreateUserData", "UpdateUserData", "UserStats", "DeleteResult"]
