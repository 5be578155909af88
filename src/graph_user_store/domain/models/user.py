from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

# Fields of a stored user that may change after creation.
MUTABLE_FIELDS = ("name",)


class User(BaseModel):
    name: str
    email: str
    created_at: str = Field(
        ..., description="ISO-8601 creation timestamp assigned by the database"
    )


class CreateUserData(BaseModel):
    name: str
    email: str


class UpdateUserData(BaseModel):
    name: Optional[str] = None

    def changes(self) -> Dict[str, Any]:
        """Return only the fields the caller actually supplied."""
        return {
            key: value
            for key, value in self.model_dump(exclude_none=True).items()
            if key in MUTABLE_FIELDS
        }


class UserStats(BaseModel):
    total: int = 0
    domains: Dict[str, int] = Field(default_factory=dict)


class DeleteResult(BaseModel):
    message: str
