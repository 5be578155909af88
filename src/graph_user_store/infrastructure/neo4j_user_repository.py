"""Neo4j-backed implementation of the user repository."""
from datetime import datetime
from typing import Any, Optional

from loguru import logger
from neo4j import Record, Session

from ..domain.interfaces import UserRepository
from ..domain.models.user import CreateUserData, UpdateUserData, User
from .neo4j_utils import Neo4jConnection, run_query

CREATE_USER = (
    "CREATE (u:User {name: $name, email: $email, createdAt: datetime()}) RETURN u"
)
FIND_USER_BY_EMAIL = "MATCH (u:User {email: $email}) RETURN u"
FIND_ALL_USERS = "MATCH (u:User) RETURN u ORDER BY u.createdAt"
DELETE_USER = "MATCH (u:User {email: $email}) DELETE u"
CLEAR_ALL = "MATCH (n) DETACH DELETE n"
COUNT_USERS = "MATCH (u:User) RETURN count(u) AS count"
CREATE_EMAIL_CONSTRAINT = (
    "CREATE CONSTRAINT user_email_unique IF NOT EXISTS "
    "FOR (u:User) REQUIRE u.email IS UNIQUE"
)


def format_timestamp(value: Any) -> str:
    """Convert a stored ``createdAt`` value to an ISO-8601 string."""
    if hasattr(value, "iso_format"):
        return value.iso_format()
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def record_to_user(record: Record) -> User:
    node = record["u"]
    return User(
        name=node["name"],
        email=node["email"],
        created_at=format_timestamp(node["createdAt"]),
    )


def build_update_query(changes: dict[str, Any]) -> str:
    set_clause = ", ".join(f"u.{key} = ${key}" for key in changes)
    return f"MATCH (u:User {{email: $email}}) SET {set_clause} RETURN u"


class Neo4jUserRepository(UserRepository):
    """UserRepository backed by Neo4j. Every call uses its own session."""

    def __init__(self, connection: Neo4jConnection) -> None:
        self._connection = connection

    async def create_user(self, data: CreateUserData) -> User:
        def _work(session: Session) -> User:
            records = run_query(
                session, CREATE_USER, {"name": data.name, "email": data.email}
            )
            return record_to_user(records[0])

        user = await self._connection.with_session(_work)
        logger.info(f"Created user {user.email}")
        return user

    async def find_user_by_email(self, email: str) -> Optional[User]:
        def _work(session: Session) -> Optional[User]:
            records = run_query(session, FIND_USER_BY_EMAIL, {"email": email})
            if not records:
                return None
            return record_to_user(records[0])

        return await self._connection.with_session(_work)

    async def find_all_users(self) -> list[User]:
        def _work(session: Session) -> list[User]:
            return [record_to_user(r) for r in run_query(session, FIND_ALL_USERS)]

        return await self._connection.with_session(_work)

    async def update_user(
        self, email: str, updates: UpdateUserData
    ) -> Optional[User]:
        changes = updates.changes()
        if not changes:
            # Nothing to write; hand back the stored record as-is.
            return await self.find_user_by_email(email)

        query = build_update_query(changes)

        def _work(session: Session) -> Optional[User]:
            records = run_query(session, query, {"email": email, **changes})
            if not records:
                return None
            return record_to_user(records[0])

        user = await self._connection.with_session(_work)
        if user is not None:
            logger.info(f"Updated user {email}: {sorted(changes)}")
        return user

    async def delete_user(self, email: str) -> None:
        def _work(session: Session) -> None:
            run_query(session, DELETE_USER, {"email": email})

        await self._connection.with_session(_work)
        logger.info(f"Deleted user {email} (if present)")

    async def clear_all(self) -> None:
        def _work(session: Session) -> None:
            run_query(session, CLEAR_ALL)

        await self._connection.with_session(_work)
        logger.warning("Removed all nodes and relationships from the database.")

    async def count_users(self) -> int:
        def _work(session: Session) -> int:
            records = run_query(session, COUNT_USERS)
            return int(records[0]["count"])

        return await self._connection.with_session(_work)

    async def ensure_constraints(self) -> None:
        """Create the unique-email constraint if it does not exist yet."""

        def _work(session: Session) -> None:
            run_query(session, CREATE_EMAIL_CONSTRAINT)

        await self._connection.with_session(_work)
        logger.info("Ensured unique constraint on :User(email).")
