import asyncio
import re
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator, Optional, TypeVar, Union

from loguru import logger
from neo4j import Driver, GraphDatabase, Record, Session
from neo4j.exceptions import Neo4jError, ServiceUnavailable

from ..config import Neo4jSettingsModel
from ..domain.exceptions import DatabaseError

T = TypeVar("T")

SessionOperation = Callable[[Session], T]


def mask_uri(uri: str) -> str:
    """Mask sensitive parts of a URI for logging."""
    return re.sub(r"://([^:]+):([^@]+)@", r"://\1:***@", uri)


def mask_username(username: str) -> str:
    """Mask a username for logging."""
    if len(username) <= 2:
        return "***"
    return username[:2] + "*" * (len(username) - 2)


class Neo4jConnection:
    """Owns a Neo4j driver and hands out sessions scoped to single operations."""

    def __init__(
        self,
        uri: str,
        user: str,
        password: str,
        database: str = "neo4j",
        **driver_options: Any,
    ) -> None:
        if not uri or not user or not password:
            raise ServiceUnavailable("Neo4j connection details are incomplete.")

        self.uri = uri
        self.database = database
        logger.info(
            f"Initializing Neo4j driver for URI: {mask_uri(uri)} "
            f"(user '{mask_username(user)}', database '{database}')"
        )
        self._driver: Driver = GraphDatabase.driver(
            uri, auth=(user, password), **driver_options
        )

    @classmethod
    def from_settings(cls, settings: Neo4jSettingsModel) -> "Neo4jConnection":
        return cls(
            settings.uri,
            settings.user,
            settings.password,
            database=settings.database,
        )

    @property
    def driver(self) -> Driver:
        return self._driver

    def get_session(self) -> Session:
        return self._driver.session(database=self.database)

    def close(self) -> None:
        logger.info("Closing Neo4j driver.")
        self._driver.close()

    def verify_connectivity(self) -> None:
        self._driver.verify_connectivity()

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Yield a new session and close it on every exit path."""
        session = self.get_session()
        try:
            yield session
        finally:
            session.close()

    async def with_session(self, operation: SessionOperation[T]) -> T:
        """
        Run ``operation`` against a fresh session without blocking the event loop.

        The session is opened and released inside a worker thread, so the
        synchronous driver call never runs on the loop itself. Whatever the
        operation returns or raises is passed through unchanged.
        """

        def _run() -> T:
            with self.session_scope() as session:
                return operation(session)

        return await asyncio.to_thread(_run)


def run_query(
    session: Session, query: str, parameters: Optional[dict[str, Any]] = None
) -> list[Record]:
    """
    Execute a Cypher query on ``session`` and return the fetched records.

    Args:
        session: An open Neo4j session.
        query: The Cypher query string to execute.
        parameters: Optional dictionary of named query parameters.

    Returns:
        List of records returned by the query.

    Raises:
        DatabaseError: For any failure while running the query or reading its
            results. The driver exception is available as ``cause``.
    """
    logger.debug(f"Executing query: {query[:100]}")
    try:
        result = session.run(query, parameters or {})
        records = list(result)
    except (Neo4jError, ServiceUnavailable) as e:
        logger.error(f"Neo4j error executing Cypher query: {e}")
        logger.error(f"Query: {query}, Parameters: {parameters}")
        raise DatabaseError(f"Database query failed: {e}", cause=e) from e
    except Exception as e:
        logger.error(f"Unexpected error executing Cypher query: {e}")
        logger.error(f"Query: {query}, Parameters: {parameters}")
        raise DatabaseError(f"Database query failed: {e}", cause=e) from e

    logger.debug(f"Query executed successfully. Fetched {len(records)} records.")
    return records


async def wait_for_connection(
    connection: Neo4jConnection, max_retries: int = 30, delay: float = 1.0
) -> None:
    """Poll ``verify_connectivity`` until it succeeds or retries run out."""
    for attempt in range(1, max_retries + 1):
        try:
            await asyncio.to_thread(connection.verify_connectivity)
            logger.info("Neo4j connectivity verified.")
            return
        except Exception as e:
            if attempt == max_retries:
                logger.error(
                    f"Neo4j not reachable after {max_retries} attempts: {e}"
                )
                raise
            logger.debug(
                f"Neo4j not ready (attempt {attempt}/{max_retries}): {e}"
            )
            await asyncio.sleep(delay)


def split_statements(script: str) -> list[str]:
    return [stmt.strip() for stmt in script.split(";") if stmt.strip()]


async def execute_cypher_file(
    connection: Neo4jConnection, path: Union[str, Path]
) -> list[Record]:
    """Run every statement of a ``.cypher`` file in a single session."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            script = f.read()
    except FileNotFoundError:
        raise FileNotFoundError(f"Cypher file not found: {path}")

    statements = split_statements(script)
    if not statements:
        raise ValueError(f"Cypher file {path} is empty or contains only whitespace")

    def _work(session: Session) -> list[Record]:
        records: list[Record] = []
        for statement in statements:
            records.extend(run_query(session, statement))
        return records

    return await connection.with_session(_work)
