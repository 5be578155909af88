"""Infrastructure implementations of domain interfaces."""

from .neo4j_user_repository import Neo4jUserRepository
from .neo4j_utils import (
    Neo4jConnection,
    execute_cypher_file,
    run_query,
    wait_for_connection,
)

__all__ = [
    "Neo4jUserRepository",
    "Neo4jConnection",
    "execute_cypher_file",
    "run_query",
    "wait_for_connection",
]
