"""Neo4j test container bootstrap shared by the integration tests."""
import asyncio

import pytest
import pytest_asyncio

from graph_user_store.domain.services import UserService
from graph_user_store.infrastructure import (
    Neo4jConnection,
    Neo4jUserRepository,
    wait_for_connection,
)

NEO4J_IMAGE = "neo4j:5.15"
NEO4J_PASSWORD = "testpassword"


@pytest.fixture(scope="session")
def neo4j_container():
    from testcontainers.neo4j import Neo4jContainer

    with Neo4jContainer(NEO4J_IMAGE, password=NEO4J_PASSWORD) as container:
        yield container


@pytest.fixture(scope="session")
def neo4j_connection(neo4j_container):
    connection = Neo4jConnection(
        neo4j_container.get_connection_url(), "neo4j", NEO4J_PASSWORD
    )
    asyncio.run(wait_for_connection(connection))
    asyncio.run(Neo4jUserRepository(connection).ensure_constraints())
    yield connection
    connection.close()


@pytest_asyncio.fixture
async def user_repository(neo4j_connection):
    repository = Neo4jUserRepository(neo4j_connection)
    await repository.clear_all()
    yield repository
    await repository.clear_all()


@pytest.fixture
def user_service(user_repository):
    return UserService(user_repository)
