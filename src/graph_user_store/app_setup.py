import sys
from typing import Optional

from loguru import logger  # type: ignore

from .config import RuntimeSettings, runtime_settings
from .domain.services import UserService
from .infrastructure import Neo4jConnection, Neo4jUserRepository

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str = "INFO") -> None:
    """Replace loguru's default sink with a single stderr sink at ``level``."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT, colorize=True)
    logger.info("Logger configured with level: {}", level.upper())


def create_user_service(
    settings: Optional[RuntimeSettings] = None,
) -> tuple[UserService, Neo4jConnection]:
    """
    Wire a ``UserService`` to a Neo4j connection built from settings.

    Configures logging, opens the driver and assembles the repository and
    service. The connection is returned alongside the service because the
    caller owns it and must ``close()`` it when done.

    Returns:
        The service and the connection it runs on.
    """
    settings = settings or runtime_settings
    configure_logging(settings.app.log_level)

    connection = Neo4jConnection.from_settings(settings.neo4j)
    repository = Neo4jUserRepository(connection)
    service = UserService(repository)
    logger.info(f"{settings.app.name} {settings.app.version} ready.")
    return service, connection
