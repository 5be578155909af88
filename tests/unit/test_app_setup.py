"""Unit tests for logging configuration and service wiring in app_setup."""
import sys
from unittest.mock import patch

import pytest

from graph_user_store.app_setup import configure_logging, create_user_service
from graph_user_store.config import AppSettingsModel, Neo4jSettingsModel, RuntimeSettings
from graph_user_store.domain.services import UserService
from graph_user_store.infrastructure import Neo4jUserRepository


@pytest.fixture
def mock_logger():
    """Provide a mock logger for testing logging functionality."""
    with patch("graph_user_store.app_setup.logger") as mock_log:
        yield mock_log


@pytest.fixture
def runtime_settings() -> RuntimeSettings:
    return RuntimeSettings(
        app=AppSettingsModel(name="Users", log_level="debug"),
        neo4j=Neo4jSettingsModel(
            uri="bolt://db:7687", user="neo4j", password="pw", database="users"
        ),
    )


def test_configure_logging_replaces_default_sink(mock_logger):
    configure_logging("warning")

    mock_logger.remove.assert_called_once_with()
    args, kwargs = mock_logger.add.call_args
    assert args == (sys.stderr,)
    assert kwargs["level"] == "WARNING"
    assert kwargs["colorize"] is True


def test_create_user_service_wires_components(mock_logger, runtime_settings):
    with patch("graph_user_store.app_setup.Neo4jConnection") as mock_connection_cls:
        service, connection = create_user_service(runtime_settings)

    mock_connection_cls.from_settings.assert_called_once_with(runtime_settings.neo4j)
    assert connection is mock_connection_cls.from_settings.return_value
    assert isinstance(service, UserService)
    assert isinstance(service._repository, Neo4jUserRepository)
    assert mock_logger.add.call_args.kwargs["level"] == "DEBUG"
