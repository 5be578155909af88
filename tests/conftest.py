"""Pytest configuration for the test suite."""

import pytest


def pytest_configure(config: pytest.Config) -> None:
    """Register the marker used by the container-backed tests."""
    config.addinivalue_line(
        "markers", "integration: tests that need a Docker-provisioned Neo4j container"
    )
