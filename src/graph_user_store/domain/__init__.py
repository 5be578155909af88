"""Domain models, interfaces, errors and services."""
