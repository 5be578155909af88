"""CRUD layer for ``User`` nodes stored in Neo4j."""

__version__ = "0.1.0"
