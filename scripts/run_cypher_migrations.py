#!/usr/bin/env python
"""Apply versioned Cypher migrations to the Neo4j database."""
import argparse
import asyncio
from pathlib import Path
from typing import Optional

from graph_user_store.config import runtime_settings
from graph_user_store.infrastructure.neo4j_utils import (
    Neo4jConnection,
    execute_cypher_file,
)


async def run_migrations(
    directory: str, connection: Optional[Neo4jConnection] = None
) -> list[str]:
    path = Path(directory)
    if not path.exists():
        raise FileNotFoundError(f"Migration directory '{directory}' does not exist")

    files = sorted(p for p in path.glob("*.cypher") if p.is_file())
    if not files:
        print(f"No migration files found in '{directory}'.")
        return []

    owns_connection = connection is None
    connection = connection or Neo4jConnection.from_settings(runtime_settings.neo4j)
    applied: list[str] = []
    try:
        for cypher_file in files:
            print(f"Applying {cypher_file.name}...")
            try:
                await execute_cypher_file(connection, cypher_file)
            except Exception as e:
                print(f"✗ Failed to apply {cypher_file.name}: {e}")
                raise  # Re-raise to stop further migrations
            print(f"✓ Applied {cypher_file.name}")
            applied.append(cypher_file.name)
    finally:
        if owns_connection:
            connection.close()
    return applied


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run Cypher migrations")
    parser.add_argument(
        "--dir",
        default="database_migrations",
        help="Directory containing .cypher migration files",
    )
    args = parser.parse_args()
    asyncio.run(run_migrations(args.dir))
