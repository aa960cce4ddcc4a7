"""Protocols for query execution.

Defines the interface prepared queries are handed to, so statements and
clients can run against a real SurrealDB connection or an in-memory fake.
"""

from typing import Any, Protocol


class DatabaseExecutor(Protocol):
    """Protocol for database query execution.

    Implementations:
    - An adapter over a live SurrealDB connection (outside this package)
    - FakeDatabaseExecutor: In-memory implementation for testing
    """

    async def execute(
        self, query: str, params: dict[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        """Execute a SurrealQL query and return results.

        Args:
            query: SurrealQL query string, already prepared
            params: Server-side query parameters

        Returns:
            List of result records as dictionaries
        """
        ...
