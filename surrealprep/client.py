"""Client facade tying query preparation to a database executor.

Provides:
- query(): prepare a template with bound parameters and run it
- statement(): a Statement builder sharing the client's executor and config
- record: bundle of record operations bound to the client
- exec: deprecated alias of query()

Supports dependency injection for testability:
    client = Client(db=FakeDatabaseExecutor())
"""

import logging
from typing import TYPE_CHECKING, Any, Optional

from .config import PrepConfig
from .lib.compose import Composable
from .lib.deprecation import deprecate
from .lib.objects import augment
from .query.statement import Statement
from .query.templating import Params, prepare
from .records import is_record_id, parse_record_id
from .serialization import jsonify

if TYPE_CHECKING:
    from .query.protocols import DatabaseExecutor

logger = logging.getLogger(__name__)


def _coerce_record_id(rid: Any) -> Any:
    return rid if is_record_id(rid) else parse_record_id(str(rid))


async def get_record(client: "Client", rid: Any) -> Optional[dict[str, Any]]:
    """Fetch a single record by id, or None if it does not exist."""
    marker = client.config.bind_marker
    rows = await client.query(f"SELECT * FROM {marker}rid", {"rid": _coerce_record_id(rid)})
    return rows[0] if rows else None


async def delete_record(client: "Client", rid: Any) -> None:
    """Delete a single record by id."""
    marker = client.config.bind_marker
    await client.query(f"DELETE {marker}rid", {"rid": _coerce_record_id(rid)})


def serialize_record(client: "Client", record: Any, indent: Optional[int] = None) -> str:
    """Render a materialized record (possibly cyclic) as JSON."""
    if indent is None:
        indent = client.config.json_indent
    return jsonify(record, indent, client.config.record_id_field)


RECORD_OPERATIONS = {
    "get": get_record,
    "delete": delete_record,
    "serialize": serialize_record,
}


class Client(Composable):
    """Prepares queries client-side and hands them to a DatabaseExecutor."""

    def __init__(
        self,
        db: "DatabaseExecutor",
        config: Optional[PrepConfig] = None,
    ):
        """Initialize client.

        Args:
            db: Executor that runs prepared SurrealQL
            config: Preparation settings. If None, read from the environment.

        Raises:
            ValueError: If configuration validation fails
        """
        self.db = db
        self.config = config or PrepConfig()
        self.config.validate()
        augment(self, "record", RECORD_OPERATIONS)

    def statement(self) -> Statement:
        """Start a new statement bound to this client's executor."""
        return Statement(self.db, self.config)

    def prepare(self, query: str, params: Optional[Params] = None) -> str:
        return prepare(query, params, self.config.bind_marker)

    async def query(self, query: str, params: Optional[Params] = None) -> list[dict[str, Any]]:
        """Prepare a query and run it.

        Args:
            query: Query template with bind markers
            params: Values for the bind markers

        Returns:
            List of result records as dictionaries
        """
        prepared = self.prepare(query, params)
        try:
            return await self.db.execute(prepared)
        except Exception as e:
            logger.error(f"Query execution error: {e}")
            raise


deprecate(
    Client,
    "exec",
    "Client.exec is deprecated and will be removed, use Client.query instead.",
    lambda client: client.query,
)
