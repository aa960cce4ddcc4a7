"""Fluent builder for SurrealQL SELECT statements.

Clauses are collected in any order and rendered in canonical order:
SELECT, FROM, WHERE, ORDER BY, LIMIT. Bound parameters from where() and
bind() are substituted by prepare() when the statement is built.

Example:
    stmt = (
        Statement()
        .select("title", "url")
        .from_("video")
        .where("channel_id = :channel", channel="UC123")
        .limit(10)
    )
    str(stmt)
    # SELECT title, url FROM video WHERE channel_id = "UC123" LIMIT 10
"""

import logging
from typing import TYPE_CHECKING, Any, Optional

from ..config import PrepConfig
from ..lib.compose import Composable
from ..records import is_record_id, to_literal
from .templating import prepare

if TYPE_CHECKING:
    from .protocols import DatabaseExecutor

logger = logging.getLogger(__name__)

# Keyword -> separator between parts of the same clause
_CLAUSES = {
    "SELECT": ", ",
    "FROM": ", ",
    "WHERE": " AND ",
    "ORDER BY": ", ",
    "LIMIT": None,
}


class Statement(Composable):
    """A SELECT statement with bound parameters."""

    def __init__(
        self,
        db: "DatabaseExecutor | None" = None,
        config: Optional[PrepConfig] = None,
    ):
        """Initialize an empty statement.

        Args:
            db: Executor used by execute() when none is passed explicitly
            config: Bind-marker settings. If None, read from the environment.
        """
        self._db = db
        self.config = config or PrepConfig()
        self._parts: dict[str, list[str]] = {}
        self.params: dict[str, Any] = {}

    def _add(self, keyword: str, text: str) -> "Statement":
        self._parts.setdefault(keyword, []).append(text)
        return self

    def select(self, *fields: str) -> "Statement":
        return self._add("SELECT", ", ".join(fields) or "*")

    def from_(self, target: Any) -> "Statement":
        """Add a table name or a record id to select from."""
        if is_record_id(target):
            target = to_literal(target)
        return self._add("FROM", str(target))

    def where(self, condition: str, **params: Any) -> "Statement":
        """Add a condition, ANDed with any previous ones."""
        self.params.update(params)
        return self._add("WHERE", condition)

    def order_by(self, field: str, direction: str = "ASC") -> "Statement":
        direction = direction.upper()
        if direction not in ("ASC", "DESC"):
            raise ValueError(f"Invalid sort direction: {direction}")
        return self._add("ORDER BY", f"{field} {direction}")

    def limit(self, count: int) -> "Statement":
        # A later limit replaces an earlier one
        self._parts["LIMIT"] = [str(int(count))]
        return self

    def bind(self, params: Optional[dict[str, Any]] = None, **more: Any) -> "Statement":
        """Bind parameter values without adding a clause."""
        self.params.update(params or {})
        self.params.update(more)
        return self

    def build(self) -> str:
        """Render the statement with all bound parameters substituted."""
        if "FROM" not in self._parts:
            raise ValueError("Statement has no FROM clause")

        parts = {"SELECT": ["*"], **self._parts}
        clauses = []
        for keyword, separator in _CLAUSES.items():
            if keyword not in parts:
                continue
            body = parts[keyword][-1] if separator is None else separator.join(parts[keyword])
            clauses.append(f"{keyword} {body}")
        return prepare(" ".join(clauses), self.params, self.config.bind_marker)

    def __str__(self) -> str:
        return self.build()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._parts!r}, params={sorted(self.params)!r})"

    async def execute(self, db: "DatabaseExecutor | None" = None) -> list[dict[str, Any]]:
        """Build the statement and run it.

        Args:
            db: Executor to use instead of the one given at construction

        Returns:
            List of result records as dictionaries

        Raises:
            ValueError: If no executor is available
        """
        db = db or self._db
        if db is None:
            raise ValueError("No database executor to run the statement on")

        query = self.build()
        try:
            return await db.execute(query)
        except Exception as e:
            logger.error(f"Statement execution error: {e}")
            raise
