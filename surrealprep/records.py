"""Adapter around the SurrealDB record identifier type.

SurrealDB returns RecordID objects instead of plain strings. These convert
to 'table:id' format when stringified, which is both the bare query literal
and the placeholder the serializer embeds for repeated records.

Nothing else in the package inspects RecordID directly.
"""

from collections.abc import Mapping
from typing import Any, Optional

from surrealdb import RecordID


def is_record_id(value: Any) -> bool:
    """Return True if value is a SurrealDB record identifier."""
    return isinstance(value, RecordID)


def to_literal(record_id: RecordID) -> str:
    """Canonical textual form, usable unquoted inside a query."""
    return str(record_id)


def to_serializable(record_id: RecordID) -> str:
    """Canonical JSON-safe form, used as a placeholder for repeated records."""
    return str(record_id)


def record_id_of(obj: Any, field_name: str = "id") -> Optional[str]:
    """Get the serializable identifier carried by a record, if any.

    Args:
        obj: A mapping row or an object with attributes
        field_name: The well-known identifier field

    Returns:
        The placeholder text, or None if the record carries no identifier
    """
    if isinstance(obj, Mapping):
        value = obj.get(field_name)
    else:
        value = getattr(obj, field_name, None)

    if is_record_id(value):
        return to_serializable(value)
    # Rows normalised to plain "table:id" strings
    if isinstance(value, str) and value:
        return value
    return None


def parse_record_id(text: str) -> RecordID:
    """Build a RecordID from its 'table:id' text.

    Raises:
        ValueError: If text has no table or no id part
    """
    table, sep, identifier = text.partition(":")
    if not sep or not table or not identifier:
        raise ValueError(f"Invalid record id: {text!r}")
    return RecordID(table, identifier)
