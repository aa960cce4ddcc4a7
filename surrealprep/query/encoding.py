"""Escaping and encoding of runtime values as query literals.

Dispatch order for encode():
- None -> null
- bool -> true / false
- int, float, Decimal -> bare decimal text, never exponent notation;
  NaN and infinities -> null
- str -> double-quoted, embedded quotes backslash-escaped
- RecordID -> bare table:id
- list, tuple -> [a,b,...] with each element encoded
- anything else -> compact JSON. Shared sub-objects are written in full;
  only a back-reference to an enclosing object becomes null.
"""

import math
import re
from decimal import Decimal
from typing import Any

from pydantic_core import to_json

from ..records import is_record_id, to_literal
from ..serialization import to_plain

# A run of non-quote characters and escaped pairs, ending at an unescaped quote.
# A match that fails from one start offset is retried from the next, so an
# already-escaped quote with no unescaped quote after it is escaped again.
_SINGLE_QUOTE = re.compile(r"([^'\\]*(?:\\.[^'\\]*)*)'")
_DOUBLE_QUOTE = re.compile(r'([^"\\]*(?:\\.[^"\\]*)*)"')


def escape(value: Any) -> str:
    """Backslash-escape unescaped single and double quotes.

    Not idempotent: escape(escape(s)) can differ from escape(s), so callers
    must escape exactly once.

    Args:
        value: Value to embed in a quoted literal (coerced with str())

    Returns:
        The escaped text
    """
    text = _SINGLE_QUOTE.sub(r"\1\\'", str(value))
    return _DOUBLE_QUOTE.sub(r'\1\\"', text)


def encode(value: Any) -> str:
    """Encode a value for use in a query, quoting and escaping if required."""
    return _encode(value, set())


def _number(value: Any) -> str:
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            return "null"
        text = repr(value)
        if "e" not in text:
            return text
        value = Decimal(text)
    if not value.is_finite():
        return "null"
    return format(value, "f")


def _encode(value: Any, path: set[int]) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, Decimal)):
        return _number(value)
    if isinstance(value, str):
        return f'"{escape(value)}"'
    if is_record_id(value):
        return to_literal(value)
    if isinstance(value, (list, tuple)):
        # A sequence containing itself encodes the back-reference as null
        if id(value) in path:
            return "null"
        path.add(id(value))
        try:
            return "[" + ",".join(_encode(item, path) for item in value) + "]"
        finally:
            path.discard(id(value))
    return to_json(to_plain(value, path), fallback=str).decode()
