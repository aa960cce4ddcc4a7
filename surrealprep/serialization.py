"""Cycle-safe JSON serialization of record graphs.

Records materialized from a graph database often point back at each other
(video -> channel -> videos -> ...). jsonify() walks the graph once, keeping
an identity-keyed VisitedSet for the duration of the call:

- first visit of a container: serialized in full
- any later visit of the same object: replaced by its record id
  ("table:id") if it carries one, otherwise omitted (null inside arrays)

This is deliberately lossy. A sub-object shared by two parents is written
out once and referenced by id the second time. to_plain() is the lossless
variant used for query values: only a back-reference to an object still
being converted is cut.
"""

import dataclasses
import logging
import math
from collections.abc import Mapping
from enum import Enum
from typing import Any, Iterator, Optional

from pydantic import BaseModel
from pydantic_core import to_json

from .records import is_record_id, record_id_of, to_serializable

logger = logging.getLogger(__name__)

_PRIMITIVES = (str, int, float, bool)
_SEQUENCES = (list, tuple, set, frozenset)
# Cannot contain themselves directly, and empty ones are shared singletons
_IMMUTABLE = (tuple, frozenset)

# Marks a value to be dropped from its parent
_OMIT = object()


class VisitedSet:
    """Objects already serialized in one jsonify() call, compared by identity.

    Holds a reference to every member so ids cannot be recycled while the
    call is running.
    """

    def __init__(self) -> None:
        self._ids: set[int] = set()
        self._order: list[Any] = []

    def __contains__(self, obj: Any) -> bool:
        return id(obj) in self._ids

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._order)

    def add(self, obj: Any) -> None:
        if id(obj) not in self._ids:
            self._ids.add(id(obj))
            self._order.append(obj)


def _is_container(value: Any) -> bool:
    if isinstance(value, (Mapping, BaseModel) + _SEQUENCES):
        return True
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return True
    return (
        hasattr(value, "__dict__")
        and not isinstance(value, (type, Enum))
        and not callable(value)
    )


def _members(value: Any) -> Iterator[tuple[Any, Any]]:
    """Yield (key, child) pairs of an object-like container."""
    if isinstance(value, Mapping):
        yield from value.items()
    elif isinstance(value, BaseModel):
        for name in type(value).model_fields:
            yield name, getattr(value, name)
    elif dataclasses.is_dataclass(value):
        for f in dataclasses.fields(value):
            yield f.name, getattr(value, f.name)
    else:
        for name, child in vars(value).items():
            if not name.startswith("_"):
                yield name, child


def _prune_items(value: Any, visited: VisitedSet, id_field: str) -> list:
    items = []
    for item in value:
        item = _prune(item, visited, id_field)
        items.append(None if item is _OMIT else item)
    return items


def _prune(value: Any, visited: VisitedSet, id_field: str) -> Any:
    """Reduce value to JSON-ready data, breaking repeated references."""
    if value is None or isinstance(value, _PRIMITIVES):
        return value
    if is_record_id(value):
        return to_serializable(value)
    if not _is_container(value):
        # datetime, UUID, Decimal, ... are left to the JSON encoder
        return value

    if isinstance(value, _IMMUTABLE):
        return _prune_items(value, visited, id_field)

    if value in visited:
        placeholder = record_id_of(value, id_field)
        logger.debug(
            f"Repeated {type(value).__name__} replaced by "
            f"{placeholder if placeholder is not None else 'omission'}"
        )
        return _OMIT if placeholder is None else placeholder
    visited.add(value)

    if isinstance(value, _SEQUENCES):
        return _prune_items(value, visited, id_field)

    result = {}
    for key, child in _members(value):
        child = _prune(child, visited, id_field)
        if child is not _OMIT:
            result[key if isinstance(key, str) else str(key)] = child
    return result


def jsonify(value: Any, indent: Optional[int] = None, id_field: str = "id") -> str:
    """Safely encode a value as JSON, allowing circular references.

    Args:
        value: The value to serialize
        indent: Pretty-print width; None or 0 gives compact output
        id_field: Field holding a record's identifier

    Returns:
        The JSON text
    """
    data = _prune(value, VisitedSet(), id_field)
    return to_json(data, indent=indent or None, fallback=str).decode()


def to_plain(value: Any, ancestors: Optional[set[int]] = None) -> Any:
    """Reduce value to JSON-ready data without dropping shared objects.

    Unlike jsonify(), only a true back-reference (an object reached again
    while it is still being converted) is cut, and it becomes None. An
    object shared by two parents is written out in full under both.
    Non-finite floats become None.

    Args:
        value: The value to convert
        ancestors: ids of the containers currently being converted

    Returns:
        Plain dicts, lists and scalars; other leaves are left to the JSON encoder
    """
    if ancestors is None:
        ancestors = set()
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if value is None or isinstance(value, _PRIMITIVES):
        return value
    if is_record_id(value):
        return to_serializable(value)
    if not _is_container(value):
        return value

    if id(value) in ancestors:
        logger.debug(f"Back-reference to {type(value).__name__} replaced by null")
        return None
    ancestors.add(id(value))
    try:
        if isinstance(value, _SEQUENCES):
            return [to_plain(item, ancestors) for item in value]
        return {
            key if isinstance(key, str) else str(key): to_plain(child, ancestors)
            for key, child in _members(value)
        }
    finally:
        ancestors.discard(id(value))
