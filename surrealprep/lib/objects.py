"""Shallow copies and operation bundles attached to a host object.

Example:
    async def get(db, rid):
        return await db.query("SELECT * FROM :rid", {"rid": rid})

    augment(client, "record", {"get": get, "defaults": {"limit": 20}})
    await client.record.get(rid)    # db is client
    client.record.defaults["limit"]  # a private copy of the dict
"""

import copy
from collections.abc import Mapping
from types import MethodType, SimpleNamespace
from typing import Any, TypeVar

H = TypeVar("H")

_IMMUTABLE = (str, bytes, int, float, complex, bool, tuple, frozenset, type(None))


def clone(item: Any) -> Any:
    """Shallow clone the given value.

    Lists, sets and mappings come back as new containers holding the same
    elements; other objects are copied one level deep; immutable values are
    returned unchanged.
    """
    if isinstance(item, _IMMUTABLE) or callable(item):
        return item
    if isinstance(item, list):
        return item.copy()
    if isinstance(item, set):
        return set(item)
    if isinstance(item, Mapping):
        return dict(item)
    return copy.copy(item)


def augment(host: H, name: str, bundle: Mapping[str, Any]) -> H:
    """Attach a named bundle of operations and values to host.

    Callables are bound so host is always their first argument, however
    they are later invoked. Other values are shallow-cloned, so hosts
    augmented with the same bundle never share mutable state.

    Args:
        host: Object receiving the bundle
        name: Attribute name for the bundle on host
        bundle: Member name -> function or value

    Returns:
        host, for chaining
    """
    members = SimpleNamespace()
    for key, value in bundle.items():
        if callable(value):
            setattr(members, key, MethodType(value, host))
        else:
            setattr(members, key, clone(value))
    setattr(host, name, members)
    return host
