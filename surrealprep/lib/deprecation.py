"""One-shot deprecation warnings for attributes.

Usage:
    deprecate(Client, "exec", "Client.exec is deprecated, use Client.query", lambda c: c.query)

    client.exec   # logs the warning (first read in the process), returns client.query
    client.exec   # plain instance attribute from now on, no warning, no resolver call
"""

import logging
import threading
from typing import Any, Callable

logger = logging.getLogger(__name__)


class DeprecatedAttribute:
    """Non-data descriptor that warns once, then resolves and caches.

    The warning is shared by every instance of the owning type (and of types
    derived from it). Each instance calls the resolver on its first read and
    keeps the result in its own __dict__, which shadows the descriptor for
    all later reads.

    Known gap: assigning the attribute on an instance before its first read
    also goes straight to __dict__, so the warning and resolver are skipped
    for that instance. Callers should not rely on either outcome.
    """

    def __init__(self, name: str, message: str, resolver: Callable[[Any], Any]):
        self.name = name
        self.message = message
        self.resolver = resolver
        self._shown = False
        self._lock = threading.Lock()

    @property
    def shown(self) -> bool:
        return self._shown

    def _warn_once(self) -> None:
        with self._lock:
            if self._shown:
                return
            self._shown = True
        logger.warning(self.message)

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        self._warn_once()
        value = self.resolver(instance)
        instance.__dict__[self.name] = value
        return value


def deprecate(
    target: Any,
    name: str,
    message: str,
    resolver: Callable[[Any], Any],
) -> DeprecatedAttribute:
    """Define a deprecated attribute.

    Args:
        target: Type to install on; an instance installs on its type
        name: Name of the deprecated attribute
        message: Warning logged on the first read, process-wide
        resolver: Called with the reading instance, returns the real value

    Returns:
        The installed descriptor
    """
    owner = target if isinstance(target, type) else type(target)
    descriptor = DeprecatedAttribute(name, message, resolver)
    setattr(owner, name, descriptor)

    # Keep composed types' tables in step so extend() carries it over
    members = vars(owner).get("__instance_members__")
    if isinstance(members, dict):
        members[name] = descriptor
    return descriptor
