"""Bind-marker substitution for query templates.

A single left-to-right scan recognises, in priority order at each offset:
- a double-quoted literal (copied verbatim)
- a single-quoted literal (copied verbatim)
- whitespace + marker + name, or whitespace + marker + /*...*/ (positional)

Only the third alternative is ever rewritten. Quoted literals may contain
backslash-escaped quotes; an unterminated literal runs to the end of the
template.

Example:
    prepare("SELECT * FROM video WHERE title = :title", {"title": "O'Brien"})
    # SELECT * FROM video WHERE title = "O\\'Brien"
"""

import logging
import re
from collections.abc import Mapping
from functools import lru_cache
from typing import Any, Optional, Union

from .encoding import encode

logger = logging.getLogger(__name__)

BIND_NAME = r"[A-Za-z][A-Za-z0-9_-]*"

Params = Union[Mapping[str, Any], list, tuple]


@lru_cache(maxsize=8)
def bind_pattern(marker: str = ":") -> re.Pattern:
    """Compile the scanning pattern for a given marker character."""
    return re.compile(
        r'"(?:[^"\\]|\\[\s\S]?)*(?:"|\Z)'
        r"|'(?:[^'\\]|\\[\s\S]?)*(?:'|\Z)"
        rf"|\s{re.escape(marker)}(?P<param>{BIND_NAME}|/\*[\s\S]*?\*/)"
    )


def prepare(query: str, params: Optional[Params] = None, marker: str = ":") -> str:
    """Prepare a query by substituting bound parameters.

    Args:
        query: The query template
        params: Mapping of bind names to values, or a list/tuple of values
            for positional ``/*...*/`` markers
        marker: Character introducing a named bind marker

    Returns:
        The query with every recognised, bound marker replaced by
        a space plus the encoded value. Unbound markers are left verbatim.

    Raises:
        TypeError: If params is neither a mapping nor a list/tuple
    """
    if params is not None and not isinstance(params, (Mapping, list, tuple)):
        raise TypeError(
            f"params must be a mapping or a list/tuple, not {type(params).__name__}"
        )
    if not params:
        return query

    positional = iter(params) if isinstance(params, (list, tuple)) else None

    def substitute(match: re.Match) -> str:
        name = match.group("param")
        if name is None:
            return match.group(0)

        if positional is not None:
            if not name.startswith("/*"):
                logger.debug(f"Named marker {name} has no value in positional params")
                return match.group(0)
            try:
                value = next(positional)
            except StopIteration:
                logger.debug("Positional marker left unsubstituted: no values remain")
                return match.group(0)
        elif name in params:
            value = params[name]
        else:
            logger.debug(f"Bind marker {name} left unsubstituted")
            return match.group(0)

        return " " + encode(value)

    return bind_pattern(marker).sub(substitute, query)
