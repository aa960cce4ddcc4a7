"""Query templating and value encoding.

Provides:
- escape / encode: runtime values as SurrealQL literals
- prepare: bind-marker substitution in query templates
- Statement: fluent SELECT builder rendered through prepare
- DatabaseExecutor: protocol prepared queries are executed through
"""

from .encoding import encode, escape
from .protocols import DatabaseExecutor
from .statement import Statement
from .templating import BIND_NAME, bind_pattern, prepare

__all__ = [
    "escape",
    "encode",
    "prepare",
    "bind_pattern",
    "BIND_NAME",
    "Statement",
    "DatabaseExecutor",
]
