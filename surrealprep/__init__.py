"""Client-side support layer for a SurrealDB-style document/graph driver.

Provides:
- Query templating with named and positional bind markers
- Encoding of runtime values (including RecordID) as query literals
- Cycle-safe JSON serialization of materialized records
- Object composition helpers: clone, augment, extend, deprecate
"""

from .client import Client
from .config import PrepConfig
from .lib.compose import Composable, extend, is_composed
from .lib.deprecation import DeprecatedAttribute, deprecate
from .lib.objects import augment, clone
from .query import DatabaseExecutor, Statement, encode, escape, prepare
from .records import is_record_id, parse_record_id, record_id_of
from .serialization import VisitedSet, jsonify, to_plain

__all__ = [
    # Config
    "PrepConfig",
    # Query
    "escape",
    "encode",
    "prepare",
    "Statement",
    "DatabaseExecutor",
    # Serialization
    "jsonify",
    "VisitedSet",
    "to_plain",
    # Records
    "is_record_id",
    "parse_record_id",
    "record_id_of",
    # Composition
    "clone",
    "augment",
    "extend",
    "is_composed",
    "Composable",
    "deprecate",
    "DeprecatedAttribute",
    # Client
    "Client",
]
