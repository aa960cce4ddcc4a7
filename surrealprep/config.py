"""Query preparation settings from environment variables."""

import os
from dataclasses import dataclass, field
from typing import Optional


def _get_env(key: str, default: str) -> str:
    """Get environment variable at call time, not import time."""
    return os.getenv(key, default)


def _get_indent() -> Optional[int]:
    raw = _get_env("SURREALPREP_JSON_INDENT", "")
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        # Left for validate() to report
        return -1


@dataclass
class PrepConfig:
    """Configuration for query templating and record serialization.

    All settings come from environment variables with defaults that match
    the classic ``:name`` bind-marker style.

    Note: Uses field(default_factory=...) to read env vars at instance
    creation time, not at class definition time.
    """

    bind_marker: str = field(default_factory=lambda: _get_env("SURREALPREP_BIND_MARKER", ":"))
    record_id_field: str = field(default_factory=lambda: _get_env("SURREALPREP_RECORD_ID_FIELD", "id"))
    json_indent: Optional[int] = field(default_factory=_get_indent)

    def validate(self) -> None:
        """Validate configuration.

        Raises:
            ValueError: If a setting is missing or malformed
        """
        marker = self.bind_marker
        if len(marker) != 1 or marker.isalnum() or marker.isspace() or marker in "'\"_":
            raise ValueError(
                f"SURREALPREP_BIND_MARKER must be a single punctuation character, got {marker!r}"
            )
        if not self.record_id_field:
            raise ValueError("SURREALPREP_RECORD_ID_FIELD is required")
        if self.json_indent is not None and self.json_indent < 0:
            raise ValueError("SURREALPREP_JSON_INDENT must be a non-negative integer")
