"""Shared pytest fixtures for surrealprep tests."""

import pytest
from surrealdb import RecordID

from surrealprep.config import PrepConfig
from surrealprep.tests.fakes import FakeDatabaseExecutor


@pytest.fixture
def config():
    """Explicit config so tests never depend on the environment."""
    return PrepConfig(bind_marker=":", record_id_field="id", json_indent=None)


@pytest.fixture
def fake_db():
    """Create a fresh FakeDatabaseExecutor for each test."""
    return FakeDatabaseExecutor()


@pytest.fixture
def video_rid():
    return RecordID("video", "abc123")
