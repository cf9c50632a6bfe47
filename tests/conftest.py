"""Pytest configuration and shared fixtures.

This module provides fixtures for testing the reading challenge,
including temporary databases, seeded groups and members, and a
factory for in-memory reading events.
"""

import os
import tempfile
from datetime import date
from pathlib import Path
from typing import Callable, Generator
from uuid import uuid4

import pytest

from biblechallenge.config import reset_config
from biblechallenge.db.models import Profile
from biblechallenge.db.schemas import GroupRecord, Membership, ReadingEvent
from biblechallenge.db.sqlite import Database, reset_db
from biblechallenge.groups import GroupManager


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture(scope="function")
def temp_db_path() -> Generator[Path, None, None]:
    """Create a temporary database file path."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)
    yield db_path
    # Cleanup
    if db_path.exists():
        db_path.unlink()


@pytest.fixture(scope="function")
def db(temp_db_path: Path) -> Generator[Database, None, None]:
    """Create a test database instance."""
    # Reset any global state
    reset_db()
    reset_config()

    # Set environment variable for test database
    os.environ["BIBLECHALLENGE_DB_PATH"] = str(temp_db_path)

    database = Database(str(temp_db_path))
    database.create_tables()
    yield database

    # Cleanup
    database.engine.dispose()
    reset_db()
    reset_config()
    if "BIBLECHALLENGE_DB_PATH" in os.environ:
        del os.environ["BIBLECHALLENGE_DB_PATH"]


@pytest.fixture
def memory_db() -> Database:
    """Create an in-memory database for testing."""
    database = Database(":memory:")
    database.create_tables()
    return database


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def group_manager(memory_db: Database) -> GroupManager:
    """Create a GroupManager with test database."""
    return GroupManager(memory_db)


@pytest.fixture
def members(group_manager: GroupManager) -> dict[str, Profile]:
    """Register three groups' worth of members.

    1조: alice, bob
    2조: carol
    3조: no members
    """
    group_manager.ensure_default_groups(["1조", "2조", "3조"])
    return {
        "alice": group_manager.register_member("alice", "Alice", "1조"),
        "bob": group_manager.register_member("bob", "Bob", "1조"),
        "carol": group_manager.register_member("carol", "Carol", "2조"),
    }


@pytest.fixture
def make_event() -> Callable[..., ReadingEvent]:
    """Factory for reading events that never touch a store."""

    def _make(
        user_id: str,
        reading_date: date,
        book: str = "Genesis",
        start_chapter: int = 1,
        chapters_read: int = 1,
    ) -> ReadingEvent:
        return ReadingEvent(
            id=str(uuid4()),
            user_id=user_id,
            reading_date=reading_date,
            book=book,
            start_chapter=start_chapter,
            chapters_read=chapters_read,
        )

    return _make


@pytest.fixture
def sample_groups() -> list[GroupRecord]:
    """Three groups in name order."""
    return [
        GroupRecord(id="g1", group_name="1조"),
        GroupRecord(id="g2", group_name="2조"),
        GroupRecord(id="g3", group_name="3조"),
    ]


@pytest.fixture
def sample_memberships() -> list[Membership]:
    """Members of g1 and g2, plus one member without a group."""
    return [
        Membership(user_id="u1", group_id="g1", nickname="Alice"),
        Membership(user_id="u2", group_id="g1", nickname="Bob"),
        Membership(user_id="u3", group_id="g2", nickname="Carol"),
        Membership(user_id="u4", group_id=None, nickname="Drifter"),
    ]


# ============================================================================
# CLI Testing Fixtures
# ============================================================================


@pytest.fixture
def cli_runner():
    """Create a Typer CLI test runner."""
    from typer.testing import CliRunner
    return CliRunner()
