"""Tests for SQLite database operations."""

from datetime import date
from uuid import UUID

import pytest

from biblechallenge.db.models import Group, Profile, Reading
from biblechallenge.db.schemas import ProfileCreate, ReadingCreate
from biblechallenge.db.sqlite import Database, get_db, reset_db
from biblechallenge.db.store import ReadingStore
from biblechallenge.errors import ConflictError, StoreUnavailable


@pytest.fixture
def profile(db: Database) -> Profile:
    """Create a group and one member."""
    group = db.create_group("1조")
    return db.create_profile(ProfileCreate(login_id="alice", nickname="Alice", group_id=group.id))


class TestDatabaseCreation:
    """Tests for database initialization."""

    def test_database_creates_tables(self, db: Database):
        """Test that database creates all required tables."""
        with db.get_session() as session:
            # These queries should not raise
            session.query(Group).first()
            session.query(Profile).first()
            session.query(Reading).first()

    def test_database_path_created(self, db: Database):
        """Test that database file is created."""
        assert db.db_path.exists()

    def test_database_is_reading_store(self, db: Database):
        """Test the database satisfies the store contract."""
        assert isinstance(db, ReadingStore)

    def test_get_db_uses_configured_path(self, temp_db_path):
        """Test the global database follows BIBLECHALLENGE_DB_PATH."""
        import os

        from biblechallenge.config import reset_config

        reset_db()
        reset_config()
        os.environ["BIBLECHALLENGE_DB_PATH"] = str(temp_db_path)
        try:
            database = get_db()
            assert database.db_path == temp_db_path
            assert get_db() is database
        finally:
            database.engine.dispose()
            reset_db()
            reset_config()
            del os.environ["BIBLECHALLENGE_DB_PATH"]


class TestGroupOperations:
    """Tests for group records."""

    def test_create_group_generates_uuid(self, db: Database):
        """Test that creating a group generates a valid UUID."""
        group = db.create_group("1조")

        assert str(UUID(group.id)) == group.id
        assert group.group_name == "1조"

    def test_duplicate_group_name_conflicts(self, db: Database):
        """Test group names are unique."""
        db.create_group("1조")

        with pytest.raises(ConflictError):
            db.create_group("1조")

    def test_get_group_by_name(self, db: Database):
        """Test looking up a group by name."""
        created = db.create_group("2조")

        found = db.get_group_by_name("2조")

        assert found is not None
        assert found.id == created.id
        assert db.get_group_by_name("9조") is None

    def test_get_group(self, db: Database):
        """Test looking up a group by ID."""
        created = db.create_group("2조")

        assert db.get_group(created.id).group_name == "2조"
        assert db.get_group("missing") is None

    def test_query_groups_ordered_by_name(self, db: Database):
        """Test groups come back in name order regardless of insert order."""
        for name in ["3조", "1조", "2조"]:
            db.create_group(name)

        groups = db.query_groups()

        assert [g.group_name for g in groups] == ["1조", "2조", "3조"]

    def test_query_groups_empty(self, db: Database):
        """Test an empty reference set."""
        assert db.query_groups() == []


class TestProfileOperations:
    """Tests for member profiles and memberships."""

    def test_create_profile(self, db: Database, profile: Profile):
        """Test creating a profile."""
        assert profile.login_id == "alice"
        assert profile.nickname == "Alice"
        assert profile.group_id is not None

    def test_duplicate_login_conflicts(self, db: Database, profile: Profile):
        """Test login IDs are unique."""
        with pytest.raises(ConflictError):
            db.create_profile(ProfileCreate(login_id="alice", nickname="Other"))

    def test_get_profile(self, db: Database, profile: Profile):
        """Test looking up profiles by ID and login."""
        assert db.get_profile(profile.id).login_id == "alice"
        assert db.get_profile_by_login("alice").id == profile.id
        assert db.get_profile_by_login("nobody") is None

    def test_query_memberships(self, db: Database, profile: Profile):
        """Test membership rows include members without a group."""
        db.create_profile(ProfileCreate(login_id="loner", nickname="Loner"))

        memberships = db.query_memberships()

        by_user = {m.user_id: m for m in memberships}
        assert len(memberships) == 2
        assert by_user[profile.id].group_id == profile.group_id
        assert any(m.group_id is None for m in memberships)

    def test_query_memberships_for_group(self, db: Database, profile: Profile):
        """Test filtering memberships by group."""
        other = db.create_group("2조")
        db.create_profile(ProfileCreate(login_id="bob", nickname="Bob", group_id=other.id))

        memberships = db.query_memberships(profile.group_id)

        assert [m.nickname for m in memberships] == ["Alice"]


class TestReadingOperations:
    """Tests for reading inserts and queries."""

    def test_insert_reading(self, db: Database, profile: Profile):
        """Test inserting a reading."""
        event = db.insert_reading_event(
            ReadingCreate(
                user_id=profile.id,
                reading_date=date(2026, 1, 5),
                book="John",
                start_chapter=3,
                chapters_read=2,
            )
        )

        assert event.id
        assert event.reading_date == date(2026, 1, 5)
        assert event.book == "John"
        assert event.end_chapter == 4

    def test_duplicate_reading_conflicts(self, db: Database, profile: Profile):
        """Test the same member, date, book and start chapter conflict."""
        reading = ReadingCreate(
            user_id=profile.id, reading_date=date(2026, 1, 5), book="John", start_chapter=3
        )
        db.insert_reading_event(reading)

        with pytest.raises(ConflictError):
            db.insert_reading_event(reading)

        assert len(db.query_reading_events(user_id=profile.id)) == 1

    def test_same_chapter_different_day(self, db: Database, profile: Profile):
        """Test the same chapter can be logged on another day."""
        for day in (5, 6):
            db.insert_reading_event(
                ReadingCreate(
                    user_id=profile.id,
                    reading_date=date(2026, 1, day),
                    book="John",
                    start_chapter=3,
                )
            )

        assert len(db.query_reading_events(user_id=profile.id)) == 2

    def test_query_by_date_range(self, db: Database, profile: Profile):
        """Test inclusive date range filtering, newest first."""
        for day in (date(2025, 12, 31), date(2026, 1, 1), date(2026, 1, 31), date(2026, 2, 1)):
            db.insert_reading_event(
                ReadingCreate(user_id=profile.id, reading_date=day, book="Genesis", start_chapter=1)
            )

        events = db.query_reading_events(start_date=date(2026, 1, 1), end_date=date(2026, 1, 31))

        assert [e.reading_date for e in events] == [date(2026, 1, 31), date(2026, 1, 1)]

    def test_query_with_limit(self, db: Database, profile: Profile):
        """Test the limit keeps only the newest readings."""
        for day in range(1, 6):
            db.insert_reading_event(
                ReadingCreate(
                    user_id=profile.id, reading_date=date(2026, 1, day), book="Acts", start_chapter=1
                )
            )

        events = db.query_reading_events(user_id=profile.id, limit=2)

        assert [e.reading_date for e in events] == [date(2026, 1, 5), date(2026, 1, 4)]

    def test_query_by_user(self, db: Database, profile: Profile):
        """Test filtering readings by member."""
        other = db.create_profile(ProfileCreate(login_id="bob", nickname="Bob"))
        db.insert_reading_event(
            ReadingCreate(user_id=profile.id, reading_date=date(2026, 1, 1), book="Ruth", start_chapter=1)
        )
        db.insert_reading_event(
            ReadingCreate(user_id=other.id, reading_date=date(2026, 1, 1), book="Ruth", start_chapter=1)
        )

        events = db.query_reading_events(user_id=other.id)

        assert len(events) == 1
        assert events[0].user_id == other.id


class TestStoreFailures:
    """Tests for store error translation."""

    def test_query_failure_raises_store_unavailable(self, db: Database):
        """Test a failing query is reported, not treated as empty."""
        db.drop_tables()

        with pytest.raises(StoreUnavailable):
            db.query_groups()

        with pytest.raises(StoreUnavailable):
            db.query_reading_events()

    def test_session_rolls_back_other_errors(self, db: Database):
        """Test non-database errors propagate unchanged and roll back."""
        with pytest.raises(RuntimeError):
            with db.get_session() as session:
                session.add(Group(group_name="temp"))
                session.flush()
                raise RuntimeError("boom")

        assert db.get_group_by_name("temp") is None
