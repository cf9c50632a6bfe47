"""SQLite database operations.

Handles database connection, session management, and the store queries
used by the challenge managers.
"""

import logging
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from typing import Generator, Optional

from sqlalchemy import create_engine, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ..errors import ConflictError, StoreUnavailable
from .models import Base, Group, Profile, Reading
from .schemas import (
    GroupRecord,
    Membership,
    ProfileCreate,
    ReadingCreate,
    ReadingEvent,
)
from .store import ReadingStore

logger = logging.getLogger(__name__)


class Database(ReadingStore):
    """Database connection and operations manager."""

    def __init__(self, db_path: Optional[str] = None):
        """Initialize database connection.

        Args:
            db_path: Path to SQLite database file. If None, uses the
                     configured BIBLECHALLENGE_DB_PATH location.
        """
        if db_path is None:
            from ..config import get_config

            db_path = str(get_config().db_path)

        self.db_path = Path(db_path)
        self._is_memory = str(db_path) == ":memory:"

        if not self._is_memory:
            self._ensure_directory()

        # For in-memory databases, use StaticPool to reuse the same connection
        # This ensures all sessions share the same in-memory database
        if self._is_memory:
            self.engine = create_engine(
                "sqlite:///:memory:",
                echo=False,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            self.engine = create_engine(
                f"sqlite:///{self.db_path}",
                echo=False,
                connect_args={"check_same_thread": False},
            )
        self.SessionLocal = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)

    def _ensure_directory(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def create_tables(self) -> None:
        """Create all database tables."""
        Base.metadata.create_all(self.engine)

    def drop_tables(self) -> None:
        """Drop all database tables. Use with caution!"""
        Base.metadata.drop_all(self.engine)

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """Get a database session context manager.

        Unique key violations surface as ConflictError, any other
        SQLAlchemy failure as StoreUnavailable.
        """
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except IntegrityError as e:
            session.rollback()
            raise ConflictError(str(e.orig)) from e
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("Database operation failed: %s", e)
            raise StoreUnavailable(str(e)) from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    # ========================================================================
    # Group Operations
    # ========================================================================

    def create_group(self, group_name: str, session: Optional[Session] = None) -> Group:
        """Create a new group record."""

        def _create(s: Session) -> Group:
            group = Group(group_name=group_name)
            s.add(group)
            s.flush()
            return group

        if session:
            return _create(session)
        else:
            with self.get_session() as s:
                group = _create(s)
                s.expunge(group)
                return group

    def get_group(self, group_id: str, session: Optional[Session] = None) -> Optional[Group]:
        """Get a group by ID."""

        def _get(s: Session) -> Optional[Group]:
            return s.get(Group, group_id)

        if session:
            return _get(session)
        else:
            with self.get_session() as s:
                group = _get(s)
                if group:
                    s.expunge(group)
                return group

    def get_group_by_name(
        self, group_name: str, session: Optional[Session] = None
    ) -> Optional[Group]:
        """Get a group by its display name."""

        def _get(s: Session) -> Optional[Group]:
            stmt = select(Group).where(Group.group_name == group_name)
            return s.execute(stmt).scalar_one_or_none()

        if session:
            return _get(session)
        else:
            with self.get_session() as s:
                group = _get(s)
                if group:
                    s.expunge(group)
                return group

    def query_groups(self) -> list[GroupRecord]:
        """Get all groups ordered by name, then ID."""
        with self.get_session() as s:
            stmt = select(Group).order_by(Group.group_name, Group.id)
            return [GroupRecord.model_validate(g) for g in s.execute(stmt).scalars().all()]

    # ========================================================================
    # Profile Operations
    # ========================================================================

    def create_profile(
        self, profile: ProfileCreate, session: Optional[Session] = None
    ) -> Profile:
        """Create a new member profile.

        Raises:
            ConflictError: If the login ID is already taken
        """

        def _create(s: Session) -> Profile:
            db_profile = Profile(
                login_id=profile.login_id,
                nickname=profile.nickname,
                group_id=profile.group_id,
            )
            s.add(db_profile)
            s.flush()
            return db_profile

        if session:
            return _create(session)
        else:
            with self.get_session() as s:
                db_profile = _create(s)
                s.expunge(db_profile)
                return db_profile

    def get_profile(self, user_id: str, session: Optional[Session] = None) -> Optional[Profile]:
        """Get a profile by ID."""

        def _get(s: Session) -> Optional[Profile]:
            return s.get(Profile, user_id)

        if session:
            return _get(session)
        else:
            with self.get_session() as s:
                profile = _get(s)
                if profile:
                    s.expunge(profile)
                return profile

    def get_profile_by_login(
        self, login_id: str, session: Optional[Session] = None
    ) -> Optional[Profile]:
        """Get a profile by login ID."""

        def _get(s: Session) -> Optional[Profile]:
            stmt = select(Profile).where(Profile.login_id == login_id)
            return s.execute(stmt).scalar_one_or_none()

        if session:
            return _get(session)
        else:
            with self.get_session() as s:
                profile = _get(s)
                if profile:
                    s.expunge(profile)
                return profile

    def query_memberships(self, group_id: Optional[str] = None) -> list[Membership]:
        """Get member to group mappings, ordered by nickname."""
        with self.get_session() as s:
            stmt = select(Profile)
            if group_id is not None:
                stmt = stmt.where(Profile.group_id == group_id)
            stmt = stmt.order_by(Profile.nickname, Profile.id)
            return [
                Membership(user_id=p.id, group_id=p.group_id, nickname=p.nickname)
                for p in s.execute(stmt).scalars().all()
            ]

    # ========================================================================
    # Reading Operations
    # ========================================================================

    def insert_reading_event(self, event: ReadingCreate) -> ReadingEvent:
        """Insert a reading.

        Raises:
            ConflictError: If the member already logged this starting
                chapter of this book on the same day
        """
        with self.get_session() as s:
            db_reading = Reading(
                user_id=event.user_id,
                reading_date=event.reading_date.isoformat(),
                book=event.book,
                start_chapter=event.start_chapter,
                chapters_read=event.chapters_read,
            )
            s.add(db_reading)
            s.flush()
            logger.debug("Inserted reading %r", db_reading)
            return ReadingEvent.model_validate(db_reading)

    def query_reading_events(
        self,
        user_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> list[ReadingEvent]:
        """Get readings, most recent first.

        Args:
            user_id: Only readings of this member
            start_date: Inclusive lower bound
            end_date: Inclusive upper bound
            limit: Maximum number of readings to return
        """
        with self.get_session() as s:
            stmt = select(Reading)
            if user_id is not None:
                stmt = stmt.where(Reading.user_id == user_id)
            if start_date is not None:
                stmt = stmt.where(Reading.reading_date >= start_date.isoformat())
            if end_date is not None:
                stmt = stmt.where(Reading.reading_date <= end_date.isoformat())
            stmt = stmt.order_by(Reading.reading_date.desc(), Reading.created_at.desc())
            if limit is not None:
                stmt = stmt.limit(limit)
            return [ReadingEvent.model_validate(r) for r in s.execute(stmt).scalars().all()]


# Global database instance
_db: Optional[Database] = None


def get_db(db_path: Optional[str] = None) -> Database:
    """Get or create the global database instance."""
    global _db
    if _db is None:
        _db = Database(db_path)
        _db.create_tables()
    return _db


def reset_db() -> None:
    """Reset the global database instance. Used for testing."""
    global _db
    _db = None
