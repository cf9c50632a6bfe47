"""SQLAlchemy ORM models for local SQLite database.

Tables:
- groups: Challenge groups (reference set)
- profiles: Challenge members, one group each
- readings: Logged reading events
"""

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


def generate_uuid() -> str:
    """Generate a UUID string for primary keys."""
    return str(uuid4())


class Group(Base):
    """Group model - a cohort sharing a leaderboard bucket."""

    __tablename__ = "groups"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    group_name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    created_at: Mapped[str] = mapped_column(
        String(26), default=lambda: datetime.now(timezone.utc).isoformat()
    )

    members: Mapped[list["Profile"]] = relationship(back_populates="group")

    def __repr__(self) -> str:
        return f"<Group(id={self.id}, name={self.group_name})>"


class Profile(Base):
    """Profile model - a challenge member and their group membership."""

    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)

    # Login identifier chosen at signup
    login_id: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    nickname: Mapped[str] = mapped_column(String(100), nullable=False)

    group_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("groups.id", ondelete="SET NULL"), index=True
    )

    created_at: Mapped[str] = mapped_column(
        String(26), default=lambda: datetime.now(timezone.utc).isoformat()
    )

    group: Mapped[Optional[Group]] = relationship(back_populates="members")

    def __repr__(self) -> str:
        return f"<Profile(login_id={self.login_id}, group_id={self.group_id})>"


class Reading(Base):
    """Reading model - one logged reading event.

    A member marks a given starting chapter at most once per day.
    """

    __tablename__ = "readings"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "reading_date", "book", "start_chapter",
            name="uq_reading_user_date_book_chapter",
        ),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )

    reading_date: Mapped[str] = mapped_column(String(10), nullable=False, index=True)  # ISO date
    book: Mapped[str] = mapped_column(String(50), nullable=False)
    start_chapter: Mapped[int] = mapped_column(Integer, nullable=False)
    chapters_read: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    created_at: Mapped[str] = mapped_column(
        String(26), default=lambda: datetime.now(timezone.utc).isoformat()
    )

    def __repr__(self) -> str:
        return (
            f"<Reading(user_id={self.user_id}, date={self.reading_date}, "
            f"book={self.book}, start={self.start_chapter}, count={self.chapters_read})>"
        )
