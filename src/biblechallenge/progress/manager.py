"""Progress manager for logging readings and building a member's grid."""

import logging
from datetime import date
from typing import Optional

from pydantic import ValidationError

from ..db.schemas import ReadingCreate, ReadingEvent
from ..db.sqlite import Database, get_db
from ..errors import ConflictError, ReadingValidationError
from ..leaderboard.schemas import MonthWindow
from .chapter_map import summarize
from .schemas import ChapterReadSummary

logger = logging.getLogger(__name__)


def _validation_message(error: ValidationError) -> str:
    """Flatten pydantic errors into one user-facing line."""
    messages = []
    for err in error.errors():
        field_name = ".".join(str(part) for part in err["loc"])
        message = err["msg"].removeprefix("Value error, ")
        messages.append(f"{field_name}: {message}" if field_name else message)
    return "; ".join(messages)


class ProgressManager:
    """Manages a member's readings and chapter progress."""

    def __init__(self, db: Optional[Database] = None):
        """Initialize progress manager.

        Args:
            db: Database instance
        """
        self.db = db or get_db()

    # -------------------------------------------------------------------------
    # Logging Readings
    # -------------------------------------------------------------------------

    def log_reading(
        self,
        user_id: str,
        book: str,
        start_chapter: int,
        chapters_read: int = 1,
        reading_date: Optional[date] = None,
    ) -> Optional[ReadingEvent]:
        """Log a run of consecutive chapters.

        A second reading with the same member, date, book and starting
        chapter is ignored.

        Args:
            user_id: Member ID
            book: Canonical English book name
            start_chapter: First chapter read
            chapters_read: Number of consecutive chapters
            reading_date: Date of reading (default: today)

        Returns:
            The stored reading, or None if it was already logged

        Raises:
            ReadingValidationError: If the book or chapter range is invalid
            StoreUnavailable: If the store cannot be written
        """
        try:
            reading = ReadingCreate(
                user_id=user_id,
                book=book,
                start_chapter=start_chapter,
                chapters_read=chapters_read,
                reading_date=reading_date or date.today(),
            )
        except ValidationError as e:
            raise ReadingValidationError(_validation_message(e)) from e

        try:
            return self.db.insert_reading_event(reading)
        except ConflictError:
            logger.debug(
                "Reading already logged: %s %s %d on %s",
                user_id, reading.book, reading.start_chapter, reading.reading_date,
            )
            return None

    def mark_chapter(
        self,
        user_id: str,
        book: str,
        chapter: int,
        reading_date: Optional[date] = None,
    ) -> bool:
        """Mark a single chapter as read.

        Returns:
            True if a new reading was stored, False if already marked that day
        """
        return self.log_reading(user_id, book, chapter, 1, reading_date) is not None

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def compute_chapter_read_map(
        self, user_id: str, today: Optional[date] = None
    ) -> ChapterReadSummary:
        """Build the member's all-time chapter counts and recent totals.

        Args:
            user_id: Member ID
            today: Reference date for month and week totals (default: today)
        """
        events = self.db.query_reading_events(user_id=user_id)
        return summarize(events, today)

    def get_recent_readings(self, user_id: str, limit: int = 7) -> list[ReadingEvent]:
        """Get the member's most recent readings, newest first."""
        return self.db.query_reading_events(user_id=user_id, limit=limit)

    def get_latest_reading(self, user_id: str) -> Optional[ReadingEvent]:
        """Get the member's most recent reading."""
        recent = self.get_recent_readings(user_id, limit=1)
        return recent[0] if recent else None

    def get_month_readings(
        self, user_id: str, window: Optional[MonthWindow] = None
    ) -> list[ReadingEvent]:
        """Get the member's readings in a month, newest first."""
        if window is None:
            window = MonthWindow.current()
        return self.db.query_reading_events(
            user_id=user_id, start_date=window.first_day, end_date=window.last_day
        )

    def get_user_month_total(
        self, user_id: str, window: Optional[MonthWindow] = None
    ) -> int:
        """Total chapters the member read in a month."""
        return sum(r.chapters_read for r in self.get_month_readings(user_id, window))
