"""Per-chapter read counts and recent totals for one member.

Counts are additive: two readings covering the same chapter count twice.
A count is "times marked read", not a read/unread flag.
"""

from collections import Counter
from datetime import date, timedelta
from typing import Iterable, Iterator, Optional

from ..db.schemas import ReadingEvent
from .schemas import ChapterKey, ChapterReadSummary


def expand_chapters(event: ReadingEvent) -> Iterator[ChapterKey]:
    """Yield each (book, chapter) a reading covers."""
    for chapter in range(event.start_chapter, event.start_chapter + event.chapters_read):
        yield event.book, chapter


def build_chapter_read_map(events: Iterable[ReadingEvent]) -> dict[ChapterKey, int]:
    """Count how many readings cover each chapter."""
    counts: Counter[ChapterKey] = Counter()
    for event in events:
        counts.update(expand_chapters(event))
    return dict(counts)


def week_start(today: date) -> date:
    """Monday of the week containing today."""
    return today - timedelta(days=today.weekday())


def month_total(events: Iterable[ReadingEvent], today: date) -> int:
    """Chapters read in today's calendar month."""
    return sum(
        e.chapters_read
        for e in events
        if e.reading_date.year == today.year and e.reading_date.month == today.month
    )


def week_total(events: Iterable[ReadingEvent], today: date) -> int:
    """Chapters read from this week's Monday through today, inclusive."""
    monday = week_start(today)
    return sum(e.chapters_read for e in events if monday <= e.reading_date <= today)


def summarize(
    events: Iterable[ReadingEvent], today: Optional[date] = None
) -> ChapterReadSummary:
    """Build the full progress summary from a member's complete history."""
    if today is None:
        today = date.today()
    events = list(events)

    return ChapterReadSummary(
        today=today,
        read_counts=build_chapter_read_map(events),
        month_total=month_total(events, today),
        week_total=week_total(events, today),
    )
