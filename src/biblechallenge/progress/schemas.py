"""Result types for a member's reading progress."""

from dataclasses import dataclass, field
from datetime import date

from ..canon import BIBLE_BOOKS, TOTAL_CHAPTERS, chapter_count, korean_name

ChapterKey = tuple[str, int]


@dataclass
class BookProgress:
    """How much of one book a member has read."""

    book: str
    chapters_total: int
    chapters_read: int = 0

    @property
    def korean_name(self) -> str:
        return korean_name(self.book)

    @property
    def percent(self) -> float:
        if self.chapters_total == 0:
            return 0.0
        return self.chapters_read / self.chapters_total * 100

    @property
    def is_complete(self) -> bool:
        return self.chapters_read >= self.chapters_total


@dataclass
class ChapterReadSummary:
    """A member's all-time chapter read counts plus recent totals."""

    today: date
    read_counts: dict[ChapterKey, int] = field(default_factory=dict)
    month_total: int = 0  # chapters_read summed over the current month
    week_total: int = 0  # chapters_read summed from Monday through today

    def count(self, book: str, chapter: int) -> int:
        """Times a chapter was marked read."""
        return self.read_counts.get((book, chapter), 0)

    def is_read(self, book: str, chapter: int) -> bool:
        return self.count(book, chapter) > 0

    @property
    def chapters_completed(self) -> int:
        """Distinct chapters read at least once."""
        return sum(1 for count in self.read_counts.values() if count > 0)

    @property
    def completion_percent(self) -> float:
        return self.chapters_completed / TOTAL_CHAPTERS * 100

    def book_progress(self) -> list[BookProgress]:
        """Per-book progress for all 66 books, in canonical order."""
        read_per_book: dict[str, int] = {}
        for (book, _), count in self.read_counts.items():
            if count > 0:
                read_per_book[book] = read_per_book.get(book, 0) + 1

        return [
            BookProgress(
                book=book,
                chapters_total=chapters,
                chapters_read=read_per_book.get(book, 0),
            )
            for book, chapters in BIBLE_BOOKS
        ]

    def book_completed(self, book: str) -> bool:
        """Whether every chapter of a book was read at least once."""
        return all(self.is_read(book, chapter) for chapter in range(1, chapter_count(book) + 1))
