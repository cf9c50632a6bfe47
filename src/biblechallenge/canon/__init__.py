"""Static 66-book canon and display names."""

from .books import (
    BIBLE_BOOKS,
    BOOK_NAMES,
    KOREAN_BOOK_NAMES,
    TOTAL_CHAPTERS,
    chapter_count,
    find_book,
    is_valid_chapter,
    iter_chapters,
    korean_name,
)

__all__ = [
    "BIBLE_BOOKS",
    "BOOK_NAMES",
    "KOREAN_BOOK_NAMES",
    "TOTAL_CHAPTERS",
    "chapter_count",
    "find_book",
    "is_valid_chapter",
    "iter_chapters",
    "korean_name",
]
