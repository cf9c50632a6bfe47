"""Per-member reading progress."""

from .chapter_map import (
    build_chapter_read_map,
    expand_chapters,
    month_total,
    summarize,
    week_start,
    week_total,
)
from .manager import ProgressManager
from .schemas import BookProgress, ChapterReadSummary

__all__ = [
    "ProgressManager",
    "BookProgress",
    "ChapterReadSummary",
    "build_chapter_read_map",
    "expand_chapters",
    "month_total",
    "summarize",
    "week_start",
    "week_total",
]
