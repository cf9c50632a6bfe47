"""Schemas for monthly group and member standings."""

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


@dataclass(frozen=True, order=True)
class MonthWindow:
    """A calendar month, used as an inclusive date range."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"month must be 1-12, got {self.month}")

    @classmethod
    def for_date(cls, day: date) -> "MonthWindow":
        """Month containing a date."""
        return cls(day.year, day.month)

    @classmethod
    def current(cls, today: Optional[date] = None) -> "MonthWindow":
        """Month containing today."""
        return cls.for_date(today or date.today())

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        _, days_in_month = calendar.monthrange(self.year, self.month)
        return date(self.year, self.month, days_in_month)

    def contains(self, day: date) -> bool:
        """Check whether a date falls inside the month."""
        return self.first_day <= day <= self.last_day

    def previous(self) -> "MonthWindow":
        if self.month == 1:
            return MonthWindow(self.year - 1, 12)
        return MonthWindow(self.year, self.month - 1)

    def next(self) -> "MonthWindow":
        if self.month == 12:
            return MonthWindow(self.year + 1, 1)
        return MonthWindow(self.year, self.month + 1)

    @property
    def label(self) -> str:
        """Korean month label, e.g. 2026년 1월."""
        return f"{self.year}년 {self.month}월"


class GroupProgress(BaseModel):
    """A group's chapter total and membership for one month."""

    group_id: str
    group_name: str
    total_chapters: int = Field(0, ge=0)
    member_count: int = Field(0, ge=0)


class RankedGroup(BaseModel):
    """A leaderboard row."""

    rank: int = Field(..., ge=1)  # 1-based position
    progress: GroupProgress
    is_caller_group: bool = False

    @property
    def group_id(self) -> str:
        return self.progress.group_id

    @property
    def group_name(self) -> str:
        return self.progress.group_name

    @property
    def total_chapters(self) -> int:
        return self.progress.total_chapters


class MemberProgress(BaseModel):
    """A member's chapter total for one month."""

    user_id: str
    nickname: str
    total_chapters: int = Field(0, ge=0)
