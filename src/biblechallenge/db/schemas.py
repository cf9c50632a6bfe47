"""Pydantic schemas for data validation.

These schemas describe what crosses the store boundary: readings going in,
and readings, memberships and groups coming out.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ..canon import chapter_count, is_valid_chapter


# ============================================================================
# Readings
# ============================================================================


class ReadingCreate(BaseModel):
    """Schema for logging a reading."""

    user_id: str = Field(..., min_length=1)
    reading_date: date = Field(default_factory=date.today)
    book: str = Field(..., min_length=1, description="Canonical English book name")
    start_chapter: int = Field(..., ge=1)
    chapters_read: int = Field(1, ge=1, description="Consecutive chapters from start_chapter")

    @field_validator("book", mode="before")
    @classmethod
    def check_book(cls, v: str) -> str:
        """Book must be one of the 66 canonical names."""
        v = str(v).strip()
        if v and not is_valid_chapter(v, 1):
            raise ValueError(f"unknown book: {v}")
        return v

    @model_validator(mode="after")
    def check_chapter_range(self) -> "ReadingCreate":
        """Every chapter in the range must exist in the book."""
        max_chapter = chapter_count(self.book)
        if self.start_chapter > max_chapter:
            raise ValueError(
                f"{self.book} has {max_chapter} chapters, got chapter {self.start_chapter}"
            )
        if self.end_chapter > max_chapter:
            raise ValueError(
                f"{self.book} has {max_chapter} chapters, "
                f"range {self.start_chapter}-{self.end_chapter} runs past the end"
            )
        return self

    @property
    def end_chapter(self) -> int:
        """Last chapter covered by this reading."""
        return self.start_chapter + self.chapters_read - 1


class ReadingEvent(BaseModel):
    """Schema for a stored reading."""

    id: str
    user_id: str
    reading_date: date
    book: str
    start_chapter: int
    chapters_read: int

    model_config = {"from_attributes": True, "frozen": True}

    @property
    def end_chapter(self) -> int:
        """Last chapter covered by this reading."""
        return self.start_chapter + self.chapters_read - 1


# ============================================================================
# Groups and Memberships
# ============================================================================


class GroupRecord(BaseModel):
    """Schema for a challenge group."""

    id: str
    group_name: str

    model_config = {"from_attributes": True, "frozen": True}


class Membership(BaseModel):
    """A member and the group they belong to."""

    user_id: str
    group_id: Optional[str] = None
    nickname: str = ""

    model_config = {"frozen": True}


class ProfileCreate(BaseModel):
    """Schema for registering a member."""

    login_id: str = Field(..., min_length=1, max_length=100)
    nickname: str = Field(..., min_length=1, max_length=100)
    group_id: Optional[str] = None

    @field_validator("login_id", "nickname", mode="before")
    @classmethod
    def strip_text(cls, v: str) -> str:
        """Strip surrounding whitespace."""
        return str(v).strip() if v is not None else v
