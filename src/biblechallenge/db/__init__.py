"""Database module for local SQLite storage."""

from .models import Group, Profile, Reading
from .schemas import (
    GroupRecord,
    Membership,
    ProfileCreate,
    ReadingCreate,
    ReadingEvent,
)
from .sqlite import Database, get_db
from .store import ReadingStore

__all__ = [
    "Group",
    "Profile",
    "Reading",
    "GroupRecord",
    "Membership",
    "ProfileCreate",
    "ReadingCreate",
    "ReadingEvent",
    "Database",
    "ReadingStore",
    "get_db",
]
