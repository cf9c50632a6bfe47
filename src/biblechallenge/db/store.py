"""Read/insert contract the aggregation code expects from a backing store.

Any store that answers these four calls can drive the leaderboard and
progress managers.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from .schemas import GroupRecord, Membership, ReadingCreate, ReadingEvent


class ReadingStore(ABC):
    """Queryable store of readings, memberships and groups."""

    @abstractmethod
    def query_reading_events(
        self,
        user_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> list[ReadingEvent]:
        """Get readings newest first, optionally for one user and an inclusive
        date range, and at most ``limit`` of them.

        Raises:
            StoreUnavailable: If the query fails
        """

    @abstractmethod
    def query_memberships(self, group_id: Optional[str] = None) -> list[Membership]:
        """Get member to group mappings, optionally for a single group.

        Raises:
            StoreUnavailable: If the query fails
        """

    @abstractmethod
    def query_groups(self) -> list[GroupRecord]:
        """Get the group reference set ordered by name.

        Raises:
            StoreUnavailable: If the query fails
        """

    @abstractmethod
    def insert_reading_event(self, event: ReadingCreate) -> ReadingEvent:
        """Store a new reading.

        Raises:
            ConflictError: If a reading with the same unique key exists
            StoreUnavailable: If the write fails for any other reason
        """
