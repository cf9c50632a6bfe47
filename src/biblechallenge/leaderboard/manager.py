"""Leaderboard manager for monthly group and member standings."""

import logging
from typing import Optional

from ..db.sqlite import Database, get_db
from .aggregator import compute_group_progress, member_standings
from .ranking import rank_groups
from .schemas import GroupProgress, MemberProgress, MonthWindow, RankedGroup

logger = logging.getLogger(__name__)


class LeaderboardManager:
    """Builds monthly leaderboards from the reading store.

    Every call re-reads groups, memberships and readings; nothing is cached
    between calls, so a refresh after logging a reading is just another call.
    """

    def __init__(self, db: Optional[Database] = None):
        """Initialize leaderboard manager.

        Args:
            db: Database instance
        """
        self.db = db or get_db()

    def compute_group_progress(
        self, window: Optional[MonthWindow] = None
    ) -> list[GroupProgress]:
        """Get chapter totals and member counts for every group.

        Args:
            window: Month to aggregate (default: current month)

        Returns:
            One entry per group, in group name order

        Raises:
            StoreUnavailable: If any of the underlying queries fail
        """
        if window is None:
            window = MonthWindow.current()

        groups = self.db.query_groups()
        memberships = self.db.query_memberships()
        events = self.db.query_reading_events(
            start_date=window.first_day, end_date=window.last_day
        )

        progress = compute_group_progress(groups, memberships, events, window)
        logger.debug(
            "Aggregated %d readings over %d groups for %s",
            len(events), len(groups), window.label,
        )
        return progress

    def get_monthly_leaderboard(
        self,
        window: Optional[MonthWindow] = None,
        caller_group_id: Optional[str] = None,
    ) -> list[RankedGroup]:
        """Get the ranked group leaderboard for a month.

        Args:
            window: Month to rank (default: current month)
            caller_group_id: Group of the member viewing the board

        Returns:
            Ranked groups, highest total first
        """
        return rank_groups(self.compute_group_progress(window), caller_group_id)

    def get_group_member_standings(
        self, group_id: str, window: Optional[MonthWindow] = None
    ) -> list[MemberProgress]:
        """Rank the members of one group by chapters read in a month.

        Args:
            group_id: Group to rank
            window: Month to rank (default: current month)

        Returns:
            Members, highest total first, including members with no readings
        """
        if window is None:
            window = MonthWindow.current()

        memberships = self.db.query_memberships(group_id)
        member_ids = {m.user_id for m in memberships}
        events = [
            e
            for e in self.db.query_reading_events(
                start_date=window.first_day, end_date=window.last_day
            )
            if e.user_id in member_ids
        ]
        return member_standings(memberships, events)
