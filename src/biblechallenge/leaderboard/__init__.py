"""Monthly group leaderboards."""

from .aggregator import (
    compute_group_progress,
    events_in_window,
    member_counts,
    member_standings,
    per_group_totals,
    per_user_totals,
)
from .manager import LeaderboardManager
from .ranking import rank_groups
from .schemas import GroupProgress, MemberProgress, MonthWindow, RankedGroup

__all__ = [
    "LeaderboardManager",
    "GroupProgress",
    "MemberProgress",
    "MonthWindow",
    "RankedGroup",
    "compute_group_progress",
    "events_in_window",
    "member_counts",
    "member_standings",
    "per_group_totals",
    "per_user_totals",
    "rank_groups",
]
