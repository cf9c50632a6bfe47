"""Leaderboard ordering for group progress."""

from typing import Optional, Sequence

from .schemas import GroupProgress, RankedGroup


def rank_groups(
    progress: Sequence[GroupProgress],
    caller_group_id: Optional[str] = None,
) -> list[RankedGroup]:
    """Order groups by total chapters, highest first.

    The sort is stable, so groups with equal totals keep their input order.

    Args:
        progress: Group progress in a deterministic order
        caller_group_id: The viewing member's group, if any

    Returns:
        Ranked rows, rank 1 first
    """
    ordered = sorted(progress, key=lambda p: -p.total_chapters)
    return [
        RankedGroup(
            rank=index,
            progress=entry,
            is_caller_group=caller_group_id is not None and entry.group_id == caller_group_id,
        )
        for index, entry in enumerate(ordered, start=1)
    ]
