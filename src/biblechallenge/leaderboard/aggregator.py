"""Monthly aggregation of reading events by member and group.

All functions here are pure folds over already-fetched rows. A member with
no group, or with a group outside the supplied reference set, counts toward
no group total.
"""

from collections import defaultdict
from typing import Iterable, Optional, Sequence

from ..db.schemas import GroupRecord, Membership, ReadingEvent
from .schemas import GroupProgress, MemberProgress, MonthWindow


def events_in_window(
    events: Iterable[ReadingEvent], window: MonthWindow
) -> list[ReadingEvent]:
    """Keep only the events dated inside the month."""
    return [e for e in events if window.contains(e.reading_date)]


def per_user_totals(events: Iterable[ReadingEvent]) -> dict[str, int]:
    """Sum chapters read per member."""
    totals: dict[str, int] = defaultdict(int)
    for event in events:
        totals[event.user_id] += event.chapters_read
    return dict(totals)


def user_group_map(memberships: Iterable[Membership]) -> dict[str, str]:
    """Map member ID to group ID, skipping members without a group."""
    return {m.user_id: m.group_id for m in memberships if m.group_id}


def per_group_totals(
    events: Iterable[ReadingEvent],
    memberships: Iterable[Membership],
    groups: Iterable[GroupRecord],
) -> dict[str, int]:
    """Sum chapters read per group. Every group appears, zero if idle."""
    totals = {g.id: 0 for g in groups}
    user_groups = user_group_map(memberships)

    for user_id, chapters in per_user_totals(events).items():
        group_id = user_groups.get(user_id)
        if group_id in totals:
            totals[group_id] += chapters

    return totals


def member_counts(
    memberships: Iterable[Membership], groups: Iterable[GroupRecord]
) -> dict[str, int]:
    """Count distinct members per group, active or not."""
    counts = {g.id: 0 for g in groups}
    seen: set[str] = set()

    for membership in memberships:
        if membership.group_id not in counts or membership.user_id in seen:
            continue
        seen.add(membership.user_id)
        counts[membership.group_id] += 1

    return counts


def compute_group_progress(
    groups: Sequence[GroupRecord],
    memberships: Sequence[Membership],
    events: Iterable[ReadingEvent],
    window: Optional[MonthWindow] = None,
) -> list[GroupProgress]:
    """Build one GroupProgress per group, in the order groups were given.

    Args:
        groups: Group reference set
        memberships: Member to group mappings
        events: Reading events, already limited to the month unless
                ``window`` is given
        window: If given, events outside the month are ignored

    Returns:
        Unsorted list with exactly one entry per group
    """
    if window is not None:
        events = events_in_window(events, window)

    totals = per_group_totals(events, memberships, groups)
    counts = member_counts(memberships, groups)

    return [
        GroupProgress(
            group_id=group.id,
            group_name=group.group_name,
            total_chapters=totals[group.id],
            member_count=counts[group.id],
        )
        for group in groups
    ]


def member_standings(
    memberships: Sequence[Membership],
    events: Iterable[ReadingEvent],
) -> list[MemberProgress]:
    """Rank members by chapters read, highest first.

    Members who read nothing are kept with a zero total. Ties keep the
    membership order.
    """
    totals = per_user_totals(events)
    standings = [
        MemberProgress(
            user_id=m.user_id,
            nickname=m.nickname,
            total_chapters=totals.get(m.user_id, 0),
        )
        for m in memberships
    ]
    return sorted(standings, key=lambda m: -m.total_chapters)
