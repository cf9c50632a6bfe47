"""Group manager for the challenge group reference set and memberships."""

import logging
from typing import Iterable, Optional

from pydantic import ValidationError

from ..config import get_config
from ..db.models import Group, Profile
from ..db.schemas import GroupRecord, ProfileCreate
from ..db.sqlite import Database, get_db
from ..errors import ChallengeError, ConflictError, UnknownMemberError

logger = logging.getLogger(__name__)


class GroupManager:
    """Manages challenge groups and member registration."""

    def __init__(self, db: Optional[Database] = None):
        """Initialize group manager.

        Args:
            db: Database instance
        """
        self.db = db or get_db()

    # -------------------------------------------------------------------------
    # Groups
    # -------------------------------------------------------------------------

    def get_or_create_group(self, group_name: str) -> Group:
        """Find a group by name, creating it if absent.

        Args:
            group_name: Display name of the group

        Returns:
            Existing or newly created Group
        """
        group_name = group_name.strip()
        if not group_name:
            raise ChallengeError("Group name is required")

        group = self.db.get_group_by_name(group_name)
        if group:
            return group

        try:
            group = self.db.create_group(group_name)
            logger.info("Created group %s", group_name)
            return group
        except ConflictError:
            # Created concurrently between lookup and insert
            group = self.db.get_group_by_name(group_name)
            if group is None:
                raise
            return group

    def ensure_default_groups(self, names: Optional[Iterable[str]] = None) -> list[GroupRecord]:
        """Create any predefined groups that do not exist yet.

        Args:
            names: Group names (default: configured group names)

        Returns:
            The full group reference set
        """
        if names is None:
            names = get_config().group_names
        for name in names:
            self.get_or_create_group(name)
        return self.db.query_groups()

    def list_groups(self) -> list[GroupRecord]:
        """Get all groups ordered by name."""
        return self.db.query_groups()

    # -------------------------------------------------------------------------
    # Members
    # -------------------------------------------------------------------------

    def register_member(self, login_id: str, nickname: str, group_name: str) -> Profile:
        """Register a member in a group, creating the group if needed.

        Raises:
            ChallengeError: If a field is empty
            ConflictError: If the login ID is already taken
        """
        try:
            profile = ProfileCreate(login_id=login_id, nickname=nickname)
        except ValidationError as e:
            raise ChallengeError(f"Invalid member details: {e.errors()[0]['msg']}") from e

        if self.db.get_profile_by_login(profile.login_id):
            raise ConflictError(f"Login ID already registered: {profile.login_id}")

        # Groups are only created for registrations that will succeed
        group = self.get_or_create_group(group_name)
        member = self.db.create_profile(profile.model_copy(update={"group_id": group.id}))
        logger.info("Registered %s in %s", member.login_id, group.group_name)
        return member

    def get_member(self, login_id: str) -> Profile:
        """Get a member by login ID.

        Raises:
            UnknownMemberError: If no member has this login ID
        """
        profile = self.db.get_profile_by_login(login_id.strip())
        if profile is None:
            raise UnknownMemberError(f"No member with login ID: {login_id}")
        return profile

    def get_profile(self, user_id: str) -> Optional[Profile]:
        """Get a member by profile ID."""
        return self.db.get_profile(user_id)
