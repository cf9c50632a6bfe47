"""Challenge groups and memberships."""

from .manager import GroupManager

__all__ = ["GroupManager"]
