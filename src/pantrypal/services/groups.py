"""Household group creation and membership."""

import logging
from dataclasses import dataclass
from typing import Protocol

from pantrypal.domain.groups import Group, GroupEnrollment, GroupMembership
from pantrypal.domain.results import ApiResult
from pantrypal.services.preferences import PreferencesService

_logger = logging.getLogger(__name__)


class GroupRepository(Protocol):
    """Persistence interface for groups and memberships."""

    def create_group(self, name: str) -> Group:
        """Insert a group and return it."""

    def get_group(self, group_id: str) -> Group | None:
        """Return a group by id, if present."""

    def list_memberships(self, user_id: str) -> list[GroupMembership]:
        """Return all membership rows for a user."""

    def create_membership(self, group_id: str, user_id: str) -> GroupMembership:
        """Insert a membership row and return it."""

    def list_user_groups(self, user_id: str) -> list[Group]:
        """Return groups the user belongs to."""


@dataclass
class GroupService:
    """Creates and joins groups, one group per user."""

    repository: GroupRepository
    preferences_service: PreferencesService

    def create_group_with_membership(
        self, name: str, user_id: str
    ) -> ApiResult[GroupEnrollment]:
        """Create a group and add its creator as the first member."""
        profile = self.preferences_service.ensure_profile(user_id)
        if not profile.ok:
            return ApiResult.failure("bad-data", profile.error or "Unknown error")

        try:
            group = self.repository.create_group(name)
        except Exception as exc:
            _logger.exception("Error creating group", extra={"user_id": user_id})
            return ApiResult.failure("bad-data", str(exc) or "Failed to create group")
        _logger.info("Created group %s for user %s", group.id, user_id)

        return self._enroll(group, user_id)

    def join_group_with_validation(
        self, group_id: str, user_id: str
    ) -> ApiResult[GroupEnrollment]:
        """Join an existing group unless the user already has one."""
        profile = self.preferences_service.ensure_profile(user_id)
        if not profile.ok:
            return ApiResult.failure("bad-data", profile.error or "Unknown error")

        try:
            group = self.repository.get_group(group_id)
        except Exception:
            _logger.warning("Group lookup failed for %s", group_id, exc_info=True)
            group = None
        if group is None:
            return ApiResult.failure("bad-data", "Group not found")

        try:
            memberships = self.repository.list_memberships(user_id)
        except Exception as exc:
            _logger.exception(
                "Error checking existing memberships", extra={"user_id": user_id}
            )
            return ApiResult.failure("bad-data", str(exc) or "Unknown error")
        if memberships:
            return ApiResult.failure("bad-data", "User is already a member of a group")

        return self._enroll(group, user_id)

    def get_user_groups(self, user_id: str) -> ApiResult[list[Group]]:
        try:
            groups = self.repository.list_user_groups(user_id)
        except Exception:
            _logger.exception("Error fetching user groups", extra={"user_id": user_id})
            return ApiResult.failure("bad-data", "Failed to fetch user groups")
        return ApiResult.success(groups)

    def _enroll(self, group: Group, user_id: str) -> ApiResult[GroupEnrollment]:
        try:
            membership = self.repository.create_membership(group.id, user_id)
        except Exception as exc:
            _logger.exception(
                "Error adding user to group",
                extra={"group_id": group.id, "user_id": user_id},
            )
            return ApiResult.failure("bad-data", str(exc) or "Failed to join group")
        return ApiResult.success(GroupEnrollment(group=group, membership=membership))
