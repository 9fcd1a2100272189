"""Supabase repository for household groups."""

from dataclasses import dataclass

from supabase import Client

from pantrypal.adapters.rows import GroupRow, MembershipRow, decode_row, decode_rows
from pantrypal.domain.groups import Group, GroupMembership
from pantrypal.services.groups import GroupRepository


@dataclass
class SupabaseGroupRepository(GroupRepository):
    """Supabase implementation over ``groups`` and ``group_membership``."""

    client: Client

    def create_group(self, name: str) -> Group:
        """Insert a group and return it."""
        response = self.client.table("groups").insert([{"name": name}]).execute()
        if not response.data:
            raise RuntimeError("Failed to create group")
        return decode_row(GroupRow, response.data[0]).to_domain()

    def get_group(self, group_id: str) -> Group | None:
        """Return a group by id, if present."""
        response = (
            self.client.table("groups")
            .select("*")
            .eq("id", group_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return decode_row(GroupRow, response.data[0]).to_domain()

    def list_memberships(self, user_id: str) -> list[GroupMembership]:
        """Return membership rows for a user."""
        response = (
            self.client.table("group_membership")
            .select("*")
            .eq("user_id", user_id)
            .execute()
        )
        rows = decode_rows(MembershipRow, response.data or [], table="group_membership")
        return [row.to_domain() for row in rows]

    def create_membership(self, group_id: str, user_id: str) -> GroupMembership:
        """Insert a membership row and return it."""
        response = (
            self.client.table("group_membership")
            .insert([{"group_id": group_id, "user_id": user_id}])
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to add user to group")
        return decode_row(MembershipRow, response.data[0]).to_domain()

    def list_user_groups(self, user_id: str) -> list[Group]:
        """Return groups joined through the user's memberships."""
        response = (
            self.client.table("groups")
            .select("*, group_membership!inner(*)")
            .eq("group_membership.user_id", user_id)
            .execute()
        )
        rows = decode_rows(GroupRow, response.data or [], table="groups")
        return [row.to_domain() for row in rows]
