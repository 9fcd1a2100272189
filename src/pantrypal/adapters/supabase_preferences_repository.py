"""Supabase repository for user preferences."""

from dataclasses import dataclass

from supabase import Client

from pantrypal.adapters.rows import PreferencesRow, decode_row
from pantrypal.domain.geo import Coordinates
from pantrypal.domain.preferences import PreferencesRecord
from pantrypal.services.preferences import PreferencesRepository

_TABLE = "user_preferences"


@dataclass
class SupabasePreferencesRepository(PreferencesRepository):
    """Supabase implementation for ``user_preferences`` rows."""

    client: Client

    def get_preferences(self, user_id: str) -> PreferencesRecord | None:
        """Return the user's preferences row, if present."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return decode_row(PreferencesRow, response.data[0]).to_domain()

    def insert_preferences(self, record: PreferencesRecord) -> PreferencesRecord:
        """Insert a preferences row and return it."""
        response = self.client.table(_TABLE).insert([record.to_payload()]).execute()
        if not response.data:
            raise RuntimeError("Failed to insert preferences")
        return decode_row(PreferencesRow, response.data[0]).to_domain()

    def update_preferences(self, record: PreferencesRecord) -> PreferencesRecord:
        """Update the row for the record's user and return it."""
        response = (
            self.client.table(_TABLE)
            .update(record.to_payload())
            .eq("user_id", record.user_id)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update preferences")
        return decode_row(PreferencesRow, response.data[0]).to_domain()

    def get_location(self, user_id: str) -> object | None:
        """Return the raw stored location column."""
        response = (
            self.client.table(_TABLE)
            .select("location")
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("location")

    def update_location(self, user_id: str, coordinates: Coordinates) -> None:
        """Store resolved coordinates in place of an address."""
        self.client.table(_TABLE).update({"location": coordinates.to_dict()}).eq(
            "user_id", user_id
        ).execute()
