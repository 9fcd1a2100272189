"""User preferences persistence service."""

import logging
from dataclasses import dataclass
from typing import Protocol

from pantrypal.domain.geo import Coordinates
from pantrypal.domain.preferences import PreferencesRecord, UserPreferences
from pantrypal.domain.results import ApiResult

_logger = logging.getLogger(__name__)


class PreferencesRepository(Protocol):
    """Persistence interface for ``user_preferences`` rows."""

    def get_preferences(self, user_id: str) -> PreferencesRecord | None:
        """Return the user's preferences row, if present."""

    def insert_preferences(self, record: PreferencesRecord) -> PreferencesRecord:
        """Insert a preferences row and return it."""

    def update_preferences(self, record: PreferencesRecord) -> PreferencesRecord:
        """Update the row keyed by the record's user id and return it."""

    def get_location(self, user_id: str) -> object | None:
        """Return the raw stored location (address text or coordinates)."""

    def update_location(self, user_id: str, coordinates: Coordinates) -> None:
        """Replace the stored location with resolved coordinates."""


@dataclass
class PreferencesService:
    """Reads and writes a user's onboarding preferences."""

    repository: PreferencesRepository

    def get(self, user_id: str) -> ApiResult[PreferencesRecord]:
        """Return the saved preferences for a user."""
        try:
            record = self.repository.get_preferences(user_id)
        except Exception:
            _logger.exception("Failed to load preferences", extra={"user_id": user_id})
            return ApiResult.failure("bad-data", "Failed to load preferences")
        if record is None:
            return ApiResult.failure("not-found", "No preferences saved")
        return ApiResult.success(record)

    def save(self, record: PreferencesRecord) -> ApiResult[PreferencesRecord]:
        """Update the user's row if it exists, otherwise insert it."""
        try:
            existing = self.repository.get_preferences(record.user_id)
            if existing is not None:
                saved = self.repository.update_preferences(record)
            else:
                saved = self.repository.insert_preferences(record)
        except Exception as exc:
            _logger.exception(
                "Failed to save preferences", extra={"user_id": record.user_id}
            )
            return ApiResult.failure("bad-data", str(exc) or "Unknown error")
        return ApiResult.success(saved)

    def ensure_profile(self, user_id: str) -> ApiResult[None]:
        """Create a placeholder row so group rows can reference the user."""
        try:
            existing = self.repository.get_preferences(user_id)
        except Exception:
            _logger.warning("Preferences lookup failed for %s, creating", user_id)
            existing = None
        if existing is not None:
            return ApiResult.success()
        try:
            self.repository.insert_preferences(PreferencesRecord.placeholder(user_id))
        except Exception:
            _logger.exception(
                "Error creating user preferences", extra={"user_id": user_id}
            )
            return ApiResult.failure("bad-data", "Failed to create user profile")
        return ApiResult.success()

    def hydrate(
        self, user_id: str, draft: UserPreferences
    ) -> ApiResult[PreferencesRecord]:
        """Load saved preferences into the in-memory draft."""
        result = self.get(user_id)
        if result.ok and result.data is not None:
            draft.apply_record(result.data)
        return result
